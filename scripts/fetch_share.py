"""
Demo script: probe, download and parse a shared file via the public API.

Usage:
    uv run python scripts/fetch_share.py LINK
    uv run python scripts/fetch_share.py LINK --header
    uv run python scripts/fetch_share.py LINK --shape none         # download only
    uv run python scripts/fetch_share.py LINK --config repplink.yaml

Without --header every line is printed as a positional row; with
--header the first line supplies column names and records are printed.
--shape overrides the result shape (rows, records or none); records
are only built when --header is also given.
"""

from __future__ import annotations

import argparse
import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("fetch_share")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    import repplink

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("link", help="Google Drive share link")
    parser.add_argument(
        "--header", action="store_true",
        help="treat the first line as column names",
    )
    parser.add_argument(
        "--shape", choices=[s.value for s in repplink.ResultShape],
        help="result shape (default: records with --header, rows otherwise)",
    )
    parser.add_argument("--config", help="path to a repplink YAML config")
    args = parser.parse_args(argv)

    try:
        handle = repplink.open(args.link, config=args.config)
    except repplink.FormatError as exc:
        log.error("%s", exc)
        return 2

    if args.shape is not None:
        shape = repplink.ResultShape(args.shape)
    elif args.header:
        shape = repplink.ResultShape.RECORDS
    else:
        shape = repplink.ResultShape.ROWS

    with handle:
        if not handle.is_accessible():
            log.error("File %s is not publicly accessible", handle.file_id)
            return 1
        try:
            result = handle.start(shape, use_header=args.header)
        except repplink.RepplinkError as exc:
            log.error("%s", exc)
            return 1

    for i, item in enumerate(result or []):
        log.info("  [%d] %s", i, item)
    log.info("Done: %d item(s) from %s", len(result or []), handle.file_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
