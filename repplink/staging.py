"""
Scoped temporary storage for downloaded payloads.

Each download is written to ``<root>/repplink-XXXX/<resource_id>.tmp``
where ``repplink-XXXX`` is a fresh directory created per call. The
per-call directory keeps concurrent downloads of the same link apart,
while the file name still carries the resource id for debugging.

``StagedResource`` is a context manager: leaving the ``with`` block --
normally, via an exception, or via ``KeyboardInterrupt`` -- deletes
the file and the per-call directory. ``release()`` is idempotent, so the
cleanup runs exactly once no matter how many exit paths reach it.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

_DIR_PREFIX = "repplink-"


class StagedResource:
    """A single staged file whose lifetime is bound to one operation."""

    def __init__(self, path: Path, call_dir: Path | None = None) -> None:
        self.path = path
        # only a directory created by TempStorage is ever removed
        self.call_dir = call_dir
        self._released = False

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"StagedResource(path={str(self.path)!r}, {state})"

    def __enter__(self) -> StagedResource:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def released(self) -> bool:
        return self._released

    def write(self, payload: bytes) -> None:
        """Persist *payload*, replacing anything already at the location."""
        if self.path.exists():
            logger.debug("Removing stale staged file %s", self.path)
            self.path.unlink()
        self.path.write_bytes(payload)
        logger.debug("Staged %d bytes at %s", len(payload), self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def read_text(self, encoding: str = "utf-8-sig") -> str:
        return self.path.read_text(encoding=encoding)

    def release(self) -> None:
        """Delete the staged file, then the per-call directory if we own it.

        Deletion errors propagate; a release that could not clean up is
        not reported as released.
        """
        if self._released:
            return
        self.path.unlink(missing_ok=True)
        if self.call_dir is not None and self.call_dir.exists():
            self.call_dir.rmdir()
        self._released = True
        logger.debug("Released staged resource %s", self.path)


class TempStorage:
    """Allocates ``StagedResource`` locations under a root directory.

    Args:
        root: Directory under which per-call directories are created.
            ``None`` uses ``tempfile.gettempdir()``.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else Path(tempfile.gettempdir())

    def acquire(self, key: str) -> StagedResource:
        """Reserve a fresh location for the payload identified by *key*."""
        self.root.mkdir(parents=True, exist_ok=True)
        call_dir = Path(tempfile.mkdtemp(prefix=_DIR_PREFIX, dir=self.root))
        return StagedResource(call_dir / f"{key}.tmp", call_dir=call_dir)
