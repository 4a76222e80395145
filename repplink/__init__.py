"""
repplink: treat a publicly shared text file as a tiny data source.

Public API surface:

- ``open(link, ...)`` -- **recommended entry point**. Validates a
  Google Drive share link and returns a ``Repplink`` handle.

- ``Repplink`` -- the handle. ``is_accessible()`` probes the file,
  ``start()`` downloads and parses it into rows or records,
  ``start_with_model()`` maps each row onto a caller-defined model and
  ``load_frame()`` returns a pandas DataFrame.

File format: one row per line, fields separated by ``|``, multiple
values inside a field separated by ``,``. Surrounding whitespace and
empty lines/fields/values are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from repplink.client import Repplink
from repplink.config import RepplinkConfig, load_config, save_config
from repplink.exceptions import (
    ConfigValidationError,
    FormatError,
    ParseError,
    RepplinkError,
    TransportError,
    TypeMismatchError,
)
from repplink.parsers import ResultShape

__all__ = [
    "open",
    "Repplink",
    "RepplinkConfig",
    "ResultShape",
    "load_config",
    "save_config",
    "RepplinkError",
    "FormatError",
    "TransportError",
    "ParseError",
    "TypeMismatchError",
    "ConfigValidationError",
]

logger = logging.getLogger(__name__)


def open(
    link: str,
    config: RepplinkConfig | str | Path | None = None,
    session: requests.Session | None = None,
) -> Repplink:
    """Validate *link* and return a ``Repplink`` handle.

    Args:
        link: Share link, ``https://drive.google.com/file/d/<id>/view``.
        config: ``RepplinkConfig``, path to a YAML config, or ``None``.
        session: Optional ``requests.Session`` shared across handles.

    Returns:
        A ``Repplink`` handle. No network request is made here.

    Raises:
        FormatError: If *link* is not a valid share link.
        FileNotFoundError: If *config* is a path that does not exist.

    Examples::

        link = repplink.open("https://drive.google.com/file/d/FILE_ID/view")
        rows = link.start()

        records = link.start(repplink.ResultShape.RECORDS, use_header=True)
    """
    handle = Repplink(link, config=config, session=session)
    logger.info("open() -- file_id=%s", handle.file_id)
    return handle
