"""
Repplink handle: one shared file, fetched and parsed on demand.

The ``Repplink`` class is a **handle object** built from a share link.
The link is validated once, in the constructor; afterwards the handle
knows its resource id and download address for its whole lifetime.

Every ``start*`` call is an independent unit of work:

1. ``ResourceFetcher.fetch_and_stage()`` downloads the file into a
   fresh ``StagedResource``.
2. The staged text is decoded and handed to ``DelimitedTextParser``.
3. The staged file is released on every exit path, including errors.

Nothing is cached between calls, so a handle can be shared freely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import pandas as pd
import requests

from repplink.config import RepplinkConfig, resolve_config
from repplink.exceptions import ParseError
from repplink.fetcher import ResourceFetcher
from repplink.frame import to_dataframe
from repplink.link import ShareLink
from repplink.mapper import map_rows
from repplink.parsers import DelimitedTextParser, Record, ResultShape, Row
from repplink.parsers.base import BaseParser
from repplink.staging import TempStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repplink:
    """Handle for a publicly shared, ``|``-delimited text file.

    Args:
        link: Google Drive share link,
            ``https://drive.google.com/file/d/<FILE_ID>/view...``.
        config: A ``RepplinkConfig``, a path to a YAML config, or
            ``None`` for defaults.
        session: Optional ``requests.Session`` to reuse connections or
            plug in a fake transport.
        storage: Optional ``TempStorage``; overrides ``config.staging_dir``.
        parser: Optional parser; defaults to ``DelimitedTextParser()``.

    Raises:
        FormatError: If *link* is not a valid share link.

    Example::

        with Repplink("https://drive.google.com/file/d/FILE_ID/view") as link:
            if link.is_accessible():
                rows = link.start()
    """

    def __init__(
        self,
        link: str,
        config: RepplinkConfig | str | Path | None = None,
        session: requests.Session | None = None,
        storage: TempStorage | None = None,
        parser: BaseParser | None = None,
    ) -> None:
        self.config = resolve_config(config)
        self.link = ShareLink.parse(link, export_endpoint=self.config.export_endpoint)
        self.fetcher = ResourceFetcher(
            session=session,
            storage=storage or TempStorage(self.config.staging_dir),
            timeout=self.config.timeout,
            headers=self.config.headers,
        )
        self.parser = parser or DelimitedTextParser()

    # -- Properties ---------------------------------------------------------

    @property
    def raw_link(self) -> str:
        return self.link.raw

    @property
    def file_id(self) -> str:
        """Resource id extracted from the share link."""
        return self.link.resource_id

    @property
    def direct_download_link(self) -> str:
        return self.link.fetch_address

    def __repr__(self) -> str:
        return f"Repplink(file_id={self.file_id!r})"

    def __enter__(self) -> Repplink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the HTTP session if the handle created it."""
        self.fetcher.close()

    # -- Operations ---------------------------------------------------------

    def is_accessible(self) -> bool:
        """Probe the download address; never raises."""
        return self.fetcher.is_accessible(self.direct_download_link)

    def start(
        self,
        shape: ResultShape | str = ResultShape.ROWS,
        use_header: bool = False,
    ) -> list[Row] | list[Record] | None:
        """Download and parse the shared file.

        Args:
            shape: ``ResultShape.ROWS`` for positional rows,
                ``ResultShape.RECORDS`` for header-keyed records, or
                ``ResultShape.NONE`` to only download. Unrecognised
                values behave like ``NONE``.
            use_header: Use the first non-empty line as keys. Only
                honoured with ``ResultShape.RECORDS``.

        Returns:
            Parsed rows or records, or ``None`` when no structured
            result was requested.

        Raises:
            TransportError: If the download fails.
            ParseError: If the content cannot be decoded or split.
        """
        logger.info(
            "start() -- file_id=%s, shape=%s, use_header=%s",
            self.file_id, shape, use_header,
        )
        with self.fetcher.fetch_and_stage(
            self.direct_download_link, self.file_id
        ) as staged:
            try:
                text = staged.read_text(encoding=self.config.encoding)
            except (UnicodeDecodeError, OSError) as exc:
                raise ParseError(
                    f"Could not read staged file for {self.file_id}: {exc}"
                ) from exc
            return self.parser.parse(text, shape=shape, use_header=use_header)

    def start_with_model(
        self,
        transform: Callable[[Any], T],
        use_header: bool = False,
    ) -> list[T]:
        """Download, parse and map every row/record through *transform*.

        With ``use_header=False`` *transform* receives a ``Row`` (a list
        whose cells are ``str`` or ``list[str]``); with
        ``use_header=True`` it receives a ``Record`` dict keyed by the
        header names.

        Example::

            @dataclass
            class Work:
                image: list[str] | str
                title: str
                video_url: str
                tags: list[str] | str

            works = link.start_with_model(lambda row: Work(*row[:4]))
        """
        shape = ResultShape.RECORDS if use_header else ResultShape.ROWS
        parsed = self.start(shape, use_header=use_header)
        return map_rows(parsed, transform)

    def load_frame(self, use_header: bool = False) -> pd.DataFrame:
        """Download and parse the file into a ``pandas.DataFrame``."""
        shape = ResultShape.RECORDS if use_header else ResultShape.ROWS
        return to_dataframe(self.start(shape, use_header=use_header))
