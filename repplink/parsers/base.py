"""
Base parser protocol / ABC for repplink.

The contract:
1. ``parse()`` takes decoded text, a ``ResultShape`` and a header flag.
2. It returns a list of ``Row`` (positional), a list of ``Record``
   (keyed by header), or ``None`` when no structured result was asked for.

Why an explicit ``ResultShape`` instead of inspecting a return type:
the caller states what it wants, and an unknown request degrades to
``None`` rather than to a type guess.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)

# A cell is a single value, or a list of values for multi-value fields.
Cell = Union[str, list[str]]
Row = list[Cell]
# Header names that themselves contain the value delimiter become tuples.
Record = dict[Union[str, tuple[str, ...]], Cell]


class ResultShape(str, Enum):
    """What a caller wants back from a parse."""

    ROWS = "rows"
    RECORDS = "records"
    NONE = "none"


def coerce_shape(shape: ResultShape | str | None) -> ResultShape:
    """Map a caller-supplied selector onto ``ResultShape``.

    Unrecognised values map to ``ResultShape.NONE`` (logged), matching
    the "no structured result" behaviour rather than raising.
    """
    if isinstance(shape, ResultShape):
        return shape
    if isinstance(shape, str):
        try:
            return ResultShape(shape.strip().lower())
        except ValueError:
            pass
    logger.warning("Unrecognised result shape %r; no structured result", shape)
    return ResultShape.NONE


class BaseParser(ABC):
    """Abstract base class for repplink text parsers."""

    @abstractmethod
    def parse(
        self,
        text: str,
        shape: ResultShape | str = ResultShape.ROWS,
        use_header: bool = False,
    ) -> list[Row] | list[Record] | None:
        """Parse decoded file content.

        Args:
            text: The full file content.
            shape: Requested result shape.
            use_header: Treat the first non-empty line as column names.
                Only honoured together with ``ResultShape.RECORDS``.

        Returns:
            Rows, records, or ``None`` for ``ResultShape.NONE``.

        Raises:
            ParseError: If the text cannot be split.
        """
