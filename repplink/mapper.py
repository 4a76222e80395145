"""
Projection of parsed rows/records onto caller-defined models.

``map_rows()`` is deliberately thin: it checks that the input really is
a row list or a record list, then applies the caller's transform in
order. Exceptions raised by the transform propagate unchanged -- the
mapper does not know which rows a model considers invalid.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from repplink.exceptions import TypeMismatchError
from repplink.parsers.base import Record, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_row_list(parsed: Any) -> bool:
    return isinstance(parsed, list) and all(isinstance(r, list) for r in parsed)


def is_record_list(parsed: Any) -> bool:
    return isinstance(parsed, list) and all(isinstance(r, dict) for r in parsed)


def map_rows(
    parsed: list[Row] | list[Record] | None,
    transform: Callable[[Any], T],
) -> list[T]:
    """Apply *transform* to every row or record, preserving order.

    Args:
        parsed: Output of ``DelimitedTextParser.parse()``. ``None``
            (no structured result) yields an empty list without
            calling *transform*.
        transform: Builds one model instance from one row/record.

    Returns:
        One ``transform`` result per input element.

    Raises:
        TypeMismatchError: If *parsed* is neither a list of rows nor a
            list of records.
    """
    if parsed is None:
        return []

    if not (is_row_list(parsed) or is_record_list(parsed)):
        raise TypeMismatchError(
            "Expected a list of rows (lists) or a list of records (dicts), "
            f"got {type(parsed).__name__}"
        )

    models = [transform(item) for item in parsed]
    logger.debug("Mapped %d item(s) with %r", len(models), transform)
    return models
