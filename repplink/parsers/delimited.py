"""
Parser for the two-level delimited text format.

File layout (one logical row per line)::

    img1.jpg,img2.jpg | Obra 1 | https://x/video1 | etiqueta1,etiqueta2
    img3.jpg          | Obra 2 | https://x/video2 | etiqueta3

Algorithm, identical with and without a header:
1. Split on ``\\n``, strip every line, drop empty lines.
2. Split a line on ``|``, strip every field, drop empty fields.
3. A field containing ``,`` becomes a list of its stripped, non-empty
   parts; any other field stays a plain string.
4. Rows left with no cells are dropped.

In header mode the first surviving row supplies the keys and every
following line is zipped against it up to the shorter of the two.
Extra header names or extra cells are dropped silently.

Note that empty fields are dropped *before* positions are assigned, so
``a||c`` yields two cells, not three.
"""

from __future__ import annotations

import logging

from repplink.exceptions import ParseError
from repplink.parsers.base import (
    BaseParser,
    Cell,
    Record,
    ResultShape,
    Row,
    coerce_shape,
)

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "|"
VALUE_DELIMITER = ","


class DelimitedTextParser(BaseParser):
    """Split ``|``-separated lines into rows or header-keyed records.

    Args:
        field_delimiter: Separates fields on a line.
        value_delimiter: Separates values inside a multi-value field.
    """

    def __init__(
        self,
        field_delimiter: str = FIELD_DELIMITER,
        value_delimiter: str = VALUE_DELIMITER,
    ) -> None:
        if not field_delimiter or not value_delimiter:
            raise ValueError("Delimiters must be non-empty strings")
        if field_delimiter == value_delimiter:
            raise ValueError(
                f"Field and value delimiters must differ, both are {field_delimiter!r}"
            )
        self.field_delimiter = field_delimiter
        self.value_delimiter = value_delimiter

    # -- Public API ---------------------------------------------------------

    def parse(
        self,
        text: str,
        shape: ResultShape | str = ResultShape.ROWS,
        use_header: bool = False,
    ) -> list[Row] | list[Record] | None:
        shape = coerce_shape(shape)
        if shape is ResultShape.NONE:
            return None

        # The header flag only applies to the record shape
        as_records = shape is ResultShape.RECORDS and use_header
        try:
            if as_records:
                result: list[Row] | list[Record] = self.parse_records(text)
            else:
                result = self.parse_rows(text)
        except Exception as exc:
            raise ParseError(f"Could not parse delimited text: {exc}") from exc

        logger.info(
            "Parsed %d %s", len(result), "records" if as_records else "rows"
        )
        return result

    def parse_rows(self, text: str) -> list[Row]:
        """Parse every non-empty line into a positional row."""
        rows = (self.decode_line(line) for line in self.split_lines(text))
        return [row for row in rows if row]

    def parse_records(self, text: str) -> list[Record]:
        """Parse with the first line that has any cells as header."""
        rows = self.parse_rows(text)
        if not rows:
            return []

        header = [_as_key(cell) for cell in rows[0]]
        logger.debug("Header: %s", header)
        return [dict(zip(header, row)) for row in rows[1:]]

    # -- Building blocks ----------------------------------------------------

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """Stripped, non-empty lines of *text*."""
        stripped = (line.strip() for line in text.split("\n"))
        return [line for line in stripped if line]

    def split_fields(self, line: str) -> list[str]:
        """Stripped, non-empty fields of a single line."""
        stripped = (field.strip() for field in line.split(self.field_delimiter))
        return [field for field in stripped if field]

    def decode_cell(self, field: str) -> Cell:
        """Turn one field into a single value or a list of values."""
        if self.value_delimiter not in field:
            return field
        parts = (part.strip() for part in field.split(self.value_delimiter))
        return [part for part in parts if part]

    def decode_line(self, line: str) -> Row:
        return [self.decode_cell(field) for field in self.split_fields(line)]


def _as_key(cell: Cell) -> str | tuple[str, ...]:
    # lists are unhashable; a multi-value header name becomes a tuple
    return tuple(cell) if isinstance(cell, list) else cell
