"""
Tabular view of parsed results as a pandas DataFrame.

Row lists become a frame with positional integer columns; ragged rows
are padded with missing values. Record lists become a frame whose
columns follow the header order; records missing trailing keys get
missing values there. Multi-value cells stay Python lists inside
object columns -- explode them with ``DataFrame.explode`` if needed.
"""

from __future__ import annotations

import logging

import pandas as pd

from repplink.exceptions import TypeMismatchError
from repplink.mapper import is_record_list, is_row_list
from repplink.parsers.base import Record, Row

logger = logging.getLogger(__name__)


def to_dataframe(parsed: list[Row] | list[Record] | None) -> pd.DataFrame:
    """Convert parser output to a ``pandas.DataFrame``.

    Raises:
        TypeMismatchError: If *parsed* is neither a row list nor a
            record list.
    """
    if parsed is None or (isinstance(parsed, list) and not parsed):
        return pd.DataFrame()

    if is_row_list(parsed):
        width = max(len(row) for row in parsed)
        padded = [row + [None] * (width - len(row)) for row in parsed]
        df = pd.DataFrame(padded, columns=range(width), dtype=object)
    elif is_record_list(parsed):
        columns: list = []
        for record in parsed:
            for key in record:
                if key not in columns:
                    columns.append(key)
        df = pd.DataFrame(
            [[record.get(key) for key in columns] for record in parsed],
            columns=pd.Index(columns, dtype=object, tupleize_cols=False),
            dtype=object,
        )
    else:
        raise TypeMismatchError(
            f"Cannot build a DataFrame from {type(parsed).__name__}"
        )

    logger.debug("Built DataFrame with shape %s", df.shape)
    return df
