"""
Parsers sub-package for repplink.

Turns the text of a staged file into plain Python structures.

Design: Strategy Pattern
- base.py defines the BaseParser ABC, the ``ResultShape`` selector and
  the ``Cell``/``Row``/``Record`` aliases shared by every parser.
- delimited.py implements DelimitedTextParser for the two-level
  ``|`` / ``,`` format.
"""

from repplink.parsers.base import BaseParser, Cell, Record, ResultShape, Row
from repplink.parsers.delimited import DelimitedTextParser

__all__ = [
    "BaseParser",
    "Cell",
    "DelimitedTextParser",
    "Record",
    "ResultShape",
    "Row",
]
