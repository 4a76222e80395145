"""
Custom exception hierarchy for repplink.

Why a custom hierarchy:
- Callers can catch specific exceptions (e.g., FormatError vs
  TransportError) without relying on generic ValueError/RuntimeError.
- Every stage of the fetch -> stage -> parse -> map flow has its own
  failure type, so a caller always knows which stage broke.
"""

from __future__ import annotations


class RepplinkError(Exception):
    """Base exception for all repplink errors."""


class FormatError(RepplinkError):
    """Raised when a share link does not match the expected pattern.

    Only links of the form ``https://drive.google.com/file/d/<id>/view...``
    are accepted. Raised at construction time; no handle is produced.
    """


class TransportError(RepplinkError):
    """Raised when the content download does not succeed.

    Attributes:
        status_code: The HTTP status returned by the server, or ``None``
            when the request never produced a response (DNS failure,
            connection reset, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(RepplinkError):
    """Raised when staged content cannot be decoded or split.

    The underlying cause (e.g. ``UnicodeDecodeError``) is chained via
    ``__cause__``.
    """


class TypeMismatchError(RepplinkError):
    """Raised when a parsed result is neither a row list nor a record list."""


class ConfigValidationError(RepplinkError):
    """Raised when a repplink YAML config file is empty or unusable."""
