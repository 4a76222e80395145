"""
Share link validation and resolution for repplink.

A share link is the URL a user copies from the "Share" dialog of Google
Drive, e.g.::

    https://drive.google.com/file/d/1AbC-xyz_09/view?usp=sharing

From it we derive:

- the **resource id** (``1AbC-xyz_09``), which names the file inside the
  provider and keys the local staging file;
- the **direct download address**, built from a fixed template so no
  network round-trip is needed to resolve it.

Every function here is pure -- no I/O, no logging side effects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from repplink.exceptions import FormatError

DEFAULT_EXPORT_ENDPOINT = "https://drive.google.com/uc"

# Anything after "/view" (query string, fragment) is tolerated; used with
# fullmatch so a trailing newline is rejected.
_SHARE_LINK_PATTERN = re.compile(
    r"https://drive\.google\.com/file/d/([A-Za-z0-9_-]+)/view.*"
)


def validate(raw: str) -> bool:
    """Return ``True`` iff *raw* is a well-formed public share link."""
    return _SHARE_LINK_PATTERN.fullmatch(raw) is not None


def resource_id(raw: str) -> str:
    """Extract the resource id token from *raw*.

    Returns an empty string when *raw* does not match; never raises.
    Call ``validate()`` first when the distinction matters.
    """
    match = _SHARE_LINK_PATTERN.fullmatch(raw)
    return match.group(1) if match else ""


def fetch_address(
    resource_id: str,
    export_endpoint: str = DEFAULT_EXPORT_ENDPOINT,
) -> str:
    """Build the direct download address for *resource_id*."""
    return f"{export_endpoint}?export=download&id={resource_id}"


@dataclass(frozen=True)
class ShareLink:
    """Validated, immutable share link.

    Attributes:
        raw: The link exactly as supplied by the caller.
        export_endpoint: Base URL of the provider's download endpoint.
    """

    raw: str
    export_endpoint: str = DEFAULT_EXPORT_ENDPOINT

    def __post_init__(self) -> None:
        if not isinstance(self.raw, str) or not validate(self.raw):
            raise FormatError(
                f"Not a valid Google Drive share link: {self.raw!r}. "
                "Expected https://drive.google.com/file/d/<FILE_ID>/view"
            )

    @classmethod
    def parse(
        cls,
        raw: str,
        export_endpoint: str = DEFAULT_EXPORT_ENDPOINT,
    ) -> ShareLink:
        """Alternate constructor; raises ``FormatError`` for invalid links."""
        return cls(raw=raw, export_endpoint=export_endpoint)

    @property
    def resource_id(self) -> str:
        return resource_id(self.raw)

    @property
    def fetch_address(self) -> str:
        return fetch_address(self.resource_id, self.export_endpoint)
