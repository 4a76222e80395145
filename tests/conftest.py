"""
Shared test fixtures and constants for repplink tests.

HTTP is never touched: ``FakeSession`` stands in for
``requests.Session`` and records every call it receives.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
import requests

# ---------------------------------------------------------------------------
# Sample links and content -- edit here if the fixtures need to change
# ---------------------------------------------------------------------------
FILE_ID = "1AbC-xyz_09"
SHARE_LINK = f"https://drive.google.com/file/d/{FILE_ID}/view?usp=sharing"
DOWNLOAD_LINK = f"https://drive.google.com/uc?export=download&id={FILE_ID}"

CATALOG_TEXT = (
    "img1.jpg,img2.jpg | Obra 1 | https://x/video1 | etiqueta1,etiqueta2\n"
    "img3.jpg | Obra 2 | https://x/video2 | etiqueta3\n"
)
CATALOG_WITH_HEADER = "img|title|url|tags\n" + CATALOG_TEXT


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------

@dataclass
class FakeResponse:
    status_code: int = 200
    content: bytes = b""


@dataclass
class FakeSession:
    """Minimal stand-in for ``requests.Session``.

    ``head_status`` / ``get_status`` control the answers; set
    ``head_error`` / ``get_error`` to an exception instance to simulate
    a transport failure.
    """

    content: bytes = b""
    head_status: int = 200
    get_status: int = 200
    head_error: Exception | None = None
    get_error: Exception | None = None
    calls: list[tuple[str, str, dict]] = field(default_factory=list)
    closed: bool = False

    def head(self, url, **kwargs):
        self.calls.append(("HEAD", url, kwargs))
        if self.head_error is not None:
            raise self.head_error
        return FakeResponse(status_code=self.head_status)

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        if self.get_error is not None:
            raise self.get_error
        return FakeResponse(status_code=self.get_status, content=self.content)

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession(content=CATALOG_TEXT.encode("utf-8"))


@pytest.fixture()
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (public API, fake transport)",
    )
