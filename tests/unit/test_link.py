"""
Unit tests for share link validation (repplink.link).

Covers pattern matching, resource id extraction, download address
construction and the ``ShareLink`` value object.
"""

from __future__ import annotations

import dataclasses

import pytest

from repplink.exceptions import FormatError
from repplink.link import (
    DEFAULT_EXPORT_ENDPOINT,
    ShareLink,
    fetch_address,
    resource_id,
    validate,
)
from tests.conftest import DOWNLOAD_LINK, FILE_ID, SHARE_LINK

VALID_LINKS = [
    "https://drive.google.com/file/d/abc123/view",
    "https://drive.google.com/file/d/abc123/view?usp=sharing",
    "https://drive.google.com/file/d/A_b-C_9/view#frag",
    "https://drive.google.com/file/d/x/viewer",
]

INVALID_LINKS = [
    "",
    "http://drive.google.com/file/d/abc123/view",
    "https://drive.google.com/file/d//view",
    "https://drive.google.com/file/d/abc123/edit",
    "https://drive.google.com/file/d/abc 123/view",
    "https://drive.google.com/open?id=abc123",
    "https://docs.google.com/file/d/abc123/view",
    " https://drive.google.com/file/d/abc123/view",
    "https://drive.google.com/file/d/abc.123/view",
    "https://drive.google.com/file/d/abc123/view\n",
    "https://drive.google.com/file/d/abc123/view?usp=sharing\nextra",
]


class TestValidate:
    """Tests for validate()."""

    @pytest.mark.parametrize("link", VALID_LINKS)
    def test_accepts_share_links(self, link):
        assert validate(link)

    @pytest.mark.parametrize("link", INVALID_LINKS)
    def test_rejects_everything_else(self, link):
        assert not validate(link)


class TestResourceId:
    """Tests for resource_id()."""

    def test_extracts_token(self):
        assert resource_id(SHARE_LINK) == FILE_ID

    def test_token_stops_at_view(self):
        assert resource_id("https://drive.google.com/file/d/A_b-C_9/view?x=1") == "A_b-C_9"

    @pytest.mark.parametrize("link", INVALID_LINKS)
    def test_empty_string_when_invalid(self, link):
        """Never raises -- returns '' for non-matching input."""
        assert resource_id(link) == ""


class TestFetchAddress:
    """Tests for fetch_address()."""

    def test_default_template(self):
        assert fetch_address(FILE_ID) == DOWNLOAD_LINK

    def test_custom_endpoint(self):
        addr = fetch_address("abc", export_endpoint="http://mirror.local/uc")
        assert addr == "http://mirror.local/uc?export=download&id=abc"

    def test_deterministic(self):
        assert fetch_address("abc") == fetch_address("abc")


class TestShareLink:
    """Tests for the ShareLink value object."""

    def test_derived_properties(self):
        link = ShareLink.parse(SHARE_LINK)
        assert link.raw == SHARE_LINK
        assert link.resource_id == FILE_ID
        assert link.fetch_address == DOWNLOAD_LINK
        assert link.export_endpoint == DEFAULT_EXPORT_ENDPOINT

    @pytest.mark.parametrize("link", INVALID_LINKS)
    def test_invalid_raises_format_error(self, link):
        with pytest.raises(FormatError, match="Not a valid Google Drive share link"):
            ShareLink(link)

    def test_non_string_raises_format_error(self):
        with pytest.raises(FormatError):
            ShareLink(None)  # type: ignore[arg-type]

    def test_immutable(self):
        link = ShareLink(SHARE_LINK)
        with pytest.raises(dataclasses.FrozenInstanceError):
            link.raw = "https://drive.google.com/file/d/other/view"  # type: ignore[misc]
