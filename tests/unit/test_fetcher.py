"""
Unit tests for HTTP probing and downloading (repplink.fetcher).

All HTTP goes through ``FakeSession`` from conftest.
"""

from __future__ import annotations

import pytest

from repplink.exceptions import TransportError
from repplink.fetcher import ResourceFetcher
from repplink.staging import TempStorage
from tests.conftest import DOWNLOAD_LINK, FILE_ID, FakeSession


@pytest.fixture()
def storage(tmp_path) -> TempStorage:
    return TempStorage(tmp_path)


def _staged_files(storage: TempStorage) -> list:
    return sorted(storage.root.rglob("*.tmp"))


class TestIsAccessible:
    """HEAD probe degrades to True/False, never raises."""

    def test_ok(self, storage):
        session = FakeSession(head_status=200)
        assert ResourceFetcher(session, storage).is_accessible(DOWNLOAD_LINK)
        method, url, kwargs = session.calls[0]
        assert (method, url) == ("HEAD", DOWNLOAD_LINK)
        assert kwargs["allow_redirects"] is True

    @pytest.mark.parametrize("status", [204, 301, 403, 404, 500])
    def test_non_200(self, storage, status):
        session = FakeSession(head_status=status)
        assert not ResourceFetcher(session, storage).is_accessible(DOWNLOAD_LINK)

    def test_transport_failure(self, storage, connection_error):
        session = FakeSession(head_error=connection_error)
        assert not ResourceFetcher(session, storage).is_accessible(DOWNLOAD_LINK)

    def test_timeout_and_headers_forwarded(self, storage):
        session = FakeSession()
        fetcher = ResourceFetcher(session, storage, timeout=5.0, headers={"X-A": "1"})
        fetcher.is_accessible(DOWNLOAD_LINK)
        _, _, kwargs = session.calls[0]
        assert kwargs["timeout"] == 5.0
        assert kwargs["headers"] == {"X-A": "1"}


class TestFetchAndStage:
    """GET + staging."""

    def test_success_stages_body(self, storage):
        session = FakeSession(content=b"a|b")
        with ResourceFetcher(session, storage).fetch_and_stage(DOWNLOAD_LINK, FILE_ID) as staged:
            assert staged.path.name == f"{FILE_ID}.tmp"
            assert staged.read_text() == "a|b"
        assert _staged_files(storage) == []

    def test_404_raises_with_status(self, storage):
        session = FakeSession(get_status=404)
        with pytest.raises(TransportError) as excinfo:
            ResourceFetcher(session, storage).fetch_and_stage(DOWNLOAD_LINK, FILE_ID)
        assert excinfo.value.status_code == 404
        assert "404" in str(excinfo.value)
        assert _staged_files(storage) == []
        assert list(storage.root.iterdir()) == []

    def test_transport_failure_raises(self, storage, connection_error):
        session = FakeSession(get_error=connection_error)
        with pytest.raises(TransportError) as excinfo:
            ResourceFetcher(session, storage).fetch_and_stage(DOWNLOAD_LINK, FILE_ID)
        assert excinfo.value.status_code is None
        assert excinfo.value.__cause__ is connection_error

    def test_write_failure_releases(self, storage, monkeypatch):
        def fail_write(self, payload):
            raise OSError("disk full")

        monkeypatch.setattr("repplink.staging.StagedResource.write", fail_write)
        session = FakeSession(content=b"x")
        with pytest.raises(OSError, match="disk full"):
            ResourceFetcher(session, storage).fetch_and_stage(DOWNLOAD_LINK, FILE_ID)
        assert list(storage.root.iterdir()) == []

    def test_default_session_is_requests(self):
        import requests

        assert isinstance(ResourceFetcher().session, requests.Session)


class TestClose:
    """Only a session the fetcher created is closed."""

    def test_injected_session_left_open(self, storage):
        session = FakeSession()
        with ResourceFetcher(session, storage):
            pass
        assert not session.closed

    def test_own_session_closed(self, storage, monkeypatch):
        monkeypatch.setattr("repplink.fetcher.requests.Session", FakeSession)
        fetcher = ResourceFetcher(storage=storage)
        fetcher.close()
        assert fetcher.session.closed
