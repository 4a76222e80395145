"""
HTTP access to a shared file.

Two requests are ever made against a download address:

- ``is_accessible()`` -- a ``HEAD`` probe. It only *reports*
  reachability: any non-200 status or transport failure becomes
  ``False``; it never raises.
- ``fetch_and_stage()`` -- a ``GET`` whose body is written to a
  ``StagedResource``. A non-200 status raises ``TransportError``
  before anything is staged.

No retries are attempted. Timeouts are whatever the caller configured
(``RepplinkConfig.timeout``); the default imposes none.
"""

from __future__ import annotations

import logging

import requests

from repplink.exceptions import TransportError
from repplink.staging import StagedResource, TempStorage

logger = logging.getLogger(__name__)

_HTTP_OK = 200


class ResourceFetcher:
    """Probe and download a public file through a ``requests`` session.

    Args:
        session: A ``requests.Session`` (or any object exposing
            compatible ``head``/``get``). A new session is created
            if omitted. Only a session created here is closed by
            ``close()``; callers keep ownership of one they pass in.
        storage: Where downloads are staged. Defaults to the system
            temp dir.
        timeout: Optional per-request timeout in seconds.
        headers: Extra headers sent with every request.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        storage: TempStorage | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.storage = storage if storage is not None else TempStorage()
        self.timeout = timeout
        self.headers = headers or {}

    def __enter__(self) -> ResourceFetcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this fetcher created it."""
        if self._owns_session:
            self.session.close()

    def is_accessible(self, address: str) -> bool:
        """Return ``True`` iff a ``HEAD`` on *address* answers 200."""
        try:
            response = self.session.head(
                address,
                headers=self.headers,
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            logger.warning("Probe of %s failed: %s", address, exc)
            return False

        logger.debug("Probe of %s -> HTTP %s", address, response.status_code)
        return response.status_code == _HTTP_OK

    def fetch_and_stage(self, address: str, resource_id: str) -> StagedResource:
        """Download *address* and stage the body under *resource_id*.

        The returned resource must be released by the caller, normally
        via ``with fetcher.fetch_and_stage(...) as staged:``.

        Raises:
            TransportError: On a non-200 status or a transport failure.
                Nothing is left on disk in either case.
        """
        try:
            response = self.session.get(
                address,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(
                f"Could not download {address}: {exc}"
            ) from exc

        if response.status_code != _HTTP_OK:
            raise TransportError(
                f"Could not download {address}: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        staged = self.storage.acquire(resource_id)
        try:
            staged.write(response.content)
        except BaseException:
            staged.release()
            raise

        logger.info(
            "Downloaded %d bytes for %s", len(response.content), resource_id
        )
        return staged
