"""Low-level HTTP client wrapper for the PostgREST config store."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any

import requests

from olt_scriptgen.client.errors import StoreRequestError, StoreResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("olt-scriptgen")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"olt-scriptgen/{_VERSION}"

# REST prefix of a hosted Supabase project.
REST_PREFIX: str = "/rest/v1"

Params = dict[str, str] | list[tuple[str, str]] | None


def _normalise_base_url(url: str) -> str:
    """Ensure the URL has a scheme, the REST prefix and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    if not url.endswith(REST_PREFIX):
        url = url + REST_PREFIX
    return url


class StoreHTTP:
    """Low-level HTTP wrapper around :class:`requests.Session`.

    Handles the API-key headers, a default ``User-Agent``, timeout, TLS
    verification, and maps transport/HTTP errors to :mod:`.errors` types.

    Args:
        base_url: Project URL, e.g. ``https://abc.supabase.co``.
        api_key: API key sent as ``apikey`` and bearer token.
        timeout_s: Request timeout in seconds (default 30).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._session: requests.Session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": _USER_AGENT,
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        params: Params = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> requests.Response:
        """Send one HTTP request to *path* and return the response.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: URL path relative to :attr:`base_url`.
            params: Optional query-string parameters.  A list of pairs is
                used when one column carries two filters.
            json: Optional JSON body.
            prefer: Optional PostgREST ``Prefer`` header value.

        Returns:
            The :class:`requests.Response`.

        Raises:
            StoreRequestError: On any transport-level failure.
            StoreResponseError: On a non-2xx HTTP status code.
        """
        url = self.base_url + path
        headers = {"Prefer": prefer} if prefer else None
        logger.debug("%s %s params=%r", method, url, params)
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout_s,
                verify=self.verify_tls,
            )
        except requests.exceptions.RequestException as exc:
            raise StoreRequestError(url, exc) from exc
        self._raise_for_status(resp)
        return resp

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self._session.close()

    def __enter__(self) -> StoreHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if not resp.ok:
            detail = ""
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                detail = str(body.get("message") or "")
            raise StoreResponseError(resp.status_code, resp.url, detail)
