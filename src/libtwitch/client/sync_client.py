"""Synchronous Kraken client.

:class:`SyncClient` mirrors :class:`~libtwitch.client.async_client.AsyncClient`
on top of a blocking :class:`httpx.Client`.  It is what the ``libtwitch``
command line uses.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, TypeVar

import httpx

from libtwitch.client.pipeline import build_headers, build_url, decode_response, encode_body
from libtwitch.credentials import CredentialSource, Credentials, load_credentials
from libtwitch.exceptions import TransportFailure
from libtwitch.models import ClientConfig
from libtwitch.output import debug

T = TypeVar("T")


class SyncClient:
    """Blocking client for the Kraken v5 API.

    Args:
        credentials: Client id and token, owned by this client from now on.
        config: Base URL, timeout and TLS settings.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).

    Example::

        with SyncClient.from_source("twitch.toml") as client:
            games = client.get("/games/top", dict[str, Any], params={"limit": 10})
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config or ClientConfig()
        self._lock = threading.Lock()
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=transport,
        )

    @classmethod
    def from_source(
        cls,
        source: CredentialSource,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> SyncClient:
        """Create a client with credentials loaded from a file path or environment mapping."""
        return cls(load_credentials(source), config=config, transport=transport)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Credentials
    # ------------------------------------------------------------------ #

    @property
    def credentials(self) -> Credentials:
        """A snapshot of the credentials; rotate the token with :meth:`set_token`."""
        with self._lock:
            return self._credentials.model_copy()

    def set_token(self, token: str) -> None:
        """Rotate the OAuth token used by subsequent requests."""
        with self._lock:
            self._credentials.set_token(token)

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        response_model: type[T],
        data: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> T:
        """Send one request and decode its body into *response_model*.

        Behaves exactly like :meth:`AsyncClient.request
        <libtwitch.client.async_client.AsyncClient.request>` but blocks.
        """
        with self._lock:
            headers = build_headers(self._credentials)
        content = encode_body(data)
        if content is not None:
            headers["Content-Type"] = "application/json"
        url = build_url(self._config.base_url, path)

        try:
            response = self._client.request(
                method, url, headers=headers, content=content, params=params,
            )
        except httpx.HTTPError as exc:
            debug(f"{method} {url} failed: {exc}")
            raise TransportFailure(exc) from exc

        debug(f"{method} {url} -> {response.status_code}")
        return decode_response(
            response.status_code, response.text, response_model, response.reason_phrase,
        )

    def get(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a GET request. See :meth:`request`."""
        return self.request("GET", path, response_model, **kwargs)

    def post(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a POST request. See :meth:`request`."""
        return self.request("POST", path, response_model, **kwargs)

    def put(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a PUT request. See :meth:`request`."""
        return self.request("PUT", path, response_model, **kwargs)

    def delete(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a DELETE request. See :meth:`request`."""
        return self.request("DELETE", path, response_model, **kwargs)
