"""Asynchronous Kraken client -- the primary way to call the API.

:class:`AsyncClient` owns an :class:`httpx.AsyncClient` and a
:class:`~libtwitch.credentials.Credentials`.  Each call performs exactly one
round trip and suspends only while awaiting it; there are no retries and no
background tasks.

See Also:
    :class:`~libtwitch.client.sync_client.SyncClient` for the blocking
    equivalent.
    :mod:`libtwitch.client.pipeline` for header building and decoding.
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


class AsyncClient:
    """Asynchronous client for the Kraken v5 API.

    The transport is created once, here, and never replaced.  Token
    rotation through :meth:`set_token` only touches the credentials, and
    every request takes a consistent snapshot of them before it is sent, so
    concurrent in-flight requests are safe.

    Args:
        credentials: Client id and token, owned by this client from now on.
        config: Base URL, timeout and TLS settings.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).

    Example::

        async with AsyncClient.from_source(os.environ) as client:
            user = await client.get("/user", User)
    """

    def __init__(
        self,
        credentials: Credentials,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config or ClientConfig()
        self._lock = threading.Lock()
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=transport,
        )

    @classmethod
    def from_source(
        cls,
        source: CredentialSource,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> AsyncClient:
        """Create a client with credentials loaded from a file path or environment mapping."""
        return cls(load_credentials(source), config=config, transport=transport)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._client.aclose()

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

    async def request(
        self,
        method: str,
        path: str,
        response_model: type[T],
        data: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> T:
        """Send one request and decode its body into *response_model*.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: Path relative to the API root, e.g. ``"/games/top"``.
            response_model: Type the body is validated against.
            data: Optional JSON body (model, dict, list, ...).
            params: Optional query parameters (cursors, limits, ...).

        Returns:
            The decoded body.

        Raises:
            ConfigError: If the credentials are incomplete.
            TransportFailure: On network, TLS or timeout errors.
            EmptyResponse: If the body is empty.
            DecodeFailure: If the body matches neither expected shape.
            ApiError: If the API reported an error.
        """
        with self._lock:
            headers = build_headers(self._credentials)
        content = encode_body(data)
        if content is not None:
            headers["Content-Type"] = "application/json"
        url = build_url(self._config.base_url, path)

        try:
            response = await self._client.request(
                method, url, headers=headers, content=content, params=params,
            )
        except httpx.HTTPError as exc:
            debug(f"{method} {url} failed: {exc}")
            raise TransportFailure(exc) from exc

        debug(f"{method} {url} -> {response.status_code}")
        return decode_response(
            response.status_code, response.text, response_model, response.reason_phrase,
        )

    async def get(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a GET request. See :meth:`request`."""
        return await self.request("GET", path, response_model, **kwargs)

    async def post(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a POST request. See :meth:`request`."""
        return await self.request("POST", path, response_model, **kwargs)

    async def put(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a PUT request. See :meth:`request`."""
        return await self.request("PUT", path, response_model, **kwargs)

    async def delete(self, path: str, response_model: type[T], **kwargs: Any) -> T:
        """Send a DELETE request. See :meth:`request`."""
        return await self.request("DELETE", path, response_model, **kwargs)
