"""Pydantic models shared across libtwitch.

* :class:`ErrorResponse` -- the structured error object Kraken returns in
  place of the expected payload.
* :class:`ClientConfig` -- transport settings for
  :class:`~libtwitch.client.AsyncClient` and
  :class:`~libtwitch.client.SyncClient`.

Credentials live in :mod:`libtwitch.credentials` next to their file I/O.
Per-endpoint response schemas are not part of the package: callers pass
their own models (or any type pydantic can validate) to the clients.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from libtwitch.constants import API_ROOT, DEFAULT_TIMEOUT


class ErrorResponse(BaseModel):
    """Error body reported by the API.

    Example::

        {"error": "Unauthorized", "status": 401, "message": "invalid oauth token"}
    """

    status: int = Field(description="HTTP status reported inside the body")
    message: str = Field(description="Human-readable explanation")
    error: str = Field(default="", description="Short error name, e.g. 'Not Found'")


class ClientConfig(BaseModel):
    """Transport settings applied when a client is constructed.

    Example::

        ClientConfig(timeout=10)
    """

    base_url: str = Field(
        default=API_ROOT, description="Prefix prepended to every request path"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds"
    )
    verify_ssl: bool = True
