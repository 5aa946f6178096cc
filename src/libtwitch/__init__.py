"""libtwitch -- a client for the Twitch Kraken (v5) REST API.

Load credentials from a TOML file or an environment mapping, create a
client, and call the API with the type you expect back::

    import os
    from libtwitch import AsyncClient

    async with AsyncClient.from_source(os.environ) as client:
        top = await client.get("/games/top", TopGames, params={"limit": 20})

Failures surface as one of the :class:`~libtwitch.exceptions.RequestError`
subclasses.  :mod:`libtwitch.auth` builds OAuth2 authorization URLs.

Modules:
    client: Async and sync clients plus the shared request pipeline.
    credentials: Credential loading and persistence.
    auth: Scopes and authorization URLs.
    exceptions: Exception hierarchy with exit-code mapping.
    app: The ``libtwitch`` command line.
"""

__version__ = "0.1.0"

from libtwitch.auth import Scope, auth_code_flow, build_auth_url, implicit_grant_flow
from libtwitch.client import AsyncClient, SyncClient
from libtwitch.credentials import Credentials, load_credentials
from libtwitch.exceptions import (
    ApiError,
    ConfigError,
    DecodeFailure,
    EmptyResponse,
    RequestError,
    TransportFailure,
    TwitchError,
)
from libtwitch.models import ClientConfig, ErrorResponse

__all__ = [
    "ApiError",
    "AsyncClient",
    "ClientConfig",
    "ConfigError",
    "Credentials",
    "DecodeFailure",
    "EmptyResponse",
    "ErrorResponse",
    "RequestError",
    "Scope",
    "SyncClient",
    "TransportFailure",
    "TwitchError",
    "auth_code_flow",
    "build_auth_url",
    "implicit_grant_flow",
    "load_credentials",
]
