"""HTTP clients for the Kraken API.

Both clients wrap :mod:`httpx`, attach the Kraken headers from their
:class:`~libtwitch.credentials.Credentials`, and decode each body into the
type the caller asks for.

Classes:
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`.
    :class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.

Example::

    from libtwitch.client import SyncClient

    with SyncClient.from_source("twitch.toml") as client:
        channel = client.get("/channel", Channel)
"""

from libtwitch.client.async_client import AsyncClient
from libtwitch.client.sync_client import SyncClient

__all__ = ["AsyncClient", "SyncClient"]
