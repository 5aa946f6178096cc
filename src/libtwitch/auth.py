"""OAuth2 authorization URLs for the Kraken API.

Twitch issues user tokens through two browser flows:

* **Authorization code** (``response_type=code``) -- the redirect carries a
  short-lived code that a server exchanges for a token.
* **Implicit grant** (``response_type=token``) -- the redirect fragment
  carries the token itself.

This module only builds the URL the user is sent to.  It performs no
network I/O and is deterministic for a given set of inputs.

Example::

    url = auth_code_flow(
        client,
        "http://localhost/cb",
        [Scope.CHANNEL_READ, Scope.USER_READ],
        state="xyz",
    )
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Union
from urllib.parse import quote

from libtwitch.constants import AUTHORIZE_URL
from libtwitch.exceptions import ConfigError

if TYPE_CHECKING:
    from libtwitch.client.async_client import AsyncClient
    from libtwitch.client.sync_client import SyncClient


class Scope(str, Enum):
    """Permissions an application can request from a Kraken user.

    The value of each member is the name Twitch expects in the ``scope``
    query parameter.  ``Scope("not_a_scope")`` raises :class:`ValueError`.
    """

    CHANNEL_CHECK_SUBSCRIPTION = "channel_check_subscription"
    CHANNEL_COMMERCIAL = "channel_commercial"
    CHANNEL_EDITOR = "channel_editor"
    CHANNEL_FEED_EDIT = "channel_feed_edit"
    CHANNEL_FEED_READ = "channel_feed_read"
    CHANNEL_READ = "channel_read"
    CHANNEL_STREAM = "channel_stream"
    CHANNEL_SUBSCRIPTIONS = "channel_subscriptions"
    CHAT_LOGIN = "chat_login"
    USER_BLOCKS_EDIT = "user_blocks_edit"
    USER_BLOCKS_READ = "user_blocks_read"
    USER_FOLLOWS_EDIT = "user_follows_edit"
    USER_READ = "user_read"
    USER_SUBSCRIPTIONS = "user_subscriptions"
    VIEWING_ACTIVITY_READ = "viewing_activity_read"

    def __str__(self) -> str:
        return self.value


class ResponseType(str, Enum):
    """The ``response_type`` of an authorization request."""

    CODE = "code"
    TOKEN = "token"


def format_scopes(scopes: Sequence[Scope]) -> str:
    """Join scope names with ``+``, keeping their order."""
    return "+".join(Scope(scope).value for scope in scopes)


def build_auth_url(
    client_id: str,
    flow_kind: Union[ResponseType, str],
    redirect_url: str,
    scopes: Sequence[Scope],
    state: str,
) -> str:
    """Build the authorization URL a user is sent to.

    Query parameters appear in a fixed order: ``response_type``,
    ``client_id``, ``redirect_uri``, ``scope``, ``state``.  The client id,
    redirect URI and state are percent-encoded; ``:`` and ``/`` are left
    intact in the redirect URI.

    Args:
        client_id: The application's client id.
        flow_kind: ``"code"`` for the authorization-code flow or
            ``"token"`` for the implicit-grant flow.
        redirect_url: Where Twitch redirects after authorization.
        scopes: Requested permissions, rendered in the given order.
        state: Opaque value echoed back on the redirect.

    Returns:
        The full authorization URL.

    Raises:
        ValueError: If *flow_kind* or one of *scopes* is not recognised.
    """
    response_type = ResponseType(flow_kind)
    return (
        f"{AUTHORIZE_URL}"
        f"?response_type={response_type.value}"
        f"&client_id={quote(client_id, safe='')}"
        f"&redirect_uri={quote(redirect_url, safe=':/')}"
        f"&scope={format_scopes(scopes)}"
        f"&state={quote(state, safe='')}"
    )


def _client_id_of(client: Union[AsyncClient, SyncClient]) -> str:
    client_id = client.credentials.client_id
    if not client_id:
        raise ConfigError("A client id is required to build an authorization URL")
    return client_id


def auth_code_flow(
    client: Union[AsyncClient, SyncClient],
    redirect_url: str,
    scopes: Sequence[Scope],
    state: str,
) -> str:
    """Authorization URL for the authorization-code flow, using *client*'s client id."""
    return build_auth_url(_client_id_of(client), ResponseType.CODE, redirect_url, scopes, state)


def implicit_grant_flow(
    client: Union[AsyncClient, SyncClient],
    redirect_url: str,
    scopes: Sequence[Scope],
    state: str,
) -> str:
    """Authorization URL for the implicit-grant flow, using *client*'s client id."""
    return build_auth_url(_client_id_of(client), ResponseType.TOKEN, redirect_url, scopes, state)
