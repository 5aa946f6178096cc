"""Tests for scopes and OAuth2 authorization URLs."""

from __future__ import annotations

import pytest

from libtwitch.auth import (
    ResponseType,
    Scope,
    auth_code_flow,
    build_auth_url,
    format_scopes,
    implicit_grant_flow,
)
from libtwitch.client import AsyncClient, SyncClient
from libtwitch.credentials import Credentials
from libtwitch.exceptions import ConfigError

AUTHORIZE = "https://api.twitch.tv/kraken/oauth2/authorize"


class TestScope:
    def test_values_are_lowercase_names(self) -> None:
        for scope in Scope:
            assert scope.value == scope.name.lower()
            assert str(scope) == scope.value

    def test_closed_set(self) -> None:
        assert len(Scope) == 15
        with pytest.raises(ValueError):
            Scope("channel_everything")

    def test_format_keeps_order(self) -> None:
        assert format_scopes([Scope.USER_READ, Scope.CHANNEL_READ]) == "user_read+channel_read"
        assert format_scopes([Scope.CHANNEL_READ, Scope.USER_READ]) == "channel_read+user_read"

    def test_format_single_and_empty(self) -> None:
        assert format_scopes([Scope.CHAT_LOGIN]) == "chat_login"
        assert format_scopes([]) == ""


class TestBuildAuthUrl:
    def test_authorization_code_flow(self) -> None:
        url = build_auth_url(
            "abc123", "code", "http://localhost/cb", [Scope.CHANNEL_READ, Scope.USER_READ], "xyz"
        )
        assert url == (
            f"{AUTHORIZE}?response_type=code&client_id=abc123"
            "&redirect_uri=http://localhost/cb&scope=channel_read+user_read&state=xyz"
        )

    def test_implicit_grant_flow(self) -> None:
        url = build_auth_url("abc", ResponseType.TOKEN, "http://localhost/cb", [Scope.USER_READ], "s")
        assert url.startswith(f"{AUTHORIZE}?response_type=token&client_id=abc&")

    def test_unknown_flow(self) -> None:
        with pytest.raises(ValueError):
            build_auth_url("abc", "password", "http://localhost/cb", [], "s")

    def test_redirect_and_state_are_encoded(self) -> None:
        url = build_auth_url(
            "abc", "code", "http://localhost:3000/cb?next=/home", [Scope.USER_READ], "a b&c"
        )
        assert "redirect_uri=http://localhost:3000/cb%3Fnext%3D/home&" in url
        assert url.endswith("&state=a%20b%26c")

    def test_deterministic(self) -> None:
        args = ("abc", "code", "http://localhost/cb", [Scope.USER_READ], "s")
        assert build_auth_url(*args) == build_auth_url(*args)


class TestClientFlows:
    def test_auth_code_flow_uses_client_id(self) -> None:
        with SyncClient(Credentials(client_id="cid", token="tok")) as client:
            url = auth_code_flow(client, "http://localhost/cb", [Scope.USER_READ], "xyz")
        assert url == (
            f"{AUTHORIZE}?response_type=code&client_id=cid"
            "&redirect_uri=http://localhost/cb&scope=user_read&state=xyz"
        )

    @pytest.mark.asyncio
    async def test_implicit_grant_flow_with_async_client(self) -> None:
        async with AsyncClient(Credentials(client_id="cid")) as client:
            url = implicit_grant_flow(client, "http://localhost/cb", [Scope.CHAT_LOGIN], "s")
        assert "response_type=token" in url
        assert "client_id=cid" in url

    def test_missing_client_id(self) -> None:
        with SyncClient(Credentials(token="tok")) as client:
            with pytest.raises(ConfigError):
                auth_code_flow(client, "http://localhost/cb", [Scope.USER_READ], "s")
