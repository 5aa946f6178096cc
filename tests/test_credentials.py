"""Tests for credential loading, mutation and persistence."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from libtwitch.credentials import Credentials, load_credentials
from libtwitch.exceptions import ConfigError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestFromFile:
    def test_both_keys(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", 'client_id = "cid"\ntoken = "tok"\n')
        creds = Credentials.from_file(path)
        assert creds.client_id == "cid"
        assert creds.token == "tok"

    def test_keys_are_optional(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", 'client_id = "cid"\n')
        creds = Credentials.from_file(str(path))
        assert creds.client_id == "cid"
        assert creds.token is None
        assert creds.is_complete is False

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read credential file"):
            Credentials.from_file(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", "client_id = \n")
        with pytest.raises(ConfigError, match="Invalid credential file"):
            Credentials.from_file(path)

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", "client_id = 42\n")
        with pytest.raises(ConfigError):
            Credentials.from_file(path)

    def test_legacy_channel_id_is_ignored(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "c.toml", 'client_id = "cid"\ntoken = "tok"\nchannel_id = "1"\n'
        )
        creds = Credentials.from_file(path)
        assert creds == Credentials(client_id="cid", token="tok")
        assert "channel_id" not in creds.model_dump()


class TestFromEnv:
    def test_reads_both_variables(self) -> None:
        creds = Credentials.from_env(
            {"TWITCH_CLIENT_ID": "cid", "TWITCH_OAUTH_TOKEN": "tok", "OTHER": "x"}
        )
        assert creds == Credentials(client_id="cid", token="tok")

    def test_unset_variables_become_empty_strings(self) -> None:
        creds = Credentials.from_env({})
        assert creds.client_id == ""
        assert creds.token == ""
        assert creds.is_complete is True

    def test_process_environment_is_opt_in(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TWITCH_CLIENT_ID", "from-env")
        monkeypatch.setenv("TWITCH_OAUTH_TOKEN", "env-token")
        assert Credentials.from_env(os.environ).client_id == "from-env"
        assert Credentials.from_env({}).client_id == ""


class TestLoadCredentials:
    def test_mapping_source(self) -> None:
        creds = load_credentials({"TWITCH_CLIENT_ID": "cid"})
        assert creds.client_id == "cid"
        assert creds.token == ""

    def test_path_source(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", 'token = "tok"\n')
        assert load_credentials(path).token == "tok"
        assert load_credentials(str(path)).token == "tok"


class TestSetToken:
    def test_in_place(self) -> None:
        creds = Credentials(client_id="cid", token="old")
        creds.set_token("new")
        assert creds.token == "new"
        assert creds.client_id == "cid"


class TestSave:
    def test_roundtrip(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        Credentials(client_id="cid", token="tok").save(path)
        assert Credentials.from_file(path) == Credentials(client_id="cid", token="tok")

    def test_roundtrip_after_rotation(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.toml", 'client_id = "cid"\ntoken = "old"\n')
        creds = Credentials.from_file(path)
        creds.set_token("new")
        creds.save(path)
        assert Credentials.from_file(path).token == "new"

    def test_none_fields_are_omitted(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        Credentials(client_id="cid").save(path)
        assert "token" not in path.read_text(encoding="utf-8")
        assert Credentials.from_file(path).token is None

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "c.toml"
        Credentials(client_id="cid", token="tok").save(path)
        assert path.is_file()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_owner_only_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        Credentials(client_id="cid", token="tok").save(path)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_write_failure_is_config_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ConfigError, match="Cannot write credential file"):
            Credentials(client_id="cid").save(blocker / "c.toml")
