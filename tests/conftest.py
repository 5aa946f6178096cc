"""Shared test fixtures for libtwitch.

Provides credentials, isolated config directories, and output managers
reset between tests. Discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from libtwitch.credentials import Credentials
from libtwitch.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the global OutputManager so flags set by one test do not leak into the next."""
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a colourless, quiet OutputManager (warnings still reach stderr)."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    return output


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> Credentials:
    """Complete credentials for authenticated calls."""
    return Credentials(client_id="test-client-id", token="test-token")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at tmp_path and clear Twitch env vars.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("libtwitch.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["TWITCH_CLIENT_ID", "TWITCH_OAUTH_TOKEN"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
