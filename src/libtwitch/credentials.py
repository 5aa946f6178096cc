"""Client id and OAuth token, loaded from a TOML file or an environment mapping.

A credential file holds two optional keys::

    client_id = "uo6dggojyb8d6soh92zknwmi5ej1q2"
    token = "cfabdegwdoklmawdzdo98xt2fo512y"

Files are written atomically with ``0o600`` permissions so the token is
never world-readable, even momentarily.

Credentials are never read from the process environment implicitly: pass
``os.environ`` (or any other mapping) to :func:`load_credentials` or
:meth:`Credentials.from_env` to opt in.

See Also:
    :class:`~libtwitch.client.AsyncClient` -- owns a :class:`Credentials`.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

import tomli_w
from pydantic import BaseModel, ValidationError

from libtwitch.config import _atomic_write
from libtwitch.constants import ENV_CLIENT_ID, ENV_OAUTH_TOKEN
from libtwitch.exceptions import ConfigError

CredentialSource = Union[str, os.PathLike[str], Mapping[str, str]]
"""A credential file path, or an environment mapping such as ``os.environ``."""


class Credentials(BaseModel):
    """Client identifier and bearer token sent with every request.

    Both fields may be ``None`` while the credentials are being assembled,
    but any authenticated call requires both.

    Attributes:
        client_id: The application's Twitch client id.
        token: The OAuth access token.

    Example::

        creds = Credentials.from_file("twitch.toml")
        creds.set_token("new-token")
        creds.save("twitch.toml")
    """

    client_id: Optional[str] = None
    token: Optional[str] = None

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike[str]]) -> Credentials:
        """Load credentials from a TOML file.

        Raises:
            ConfigError: If the file cannot be read, is not valid TOML, or
                holds a non-string ``client_id`` or ``token``.  Other keys,
                such as a legacy ``channel_id``, are ignored.
        """
        path = Path(path).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc
        try:
            data = tomllib.loads(text)
            return cls.model_validate(data)
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid credential file {path}: {exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> Credentials:
        """Build credentials from ``TWITCH_CLIENT_ID`` and ``TWITCH_OAUTH_TOKEN``.

        Missing variables become empty strings rather than errors; the API
        rejects the resulting requests.
        """
        return cls(
            client_id=environ.get(ENV_CLIENT_ID, ""),
            token=environ.get(ENV_OAUTH_TOKEN, ""),
        )

    @property
    def is_complete(self) -> bool:
        """Whether both the client id and the token are present."""
        return self.client_id is not None and self.token is not None

    def set_token(self, token: str) -> None:
        """Replace the OAuth token in place. No I/O is performed."""
        self.token = token

    def save(self, path: Union[str, os.PathLike[str]]) -> None:
        """Write the credentials to *path* as TOML.

        Fields that are ``None`` are left out of the file.

        Raises:
            ConfigError: If the file cannot be written.
        """
        path = Path(path).expanduser()
        text = tomli_w.dumps(self.model_dump(exclude_none=True))
        try:
            _atomic_write(path, text, mode=0o600)
        except OSError as exc:
            raise ConfigError(f"Cannot write credential file {path}: {exc}") from exc


def load_credentials(source: CredentialSource) -> Credentials:
    """Load credentials from a file path or an environment mapping.

    Args:
        source: A path to a TOML credential file, or a mapping of
            environment variables (typically ``os.environ``).

    Returns:
        The loaded :class:`Credentials`.

    Raises:
        ConfigError: If *source* is a path that cannot be read or parsed.
    """
    if isinstance(source, Mapping):
        return Credentials.from_env(source)
    return Credentials.from_file(source)
