"""Where libtwitch keeps files, and how it writes them.

The only file libtwitch writes on its own is the credential file used by
``libtwitch token set`` when no explicit path is given.  It lives in the
per-user config directory:

* Linux and the BSDs: ``$XDG_CONFIG_HOME/libtwitch/credentials.toml``
  (``~/.config/libtwitch/credentials.toml`` when the variable is unset).
* Everything else: ``~/.libtwitch/credentials.toml``.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

_DIR_NAME = "libtwitch"
_CREDENTIALS_FILE = "credentials.toml"


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_config_dir() -> Path:
    """Return the per-user config directory, creating it on first use."""
    if _is_xdg_platform():
        xdg_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        config_dir = Path(xdg_home) / _DIR_NAME
    else:
        config_dir = Path.home() / f".{_DIR_NAME}"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def default_credentials_path() -> Path:
    return get_config_dir() / _CREDENTIALS_FILE


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Replace *path* with *data* in one rename.

    The content goes to a sibling temp file first, so readers see either the
    old file or the new one.  *mode* is applied before anything is written,
    which keeps a token file from ever being world-readable.  On failure the
    temp file is removed and the exception propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handle, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if mode is not None:
            os.chmod(tmp_name, mode)
        with os.fdopen(handle, "w", encoding="utf-8") as tmp:
            handle = -1
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if handle != -1:
            os.close(handle)
        Path(tmp_name).unlink(missing_ok=True)
        raise
