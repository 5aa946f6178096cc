"""Typer application and entry point for the ``libtwitch`` command line.

The command line is a thin collaborator of the library: it loads
credentials from ``--credentials PATH`` (or from the environment when no
path is given), calls :class:`~libtwitch.client.SyncClient` or
:mod:`libtwitch.auth`, and prints the result.

Typical use::

    libtwitch auth-url --redirect-uri http://localhost/cb --scope user_read --state xyz
    libtwitch -c twitch.toml get /games/top --param limit=5
    libtwitch -c twitch.toml token set NEW_TOKEN

Library errors are reported on stderr and mapped to the exit codes in
:mod:`libtwitch.exit_codes`.
"""

from __future__ import annotations

import json
import os
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer

from libtwitch import __version__
from libtwitch.constants import DEFAULT_TIMEOUT
from libtwitch.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE

if TYPE_CHECKING:
    from libtwitch.credentials import Credentials

app = typer.Typer(
    name="libtwitch",
    help="Call the Twitch Kraken API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
token_app = typer.Typer(no_args_is_help=True)
app.add_typer(token_app, name="token", help="Inspect or rotate the OAuth token.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"libtwitch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    credentials: Optional[Path] = typer.Option(
        None,
        "--credentials",
        "-c",
        help="TOML credential file. Defaults to TWITCH_CLIENT_ID / TWITCH_OAUTH_TOKEN.",
    ),
    timeout: float = typer.Option(DEFAULT_TIMEOUT, "--timeout", min=0.001, help="Request timeout in seconds."),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: configures output and stores shared options in ``ctx.obj``."""
    from libtwitch.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["credentials"] = credentials
    ctx.obj["timeout"] = timeout


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn library errors into an error line and the matching exit code."""
    from libtwitch.exceptions import TwitchError
    from libtwitch.output import error

    try:
        yield
    except TwitchError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _load_credentials(ctx: typer.Context) -> Credentials:
    """Load credentials from --credentials, or from the environment when it is absent."""
    from libtwitch.credentials import load_credentials

    path: Optional[Path] = ctx.obj.get("credentials")
    return load_credentials(path if path is not None else os.environ)


def _parse_params(params: Optional[list[str]]) -> dict[str, str]:
    """Parse ``key=value`` query parameters."""
    from libtwitch.output import error

    parsed: dict[str, str] = {}
    for item in params or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            error(f"Invalid parameter '{item}', expected key=value.")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        parsed[key] = value
    return parsed


def _parse_data(data: Optional[str]) -> Any:  # noqa: ANN401
    """Parse the ``--data`` option as JSON."""
    from libtwitch.output import error

    if data is None:
        return None
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        error(f"--data is not valid JSON: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None


def _call(
    ctx: typer.Context,
    method: str,
    path: str,
    params: Optional[list[str]],
    data: Optional[str] = None,
) -> None:
    from libtwitch.client import SyncClient
    from libtwitch.models import ClientConfig
    from libtwitch.output import format_response

    query = _parse_params(params)
    body = _parse_data(data)
    with _handle_errors():
        credentials = _load_credentials(ctx)
        config = ClientConfig(timeout=ctx.obj["timeout"])
        with SyncClient(credentials, config=config) as client:
            result = client.request(method, path, Any, data=body, params=query or None)
    format_response(result)


_PATH_ARG = typer.Argument(help="Path below the API root, e.g. /games/top.")
_PARAM_OPT = typer.Option(None, "--param", "-p", help="Query parameter as key=value (repeatable).")
_DATA_OPT = typer.Option(None, "--data", "-d", help="JSON request body.")


# ------------------------------------------------------------------ #
# API commands
# ------------------------------------------------------------------ #


@app.command("get")
def get_command(
    ctx: typer.Context,
    path: str = _PATH_ARG,
    param: Optional[list[str]] = _PARAM_OPT,
) -> None:
    """Send a GET request and print the response."""
    _call(ctx, "GET", path, param)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    path: str = _PATH_ARG,
    param: Optional[list[str]] = _PARAM_OPT,
) -> None:
    """Send a DELETE request and print the response."""
    _call(ctx, "DELETE", path, param)


@app.command("post")
def post_command(
    ctx: typer.Context,
    path: str = _PATH_ARG,
    data: Optional[str] = _DATA_OPT,
    param: Optional[list[str]] = _PARAM_OPT,
) -> None:
    """Send a POST request with an optional JSON body and print the response."""
    _call(ctx, "POST", path, param, data)


@app.command("put")
def put_command(
    ctx: typer.Context,
    path: str = _PATH_ARG,
    data: Optional[str] = _DATA_OPT,
    param: Optional[list[str]] = _PARAM_OPT,
) -> None:
    """Send a PUT request with an optional JSON body and print the response."""
    _call(ctx, "PUT", path, param, data)


# ------------------------------------------------------------------ #
# Authorization URL
# ------------------------------------------------------------------ #


@app.command("auth-url")
def auth_url_command(
    ctx: typer.Context,
    redirect_uri: str = typer.Option(..., "--redirect-uri", help="Registered redirect URI."),
    scope: list[str] = typer.Option(..., "--scope", "-s", help="Scope to request (repeatable)."),
    state: str = typer.Option(..., "--state", help="Opaque value echoed back on redirect."),
    flow: str = typer.Option("code", "--flow", help="'code' (authorization code) or 'token' (implicit grant)."),
    client_id: Optional[str] = typer.Option(
        None, "--client-id", help="Client id. Defaults to the loaded credentials."
    ),
) -> None:
    """Print the OAuth2 authorization URL for the requested scopes."""
    from libtwitch.auth import ResponseType, Scope, build_auth_url
    from libtwitch.exceptions import ConfigError
    from libtwitch.output import error, info, print_data

    try:
        scopes = [Scope(name) for name in scope]
        response_type = ResponseType(flow)
    except ValueError as exc:
        error(str(exc))
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    with _handle_errors():
        if client_id is None:
            client_id = _load_credentials(ctx).client_id
        if not client_id:
            raise ConfigError("No client id: pass --client-id or configure credentials")
        url = build_auth_url(client_id, response_type, redirect_uri, scopes, state)
    print_data(url)
    info("Open this URL in a browser to authorize the application.")


# ------------------------------------------------------------------ #
# Token management
# ------------------------------------------------------------------ #


def _mask(token: Optional[str]) -> str:
    if not token:
        return "(not set)"
    if len(token) <= 4:
        return "*" * len(token)
    return token[:4] + "*" * (len(token) - 4)


@token_app.command("show")
def token_show(ctx: typer.Context) -> None:
    """Show the client id and a masked token."""
    from libtwitch.output import print_data

    with _handle_errors():
        credentials = _load_credentials(ctx)
    print_data(f"client_id\t{credentials.client_id or '(not set)'}")
    print_data(f"token\t{_mask(credentials.token)}")


@token_app.command("set")
def token_set(
    ctx: typer.Context,
    token: str = typer.Argument(help="The new OAuth token."),
    save: Optional[Path] = typer.Option(
        None, "--save", help="File to write. Defaults to --credentials, else the default path."
    ),
) -> None:
    """Rotate the OAuth token and save the credential file."""
    from libtwitch.config import default_credentials_path
    from libtwitch.output import success

    with _handle_errors():
        credentials = _load_credentials(ctx)
        credentials.set_token(token)
        target = save or ctx.obj.get("credentials") or default_credentials_path()
        credentials.save(target)
    success(f"Token saved to {target}.")


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Console-script entry point for ``libtwitch``.

    :class:`~libtwitch.exceptions.TwitchError` instances that escape a
    command exit with their ``exit_code``; anything else exits with
    :data:`~libtwitch.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from libtwitch.exceptions import TwitchError
        from libtwitch.output import error

        if isinstance(exc, TwitchError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
