"""Exception hierarchy for libtwitch.

All exceptions inherit from :class:`TwitchError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`libtwitch.exit_codes`.
The command line entry point in :func:`libtwitch.app.main` catches
``TwitchError`` and exits with the appropriate code; library callers catch
the specific classes they care about.

Every request made through a client ends in a decoded value or exactly one
of the four :class:`RequestError` outcomes.  They are siblings, so a caller
can catch ``RequestError`` and branch on the concrete type::

    TwitchError
    +-- ConfigError        (exit 1)
    +-- RequestError
        +-- TransportFailure   (exit 6)
        +-- EmptyResponse      (exit 8)
        +-- DecodeFailure      (exit 7)
        +-- ApiError           (exit 3 / 4 / 5, from the reported status)
"""

from __future__ import annotations

from typing import Optional

from libtwitch.exit_codes import (
    EXIT_API_ERROR,
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_EMPTY_RESPONSE,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
)
from libtwitch.models import ErrorResponse


class TwitchError(Exception):
    """Base exception for all libtwitch errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(TwitchError):
    """Raised for configuration problems (unreadable or invalid credential file, missing credentials)."""

    exit_code = EXIT_GENERIC_FAILURE


class RequestError(TwitchError):
    """Base class for the four outcomes of a failed API request."""


class TransportFailure(RequestError):
    """The HTTP call could not complete (DNS, TLS, connection reset, timeout).

    Args:
        cause: The underlying :class:`httpx.HTTPError`.
    """

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, cause: Exception):
        super().__init__(f"Request failed: {cause}")
        self.cause = cause


class EmptyResponse(RequestError):
    """The server answered with an empty body."""

    exit_code = EXIT_EMPTY_RESPONSE

    def __init__(self, message: str = "empty response"):
        super().__init__(message)


class DecodeFailure(RequestError):
    """The body matched neither the expected shape nor the error shape.

    Args:
        cause: The parse or validation error raised by the decoder.
        body: The raw response body, kept for diagnostics.
    """

    exit_code = EXIT_DECODE_ERROR

    def __init__(self, cause: Exception, body: str = ""):
        super().__init__(f"Could not decode response: {cause}")
        self.cause = cause
        self.body = body


class ApiError(RequestError):
    """The server returned a structured error object.

    When the body was first tried against the caller's expected shape and
    failed, that failure is kept as :attr:`cause`.

    Args:
        response: The decoded :class:`~libtwitch.models.ErrorResponse`.
        cause: The :class:`DecodeFailure` from the success-shape decode, if any.
    """

    def __init__(self, response: ErrorResponse, cause: Optional[DecodeFailure] = None):
        detail = response.error or "error"
        super().__init__(f"HTTP {response.status} {detail}: {response.message}")
        self.response = response
        self.cause = cause

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def error(self) -> str:
        return self.response.error

    @property
    def message(self) -> str:
        return self.response.message

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        if self.status in (401, 403):
            return EXIT_AUTH_FAILURE
        if self.status == 404:
            return EXIT_NOT_FOUND
        return EXIT_API_ERROR
