"""Request building and response decoding shared by both clients.

The clients own the transport and the single network round trip; everything
around it lives here so that :class:`~libtwitch.client.AsyncClient` and
:class:`~libtwitch.client.SyncClient` behave identically:

1. :func:`build_headers` -- ``Accept``, ``Client-ID`` and
   ``Authorization: OAuth <token>`` from the credentials.
2. :func:`encode_body` -- JSON request body.
3. :func:`decode_response` -- turns the status and the full body text into
   the caller's type or one of the :class:`~libtwitch.exceptions.RequestError`
   outcomes.

Decoding order for a non-empty 2xx body: the caller's type first, then
:class:`~libtwitch.models.ErrorResponse`, because Kraken sometimes answers
200 with an error object.  Any other status skips straight to the error
shape.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_json

from libtwitch.constants import ACCEPT_MEDIA_TYPE, AUTH_SCHEME, CLIENT_ID_HEADER
from libtwitch.credentials import Credentials
from libtwitch.exceptions import ApiError, ConfigError, DecodeFailure, EmptyResponse
from libtwitch.models import ErrorResponse
from libtwitch.output import warning

T = TypeVar("T")

_ERROR_SNIPPET_LENGTH = 200
_ADAPTER_CACHE_SIZE = 256


def build_url(base_url: str, path: str) -> str:
    """Prefix *path* with the API root; a missing leading slash is added."""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base_url.rstrip('/')}{path}"


def build_headers(credentials: Credentials) -> dict[str, str]:
    """Return the authentication headers for *credentials*.

    Raises:
        ConfigError: If the client id or the token is missing.
    """
    if credentials.client_id is None or credentials.token is None:
        raise ConfigError(
            "Both a client id and an OAuth token are required for API requests"
        )
    return {
        "Accept": ACCEPT_MEDIA_TYPE,
        CLIENT_ID_HEADER: credentials.client_id,
        "Authorization": f"{AUTH_SCHEME} {credentials.token}",
    }


def encode_body(data: Any) -> Optional[bytes]:
    """Serialise a request body to JSON, or return ``None`` when there is none.

    Pydantic models, dataclasses and plain JSON-compatible values are all
    accepted.
    """
    if data is None:
        return None
    return to_json(data)


@lru_cache(maxsize=_ADAPTER_CACHE_SIZE)
def _adapter(response_model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_model)


def decode_response(
    status_code: int,
    text: str,
    response_model: type[T],
    reason_phrase: str = "",
) -> T:
    """Decode a response body into *response_model*.

    Args:
        status_code: The HTTP status of the response.
        text: The complete response body.
        response_model: Any type pydantic can validate (a model class,
            ``dict[str, Any]``, ``list[Model]``, ...).
        reason_phrase: The HTTP reason phrase, used when a failing response
            carries no structured error.

    Returns:
        The validated value.

    Raises:
        EmptyResponse: If *text* is empty, whatever the status.
        ApiError: If the body is a structured error object, or the status
            is not 2xx.  A non-2xx body that is not an error object is
            written to stderr and its :class:`DecodeFailure` kept as ``cause``.
        DecodeFailure: If a 2xx body matches neither shape.
    """
    if not text:
        raise EmptyResponse()

    if not 200 <= status_code < 300:
        try:
            error_response = ErrorResponse.model_validate_json(text)
        except ValidationError as exc:
            failure = DecodeFailure(exc, body=text)
            warning(f'Could not decode response body:\n"{text}"')
            error_response = ErrorResponse(
                status=status_code,
                error=reason_phrase,
                message=text[:_ERROR_SNIPPET_LENGTH],
            )
            raise ApiError(error_response, cause=failure) from failure
        raise ApiError(error_response)

    try:
        return _adapter(response_model).validate_json(text)
    except ValidationError as exc:
        failure = DecodeFailure(exc, body=text)

    try:
        error_response = ErrorResponse.model_validate_json(text)
    except ValidationError:
        warning(f'Could not decode response body:\n"{text}"')
        raise failure from failure.cause

    raise ApiError(error_response, cause=failure) from failure
