"""Numeric process exit codes used by the ``libtwitch`` command line.

Each constant maps to one error category and is referenced by the
corresponding :class:`~libtwitch.exceptions.TwitchError` subclass, so shell
scripts can tell failures apart without parsing stderr.

Example::

    $ libtwitch get /user
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the OAuth token was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, including configuration errors."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The API rejected the credentials (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_API_ERROR = 5
"""The API reported any other structured error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, TLS, connection reset)."""

EXIT_DECODE_ERROR = 7
"""The response body could not be decoded."""

EXIT_EMPTY_RESPONSE = 8
"""The API answered with an empty body."""
