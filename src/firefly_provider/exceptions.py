# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Error taxonomy for the Firefly III provider.

Every failure surfaced by this package is a :class:`FireflyError`. The
subclasses map onto the stages of a read:

- ``ConfigError``: the endpoint or credential is malformed. Raised while the
  session is being configured, before any network call.
- ``AuthError``: the remote service rejected our credentials (token exchange
  refused, or a 401/403 on the API call).
- ``TransportError``: the request could not be sent or the connection failed.
- ``DecodeError``: the response body is not the JSON shape we expect.
- ``ResponseError``: any other non-2xx answer from the API.

Nothing here retries. Callers that want retries wrap the read themselves.
"""

from __future__ import annotations


class FireflyError(Exception):
    """Base class for all provider failures.

    Attributes:
        url: Fully addressed request URL, when the failure is tied to one.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ConfigError(FireflyError):
    """Malformed endpoint or credential configuration.

    Attributes:
        field: Name of the offending configuration attribute, if known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AuthError(FireflyError):
    """Credentials were rejected by the remote service."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class TransportError(FireflyError):
    """Network, TLS or timeout failure while sending a request."""


class DecodeError(FireflyError):
    """Response body is not valid JSON or does not match the envelope."""


class ResponseError(FireflyError):
    """The API answered with an unexpected non-2xx status.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Leading excerpt of the response body, for diagnostics.
    """

    def __init__(self, message: str, *, url: str | None = None, status_code: int, body: str = "") -> None:
        super().__init__(message, url=url)
        self.status_code = status_code
        self.body = body


__all__ = [
    "AuthError",
    "ConfigError",
    "DecodeError",
    "FireflyError",
    "ResponseError",
    "TransportError",
]
