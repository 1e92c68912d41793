# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Bearer token sources for the authenticated transport.

The transport asks a provider for a token on every request. Two providers
exist, one per credential variant:

- :class:`StaticTokenProvider` hands back a personal access token.
- :class:`ClientCredentialsTokenProvider` runs the OAuth 2.0 client
  credentials grant (RFC 6749 Section 4.4) against the Firefly III token
  endpoint and caches the result until shortly before it expires.

Token requests go straight to the *inner* transport, so they are not
rewritten or authenticated a second time.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import anyio
import httpx

from ..config import DEFAULT_TOKEN_PATH, BearerToken, ClientCredentials, EndpointConfig
from ..exceptions import AuthError
from ..utils import get_logger
from .models import TokenResponse


_logger = get_logger("firefly_provider.auth")


@runtime_checkable
class TokenProvider(Protocol):
    """Source of bearer tokens for outgoing requests."""

    def get_token(self, transport: httpx.BaseTransport) -> str:
        """Return a bearer token, fetching one through ``transport`` if needed."""

    async def aget_token(self, transport: httpx.AsyncBaseTransport) -> str:
        """Async variant of :meth:`get_token`."""

    def invalidate(self) -> None:
        """Forget any cached token so the next call fetches a fresh one."""


class StaticTokenProvider:
    """Provider for a long-lived personal access token."""

    __slots__ = ("_token",)

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self, transport: httpx.BaseTransport) -> str:
        return self._token

    async def aget_token(self, transport: httpx.AsyncBaseTransport) -> str:
        return self._token

    def invalidate(self) -> None:
        pass

    def __repr__(self) -> str:
        return "StaticTokenProvider(token=***)"


class ClientCredentialsTokenProvider:
    """Exchange a client id/secret pair for a short-lived bearer token.

    The client authenticates to the token endpoint with HTTP Basic, as
    RFC 6749 Section 2.3.1 recommends. Tokens are cached until ``leeway``
    seconds before ``expires_in`` runs out; tokens without ``expires_in``
    are kept until :meth:`invalidate` is called.

    Example:
        >>> provider = ClientCredentialsTokenProvider(
        ...     "http://firefly.local:8000", client_id="7", client_secret="s3cret"
        ... )
        >>> token = provider.get_token(httpx.HTTPTransport())
    """

    def __init__(
        self,
        base_url: httpx.URL | str,
        client_id: str,
        client_secret: str,
        *,
        scope: str | None = None,
        token_path: str = DEFAULT_TOKEN_PATH,
        leeway: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._token_url = str(httpx.URL(base_url).copy_with(path=token_path))
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = scope
        self._leeway = leeway
        self._clock = clock
        self._lock = threading.Lock()
        self._async_lock = anyio.Lock()
        self._token: str | None = None
        self._expires_at: float | None = None

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def scope(self) -> str | None:
        return self._scope

    @property
    def token_url(self) -> str:
        return self._token_url

    def __repr__(self) -> str:
        return f"ClientCredentialsTokenProvider(token_url={self._token_url!r}, client_id={self._client_id!r})"

    # ------------------------------------------------------------------
    # Token acquisition
    # ------------------------------------------------------------------

    def get_token(self, transport: httpx.BaseTransport) -> str:
        with self._lock:
            cached = self._cached()
            if cached is not None:
                return cached

            response = transport.handle_request(self._build_request())
            try:
                response.read()
            finally:
                response.close()
            return self._store(self._accept(response))

    async def aget_token(self, transport: httpx.AsyncBaseTransport) -> str:
        async with self._async_lock:
            cached = self._cached()
            if cached is not None:
                return cached

            response = await transport.handle_async_request(self._build_request())
            try:
                await response.aread()
            finally:
                await response.aclose()
            return self._store(self._accept(response))

    def invalidate(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _cached(self) -> str | None:
        if self._token is None:
            return None
        if self._expires_at is not None and self._clock() >= self._expires_at:
            return None
        return self._token

    def _store(self, token: TokenResponse) -> str:
        self._token = token.access_token
        if token.expires_in is None:
            self._expires_at = None
        else:
            self._expires_at = self._clock() + max(token.expires_in - self._leeway, 0.0)
        _logger.debug("acquired client credentials token", token_url=self._token_url, expires_in=token.expires_in)
        return token.access_token

    def _build_request(self) -> httpx.Request:
        form = {"grant_type": "client_credentials"}
        if self._scope:
            form["scope"] = self._scope

        request = httpx.Request("POST", self._token_url, data=form, headers={"Accept": "application/json"})
        # The exchange bypasses httpx.Client, so the Basic flow is stepped once by hand.
        return next(httpx.BasicAuth(self._client_id, self._client_secret).auth_flow(request))

    def _accept(self, response: httpx.Response) -> TokenResponse:
        if not response.is_success:
            raise AuthError(
                f"token exchange rejected with HTTP {response.status_code}: {_describe_oauth_error(response)}",
                url=self._token_url,
                status_code=response.status_code,
            )

        try:
            token = TokenResponse.from_dict(response.json())
        except ValueError as exc:
            raise AuthError(f"invalid token response: {exc}", url=self._token_url) from exc

        if token.token_type.lower() != "bearer":
            raise AuthError(f"unsupported token_type {token.token_type!r}", url=self._token_url)
        return token


def _describe_oauth_error(response: httpx.Response) -> str:
    """Render an RFC 6749 Section 5.2 error body, or a text excerpt."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or "no body"
    if not isinstance(payload, dict) or "error" not in payload:
        return response.text[:200]
    description = payload.get("error_description") or payload.get("message")
    return f"{payload['error']}: {description}" if description else str(payload["error"])


def token_provider_for(config: EndpointConfig) -> TokenProvider:
    """Select the token provider for the session's credential variant."""
    credential = config.credential
    if isinstance(credential, BearerToken):
        return StaticTokenProvider(credential.token)
    if isinstance(credential, ClientCredentials):
        return ClientCredentialsTokenProvider(
            config.url,
            credential.client_id,
            credential.client_secret,
            scope=credential.scope,
            token_path=credential.token_path,
        )
    raise TypeError(f"unsupported credential {type(credential).__name__}")


__all__ = [
    "ClientCredentialsTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
    "token_provider_for",
]
