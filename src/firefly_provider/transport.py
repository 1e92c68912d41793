# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Authenticated transport for the Firefly III API.

Callers build requests against paths relative to the service root
(``GET /api/v1/about``). The transport fills in the configured scheme, host
and port, attaches ``Authorization: Bearer <token>`` and hands the request to
an inner transport. Path and query are left alone.

Example:
    >>> config = EndpointConfig("http://firefly.local:8000", BearerToken("tok"))
    >>> client = httpx.Client(transport=FireflyTransport(config))
    >>> client.get("/api/v1/about")  # sent to http://firefly.local:8000/api/v1/about

The transport does not retry, log or cache. Errors raised by the inner
transport propagate unchanged.
"""

from __future__ import annotations

import httpx

from .auth import TokenProvider, token_provider_for
from .config import EndpointConfig


class _RequestRewriter:
    """Shared URL and header rewriting for the sync and async transports."""

    __slots__ = ("_scheme", "_host", "_port", "_netloc", "_tokens")

    def __init__(self, config: EndpointConfig, tokens: TokenProvider | None) -> None:
        url = config.url
        self._scheme = url.scheme
        self._host = url.host
        self._port = url.port
        self._netloc = url.netloc.decode("ascii")
        self._tokens = tokens if tokens is not None else token_provider_for(config)

    @property
    def tokens(self) -> TokenProvider:
        return self._tokens

    def readdress(self, request: httpx.Request) -> None:
        request.url = request.url.copy_with(scheme=self._scheme, host=self._host, port=self._port)
        request.headers["Host"] = self._netloc

    def authorize(self, request: httpx.Request, token: str) -> None:
        request.headers["Authorization"] = f"Bearer {token}"

    def observe(self, response: httpx.Response) -> None:
        # A rejected token is dropped so the next request fetches a new one.
        if response.status_code == 401:
            self._tokens.invalidate()


class FireflyTransport(httpx.BaseTransport):
    """Synchronous transport bound to one endpoint and credential.

    Args:
        config: Session configuration. The base URL is parsed once, here.
        transport: Inner transport that performs the I/O. Defaults to
            :class:`httpx.HTTPTransport`.
        tokens: Token provider override. Defaults to the provider matching
            ``config.credential``.
    """

    def __init__(
        self,
        config: EndpointConfig,
        transport: httpx.BaseTransport | None = None,
        *,
        tokens: TokenProvider | None = None,
    ) -> None:
        self._config = config
        self._rewriter = _RequestRewriter(config, tokens)
        self._transport = transport if transport is not None else httpx.HTTPTransport()

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def tokens(self) -> TokenProvider:
        return self._rewriter.tokens

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._rewriter.readdress(request)
        self._rewriter.authorize(request, self._rewriter.tokens.get_token(self._transport))
        response = self._transport.handle_request(request)
        self._rewriter.observe(response)
        return response

    def close(self) -> None:
        self._transport.close()


class AsyncFireflyTransport(httpx.AsyncBaseTransport):
    """Async counterpart of :class:`FireflyTransport`."""

    def __init__(
        self,
        config: EndpointConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        *,
        tokens: TokenProvider | None = None,
    ) -> None:
        self._config = config
        self._rewriter = _RequestRewriter(config, tokens)
        self._transport = transport if transport is not None else httpx.AsyncHTTPTransport()

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def tokens(self) -> TokenProvider:
        return self._rewriter.tokens

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self._rewriter.readdress(request)
        self._rewriter.authorize(request, await self._rewriter.tokens.aget_token(self._transport))
        response = await self._transport.handle_async_request(request)
        self._rewriter.observe(response)
        return response

    async def aclose(self) -> None:
        await self._transport.aclose()


__all__ = ["AsyncFireflyTransport", "FireflyTransport"]
