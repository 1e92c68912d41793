# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Session clients for the Firefly III API.

Each client owns its own :mod:`httpx` client built around the authenticated
transport. Nothing is shared between sessions, so two providers configured
against different instances never see each other's credentials.

Example:
    >>> config = EndpointConfig.from_env()
    >>> with FireflyClient(config) as client:
    ...     info = client.system_info()
    >>> info.version
    '6.1.0'
"""

from __future__ import annotations

from types import TracebackType

import httpx

from .config import EndpointConfig
from .sysinfo import SystemInfo, afetch_system_info, fetch_system_info
from .transport import AsyncFireflyTransport, FireflyTransport


DEFAULT_TIMEOUT = 30.0


class FireflyClient:
    """Synchronous Firefly III session.

    Args:
        config: Endpoint and credential for this session.
        timeout: Default per-request timeout in seconds.
        transport: Inner transport doing the I/O. Tests pass an
            :class:`httpx.MockTransport` here.
    """

    def __init__(
        self,
        config: EndpointConfig,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http = httpx.Client(transport=FireflyTransport(config, transport), timeout=timeout)

    @classmethod
    def from_env(cls, prefix: str = "FIREFLY_", **kwargs) -> FireflyClient:
        return cls(EndpointConfig.from_env(prefix), **kwargs)

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def http(self) -> httpx.Client:
        """Underlying client, for requests this module has no helper for."""
        return self._http

    def system_info(self, *, timeout: float | httpx.Timeout | None = None) -> SystemInfo:
        """Fetch ``/api/v1/about``. See :func:`~firefly_provider.sysinfo.fetch_system_info`."""
        if timeout is None:
            return fetch_system_info(self._http)
        return fetch_system_info(self._http, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> FireflyClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FireflyClient(base_url={self._config.base_url!r}, credential={self._config.credential.kind!r})"


class AsyncFireflyClient:
    """Async Firefly III session. Mirrors :class:`FireflyClient`."""

    def __init__(
        self,
        config: EndpointConfig,
        *,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(transport=AsyncFireflyTransport(config, transport), timeout=timeout)

    @classmethod
    def from_env(cls, prefix: str = "FIREFLY_", **kwargs) -> AsyncFireflyClient:
        return cls(EndpointConfig.from_env(prefix), **kwargs)

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http

    async def system_info(self, *, timeout: float | httpx.Timeout | None = None) -> SystemInfo:
        if timeout is None:
            return await afetch_system_info(self._http)
        return await afetch_system_info(self._http, timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> AsyncFireflyClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"AsyncFireflyClient(base_url={self._config.base_url!r}, credential={self._config.credential.kind!r})"


__all__ = ["AsyncFireflyClient", "DEFAULT_TIMEOUT", "FireflyClient"]
