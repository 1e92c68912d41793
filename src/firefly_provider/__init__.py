# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Firefly III integration primitives.

The pieces, in the order a read uses them:

- ``firefly_provider.config`` - endpoint and credential configuration
- ``firefly_provider.auth`` - bearer token providers (access token, client credentials)
- ``firefly_provider.transport`` - authenticated httpx transport
- ``firefly_provider.sysinfo`` - ``/api/v1/about`` fetch and decode
- ``firefly_provider.provider`` - host-tool facing provider surface
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .client import AsyncFireflyClient, FireflyClient
from .config import BearerToken, ClientCredentials, Credential, EndpointConfig
from .exceptions import AuthError, ConfigError, DecodeError, FireflyError, ResponseError, TransportError
from .provider import FireflyProvider, SysInfoDataSource
from .sysinfo import SystemInfo, afetch_system_info, fetch_system_info
from .transport import AsyncFireflyTransport, FireflyTransport

try:
    __version__ = version("firefly-provider")
except PackageNotFoundError:
    __version__ = "0.0.0+local"


__all__ = [
    "AsyncFireflyClient",
    "AsyncFireflyTransport",
    "AuthError",
    "BearerToken",
    "ClientCredentials",
    "ConfigError",
    "Credential",
    "DecodeError",
    "EndpointConfig",
    "FireflyClient",
    "FireflyError",
    "FireflyProvider",
    "FireflyTransport",
    "ResponseError",
    "SysInfoDataSource",
    "SystemInfo",
    "TransportError",
    "afetch_system_info",
    "fetch_system_info",
]
