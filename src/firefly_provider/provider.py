# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Provider surface handed to the host infrastructure tool.

The host tool owns schema plumbing, state and diffing. This module gives it
what it needs to drive a read:

- provider metadata (type name ``firefly`` and the release version),
- the attribute schema for the provider block,
- ``configure``: user attributes in, a session :class:`FireflyClient` out,
- the data sources, keyed by type name (``firefly_sysinfo``).

Data sources receive the typed client directly; there is no untyped
"provider data" slot to assert on.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from .client import FireflyClient
from .config import EndpointConfig
from .utils import get_logger


PROVIDER_TYPE_NAME = "firefly"

_logger = get_logger("firefly_provider.provider")


@dataclass(frozen=True, slots=True)
class AttributeSchema:
    """One string attribute of a provider or data source block."""

    name: str
    description: str = ""
    required: bool = False
    optional: bool = False
    sensitive: bool = False
    computed: bool = False


@dataclass(frozen=True, slots=True)
class ProviderMetadata:
    type_name: str
    version: str


class DataSource(Protocol):
    type_name: str

    def schema(self) -> tuple[AttributeSchema, ...]: ...

    def read(self, client: FireflyClient) -> dict[str, str]: ...


class SysInfoDataSource:
    """General system information and versions of the supporting software."""

    type_name = f"{PROVIDER_TYPE_NAME}_sysinfo"
    description = "Exposes general system information and versions of the supporting software"

    def schema(self) -> tuple[AttributeSchema, ...]:
        return tuple(
            AttributeSchema(name, computed=True)
            for name in ("version", "api_version", "php_version", "os", "driver")
        )

    def read(self, client: FireflyClient) -> dict[str, str]:
        """Fetch and flatten system info. Any failure propagates; nothing partial is returned."""
        info = client.system_info()
        return info.to_dict()


class FireflyProvider:
    """Firefly III provider.

    Args:
        version: Provider release version. ``"dev"`` for local builds,
            ``"test"`` under acceptance tests.
    """

    def __init__(self, version: str = "dev") -> None:
        self.version = version
        self._data_sources: dict[str, DataSource] = {
            source.type_name: source for source in (SysInfoDataSource(),)
        }

    def metadata(self) -> ProviderMetadata:
        return ProviderMetadata(type_name=PROVIDER_TYPE_NAME, version=self.version)

    def schema(self) -> tuple[AttributeSchema, ...]:
        return (
            AttributeSchema(
                "endpoint",
                "The URL of the Firefly instance, with an optional port, such as "
                "<http://firefly.local> or <http://firefly.local:8000>",
                required=True,
            ),
            AttributeSchema(
                "access_token",
                "A Personal Access Token generated on the Firefly web API. "
                "Conflicts with client_id/client_secret.",
                optional=True,
                sensitive=True,
            ),
            AttributeSchema(
                "client_id",
                "OAuth client ID, used with client_secret for the client credentials grant.",
                optional=True,
            ),
            AttributeSchema(
                "client_secret",
                "OAuth client secret paired with client_id.",
                optional=True,
                sensitive=True,
            ),
            AttributeSchema("scope", "Optional OAuth scopes to request.", optional=True),
        )

    def configure(self, raw: Mapping[str, Any], **client_kwargs: Any) -> FireflyClient:
        """Validate user attributes and open a session client.

        Raises:
            ConfigError: If the endpoint or credential is malformed. No
                network call is made before validation succeeds.
        """
        config = EndpointConfig.from_mapping(raw)
        _logger.debug("configured provider", endpoint=config.base_url, credential=config.credential.kind)
        return FireflyClient(config, **client_kwargs)

    def data_sources(self) -> Mapping[str, DataSource]:
        return dict(self._data_sources)

    def read_data_source(self, type_name: str, client: FireflyClient) -> dict[str, str]:
        """Read the named data source through ``client``.

        Raises:
            KeyError: If no data source has that type name.
        """
        try:
            source = self._data_sources[type_name]
        except KeyError:
            raise KeyError(f"unknown data source {type_name!r}; known: {sorted(self._data_sources)}") from None
        return source.read(client)


__all__ = [
    "PROVIDER_TYPE_NAME",
    "AttributeSchema",
    "DataSource",
    "FireflyProvider",
    "ProviderMetadata",
    "SysInfoDataSource",
]
