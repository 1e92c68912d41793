# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Endpoint configuration for a provider session.

A session is configured once from user-supplied values and never mutated
afterwards. The credential is a tagged union: either a personal access token
(:class:`BearerToken`) or an OAuth2 client-id/secret pair
(:class:`ClientCredentials`).

Example:
    >>> config = EndpointConfig(
    ...     base_url="http://firefly.local:8000",
    ...     credential=BearerToken("eyJ0eXAiOiJKV1Qi..."),
    ... )
    >>> config.host
    'firefly.local'
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx

from .exceptions import ConfigError


ENDPOINT_PATTERN = re.compile(r"https?://[^:/?#@\s]+(:\d+)?")
"""Accepted endpoint shape: scheme, host and optional port. No path or query."""

DEFAULT_TOKEN_PATH = "/oauth/token"


@dataclass(frozen=True, slots=True)
class BearerToken:
    """Personal access token sent as ``Authorization: Bearer <token>``."""

    token: str = field(repr=False)
    kind: Literal["access_token"] = field(default="access_token", init=False)

    def __post_init__(self) -> None:
        if not self.token or not self.token.strip():
            raise ConfigError("access_token must be non-empty", field="access_token")


@dataclass(frozen=True, slots=True)
class ClientCredentials:
    """OAuth2 client-credentials pair, exchanged for a short-lived bearer token.

    Attributes:
        client_id: OAuth client identifier.
        client_secret: OAuth client secret. Never shown in ``repr``.
        scope: Optional space-separated scopes to request.
        token_path: Token endpoint path, relative to the configured endpoint.
    """

    client_id: str
    client_secret: str = field(repr=False)
    scope: str | None = None
    token_path: str = DEFAULT_TOKEN_PATH
    kind: Literal["client_credentials"] = field(default="client_credentials", init=False)

    def __post_init__(self) -> None:
        if not self.client_id:
            raise ConfigError("client_id must be non-empty", field="client_id")
        if not self.client_secret:
            raise ConfigError("client_secret must be non-empty", field="client_secret")
        if not self.token_path.startswith("/"):
            raise ConfigError(f"token_path must start with '/', got {self.token_path!r}", field="token_path")


Credential = BearerToken | ClientCredentials
"""Exactly one credential variant is active per session."""


@dataclass(frozen=True, slots=True)
class EndpointConfig:
    """Base endpoint and credential for one provider session.

    Raises:
        ConfigError: If ``base_url`` is not ``scheme://host[:port]`` or the
            credential is not a known variant.
    """

    base_url: str
    credential: Credential
    _url: httpx.URL = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str) or not ENDPOINT_PATTERN.fullmatch(self.base_url):
            raise ConfigError(
                f"endpoint must be a URL like http://firefly.local or http://firefly.local:8000, got {self.base_url!r}",
                field="endpoint",
            )
        if not isinstance(self.credential, (BearerToken, ClientCredentials)):
            raise ConfigError(
                f"credential must be BearerToken or ClientCredentials, got {type(self.credential).__name__}",
                field="credential",
            )
        object.__setattr__(self, "_url", parse_base_url(self.base_url))

    @property
    def url(self) -> httpx.URL:
        """Parsed base URL."""
        return self._url

    @property
    def scheme(self) -> str:
        return self._url.scheme

    @property
    def host(self) -> str:
        return self._url.host

    @property
    def port(self) -> int | None:
        return self._url.port

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> EndpointConfig:
        """Build a configuration from host-tool attributes.

        Recognised keys: ``endpoint`` (required), then either ``access_token``
        or ``client_id`` + ``client_secret`` (with optional ``scope``).
        Setting both variants is an error.
        """
        endpoint = raw.get("endpoint")
        if not endpoint:
            raise ConfigError("endpoint is required", field="endpoint")

        access_token = raw.get("access_token")
        client_id = raw.get("client_id")
        client_secret = raw.get("client_secret")

        credential: Credential
        if access_token and (client_id or client_secret):
            raise ConfigError(
                "set either access_token or client_id/client_secret, not both",
                field="access_token",
            )
        if access_token:
            credential = BearerToken(str(access_token))
        elif client_id or client_secret:
            credential = ClientCredentials(
                client_id=str(client_id or ""),
                client_secret=str(client_secret or ""),
                scope=raw.get("scope") or None,
            )
        else:
            raise ConfigError(
                "one of access_token or client_id/client_secret is required",
                field="access_token",
            )

        return cls(base_url=str(endpoint), credential=credential)

    @classmethod
    def from_env(cls, prefix: str = "FIREFLY_", environ: Mapping[str, str] | None = None) -> EndpointConfig:
        """Build a configuration from ``<prefix>ENDPOINT``, ``<prefix>ACCESS_TOKEN``, ...

        Reads ``ENDPOINT``, ``ACCESS_TOKEN``, ``CLIENT_ID``, ``CLIENT_SECRET``
        and ``SCOPE`` under the given prefix.
        """
        env = os.environ if environ is None else environ
        keys = ("endpoint", "access_token", "client_id", "client_secret", "scope")
        return cls.from_mapping({key: env.get(f"{prefix}{key.upper()}") for key in keys})


def parse_base_url(base_url: str) -> httpx.URL:
    """Parse ``base_url`` into an absolute :class:`httpx.URL`.

    Raises:
        ConfigError: If the value cannot be parsed, lacks a scheme or host, or
            carries anything beyond ``scheme://host[:port]``.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigError(f"cannot parse endpoint {base_url!r}: {exc}", field="endpoint") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"endpoint {base_url!r} needs an http(s) scheme and a host", field="endpoint")
    if url.userinfo or url.query or url.fragment or url.raw_path != b"/":
        raise ConfigError(
            f"endpoint {base_url!r} must not carry credentials, a path, a query or a fragment",
            field="endpoint",
        )
    return url


__all__ = [
    "DEFAULT_TOKEN_PATH",
    "ENDPOINT_PATTERN",
    "BearerToken",
    "ClientCredentials",
    "Credential",
    "EndpointConfig",
    "parse_base_url",
]
