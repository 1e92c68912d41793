# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""System information read from ``GET /api/v1/about``.

Firefly III answers with an envelope::

    {"data": {"version": "6.1.0", "api_version": "2.0.0",
              "php_version": "8.2", "os": "Linux", "driver": "mysql"}}

Newer servers may send ``platform_version`` in place of ``php_version``;
both decode into :attr:`SystemInfo.php_version`.

A fetch either returns a fully populated :class:`SystemInfo` or raises. A
body that fails to decode is a :class:`~firefly_provider.exceptions.DecodeError`,
never a record with empty fields.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .exceptions import AuthError, DecodeError, ResponseError, TransportError
from .utils import get_logger


ABOUT_PATH = "/api/v1/about"

_logger = get_logger("firefly_provider.sysinfo")

TimeoutTypes = float | httpx.Timeout | None


@dataclass(frozen=True, slots=True)
class SystemInfo:
    """Versions of the Firefly III instance and its supporting software."""

    version: str
    api_version: str
    php_version: str
    os: str
    driver: str

    @property
    def platform_version(self) -> str:
        """Alias of :attr:`php_version` under the platform-neutral name."""
        return self.php_version

    def to_dict(self) -> dict[str, str]:
        """Flat string record, keyed as the ``firefly_sysinfo`` attributes."""
        return asdict(self)


class _AboutData(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    version: str
    api_version: str
    php_version: str = Field(validation_alias=AliasChoices("php_version", "platform_version"))
    os: str
    driver: str


class _AboutEnvelope(BaseModel):
    data: _AboutData


def decode_system_info(body: bytes | str, *, url: str | None = None) -> SystemInfo:
    """Decode an ``/about`` response body.

    Raises:
        DecodeError: If ``body`` is not JSON or does not match the envelope.
    """
    try:
        envelope = _AboutEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"unexpected system info response from {url or ABOUT_PATH}: {exc}", url=url) from exc

    data = envelope.data
    return SystemInfo(
        version=data.version,
        api_version=data.api_version,
        php_version=data.php_version,
        os=data.os,
        driver=data.driver,
    )


def _build_request(client: httpx.Client | httpx.AsyncClient, timeout: TimeoutTypes | object) -> httpx.Request:
    return client.build_request(
        "GET",
        ABOUT_PATH,
        headers={"Accept": "application/json"},
        timeout=timeout,
    )


def _check_status(response: httpx.Response, url: str) -> None:
    if response.is_success:
        return
    if response.status_code in (401, 403):
        raise AuthError(
            f"Firefly III rejected the credentials (HTTP {response.status_code}) for {url}",
            url=url,
            status_code=response.status_code,
        )
    raise ResponseError(
        f"HTTP {response.status_code} from {url}",
        url=url,
        status_code=response.status_code,
        body=response.text[:500],
    )


def fetch_system_info(
    client: httpx.Client,
    *,
    timeout: TimeoutTypes | object = httpx.USE_CLIENT_DEFAULT,
) -> SystemInfo:
    """Read the instance's system information.

    Args:
        client: Client whose transport is a
            :class:`~firefly_provider.transport.FireflyTransport`.
        timeout: Deadline for this round trip. Defaults to the client's.

    Raises:
        TransportError: If the request could not be sent.
        AuthError: If the server answers 401/403 or the token exchange fails.
        ResponseError: For any other non-2xx status.
        DecodeError: If the body does not match the envelope.
    """
    request = _build_request(client, timeout)
    _logger.debug("fetching system info", path=ABOUT_PATH)
    try:
        response = client.send(request, stream=True)
    except httpx.TransportError as exc:
        raise TransportError(f"unable to reach {request.url}: {exc}", url=str(request.url)) from exc

    url = str(request.url)
    try:
        body = response.read()
        _check_status(response, url)
    except httpx.TransportError as exc:
        raise TransportError(f"connection to {url} failed while reading: {exc}", url=url) from exc
    finally:
        response.close()

    info = decode_system_info(body, url=url)
    _logger.debug("read system info", url=url, **info.to_dict())
    return info


async def afetch_system_info(
    client: httpx.AsyncClient,
    *,
    timeout: TimeoutTypes | object = httpx.USE_CLIENT_DEFAULT,
) -> SystemInfo:
    """Async variant of :func:`fetch_system_info`.

    Cancellation of the enclosing task or cancel scope aborts the request.
    """
    request = _build_request(client, timeout)
    _logger.debug("fetching system info", path=ABOUT_PATH)
    try:
        response = await client.send(request, stream=True)
    except httpx.TransportError as exc:
        raise TransportError(f"unable to reach {request.url}: {exc}", url=str(request.url)) from exc

    url = str(request.url)
    try:
        body = await response.aread()
        _check_status(response, url)
    except httpx.TransportError as exc:
        raise TransportError(f"connection to {url} failed while reading: {exc}", url=url) from exc
    finally:
        await response.aclose()

    info = decode_system_info(body, url=url)
    _logger.debug("read system info", url=url, **info.to_dict())
    return info


__all__ = [
    "ABOUT_PATH",
    "SystemInfo",
    "afetch_system_info",
    "decode_system_info",
    "fetch_system_info",
]
