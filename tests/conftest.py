# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Shared fixtures for firefly_provider tests."""

from __future__ import annotations

import time
from typing import Any

import httpx
import pytest

from firefly_provider import BearerToken, ClientCredentials, EndpointConfig


ENDPOINT = "http://firefly.local:8000"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeClock:
    """Controllable clock for testing token expiry."""

    def __init__(self, now: float | None = None) -> None:
        self._now = now if now is not None else time.monotonic()

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


class RecordingHandler:
    """``httpx.MockTransport`` handler that records every request it sees.

    Outcomes are looked up by ``(method, path)``. An outcome is a response,
    an exception instance to raise, or a list consumed one entry per call.
    Unknown routes answer 404.
    """

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None) -> None:
        self.routes: dict[tuple[str, str], Any] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.routes.get((request.method, request.url.path))
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if outcome is None:
            return httpx.Response(404, json={"message": "Resource not found"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def about_payload() -> dict[str, Any]:
    return {
        "data": {
            "version": "6.1.0",
            "api_version": "2.0.0",
            "php_version": "8.2",
            "os": "Linux",
            "driver": "mysql",
        }
    }


@pytest.fixture
def token_config() -> EndpointConfig:
    return EndpointConfig(ENDPOINT, BearerToken("pat-123"))


@pytest.fixture
def client_credentials_config() -> EndpointConfig:
    return EndpointConfig(ENDPOINT, ClientCredentials(client_id="7", client_secret="s3cret"))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_000.0)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()
