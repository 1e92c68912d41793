# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Tests for structured logging helpers and what the package logs."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from firefly_provider import FireflyClient
from firefly_provider.sysinfo import ABOUT_PATH
from firefly_provider.utils import ColoredFormatter, get_logger, setup_logger
from firefly_provider.utils.logger import JsonFormatter


class TestStructuredLogger:
    def test_keyword_context_lands_on_record(self, caplog):
        caplog.set_level(logging.DEBUG, logger="firefly_provider.test")
        log = get_logger("firefly_provider.test")

        log.info("fetched", url="http://firefly.local/api/v1/about", version="6.1.0")

        record = caplog.records[-1]
        assert record.getMessage() == "fetched"
        assert record.context == {"url": "http://firefly.local/api/v1/about", "version": "6.1.0"}

    def test_disabled_level_is_skipped(self, caplog):
        caplog.set_level(logging.WARNING, logger="firefly_provider.quiet")

        get_logger("firefly_provider.quiet").debug("hidden", detail=1)

        assert not [r for r in caplog.records if r.name == "firefly_provider.quiet"]

    def test_text_formatter_renders_context(self):
        record = logging.LogRecord("firefly_provider", logging.INFO, __file__, 1, "hello", None, None)
        record.context = {"os": "Linux"}

        line = ColoredFormatter("%(message)s", use_color=False).format(record)

        assert line == "hello os='Linux'"

    def test_json_formatter(self):
        record = logging.LogRecord("firefly_provider", logging.INFO, __file__, 1, "hello", None, None)
        record.context = {"driver": "mysql"}

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "hello"
        assert payload["context"] == {"driver": "mysql"}


class TestSetupLogger:
    def test_installs_single_handler(self):
        root = logging.getLogger("firefly_provider")
        original_handlers, original_level = list(root.handlers), root.level
        try:
            setup_logger(logging.DEBUG, force=True)
            setup_logger(logging.INFO)

            assert len(root.handlers) == 1
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = original_handlers
            root.setLevel(original_level)


class TestNoSecretsLogged:
    @pytest.mark.parametrize("level", [logging.DEBUG, logging.INFO])
    def test_fetch_logs_never_contain_token(self, caplog, handler, token_config, about_payload, level):
        caplog.set_level(level, logger="firefly_provider")
        handler.routes[("GET", ABOUT_PATH)] = httpx.Response(200, json=about_payload)

        with FireflyClient(token_config, transport=handler.transport()) as client:
            client.system_info()

        for record in caplog.records:
            assert "pat-123" not in record.getMessage()
            assert "pat-123" not in repr(getattr(record, "context", {}))

    def test_fetch_logs_decoded_record_at_debug(self, caplog, handler, token_config, about_payload):
        caplog.set_level(logging.DEBUG, logger="firefly_provider")
        handler.routes[("GET", ABOUT_PATH)] = httpx.Response(200, json=about_payload)

        with FireflyClient(token_config, transport=handler.transport()) as client:
            client.system_info()

        read = [r for r in caplog.records if r.getMessage() == "read system info"]
        assert read and read[0].context["version"] == "6.1.0"
