# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Logging helpers.

Loggers are plain :mod:`logging` loggers wrapped so call sites can attach
structured context as keyword arguments::

    log = get_logger("firefly_provider.sysinfo")
    log.debug("fetched system info", url=url, version=info.version)

The context lands on the record as ``record.context`` and is rendered either
as ``key=value`` pairs (text mode) or as a JSON object (``use_json=True``).
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, MutableMapping
from typing import Any, ClassVar

_RESET = "\033[0m"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter that turns keyword arguments into record context."""

    _RESERVED = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def log(self, level: int, msg: object, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        context = {key: kwargs.pop(key) for key in list(kwargs) if key not in self._RESERVED}
        msg, kwargs = self.process(msg, kwargs)
        extra = dict(kwargs.pop("extra", None) or {})
        extra["context"] = context
        self.logger.log(level, msg, *args, extra=extra, **kwargs)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return msg, kwargs


class ColoredFormatter(logging.Formatter):
    """Text formatter with ANSI level colours and ``key=value`` context."""

    LEVEL_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }

    def __init__(self, fmt: str | None = None, *, use_color: bool = True) -> None:
        super().__init__(fmt or _DEFAULT_FORMAT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line = f"{line} " + " ".join(f"{key}={value!r}" for key, value in context.items())
        color = self.LEVEL_COLORS.get(record.levelname) if self.use_color else None
        return f"{color}{line}{_RESET}" if color else line


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, serializer: Callable[[dict[str, Any]], str] | None = None) -> None:
        super().__init__()
        self._serialize = serializer or (lambda payload: json.dumps(payload, default=str, separators=(",", ":")))

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return self._serialize(payload)


def setup_logger(
    level: int = logging.INFO,
    *,
    use_json: bool = False,
    json_serializer: Callable[[dict[str, Any]], str] | None = None,
    force: bool = False,
) -> None:
    """Install a stderr handler on the ``firefly_provider`` logger.

    Args:
        level: Minimum level for the package logger.
        use_json: Emit JSON lines instead of coloured text.
        json_serializer: Custom encoder used when ``use_json`` is set.
        force: Replace handlers installed by a previous call.
    """
    root = logging.getLogger("firefly_provider")
    if root.handlers and not force:
        root.setLevel(level)
        return
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if use_json:
        handler.setFormatter(JsonFormatter(json_serializer))
    else:
        handler.setFormatter(ColoredFormatter(use_color=sys.stderr.isatty()))
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> StructuredLogger:
    """Return a structured logger for ``name``."""
    return StructuredLogger(logging.getLogger(name), {})


__all__ = ["ColoredFormatter", "JsonFormatter", "StructuredLogger", "get_logger", "setup_logger"]
