# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Utility helpers for the Firefly provider."""

from .logger import ColoredFormatter, StructuredLogger, get_logger, setup_logger

__all__ = ["ColoredFormatter", "StructuredLogger", "get_logger", "setup_logger"]
