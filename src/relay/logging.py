# Orion Relay
# Copyright (C) 2025 Phoenix Link (Pty) Ltd. All Rights Reserved.
#
# This file is part of Orion Relay.
#
# Orion Relay is dual-licensed:
#
# 1. Open Source: GNU Affero General Public License v3.0 (AGPL-3.0)
#    You may use, modify, and distribute this file under AGPL-3.0.
#    See LICENSE for the full text.
#
# 2. Commercial: Available from Phoenix Link (Pty) Ltd
#    For proprietary use, SaaS deployment, or enterprise licensing.
#    See LICENSE-ENTERPRISE.md or contact info@phoenixlink.co.za
#
# Contributions require a signed CLA. See COPYRIGHT.md and CLA.md.
"""
Orion Relay -- Log formatting

The library only emits through standard "relay.*" loggers and installs no
handlers on import. Applications that want the Orion-style line format call
configure_logging() once:

    2026-02-09T17:30:45.123Z | INFO  | openai       | Sending request | model="gpt-4o-mini" messages=2
    2026-02-09T17:30:46.500Z | DEBUG | openai       | Request complete | latency_ms=1377 total_tokens=340
    2026-02-09T17:30:46.501Z | WARN  | anthropic    | Provider error | status=429

Component and structured fields come from the record extras:

    logger.info("Sending request", extra={"component": "openai", "fields": {...}})
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

MAX_LOG_FILE_BYTES = 10 * 1024 * 1024  # 10 MB per file
LOG_BACKUP_COUNT = 5
ROOT_LOGGER_NAME = "relay"

_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "CRIT"}


class RelayLogFormatter(logging.Formatter):
    """
    Format: TIMESTAMP | LEVEL | COMPONENT | MESSAGE | {structured fields}
    """

    LEVEL_WIDTH = 5
    COMPONENT_WIDTH = 12

    def format(self, record: logging.LogRecord) -> str:
        now = datetime.fromtimestamp(record.created, timezone.utc)
        ts = now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

        level = _LEVEL_NAMES.get(record.levelname, record.levelname)
        component = getattr(record, "component", None) or record.name.rsplit(".", 1)[-1]
        message = record.getMessage()

        fields = getattr(record, "fields", None) or {}
        field_str = ""
        if fields:
            field_str = " | " + " ".join(_format_field(k, v) for k, v in fields.items())

        line = (
            f"{ts} | {level:<{self.LEVEL_WIDTH}} | "
            f"{component:<{self.COMPONENT_WIDTH}} | {message}{field_str}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _format_field(key: str, value: Any) -> str:
    if isinstance(value, str):
        return f'{key}="{value}"'
    if isinstance(value, float):
        return f"{key}={value:.3f}"
    return f"{key}={value}"


def configure_logging(
    level: str = "WARNING",
    stream: IO[str] | None = None,
    log_file: str | None = None,
) -> logging.Logger:
    """Attach RelayLogFormatter handlers to the "relay" logger.

    Safe to call repeatedly: handlers installed by an earlier call are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        if getattr(handler, "_relay_handler", False):
            logger.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(RelayLogFormatter())
    stream_handler._relay_handler = True  # type: ignore[attr-defined]
    logger.addHandler(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(path),
            maxBytes=MAX_LOG_FILE_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(RelayLogFormatter())
        file_handler._relay_handler = True  # type: ignore[attr-defined]
        logger.addHandler(file_handler)

    return logger


__all__ = ["RelayLogFormatter", "configure_logging"]
