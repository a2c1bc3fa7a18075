"""Structured logging helpers for search diagnostics."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, TextIO

PACKAGE_LOGGER = "hotsax"


def _json_logs_enabled() -> bool:
    return os.getenv("HOTSAX_JSON_LOGS", "false").lower() == "true"


def configure_logging(level: str = "INFO", json_logs: bool | None = None, stream: TextIO | None = None) -> None:
    """Configure global logging and the package logger level.

    Respects the HOTSAX_JSON_LOGS env override when ``json_logs`` is not given.
    """

    if json_logs is None:
        json_logs = _json_logs_enabled()

    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        stream=stream,
        format="%(message)s" if json_logs else "%(asctime)s %(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    level: int = logging.INFO,
    json_logs: bool | None = None,
    **fields: Any,
) -> None:
    """Emit ``{"event": event, **fields}`` as a dict or a JSON string."""

    if not logger.isEnabledFor(level):
        return
    if json_logs is None:
        json_logs = _json_logs_enabled()

    payload = {"event": event, **fields}
    if json_logs:
        logger.log(level, json.dumps(payload, default=str))
    else:
        logger.log(level, payload)
