"""Optional logging setup for applications embedding rolescope.

The library itself only creates module loggers under ``rolescope``; call
``configure_logging`` from an entry point to attach a handler.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from rolescope.config.models import RoleScopeConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: RoleScopeConfig, handler: logging.Handler | None = None) -> logging.Logger:
    """Attach a single handler to the ``rolescope`` logger per *config*.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger("rolescope")
    logger.setLevel(_LEVELS[config.log_level])

    for existing in list(logger.handlers):
        if getattr(existing, "_rolescope_handler", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler._rolescope_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
