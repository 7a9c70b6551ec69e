"""
Logging setup for the authorization core

Plain stdlib logging with an optional JSON formatter.
"""

import logging
import json
from typing import Optional
from datetime import datetime, UTC

from .config import AuthSettings, get_settings

# Extra record attributes copied into JSON output when present
_CONTEXT_FIELDS = ("user_id", "perm_module", "action", "role_id")


class StructuredLogFormatter(logging.Formatter):
    """
    JSON formatter for structured logging

    Usage:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredLogFormatter())
        logger.addHandler(handler)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for name in _CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_obj[name] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def setup_logging(settings: Optional[AuthSettings] = None) -> None:
    """
    Configure the root logger from settings

    Replaces existing root handlers so repeated calls do not duplicate output.
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler()
    if settings.log_json:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level)
