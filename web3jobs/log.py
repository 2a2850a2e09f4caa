"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this module only wires a
stderr handler onto the package logger. stdout is left to tool output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE_NAME = "web3-career"
PACKAGE_LOGGER = "web3jobs"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; structured fields come from ``extra={"data": ...}``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "service": SERVICE_NAME,
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", json_output: bool = True, stream: Optional[Any] = None) -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Calling it again replaces the handler rather than stacking another.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_web3jobs", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._web3jobs = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False
    return logger
