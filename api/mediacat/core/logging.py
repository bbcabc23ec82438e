"""Process-wide logging setup."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from mediacat.core.config import Settings

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
LOG_FORMAT_NO_TIME = "%(name)s [%(levelname)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def __init__(self, *, timestamp: bool = True) -> None:
        super().__init__()
        self._timestamp = timestamp

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._timestamp:
            payload["time"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings; safe to call more than once."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    if settings.log_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter(timestamp=settings.log_timestamp))
        logging.basicConfig(level=level, handlers=[handler], force=True)
        return
    log_format = LOG_FORMAT if settings.log_timestamp else LOG_FORMAT_NO_TIME
    logging.basicConfig(level=level, format=log_format, force=True)
