import json
import logging
from datetime import UTC, datetime
from typing import Any

from app.core.config import settings



class JsonLogFormatter(logging.Formatter):
    # Secrets (signatures, Basic auth, signing keys) must never be added here.
    _extra_fields = (
        "event_name",
        "operation",
        "user_id",
        "status",
        "upstream_status",
        "latency_ms",
        "error_code",
        "configured_level",
        "path",
        "method",
    )

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self._extra_fields:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exc_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _resolve_level(configured: str) -> int:
    level = logging.getLevelName(configured.upper())
    if isinstance(level, int):
        return level
    logging.getLogger("walletauth.logging").warning(
        "invalid_log_level_fallback",
        extra={"event_name": "invalid_log_level_fallback", "configured_level": configured},
    )
    return logging.INFO


def configure_logging() -> None:
    """Attach one JSON stream handler to the root logger.

    Safe to call repeatedly (each app lifespan calls it); handlers installed
    by others, such as pytest's capture handler, are left in place.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(settings.log_level))

    if any(isinstance(handler.formatter, JsonLogFormatter) for handler in root_logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter())
    root_logger.addHandler(handler)
