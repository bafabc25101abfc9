"""
Structured Logging Configuration: JSON formatting for production, colored for development.

All records go to stderr; stdout is reserved for the raw API response.

Usage:
    from pos_skills.utils.structured_logging import configure_logging
    configure_logging(settings)  # Call once at startup
"""
import logging
import re
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict

from pos_skills.utils.config import PosSettings

CONTEXT_FIELDS = ("skill", "command", "method", "path", "status_code", "duration_ms")

_API_KEY_PATTERN = re.compile(r"(api_key=)[^&\s]+")


def redact_api_key(text: str) -> str:
    """Mask the api_key query parameter in URLs before they are logged."""
    return _API_KEY_PATTERN.sub(r"\1***", text)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with request context attached when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": redact_api_key(record.getMessage()),
        }
        entry.update({f: getattr(record, f) for f in CONTEXT_FIELDS if hasattr(record, f)})
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Short colored lines for a terminal; long messages are cut at MAX_LENGTH."""

    MAX_LENGTH = 500
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def format(self, record: logging.LogRecord) -> str:
        msg = redact_api_key(record.getMessage())
        if len(msg) > self.MAX_LENGTH:
            msg = msg[:self.MAX_LENGTH - 3] + "..."
        context = " ".join(f"{f}={getattr(record, f)}" for f in CONTEXT_FIELDS if hasattr(record, f))
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        color = self.LEVEL_COLORS.get(record.levelno, "")
        line = f"{stamp} {record.levelname:<7} {record.name} | {msg}"
        if context:
            line += f"  [{context}]"
        return f"{color}{line}\033[0m"


def configure_logging(settings: PosSettings):
    """Send all logging to stderr, formatted for the configured environment."""
    handler = logging.StreamHandler(sys.stderr)
    if settings.POS_ENVIRONMENT == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ColoredFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING))

    for noisy in ("httpx", "httpcore", "mcp"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


class ContextLogger(logging.LoggerAdapter):
    """LoggerAdapter whose context can be extended with bind()."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def bind(self, **context) -> "ContextLogger":
        return ContextLogger(self.logger, {**self.extra, **context})


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(logging.getLogger(name), {})
