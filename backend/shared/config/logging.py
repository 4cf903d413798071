"""
Structured logging for the back-office.

Callers pass context as keyword arguments:

    logger = get_logger(__name__)
    logger.info("Business created", business_id=business.id, slug=business.slug)

The keywords land in ``record.extra_data``. Production writes one JSON object
per line; development writes coloured single lines. The request correlation
ID is attached by CorrelationIdFilter.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

# Keyword arguments understood by logging.Logger._log itself
_LOGGING_KWARGS = ("exc_info", "extra", "stack_info", "stacklevel")

# Chatty third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "multipart": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
}


def _request_id(record: logging.LogRecord) -> str | None:
    request_id = getattr(record, "request_id", None)
    return request_id if request_id and request_id != "-" else None


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if _request_id(record):
            entry["request_id"] = _request_id(record)
        if getattr(record, "extra_data", None):
            entry["data"] = record.extra_data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if settings.debug:
            entry["where"] = f"{record.pathname}:{record.lineno} in {record.funcName}"
        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Coloured one-liners for a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        parts = [f"{color}{when} {record.levelname:<8}{self.RESET}"]
        if _request_id(record):
            parts.append(f"{self.DIM}{_request_id(record)[:8]}{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        line = " ".join(parts)
        data = getattr(record, "extra_data", None)
        if data:
            line += "  " + " ".join(f"{key}={value}" for key, value in data.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """Logger whose level methods accept arbitrary keyword context."""

    def _log(self, level, msg, args, **kwargs):  # type: ignore[override]
        native = {key: kwargs.pop(key) for key in _LOGGING_KWARGS if key in kwargs}
        extra = dict(native.pop("extra", None) or {})
        extra["extra_data"] = kwargs or None
        super()._log(level, msg, args, extra=extra, **native)


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """Install the stdout handler on the root logger. Safe to call twice."""
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(JsonFormatter() if settings.is_production else ConsoleFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]

    for name, cap in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)


def get_logger(name: str) -> StructuredLogger:
    return logging.getLogger(name)  # type: ignore[return-value]


def mask_email(email: str | None) -> str:
    """"amadou@cityfood.ml" -> "am***@cityfood.ml"."""
    if not email or "@" not in email:
        return "<no-email>" if not email else "***@invalid"
    local, domain = email.split("@", 1)
    return f"{local[:2] or '*'}***@{domain}"


api_logger = get_logger("cityfood_api")
auth_logger = get_logger("cityfood_api.auth")
catalog_logger = get_logger("cityfood_api.catalog")
order_logger = get_logger("cityfood_api.orders")
security_audit_logger = get_logger("security.audit")


def audit_auth_event(
    event_type: str,
    user_id: str | None = None,
    email: str | None = None,
    success: bool = True,
    reason: str | None = None,
    ip_address: str | None = None,
    **extra: Any,
) -> None:
    """
    Record a login attempt on the security audit logger.

    Failures are logged at WARNING. The e-mail is masked.
    """
    security_audit_logger.log(
        logging.INFO if success else logging.WARNING,
        "AUTH_AUDIT: %s",
        event_type,
        event_type=event_type,
        user_id=user_id,
        email=mask_email(email) if email else None,
        success=success,
        reason=reason,
        ip_address=ip_address,
        **extra,
    )
