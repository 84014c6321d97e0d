"""
Alumni Portal - Logging
Plain text in development, one JSON object per line in production. Every
record is tagged with the current request id and, once the session token
has been verified, the calling account id.
"""

import logging
import sys
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from alumni_portal.core.config import settings


request_id_var: ContextVar[str] = ContextVar('request_id', default='')
account_id_var: ContextVar[str] = ContextVar('account_id', default='')

# Attributes every LogRecord has; anything else came in through ``extra``
_STANDARD_RECORD_KEYS = frozenset(
    logging.LogRecord('', 0, '', 0, '', (), None).__dict__
) | {'message', 'asctime', 'request_id', 'account_id'}


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_account_id() -> str:
    return account_id_var.get()


def set_account_id(account_id: str) -> None:
    """Tag later log records with the authenticated account"""
    account_id_var.set(account_id)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:8]


def mask_email(email: Optional[str]) -> Optional[str]:
    """``meera@example.com`` -> ``m***@example.com``; member addresses stay out of the logs"""
    if not email or "@" not in email:
        return email
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"


class JSONFormatter(logging.Formatter):
    """Structured records for log shippers"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id() or None,
            "account_id": get_account_id() or None,
        }
        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS and not key.startswith('_')
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Readable records prefixed with request and account ids"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.account_id = get_account_id() or '-'
        return super().format(record)


class PortalLogger(logging.Logger):
    """Logger with helpers for the portal's structured events"""

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float) -> None:
        """One line per HTTP request; 4xx at WARNING, 5xx at ERROR"""
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self.log(
            level,
            f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)",
            extra={
                "event_type": "http_request",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **fields) -> None:
        """
        Registration, login, signup and approval decisions.

        Failures log at WARNING so brute-force attempts stand out. The email
        is masked.
        """
        email = mask_email(user_email)
        summary = f"[Auth] {event} {'ok' if success else 'failed'}"
        if email:
            summary += f" for {email}"
        if reason:
            summary += f": {reason}"

        self.log(
            logging.INFO if success else logging.WARNING,
            summary,
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "user_email": email,
                "failure_reason": reason,
                **fields
            }
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None) -> None:
        """Unexpected exception with traceback"""
        self.error(
            f"Error in {context}: {type(error).__name__}: {error}",
            exc_info=error,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_context": context,
            }
        )


def setup_logging() -> PortalLogger:
    """Configure the ``alumni_portal`` logger from settings"""
    logging.setLoggerClass(PortalLogger)

    logger = logging.getLogger("alumni_portal")
    logger.__class__ = PortalLogger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.propagate = False
    logger.handlers.clear()

    if settings.is_production:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter(
            "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(account_id)s] | %(message)s"
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return logger


logger: PortalLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'mask_email',
    'get_request_id',
    'set_request_id',
    'get_account_id',
    'set_account_id',
    'generate_request_id',
    'PortalLogger',
    'JSONFormatter',
]
