"""Community - Logger Configuration.

Loguru-based structured logging configuration.

This module configures a unified logger for the application:
- Loguru for application logs (pretty format, colors, structured data)
- Intercept handler for third-party library logs (uvicorn, fastapi, httpx)
- Request/trace ID correlation from context variables
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from src.shared.context import request_id_var, trace_id_var

if TYPE_CHECKING:
    from src.core.config import Settings

# Sensitive field patterns for redaction
SENSITIVE_PATTERNS = re.compile(
    r"(password|token|secret|credential|api_key|access_token|refresh_token)",
    re.IGNORECASE,
)

# Fields rendered at top level of a JSON record
_TOP_LEVEL_KEYS = {"trace_id", "request_id", "name"}


def _get_settings() -> Settings:
    """Get settings lazily to avoid circular imports."""
    from src.core.config import get_settings

    return get_settings()


class InterceptHandler(logging.Handler):
    """Handler for intercepting standard logging and redirecting to Loguru.

    Many libraries (uvicorn, fastapi, httpx) use the standard logging module.
    To have all logs in unified Loguru format, we intercept them through this handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """Redirect a standard logging record to Loguru.

        Args:
            record: Log record from standard logging
        """
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)

        frame = logging.currentframe()
        depth = 2

        if frame:
            while frame.f_code.co_filename == logging.__file__:
                if frame.f_back:
                    frame = frame.f_back
                    depth += 1
                else:
                    break

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _context_patcher(record: dict[str, Any]) -> None:
    """Add request and trace IDs from context to every record."""
    record["extra"].setdefault("request_id", request_id_var.get() or "-")
    record["extra"].setdefault("trace_id", trace_id_var.get() or "-")


def _redact_sensitive_value(key: str, value: Any) -> Any:
    """Redact sensitive values based on key name."""
    if SENSITIVE_PATTERNS.search(key):
        return "***REDACTED***"
    return value


def _build_json_entry(record: dict[str, Any], service_name: str) -> dict[str, Any]:
    """Build a structured log entry from a Loguru record."""
    extra = record["extra"]
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": extra.get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        "request_id": extra.get("request_id", "-"),
        "trace_id": extra.get("trace_id", "-"),
        "service": service_name,
    }

    for key, value in extra.items():
        if key not in _TOP_LEVEL_KEYS:
            entry[key] = _redact_sensitive_value(key, value)

    if record.get("exception"):
        exc = record["exception"]
        entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return entry


def _create_json_sink(service_name: str) -> Any:
    """Create a JSON sink for stdout logging.

    Args:
        service_name: Name of the service for log entries

    Returns:
        Sink function for Loguru
    """

    def json_sink(message: Any) -> None:
        """Write JSON formatted log to stdout."""
        entry = _build_json_entry(message.record, service_name)
        sys.stdout.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        sys.stdout.flush()

    return json_sink


def setup_logger(settings: Settings | None = None) -> None:
    """Configure Loguru logger.

    Sets up:
    - Console handler with colored output (dev) or JSON format (prod)
    - Request/trace ID correlation
    - Third-party library log interception
    """
    settings = settings or _get_settings()

    logger.remove()
    logger.configure(patcher=_context_patcher)

    is_prod = settings.logging.format.lower() == "json"

    if is_prod:
        logger.add(
            _create_json_sink(settings.app.name),
            level=settings.logging.level.upper(),
            backtrace=True,
            diagnose=False,  # Don't expose internal state in production
            enqueue=settings.logging.enqueue,
        )
    else:
        dev_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | "
            "<dim>request_id={extra[request_id]}</dim>"
        )
        logger.add(
            sys.stdout,
            format=dev_format,
            level=settings.logging.level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=settings.app.debug,
            enqueue=settings.logging.enqueue,
        )

    configure_third_party_loggers(is_prod)

    logger.info(
        "Logger configured",
        level=settings.logging.level,
        format="json" if is_prod else "console",
    )


def configure_third_party_loggers(is_prod: bool = False) -> None:
    """Route third-party standard logging through Loguru and tame verbosity."""
    logging.root.handlers = []
    logging.root.setLevel(logging.INFO)

    loggers_to_configure = [
        "",  # root logger
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "fastapi",
        "httpx",
        "httpcore",
    ]

    for logger_name in loggers_to_configure:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers.clear()
        logging_logger.addHandler(InterceptHandler())
        logging_logger.propagate = False

        if logger_name == "uvicorn.access":
            logging_logger.setLevel(logging.WARNING if is_prod else logging.INFO)
        elif logger_name in ["httpx", "httpcore"]:
            logging_logger.setLevel(logging.WARNING)
        else:
            logging_logger.setLevel(logging.INFO)

    logger.debug("Third-party loggers configured")


def get_logger(name: str):
    """Get a logger with the specified name.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Configured Loguru logger with bound name
    """
    return logger.bind(name=name)
