"""
Logging configuration for the RAN link planner API.

This module provides a centralized logging configuration with support for:
- Structured JSON logging in production
- Human-readable console output in development
- Optional file-based logging with rotation
- Request IDs for request tracing
"""
import json
import logging
import logging.config
import logging.handlers
import os
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request, Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIdFilter(logging.Filter):
    """Add the current request's id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "system"  # type: ignore
        return True


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    In production, logs are emitted as JSON for easier parsing by log aggregation
    systems. In development, the plain format string is used.
    """
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.is_prod = os.getenv("ENVIRONMENT", "development").lower() == "production"
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        if not self.is_prod:
            return super().format(record)

        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "system"),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False)


def build_logging_config(log_level: str, log_format: str, log_dir: Optional[str] = None) -> Dict[str, Any]:
    """Build the dictConfig for the given level, format and optional log directory."""
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }
    }
    if log_dir:
        logs_path = Path(log_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "file",
            "filename": str(logs_path / "ranlink.log"),
            "maxBytes": 10 * 1024 * 1024,  # 10MB
            "backupCount": 5,
            "encoding": "utf-8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "WARNING",
            "formatter": "file",
            "filename": str(logs_path / "error.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "ranlink.core.logging.JsonFormatter",
                "fmt": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "file": {
                "format": log_format,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {  # root logger
                "handlers": list(handlers),
                "level": log_level,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "urllib3": {
                "level": "WARNING",
            },
        },
    }


def setup_logging() -> None:
    """
    Configure logging for the application.

    Sets up console and, when LOG_DIR is configured, rotating file handlers.
    """
    from .config import settings

    logging.config.dictConfig(build_logging_config(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_DIR))

    request_id_filter = RequestIdFilter()
    for handler in logging.root.handlers:
        handler.addFilter(request_id_filter)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: The name of the logger. If None, returns the root logger.

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)


def log_request(request: Request, response: Optional[Response] = None, error: Optional[Exception] = None) -> str:
    """
    Log an HTTP request with its response or error.

    Args:
        request: The FastAPI Request object.
        response: The response (if successful).
        error: Any exception that occurred during request processing.

    Returns:
        The request ID attached to the request.
    """
    logger = get_logger("http")

    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    request.state.request_id = request_id
    request_id_var.set(request_id)

    extra = {
        "method": request.method,
        "url": str(request.url),
        "client": request.client.host if request.client else "unknown",
    }
    if error:
        logger.error("Request failed: %s", error, extra={**extra, "status_code": getattr(error, "status_code", 500)})
    elif response is not None:
        logger.info("Request processed", extra={**extra, "status_code": response.status_code})
    else:
        logger.info("Request started", extra=extra)
    return request_id
