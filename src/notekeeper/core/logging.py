"""
Logging configuration for the Notekeeper backend.

``setup_logging()`` installs a dictConfig: JSON lines on the console
(coloured text when ``debug`` is on) plus optional rotating files.
``LoggingMiddleware`` gives every request an id, echoes it in the
``X-Request-ID`` header and stamps it on every record logged while the
request is being handled.
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import get_settings

REQUEST_ID_HEADER = b"x-request-id"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# LogRecord attributes that are not user supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "request_id",
}

_THIRD_PARTY_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "WARNING",  # LoggingMiddleware already logs each request
    "sqlalchemy": "WARNING",
    "alembic": "INFO",
    "aiosqlite": "WARNING",
}


class RequestContextFilter(logging.Filter):
    """Attach the current request id (or None) to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            entry["request_id"] = request_id

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Human readable console output for local development."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;35m",
    }
    DIM = "\033[90m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # format a copy so file handlers sharing the record stay uncoloured
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        colored.name = f"{self.DIM}{record.name}{self.RESET}"
        line = super().format(colored)
        request_id = getattr(record, "request_id", None)
        return f"{line} {self.DIM}[{request_id}]{self.RESET}" if request_id else line


def get_log_level(level_str: Optional[str] = None) -> int:
    """Numeric level for a name; unknown names fall back to INFO."""
    level = logging.getLevelName((level_str or get_settings().log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _file_handlers(log_dir: Path) -> Dict[str, Dict[str, Any]]:
    log_dir.mkdir(parents=True, exist_ok=True)
    rotating = {
        "class": "logging.handlers.RotatingFileHandler",
        "maxBytes": 10_000_000,  # 10MB
        "backupCount": 5,
        "encoding": "utf-8",
        "filters": ["request_context"],
    }
    return {
        "file": {**rotating, "filename": str(log_dir / "notekeeper.log"), "formatter": "json", "level": "DEBUG"},
        "error_file": {**rotating, "filename": str(log_dir / "error.log"), "formatter": "json", "level": "ERROR"},
    }


def build_logging_config() -> Dict[str, Any]:
    """dictConfig mapping for the current settings."""
    settings = get_settings()

    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "colored" if settings.debug else "json",
            "level": get_log_level(),
            "filters": ["request_context"],
        },
    }
    if settings.log_to_file:
        handlers.update(_file_handlers(Path(settings.log_dir)))
    app_handlers: List[str] = list(handlers)

    loggers: Dict[str, Dict[str, Any]] = {
        "notekeeper": {"handlers": app_handlers, "level": "DEBUG", "propagate": False},
    }
    for name, level in _THIRD_PARTY_LEVELS.items():
        loggers[name] = {"handlers": ["console"], "level": level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_context": {"()": RequestContextFilter}},
        "formatters": {
            "json": {"()": JSONFormatter},
            "colored": {
                "()": ColoredFormatter,
                "format": "%(asctime)s %(levelname)s %(name)s  %(message)s",
                "datefmt": "%H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging() -> None:
    """Apply the logging configuration."""
    settings = get_settings()
    logging.config.dictConfig(build_logging_config())
    get_logger("logging").info(
        "Logging configured",
        extra={"log_level": settings.log_level, "debug": settings.debug, "environment": settings.environment},
    )


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under ``notekeeper.``."""
    return logging.getLogger(f"notekeeper.{name}")


class LoggingMiddleware:
    """ASGI middleware: request id, one line per request and response."""

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        # reuse a caller supplied id so logs correlate across services
        request_id = headers.get(REQUEST_ID_HEADER, b"").decode("latin-1") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start = time.perf_counter()

        client = scope.get("client")
        self.logger.info("HTTP Request", extra={
            "method": scope["method"],
            "path": scope["path"],
            "query_string": scope.get("query_string", b"").decode("latin-1"),
            "client_ip": client[0] if client else "unknown",
        })

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + [
                    (REQUEST_ID_HEADER, request_id.encode("latin-1"))
                ]
                self.logger.info("HTTP Response", extra={
                    "status_code": message.get("status", 0),
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                    "method": scope["method"],
                    "path": scope["path"],
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                "method": scope["method"],
                "path": scope["path"],
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                "exception_type": type(exc).__name__,
            })
            raise
        finally:
            request_id_var.reset(token)
