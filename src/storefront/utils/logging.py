"""Logging configuration for the storefront.

Standard library handlers carry the output; structlog shapes every record into
key/value events so commits and rejections can be traced by order and product.

Environment:
    LOG_LEVEL    explicit level, otherwise derived from the environment name
    LOG_FORMAT   ``json`` or ``console``, otherwise json in production/staging
    LOG_DIR      directory for the rotating log files (default ``logs``)
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access", "sqlalchemy.engine")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(_environment(), "INFO")).upper()


def _wants_json() -> bool:
    fmt = os.getenv("LOG_FORMAT")
    if fmt:
        return fmt.lower() == "json"
    return _environment() in ("production", "staging")


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _install_handlers(log_dir: Path, level: str) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(log_dir / "storefront.log", level),
        _rotating_file(log_dir / "storefront_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer():
    if _wants_json():
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def configure_logging(log_dir: str | Path | None = None) -> None:
    """Route structlog through the stdlib root logger and pick a renderer.

    Safe to call more than once; handlers are replaced, not appended.
    """
    _install_handlers(Path(log_dir or os.getenv("LOG_DIR", "logs")), log_level())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            ),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_context(**values) -> None:
    """Bind request-scoped values (caller id, order id) onto every later log line."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
