"""
Logging configuration for Charity Finder Backend.

Uses structlog for structured logging with JSON output and optional file-based logging.
"""

import logging
import sys
import os
import time
from datetime import datetime
import structlog
from structlog.stdlib import LoggerFactory

from core.config import settings


def _daily_log_path(logs_dir: str, prefix: str) -> str:
    return os.path.join(logs_dir, f"{prefix}_{datetime.now().strftime('%Y%m%d')}.log")


def setup_logging() -> structlog.stdlib.BoundLogger:
    """Setup structured logging configuration with file-based logging."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if not settings.DEBUG else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    root_logger.handlers.clear()

    # Console handler (always enabled)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # httpx logs every Places call at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logs_dir = settings.LOG_DIR
    if settings.ENABLE_FILE_LOGGING or settings.ENABLE_REQUEST_LOGGING:
        os.makedirs(logs_dir, exist_ok=True)

    if settings.ENABLE_FILE_LOGGING:
        # General application log
        app_log_file = _daily_log_path(logs_dir, "app")
        app_file_handler = logging.FileHandler(app_log_file, encoding='utf-8')
        app_file_handler.setFormatter(formatter)
        app_file_handler.setLevel(logging.INFO)
        root_logger.addHandler(app_file_handler)

        # Error log
        error_log_file = _daily_log_path(logs_dir, "error")
        error_file_handler = logging.FileHandler(error_log_file, encoding='utf-8')
        error_file_handler.setFormatter(formatter)
        error_file_handler.setLevel(logging.ERROR)
        root_logger.addHandler(error_file_handler)

    if settings.ENABLE_REQUEST_LOGGING:
        request_log_file = _daily_log_path(logs_dir, "requests")
        request_logger = logging.getLogger("request")
        request_logger.setLevel(logging.INFO)

        # Prevent propagation to root logger to avoid duplicate logs
        request_logger.propagate = False

        request_file_handler = logging.FileHandler(request_log_file, encoding='utf-8')
        request_file_handler.setFormatter(formatter)
        request_logger.addHandler(request_file_handler)

    return structlog.get_logger()


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


async def log_request_middleware(request, call_next):
    """Log each request with its status and duration."""
    logger = get_logger("request")
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "Request failed",
            method=request.method,
            path=request.url.path,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        raise

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        query=request.url.query or None,
        client_ip=request.client.host if request.client else None,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response
