"""
Logging configuration for twd-mcp.

Provides structured JSON logging and a human-readable text format. All
output goes to stderr (and optionally a rotating file) because stdout
carries the tool protocol when running as a server.
"""

import functools
import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone

from .config import Config


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "component": record.name,
            "session_id": self.session_id,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "metadata"):
            log_entry["metadata"] = record.metadata

        for attr in ["tool_name", "operation", "duration", "status"]:
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable text."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        message = f"[{timestamp}] {record.levelname:8} {record.name:20} | {record.getMessage()}"
        message += f" (session: {self.session_id[:8]})"

        if hasattr(record, "metadata") and record.metadata:
            metadata_str = " | ".join(f"{k}={v}" for k, v in record.metadata.items())
            message += f" | {metadata_str}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging(config: Config, session_id: str) -> logging.Logger:
    """
    Set up logging configuration based on environment and config.

    Args:
        config: Configuration object with logging settings
        session_id: Unique session identifier for log correlation

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, config.logging_level)
    root_logger.setLevel(log_level)

    if config.log_format == "json":
        formatter = StructuredFormatter(session_id)
    else:
        formatter = TextFormatter(session_id)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if config.log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            config.log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger("twd_mcp.logging")
    logger.debug(
        "Logging configured",
        extra={
            "metadata": {
                "session_id": session_id,
                "log_level": config.log_level,
                "log_format": config.log_format,
                "ci_mode": config.is_ci_mode,
            }
        },
    )

    return root_logger


def get_logger(name: str, **context) -> logging.Logger:
    """
    Get a logger with optional context.

    Args:
        name: Logger name (typically module name)
        **context: Additional context to include in log records

    Returns:
        Logger, wrapped in an adapter when context is given
    """
    logger = logging.getLogger(name)

    if context:

        class ContextAdapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):
                if "extra" not in kwargs:
                    kwargs["extra"] = {}
                kwargs["extra"].update(self.extra)
                return msg, kwargs

        return ContextAdapter(logger, context)

    return logger


def log_performance(operation_name: str):
    """
    Decorator to log performance metrics for functions.

    Args:
        operation_name: Name of the operation being measured

    Returns:
        Decorator function
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(f"{func.__module__}.{func.__name__}")
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.time() - start_time
                logger.error(
                    f"{operation_name} failed",
                    extra={
                        "metadata": {
                            "operation": operation_name,
                            "duration": duration,
                            "success": False,
                            "error": str(e),
                        }
                    },
                )
                raise

            duration = time.time() - start_time
            logger.debug(
                f"{operation_name} completed",
                extra={
                    "metadata": {
                        "operation": operation_name,
                        "duration": duration,
                        "success": True,
                    }
                },
            )
            return result

        return wrapper

    return decorator
