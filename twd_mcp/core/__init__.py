"""Core components for twd-mcp."""

from .config import Config
from .exceptions import (
    TwdMcpError,
    ValidationError,
    GenerationError,
    UnknownToolError,
    ConfigurationError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "Config",
    "TwdMcpError",
    "ValidationError",
    "GenerationError",
    "UnknownToolError",
    "ConfigurationError",
    "setup_logging",
    "get_logger",
]
