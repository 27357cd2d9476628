"""
Configuration management for twd-mcp.

Handles environment variables, configuration files, defaults and
validation for the tool server and the command-line interface.
"""

import os
import json
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]
VALID_LOG_FORMATS = ["text", "json"]


@dataclass
class Config:
    """Configuration class for twd-mcp with environment variable support."""

    # Environment detection
    ci_mode: bool = field(default=False)

    # Logging configuration
    log_level: str = field(default="INFO")
    log_format: str = field(default="text")
    log_file: Optional[Path] = field(default=None)

    # Server identity
    server_name: str = field(default="twd-mcp")

    def __post_init__(self):
        """Apply environment overrides and normalise values."""
        ci_env = os.getenv("CI", "").lower() == "true"
        if ci_env and self.ci_mode is False:
            self.ci_mode = True

        log_env = os.getenv("TWD_MCP_LOG_LEVEL")
        if log_env:
            self.log_level = log_env
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            self.log_level = "INFO"
        else:
            self.log_level = self.log_level.upper()

        format_env = os.getenv("TWD_MCP_LOG_FORMAT")
        if format_env:
            self.log_format = format_env.lower()
        elif self.ci_mode and self.log_format == "text":
            self.log_format = "json"
        if self.log_format not in VALID_LOG_FORMATS:
            self.log_format = "text"

        file_env = os.getenv("TWD_MCP_LOG_FILE")
        if file_env:
            self.log_file = Path(file_env)
        elif self.log_file is not None and not isinstance(self.log_file, Path):
            self.log_file = Path(self.log_file)

    @property
    def is_ci_mode(self) -> bool:
        """Check if running in CI environment."""
        return self.ci_mode

    @property
    def debug_enabled(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"

    @property
    def logging_level(self) -> str:
        """Level name understood by the logging module."""
        return "WARNING" if self.log_level == "WARN" else self.log_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging."""
        return {
            "ci_mode": self.ci_mode,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": str(self.log_file) if self.log_file else None,
            "server_name": self.server_name,
        }

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        ci = os.getenv("CI", "").lower() == "true"
        return cls(
            ci_mode=ci,
            log_level=os.getenv("TWD_MCP_LOG_LEVEL", "INFO").upper(),
            log_format="json" if ci else "text",
        )

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Create configuration from a YAML or JSON file.

        Environment variables still take precedence over file values.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}", config_path=str(path)
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file {path}: {e}",
                config_path=str(path),
            )

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {path}",
                config_path=str(path),
            )

        known = {"ci_mode", "log_level", "log_format", "log_file", "server_name"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys in {path}: {', '.join(unknown)}",
                config_path=str(path),
            )

        return cls(**data)

    def validate(self) -> None:
        """Validate configuration and raise ValidationError if invalid."""
        from .exceptions import ValidationError

        errors = []

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

        if self.log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid log format: {self.log_format}. Must be one of {VALID_LOG_FORMATS}"
            )

        if not self.server_name or not self.server_name.strip():
            errors.append("Server name cannot be empty")

        if self.log_file is not None and not self.log_file.parent.exists():
            errors.append(f"Log file directory does not exist: {self.log_file.parent}")

        if errors:
            message = "Configuration validation failed: " + "; ".join(errors)
            raise ValidationError(
                message,
                validation_type="config",
                violations=errors,
            )
