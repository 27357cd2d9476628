"""
Base exception classes for twd-mcp.

Provides a hierarchy of exceptions for the failures that can reach the
tool adapter: invalid input, unrenderable values, unknown tools and
configuration problems.
"""

from typing import Optional, Dict, Any


class TwdMcpError(Exception):
    """Base exception class for all twd-mcp errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ValidationError(TwdMcpError):
    """Raised when tool input or configuration fails validation."""

    def __init__(
        self,
        message: str,
        validation_type: Optional[str] = None,
        violations: Optional[list] = None,
    ):
        super().__init__(message, "VALIDATION_FAILED")
        self.validation_type = validation_type
        self.violations = violations or []
        self.context.update(
            {
                "validation_type": validation_type,
                "violations": violations,
            }
        )


class GenerationError(TwdMcpError):
    """Raised when a generator cannot render its input as source code."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        value_type: Optional[str] = None,
    ):
        super().__init__(message, "GENERATION_FAILED")
        self.operation = operation
        self.value_type = value_type
        self.context.update(
            {
                "operation": operation,
                "value_type": value_type,
            }
        )


class UnknownToolError(TwdMcpError):
    """Raised when a tool call names a tool that is not registered."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", "UNKNOWN_TOOL")
        self.tool_name = tool_name
        self.context.update({"tool_name": tool_name})


class ConfigurationError(TwdMcpError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
    ):
        super().__init__(message, "CONFIGURATION_FAILED")
        self.config_path = config_path
        self.context.update({"config_path": config_path})
