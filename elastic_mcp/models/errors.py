"""Error handling data models."""

from typing import Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Configuration
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Input Validation
    INVALID_INPUT = "INVALID_INPUT"

    # Tool Registry
    TOOL_REGISTRATION_ERROR = "TOOL_REGISTRATION_ERROR"
    DUPLICATE_TOOL = "DUPLICATE_TOOL"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"

    # Tool Execution
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    STORE_ERROR = "STORE_ERROR"


class MCPError(Exception):
    """Base exception for MCP server errors."""

    def __init__(self, code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(MCPError):
    """Connection or auth configuration is missing or contradictory."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_CONFIGURATION, message, details)


class ValidationError(MCPError):
    """Tool arguments failed their schema, or a bulk operation is incomplete."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_INPUT, message, details)


class ToolRegistrationError(MCPError):
    """A tool definition could not be added to the registry."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.TOOL_REGISTRATION_ERROR) -> None:
        super().__init__(code, message)


class DuplicateToolError(ToolRegistrationError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool with name '{name}' already registered.", ErrorCode.DUPLICATE_TOOL)
        self.tool_name = name


class UnknownToolError(MCPError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(ErrorCode.TOOL_NOT_FOUND, f"Tool '{name}' not found", {"tool_name": name})
        self.tool_name = name


class RemoteOperationError(MCPError):
    """The Elasticsearch call itself failed (network, auth, 4xx/5xx)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.STORE_ERROR, message, details)
