"""Data models for the Elasticsearch MCP server."""

from elastic_mcp.models.envelope import ErrorResult, ResponseEnvelope, SuccessResult, TextFragment
from elastic_mcp.models.errors import ErrorCode, MCPError
from elastic_mcp.models.mcp import HealthCheckResponse, MCPToolDefinition, ToolExecutionContext

__all__ = [
    "ErrorCode",
    "ErrorResult",
    "HealthCheckResponse",
    "MCPError",
    "MCPToolDefinition",
    "ResponseEnvelope",
    "SuccessResult",
    "TextFragment",
    "ToolExecutionContext",
]
