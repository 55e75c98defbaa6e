"""Models for the MCP server."""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog
from pydantic import BaseModel, Field


class MCPToolDefinition(BaseModel):
    """
    Defines the structure for an MCP tool's metadata, used for schema generation.
    """

    name: str = Field(..., description="The unique name of the tool.")
    description: str = Field(..., description="A brief description of what the tool does.")
    input_schema: dict[str, Any] = Field(
        ..., description="The JSON schema for the tool's input parameters."
    )
    version: str = Field("1.0", description="The version of the tool definition.")

    def to_mcp(self) -> dict[str, Any]:
        """Shape used by the MCP `tools/list` result."""
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


@dataclass
class ToolExecutionContext:
    """
    Context object passed to tool handlers.
    Encapsulates request-specific information like the correlation ID and a bound logger.
    """

    correlation_id: str
    logger: structlog.stdlib.BoundLogger
    tool_name: str | None = None
    start_time: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.start_time) * 1000, 2)


class HealthCheckResponse(BaseModel):
    """
    Response model for the health check endpoint.
    """

    status: str = Field(..., description="Status of the server")
    version: str = Field(..., description="Version of the server")
    timestamp: datetime = Field(..., description="Current server timestamp in ISO 8601 format")
    tools_loaded: int = Field(..., description="Number of tools currently loaded")
    registered_tools: list[str] = Field(
        default_factory=list, description="List of registered tool names"
    )
