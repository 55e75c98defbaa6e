"""
MCP protocol server over stdio, built on the SDK's low-level `Server`.

`list_tools` publishes the registry's catalogue and `call_tool` routes every
call through `ToolRegistry.invoke`, so argument validation and error shaping
are identical to the HTTP surfaces.
"""

from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData

from elastic_mcp import __version__
from elastic_mcp.models.envelope import ResponseEnvelope
from elastic_mcp.models.errors import UnknownToolError
from elastic_mcp.registry.tool_registry import ToolRegistry
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)

SERVER_NAME = "elasticsearch-mcp-server"


def tools_to_mcp(registry: ToolRegistry) -> list[types.Tool]:
    return [
        types.Tool(name=definition.name, description=definition.description, inputSchema=definition.input_schema)
        for definition in registry.generate_mcp_schema()
    ]


def envelope_to_content(envelope: ResponseEnvelope) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=fragment.text) for fragment in envelope.content]


def create_mcp_server(registry: ToolRegistry) -> Server:
    """Build a low-level MCP server bound to `registry`."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tools_to_mcp(registry)

    # Arguments are validated by the registry so that failures come back as envelopes.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        try:
            envelope = await registry.invoke(name, arguments)
        except UnknownToolError as e:
            logger.warning("tool.unknown", tool_name=name)
            raise McpError(ErrorData(code=INVALID_PARAMS, message=e.message)) from e
        return envelope_to_content(envelope)

    return server


async def run_stdio(registry: ToolRegistry) -> None:
    """Serve `registry` over stdin/stdout until the client disconnects."""
    server = create_mcp_server(registry)
    logger.info("Starting MCP server on stdio", server_name=SERVER_NAME, tool_count=len(registry))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
