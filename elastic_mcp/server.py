"""
HTTP server.

Serves the MCP JSON-RPC endpoint at /mcp next to the REST endpoints
(/health, /tools/list, /tools/invoke). All of them dispatch through the same
sealed ToolRegistry.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette import status

from elastic_mcp import __version__
from elastic_mcp.handlers.health import health_check
from elastic_mcp.handlers.jsonrpc_mcp import router as jsonrpc_router
from elastic_mcp.models.errors import ErrorCode
from elastic_mcp.models.mcp import MCPToolDefinition
from elastic_mcp.registry.tool_registry import ToolRegistry
from elastic_mcp.store.client import ElasticsearchStore
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(registry: ToolRegistry, store: ElasticsearchStore | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        registry: Sealed tool registry to serve
        store: Store to close on shutdown, if the app owns it
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifespan (startup and shutdown)."""
        logger.info("Starting HTTP server", version=__version__, tool_count=len(registry))
        yield
        if store is not None:
            await store.close()
        logger.info("Shutting down HTTP server")

    app = FastAPI(
        title="Elasticsearch MCP Server",
        description="Serves Elasticsearch tools over MCP JSON-RPC and a REST API.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.include_router(jsonrpc_router)

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Health check endpoint."""
        return await health_check(request.app.state.registry)

    @app.get("/tools/list")
    async def list_tools(request: Request) -> list[MCPToolDefinition]:
        """List available MCP tools."""
        return request.app.state.registry.generate_mcp_schema()

    @app.post("/tools/invoke")
    async def invoke_tool(request: Request) -> JSONResponse:
        """REST endpoint to invoke a tool directly."""
        registry: ToolRegistry = request.app.state.registry

        try:
            request_body = await request.json()
        except ValueError as e:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Request body must be valid JSON") from e
        if not isinstance(request_body, dict):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object")
        tool_name = request_body.get("tool_name")
        parameters = request_body.get("parameters", {})

        # Prioritize correlation_id from request context, otherwise generate a new one
        context = request_body.get("context")
        correlation_id = (context.get("correlation_id") if isinstance(context, dict) else None) or str(uuid4())
        bound_logger = logger.bind(correlation_id=correlation_id)

        if not tool_name:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "tool_name is required")
        if tool_name not in registry:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"Tool '{tool_name}' not found")

        try:
            result = await registry.invoke(tool_name, parameters, correlation_id=correlation_id)
        except Exception as e:
            bound_logger.error("Unhandled exception in invoke_tool", error=str(e), exc_info=True)
            raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error") from e

        if result.is_error and result.error_code == ErrorCode.INVALID_INPUT:
            return JSONResponse(
                {"error_code": "invalid_parameters", "error": result.texts[0], "result": result.to_mcp()},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        return JSONResponse({"result": result.to_mcp(), "correlation_id": correlation_id})

    return app
