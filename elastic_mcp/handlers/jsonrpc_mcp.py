"""Plain JSON-RPC handler for the MCP protocol over HTTP."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from elastic_mcp import __version__
from elastic_mcp.mcp_server import SERVER_NAME
from elastic_mcp.registry.tool_registry import ToolRegistry
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

PROTOCOL_VERSION = "2024-11-05"


class JSONRPCRequest(BaseModel):
    """JSON-RPC 2.0 request."""

    jsonrpc: str
    id: int | str | None = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


def _result(request_id: int | str | None, result: dict[str, Any]) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": request_id, "result": result})


def _error(request_id: int | str | None, code: int, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}},
        status_code=status_code,
    )


@router.post("/mcp")
async def jsonrpc_mcp_handler(rpc_request: JSONRPCRequest, request: Request) -> Response:
    """
    JSON-RPC 2.0 handler for `initialize`, `tools/list` and `tools/call`.

    Tool results use the MCP `CallToolResult` shape, with `isError` set from
    the envelope variant.
    """
    method = rpc_request.method
    params = rpc_request.params
    request_id = rpc_request.id
    registry: ToolRegistry = request.app.state.registry

    logger.info("JSON-RPC request", method=method, id=request_id)

    try:
        if method == "initialize":
            return _result(
                request_id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {"listChanged": False}},
                    "serverInfo": {"name": SERVER_NAME, "version": __version__},
                },
            )

        if method.startswith("notifications/"):
            return Response(status_code=202)

        if method == "tools/list":
            return _result(
                request_id,
                {"tools": [definition.to_mcp() for definition in registry.generate_mcp_schema()]},
            )

        if method == "tools/call":
            tool_name = params.get("name")
            if not tool_name:
                return _error(request_id, -32602, "Missing 'name' parameter", 400)
            if tool_name not in registry:
                return _error(request_id, -32601, f"Tool '{tool_name}' not found", 404)

            envelope = await registry.invoke(tool_name, params.get("arguments") or {})
            return _result(request_id, envelope.to_mcp())

        return _error(request_id, -32601, f"Method '{method}' not found", 404)

    except Exception as e:
        logger.error("JSON-RPC handler error", error=str(e), exc_info=True)
        return _error(request_id, -32603, f"Internal error: {str(e)}", 500)
