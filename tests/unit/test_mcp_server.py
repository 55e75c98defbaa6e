"""Unit tests for the stdio MCP server wiring."""

import pytest
from mcp import types

from elastic_mcp.mcp_server import SERVER_NAME, create_mcp_server, envelope_to_content, tools_to_mcp
from elastic_mcp.models.envelope import ErrorResult, SuccessResult


def test_tools_to_mcp_lists_catalogue(registry):
    tools = tools_to_mcp(registry)

    assert [tool.name for tool in tools] == registry.get_registered_tool_names()
    search = next(tool for tool in tools if tool.name == "search")
    assert search.description == "Perform an Elasticsearch search with the provided query DSL and highlighting"
    assert set(search.inputSchema["required"]) == {"index", "queryBody"}


def test_envelope_to_content():
    content = envelope_to_content(SuccessResult.of("heading", "body"))

    assert [item.text for item in content] == ["heading", "body"]
    assert all(item.type == "text" for item in content)
    assert envelope_to_content(ErrorResult.from_message("boom"))[0].text == "Error: boom"


def test_server_identity(registry):
    server = create_mcp_server(registry)

    assert server.name == SERVER_NAME
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


@pytest.mark.asyncio
async def test_list_tools_handler(registry):
    server = create_mcp_server(registry)
    handler = server.request_handlers[types.ListToolsRequest]

    result = await handler(types.ListToolsRequest(method="tools/list"))

    assert len(result.root.tools) == 16


@pytest.mark.asyncio
async def test_call_tool_handler_routes_through_registry(registry, mock_store):
    mock_store.count_documents.return_value = 3
    server = create_mcp_server(registry)
    handler = server.request_handlers[types.CallToolRequest]

    result = await handler(
        types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="count_documents", arguments={"index": "books"}),
        )
    )

    assert result.root.content[0].text == "Count of documents in index 'books': 3"
    mock_store.count_documents.assert_awaited_once_with("books", None)


@pytest.mark.asyncio
async def test_call_tool_handler_reports_invalid_arguments(registry, mock_store):
    server = create_mcp_server(registry)
    handler = server.request_handlers[types.CallToolRequest]

    result = await handler(
        types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="delete_index", arguments={"index": "  "}),
        )
    )

    assert result.root.content[0].text == (
        "Error: Invalid arguments for tool 'delete_index': index: Index name is required"
    )
    mock_store.delete_index.assert_not_awaited()
