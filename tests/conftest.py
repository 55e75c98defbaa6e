"""Shared fixtures: a mocked store, a registry built on it, and a tool context."""

from unittest.mock import AsyncMock

import pytest
import structlog

from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.registry.catalog import build_registry
from elastic_mcp.registry.tool_registry import ToolRegistry
from elastic_mcp.store.client import ElasticsearchStore


@pytest.fixture
def mock_store() -> AsyncMock:
    """An ElasticsearchStore whose coroutines are all AsyncMocks."""
    return AsyncMock(spec=ElasticsearchStore)


@pytest.fixture
def registry(mock_store: AsyncMock) -> ToolRegistry:
    """The full, sealed tool catalogue bound to `mock_store`."""
    return build_registry(mock_store)


@pytest.fixture
def tool_context() -> ToolExecutionContext:
    """A ToolExecutionContext with a plain structlog logger."""
    return ToolExecutionContext(
        correlation_id="test-corr-id", logger=structlog.get_logger("test_logger")
    )
