"""The fixed tool catalogue served by this server."""

from elastic_mcp.registry.tool_registry import ToolRegistry
from elastic_mcp.store.client import ElasticsearchStore
from elastic_mcp.tools.base import BaseMCPTool
from elastic_mcp.tools.bulk_tool import BulkTool
from elastic_mcp.tools.cluster_tools import GetClusterHealthTool, GetShardsTool
from elastic_mcp.tools.document_tools import (
    AddDocumentTool,
    DeleteDocumentTool,
    SearchTool,
    UpdateDocumentTool,
)
from elastic_mcp.tools.index_tools import (
    CountDocumentsTool,
    CreateIndexTool,
    DeleteIndexTool,
    GetAliasesTool,
    GetMappingsTool,
    GetTemplatesTool,
    ListIndicesTool,
)
from elastic_mcp.tools.query_mutation_tools import DeleteByQueryTool, UpdateByQueryTool
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)

TOOL_CLASSES: tuple[type[BaseMCPTool], ...] = (
    ListIndicesTool,
    GetMappingsTool,
    SearchTool,
    GetClusterHealthTool,
    GetShardsTool,
    AddDocumentTool,
    UpdateDocumentTool,
    DeleteDocumentTool,
    UpdateByQueryTool,
    DeleteByQueryTool,
    BulkTool,
    CreateIndexTool,
    DeleteIndexTool,
    CountDocumentsTool,
    GetTemplatesTool,
    GetAliasesTool,
)


def build_registry(store: ElasticsearchStore) -> ToolRegistry:
    """Register every tool against `store` and seal the registry."""
    registry = ToolRegistry()
    for tool_class in TOOL_CLASSES:
        registry.register_tool(tool_class(store))
    registry.seal()
    logger.info("Tools registered.", tool_count=len(registry))
    return registry
