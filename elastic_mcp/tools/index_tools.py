"""Index-level tools: listing, mappings, lifecycle, counts, templates and aliases."""

from elastic_mcp.models.arguments import (
    CountDocumentsArgs,
    CreateIndexArgs,
    IndexArgs,
    ListIndicesArgs,
    NameFilterArgs,
)
from elastic_mcp.models.envelope import ResponseEnvelope, SuccessResult
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool


class ListIndicesTool(BaseMCPTool[ListIndicesArgs]):
    args_model = ListIndicesArgs

    @property
    def name(self) -> str:
        return "list_indices"

    @property
    def description(self) -> str:
        return "List all available Elasticsearch indices with detailed information"

    async def run(self, args: ListIndicesArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        indices = await self.store.list_indices(args.index_pattern)
        return SuccessResult.with_json(
            f"Found {len(indices)} indices matching pattern '{args.index_pattern}'", indices
        )


class GetMappingsTool(BaseMCPTool[IndexArgs]):
    args_model = IndexArgs

    @property
    def name(self) -> str:
        return "get_mappings"

    @property
    def description(self) -> str:
        return "Get field mappings for a specific Elasticsearch index"

    async def run(self, args: IndexArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        mappings = await self.store.get_mappings(args.index)
        return SuccessResult.with_json(f"Mappings for index: {args.index}", mappings)


class CreateIndexTool(BaseMCPTool[CreateIndexArgs]):
    args_model = CreateIndexArgs

    @property
    def name(self) -> str:
        return "create_index"

    @property
    def description(self) -> str:
        return "Create a new Elasticsearch index with optional settings and mappings"

    async def run(self, args: CreateIndexArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        await self.store.create_index(args.index, settings=args.settings, mappings=args.mappings)
        return SuccessResult.of(f"Index '{args.index}' created successfully.")


class DeleteIndexTool(BaseMCPTool[IndexArgs]):
    args_model = IndexArgs

    @property
    def name(self) -> str:
        return "delete_index"

    @property
    def description(self) -> str:
        return "Delete an Elasticsearch index"

    async def run(self, args: IndexArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        await self.store.delete_index(args.index)
        return SuccessResult.of(f"Index '{args.index}' deleted successfully.")


class CountDocumentsTool(BaseMCPTool[CountDocumentsArgs]):
    args_model = CountDocumentsArgs

    @property
    def name(self) -> str:
        return "count_documents"

    @property
    def description(self) -> str:
        return "Count documents in an index, optionally filtered by a query"

    async def run(self, args: CountDocumentsArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        count = await self.store.count_documents(args.index, args.query)
        qualifier = " matching the provided query" if args.query else ""
        return SuccessResult.of(f"Count of documents in index '{args.index}'{qualifier}: {count}")


class GetTemplatesTool(BaseMCPTool[NameFilterArgs]):
    args_model = NameFilterArgs

    @property
    def name(self) -> str:
        return "get_templates"

    @property
    def description(self) -> str:
        return "Get index templates from Elasticsearch"

    async def run(self, args: NameFilterArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        templates = await self.store.get_index_templates(args.name)
        return SuccessResult.with_json("Index Templates:", templates)


class GetAliasesTool(BaseMCPTool[NameFilterArgs]):
    args_model = NameFilterArgs

    @property
    def name(self) -> str:
        return "get_aliases"

    @property
    def description(self) -> str:
        return "Get index aliases from Elasticsearch"

    async def run(self, args: NameFilterArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        aliases = await self.store.get_aliases(args.name)
        return SuccessResult.with_json("Index Aliases:", aliases)
