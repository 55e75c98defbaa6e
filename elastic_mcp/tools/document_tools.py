"""Single-document tools and search."""

from elastic_mcp.models.arguments import (
    AddDocumentArgs,
    DeleteDocumentArgs,
    SearchArgs,
    UpdateDocumentArgs,
)
from elastic_mcp.models.envelope import ResponseEnvelope, SuccessResult, to_json
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool
from elastic_mcp.utils.formatting import format_hit, hits_total


class SearchTool(BaseMCPTool[SearchArgs]):
    """
    Runs a query DSL body against an index.

    The result starts with a totals line, then aggregations when the response
    has any, then one fragment per hit.
    """

    args_model = SearchArgs

    @property
    def name(self) -> str:
        return "search"

    @property
    def description(self) -> str:
        return "Perform an Elasticsearch search with the provided query DSL and highlighting"

    async def run(self, args: SearchArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        response = await self.store.search(args.index, args.query_body)
        hits = response.get("hits") or {}
        documents = hits.get("hits") or []
        offset = args.query_body.get("from", 0)

        texts = [
            f"Total results: {hits_total(hits)}, showing {len(documents)} from position {offset}"
        ]
        if response.get("aggregations"):
            texts.append(f"Aggregations: {to_json(response['aggregations'])}")
        texts.extend(format_hit(hit) for hit in documents)
        return SuccessResult.of(*texts)


class AddDocumentTool(BaseMCPTool[AddDocumentArgs]):
    args_model = AddDocumentArgs

    @property
    def name(self) -> str:
        return "add_document"

    @property
    def description(self) -> str:
        return "Add a new document to a specific Elasticsearch index"

    async def run(self, args: AddDocumentArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        response = await self.store.add_document(args.index, args.document, args.id)
        return SuccessResult.of(f"Document added to index '{args.index}' with ID: {response.get('_id')}")


class UpdateDocumentTool(BaseMCPTool[UpdateDocumentArgs]):
    args_model = UpdateDocumentArgs

    @property
    def name(self) -> str:
        return "update_document"

    @property
    def description(self) -> str:
        return "Update an existing document in a specific Elasticsearch index"

    async def run(self, args: UpdateDocumentArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        await self.store.update_document(args.index, args.id, args.document)
        return SuccessResult.of(f"Document with ID '{args.id}' updated in index '{args.index}'.")


class DeleteDocumentTool(BaseMCPTool[DeleteDocumentArgs]):
    args_model = DeleteDocumentArgs

    @property
    def name(self) -> str:
        return "delete_document"

    @property
    def description(self) -> str:
        return "Delete a document from a specific Elasticsearch index"

    async def run(self, args: DeleteDocumentArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        await self.store.delete_document(args.index, args.id)
        return SuccessResult.of(f"Document with ID '{args.id}' deleted from index '{args.index}'.")
