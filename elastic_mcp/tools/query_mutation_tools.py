"""update_by_query and delete_by_query."""

from elastic_mcp.models.arguments import DeleteByQueryArgs, UpdateByQueryArgs
from elastic_mcp.models.envelope import ResponseEnvelope, SuccessResult
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool
from elastic_mcp.utils.query_mutation import (
    QueryMutationResult,
    build_delete_by_query_params,
    build_update_by_query_params,
    render_delete_by_query,
    render_update_by_query,
)


class UpdateByQueryTool(BaseMCPTool[UpdateByQueryArgs]):
    args_model = UpdateByQueryArgs

    @property
    def name(self) -> str:
        return "update_by_query"

    @property
    def description(self) -> str:
        return "Update documents in an Elasticsearch index based on a query"

    async def run(self, args: UpdateByQueryArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        params = build_update_by_query_params(
            args.index,
            args.query,
            args.script,
            conflicts=args.conflicts,
            max_docs=args.max_docs,
            refresh=args.refresh,
        )
        response = await self.store.update_by_query(params)
        result = QueryMutationResult.from_response(response, "updated")
        if result.failures:
            context.logger.warning(
                "update_by_query.partial_failure", index=args.index, failures=result.failure_count
            )
        return SuccessResult.of(render_update_by_query(args.index, result))


class DeleteByQueryTool(BaseMCPTool[DeleteByQueryArgs]):
    args_model = DeleteByQueryArgs

    @property
    def name(self) -> str:
        return "delete_by_query"

    @property
    def description(self) -> str:
        return "Delete documents in an Elasticsearch index based on a query"

    async def run(self, args: DeleteByQueryArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        params = build_delete_by_query_params(
            args.index,
            args.query,
            conflicts=args.conflicts,
            max_docs=args.max_docs,
            refresh=args.refresh,
        )
        response = await self.store.delete_by_query(params)
        result = QueryMutationResult.from_response(response, "deleted")
        if result.failures:
            context.logger.warning(
                "delete_by_query.partial_failure", index=args.index, failures=result.failure_count
            )
        return SuccessResult.of(render_delete_by_query(args.index, result))
