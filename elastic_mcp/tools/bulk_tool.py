from elastic_mcp.models.arguments import BulkArgs
from elastic_mcp.models.envelope import ResponseEnvelope, SuccessResult
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool
from elastic_mcp.utils.bulk_compiler import compile_operations, render_summary, summarize


class BulkTool(BaseMCPTool[BulkArgs]):
    """
    Sends several document operations in one `_bulk` request.

    Operations are checked and compiled before the store is called, so an
    incomplete operation rejects the whole batch. Item failures reported by
    Elasticsearch do not fail the call; they are listed in the summary.
    """

    args_model = BulkArgs

    @property
    def name(self) -> str:
        return "bulk"

    @property
    def description(self) -> str:
        return "Perform multiple document operations (create, update, delete) in a single API call"

    async def run(self, args: BulkArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        compiled = compile_operations(args.operations)
        context.logger.debug(
            "bulk.compiled", operations=len(args.operations), lines=len(compiled.lines)
        )

        response = await self.store.bulk(compiled.lines, pipeline=args.pipeline, refresh=args.refresh)
        summary = summarize(args.operations, response)
        if summary.failure_count:
            context.logger.warning(
                "bulk.partial_failure",
                failed=summary.failure_count,
                total=summary.total_operations,
            )
        return SuccessResult.of(render_summary(summary))
