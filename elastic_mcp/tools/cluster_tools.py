from elastic_mcp.models.arguments import GetShardsArgs, NoArguments
from elastic_mcp.models.envelope import ResponseEnvelope, SuccessResult
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool


class GetClusterHealthTool(BaseMCPTool[NoArguments]):
    """Reports cluster status along with node and shard counts."""

    args_model = NoArguments

    @property
    def name(self) -> str:
        return "get_cluster_health"

    @property
    def description(self) -> str:
        return "Get health information about the Elasticsearch cluster"

    async def run(self, args: NoArguments, context: ToolExecutionContext) -> ResponseEnvelope:
        health = await self.store.get_cluster_health()
        return SuccessResult.with_json("Elasticsearch Cluster Health:", health)


class GetShardsTool(BaseMCPTool[GetShardsArgs]):
    args_model = GetShardsArgs

    @property
    def name(self) -> str:
        return "get_shards"

    @property
    def description(self) -> str:
        return "Get shard information for all or specific indices"

    async def run(self, args: GetShardsArgs, context: ToolExecutionContext) -> ResponseEnvelope:
        shards = await self.store.get_shards(args.index)
        scope = f" for index {args.index}" if args.index else ""
        return SuccessResult.with_json(f"Found {len(shards)} shards{scope}", shards)
