from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from elastic_mcp.models.arguments import NoArguments, ToolArguments
from elastic_mcp.models.envelope import ErrorResult, ResponseEnvelope
from elastic_mcp.models.errors import ErrorCode, MCPError
from elastic_mcp.models.mcp import ToolExecutionContext
from elastic_mcp.store.client import ElasticsearchStore

ArgsT = TypeVar("ArgsT", bound=ToolArguments)


class BaseMCPTool(ABC, Generic[ArgsT]):
    """
    Abstract Base Class for all MCP Tools.

    A tool declares its `name`, `description` and `args_model`, and implements
    `run`. The registry validates raw arguments into an `args_model` instance
    before calling `handler`, which is the tool's catch boundary: whatever `run`
    raises comes back as an `ErrorResult`.
    """

    args_model: type[ToolArguments] = NoArguments

    def __init__(self, store: ElasticsearchStore):
        self.store = store

    @property
    @abstractmethod
    def name(self) -> str:
        """The unique name of the tool."""
        raise NotImplementedError

    @property
    @abstractmethod
    def description(self) -> str:
        """A brief description of what the tool does."""
        raise NotImplementedError

    @property
    def input_schema(self) -> dict[str, Any]:
        """
        The JSON schema of `args_model`, with camelCase property names.
        This schema is what MCP clients see in `tools/list`.
        """
        return self.args_model.model_json_schema(by_alias=True)

    @abstractmethod
    async def run(self, args: ArgsT, context: ToolExecutionContext) -> ResponseEnvelope:
        """
        Execute the tool's logic.

        Args:
            args: Validated, immutable arguments.
            context: An instance of `ToolExecutionContext` providing runtime context.

        Returns:
            A SuccessResult, or an ErrorResult for failures the tool reports itself.
        """
        raise NotImplementedError

    async def handler(self, args: ArgsT, context: ToolExecutionContext) -> ResponseEnvelope:
        """Run the tool and turn any failure into an error envelope."""
        try:
            return await self.run(args, context)
        except MCPError as e:
            log = context.logger.warning if e.code == ErrorCode.INVALID_INPUT else context.logger.error
            log(
                "tool.failed",
                tool_name=self.name,
                error_code=e.code.value,
                error_message=e.message,
                details=e.details,
            )
            return ErrorResult.from_message(e.message, e.code)
        except Exception as e:
            context.logger.error("tool.failed", tool_name=self.name, error=str(e), exc_info=True)
            return ErrorResult.from_message(str(e))
