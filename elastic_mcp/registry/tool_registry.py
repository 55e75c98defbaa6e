from collections.abc import Mapping
from inspect import iscoroutinefunction
from typing import Any
from uuid import uuid4

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from pydantic import ValidationError as PydanticValidationError

from elastic_mcp.models.arguments import ToolArguments, describe_validation_error
from elastic_mcp.models.envelope import ErrorResult, ResponseEnvelope
from elastic_mcp.models.errors import (
    DuplicateToolError,
    ErrorCode,
    ToolRegistrationError,
    UnknownToolError,
)
from elastic_mcp.models.mcp import MCPToolDefinition, ToolExecutionContext
from elastic_mcp.tools.base import BaseMCPTool
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    Holds the tool catalogue and dispatches invocations to it.

    The registry is filled once at startup and then sealed; after that it is
    read-only and can be shared by every transport.
    """

    def __init__(self) -> None:
        self._registered_tools: dict[str, BaseMCPTool] = {}
        self._sealed = False

    def register_tool(self, tool: BaseMCPTool) -> None:
        """
        Registers an MCP tool with the registry after performing comprehensive validation.

        Args:
            tool: An instance of a class inheriting from BaseMCPTool.

        Raises:
            ToolRegistrationError: If the tool is invalid or the registry is sealed.
            DuplicateToolError: If a tool with the same name is already registered.
        """
        if self._sealed:
            raise ToolRegistrationError("Tool registry is sealed; no tools can be added.")
        self._validate_tool_instance(tool)
        self._validate_tool_properties(tool)
        self._validate_duplicate_name(tool)
        self._validate_input_schema(tool)

        self._registered_tools[tool.name] = tool

    def seal(self) -> None:
        """Close the registry to further registration."""
        self._sealed = True
        logger.info("registry.sealed", tool_count=len(self._registered_tools))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _validate_tool_instance(self, tool: Any) -> None:
        """Checks if the provided object is an instance of BaseMCPTool."""
        if not isinstance(tool, BaseMCPTool):
            raise ToolRegistrationError(f"Provided object is not an instance of BaseMCPTool: {type(tool)}")

    def _validate_tool_properties(self, tool: BaseMCPTool) -> None:
        """Validates that the tool has all required and correctly typed properties."""
        if not tool.name or not isinstance(tool.name, str):
            raise ToolRegistrationError("Tool must have a non-empty string 'name'.")
        if not tool.description or not isinstance(tool.description, str):
            raise ToolRegistrationError(f"Tool '{tool.name}' must have a non-empty string 'description'.")
        if not (isinstance(tool.args_model, type) and issubclass(tool.args_model, ToolArguments)):
            raise ToolRegistrationError(f"Tool '{tool.name}' must declare a ToolArguments 'args_model'.")
        if not (callable(tool.handler) and iscoroutinefunction(tool.handler)):
            raise ToolRegistrationError(f"Tool '{tool.name}' must have an async 'handler' method.")

    def _validate_duplicate_name(self, tool: BaseMCPTool) -> None:
        """Checks if a tool with the same name is already registered."""
        if tool.name in self._registered_tools:
            raise DuplicateToolError(tool.name)

    def _validate_input_schema(self, tool: BaseMCPTool) -> None:
        """Validates the tool's input_schema against the JSON Schema meta-schema."""
        schema = tool.input_schema
        if not isinstance(schema, dict) or schema.get("type") != "object":
            raise ToolRegistrationError(f"Tool '{tool.name}' must have an object 'input_schema'.")
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ToolRegistrationError(
                f"Tool '{tool.name}' has an invalid 'input_schema': {e.message}"
            ) from e

    def get_tool(self, tool_name: str) -> BaseMCPTool | None:
        """
        Retrieves a registered tool by its name.

        Returns:
            The BaseMCPTool instance if found, otherwise None.
        """
        return self._registered_tools.get(tool_name)

    def get_registered_tool_names(self) -> list[str]:
        """Names of all registered tools, in registration order."""
        return list(self._registered_tools.keys())

    def generate_mcp_schema(self) -> list[MCPToolDefinition]:
        """
        Generates a list of MCPToolDefinition objects for all registered tools.
        This is used to expose the available tools and their schemas to the MCP client.
        """
        return [
            MCPToolDefinition(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema,
            )
            for tool in self._registered_tools.values()
        ]

    async def invoke(
        self,
        tool_name: str,
        raw_arguments: Mapping[str, Any] | None,
        correlation_id: str | None = None,
    ) -> ResponseEnvelope:
        """
        Validate arguments and run a tool.

        Args:
            tool_name: Registered tool name
            raw_arguments: Arguments as received from the caller
            correlation_id: Optional id to bind to the invocation's log lines

        Returns:
            The tool's envelope, or an ErrorResult if the arguments are invalid

        Raises:
            UnknownToolError: If no tool is registered under `tool_name`
        """
        tool = self.get_tool(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name)

        correlation_id = correlation_id or str(uuid4())
        bound_logger = logger.bind(correlation_id=correlation_id, tool_name=tool_name)

        try:
            args = tool.args_model.model_validate(raw_arguments if raw_arguments is not None else {})
        except PydanticValidationError as e:
            message = f"Invalid arguments for tool '{tool_name}': {describe_validation_error(e)}"
            bound_logger.warning("tool.arguments_invalid", error=message)
            return ErrorResult.from_message(message, ErrorCode.INVALID_INPUT)

        context = ToolExecutionContext(
            correlation_id=correlation_id, logger=bound_logger, tool_name=tool_name
        )
        bound_logger.info("tool.invoked")
        result = await tool.handler(args, context)
        bound_logger.info("tool.completed", elapsed_ms=context.elapsed_ms(), is_error=result.is_error)
        return result

    def __len__(self) -> int:
        return len(self._registered_tools)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._registered_tools
