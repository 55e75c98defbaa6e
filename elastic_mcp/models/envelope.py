"""Uniform result envelope returned by every tool."""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from elastic_mcp.models.errors import ErrorCode


class TextFragment(BaseModel):
    """A single MCP text content item."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ResponseEnvelope(BaseModel):
    """
    Ordered sequence of text fragments.

    Tool handlers return one of the two concrete variants: `SuccessResult` when
    the store call went through (even if individual bulk items failed), or
    `ErrorResult` when the call itself could not be completed.
    """

    model_config = ConfigDict(frozen=True)

    content: tuple[TextFragment, ...] = Field(default_factory=tuple)

    @property
    def is_error(self) -> bool:
        return False

    @property
    def texts(self) -> list[str]:
        return [fragment.text for fragment in self.content]

    def to_mcp(self) -> dict[str, Any]:
        """Serialize to the MCP `CallToolResult` shape."""
        return {
            "content": [fragment.model_dump() for fragment in self.content],
            "isError": self.is_error,
        }


class SuccessResult(ResponseEnvelope):
    """The operation completed; partial item failures are reported in the text."""

    @classmethod
    def of(cls, *texts: str) -> "SuccessResult":
        return cls(content=tuple(TextFragment(text=text) for text in texts))

    @classmethod
    def with_json(cls, heading: str, payload: Any) -> "SuccessResult":
        """A heading fragment followed by a pretty-printed JSON fragment."""
        return cls.of(heading, to_json(payload))


class ErrorResult(ResponseEnvelope):
    """The operation failed; the first fragment reads `Error: <message>`."""

    error_code: ErrorCode = Field(ErrorCode.TOOL_EXECUTION_ERROR, exclude=True)

    @property
    def is_error(self) -> bool:
        return True

    @classmethod
    def from_message(cls, message: str, code: ErrorCode = ErrorCode.TOOL_EXECUTION_ERROR) -> "ErrorResult":
        return cls(content=(TextFragment(text=f"Error: {message}"),), error_code=code)


def to_json(payload: Any) -> str:
    """Pretty-print a result payload, the way every listing tool shows raw data."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    elif isinstance(payload, list):
        payload = [item.model_dump(by_alias=True) if isinstance(item, BaseModel) else item for item in payload]
    return json.dumps(payload, indent=2, default=str)
