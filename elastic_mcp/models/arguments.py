"""
Argument models for every tool in the catalogue.

Each tool declares one frozen model. The registry validates raw call arguments
against it, so handlers always receive a typed, immutable value. Field names
are snake_case in Python and camelCase on the wire.
"""

from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _required(message: str, strip: bool = True) -> AfterValidator:
    def check(value: str) -> str:
        if strip:
            value = value.strip()
        if not value:
            raise PydanticCustomError("required", message)
        return value

    return AfterValidator(check)


_MIN_ONE = Field(json_schema_extra={"minLength": 1})

IndexName = Annotated[str, _required("Index name is required"), _MIN_ONE]
IndexPattern = Annotated[str, _required("Index pattern is required"), _MIN_ONE]
DocumentId = Annotated[str, _required("Document ID is required", strip=False), _MIN_ONE]
ScriptSource = Annotated[str, _required("Script source is required", strip=False), _MIN_ONE]
MaxDocs = Annotated[StrictInt, Field(gt=0)]
Conflicts = Literal["abort", "proceed"]
BulkAction = Literal["index", "create", "update", "delete"]


class ToolArguments(BaseModel):
    """Base for tool argument models."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class NoArguments(ToolArguments):
    pass


class ListIndicesArgs(ToolArguments):
    index_pattern: IndexPattern = Field(
        ..., description='Pattern of Elasticsearch indices to list (e.g., "logs-*")'
    )


class IndexArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index")


class SearchArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index to search")
    query_body: dict[str, Any] = Field(
        ...,
        description="Complete Elasticsearch query DSL object (can include query, size, from, sort, etc.)",
    )


class GetShardsArgs(ToolArguments):
    index: str | None = Field(None, description="Optional index name to get shard information for")


class AddDocumentArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index")
    id: str | None = Field(
        None, description="Optional document ID (if not provided, Elasticsearch will generate one)"
    )
    document: dict[str, Any] = Field(..., description="Document body to index")


class UpdateDocumentArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index")
    id: DocumentId = Field(..., description="Document ID to update")
    document: dict[str, Any] = Field(..., description="Partial document body to update (fields to change)")


class DeleteDocumentArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index")
    id: DocumentId = Field(..., description="Document ID to delete")


class ScriptArgs(ToolArguments):
    source: ScriptSource = Field(..., description="Painless script source for the update operation")
    params: dict[str, Any] | None = Field(None, description="Optional parameters for the script")


class QueryMutationArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index")
    query: dict[str, Any] = Field(..., description="Elasticsearch query selecting the target documents")
    conflicts: Conflicts | None = Field(None, description="What to do when version conflicts occur")
    max_docs: MaxDocs | None = Field(None, description="Limit the number of documents affected")
    refresh: bool = Field(True, description="Refresh the index after the operation (defaults to true)")


class DeleteByQueryArgs(QueryMutationArgs):
    pass


class UpdateByQueryArgs(QueryMutationArgs):
    script: ScriptArgs = Field(..., description="Script to execute on matching documents")


class BulkOperation(ToolArguments):
    """One logical document mutation inside a `bulk` call."""

    action: BulkAction = Field(
        ...,
        description="The action to perform: index (create/replace), create (fail if exists), update, or delete",
    )
    index: IndexName = Field(..., description="Name of the Elasticsearch index for this operation")
    id: str | None = Field(
        None, description="Document ID (required for update and delete, optional for index/create)"
    )
    document: dict[str, Any] | None = Field(
        None, description="Document body (required for index/create/update, not used for delete)"
    )


def _at_least_one(operations: list[BulkOperation]) -> list[BulkOperation]:
    if not operations:
        raise PydanticCustomError("too_short", "At least one operation is required")
    return operations


class BulkArgs(ToolArguments):
    operations: Annotated[
        list[BulkOperation], AfterValidator(_at_least_one), Field(json_schema_extra={"minItems": 1})
    ] = Field(..., description="Array of operations to perform in bulk")
    pipeline: str | None = Field(None, description="Optional pipeline to use for preprocessing documents")
    refresh: bool = Field(True, description="Refresh the affected indices after the batch (defaults to true)")


class CreateIndexArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the new Elasticsearch index to create")
    settings: dict[str, Any] | None = Field(
        None, description="Optional index settings like number of shards, replicas, etc."
    )
    mappings: dict[str, Any] | None = Field(
        None, description="Optional index mappings defining field types and properties"
    )


class CountDocumentsArgs(ToolArguments):
    index: IndexName = Field(..., description="Name of the Elasticsearch index to count documents in")
    query: dict[str, Any] | None = Field(
        None, description="Optional Elasticsearch query to filter documents to count"
    )


class NameFilterArgs(ToolArguments):
    name: str | None = Field(None, description="Optional name filter")


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into `path: reason; path: reason`."""
    parts = []
    for error in exc.errors():
        path = ""
        for item in error["loc"]:
            path += f"[{item}]" if isinstance(item, int) else (f".{item}" if path else str(item))
        parts.append(f"{path}: {error['msg']}" if path else error["msg"])
    return "; ".join(parts)
