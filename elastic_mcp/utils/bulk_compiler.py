"""
Bulk request compilation and response reconciliation.

A logical operation list is expanded into the newline-delimited pairing the
`_bulk` endpoint expects: one action line per operation, followed by a
payload line for everything except `delete`. The store answers with one item
per operation in the same order, which is what `summarize` relies on.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from elastic_mcp.models.arguments import BulkOperation
from elastic_mcp.models.errors import ValidationError
from elastic_mcp.utils.formatting import format_failure_list

ACTIONS_REQUIRING_ID = frozenset({"update", "delete"})
ACTIONS_REQUIRING_DOCUMENT = frozenset({"index", "create", "update"})


@dataclass(frozen=True)
class CompiledBulk:
    """Wire lines plus the position of each operation's action line."""

    lines: list[dict[str, Any]]
    action_positions: tuple[int, ...]


@dataclass(frozen=True)
class BulkItemResult:
    """Outcome of one logical operation."""

    operation_index: int
    action: str
    document_id: str
    index_name: str
    status: int
    result: str | None = None
    error_type: str | None = None
    error_reason: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_type is not None


@dataclass(frozen=True)
class BulkSummary:
    took: int
    errors: bool
    items: tuple[BulkItemResult, ...]

    @property
    def total_operations(self) -> int:
        return len(self.items)

    @property
    def failures(self) -> list[BulkItemResult]:
        return [item for item in self.items if item.failed]

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def success_count(self) -> int:
        return self.total_operations - self.failure_count


def validate_operations(operations: Sequence[BulkOperation]) -> None:
    """
    Check every operation before anything is compiled.

    Raises:
        ValidationError: For the first operation missing its id or document,
            naming its 1-based position
    """
    for position, operation in enumerate(operations, start=1):
        if operation.action in ACTIONS_REQUIRING_ID and not operation.id:
            raise ValidationError(
                f"Operation #{position} ({operation.action}): Document ID is required",
                {"operation": position, "field": "id"},
            )
        if operation.action in ACTIONS_REQUIRING_DOCUMENT and operation.document is None:
            raise ValidationError(
                f"Operation #{position} ({operation.action}): Document body is required",
                {"operation": position, "field": "document"},
            )


def compile_operations(operations: Sequence[BulkOperation]) -> CompiledBulk:
    """
    Expand logical operations into bulk wire lines, preserving order.

    Args:
        operations: Logical operations as validated by the `bulk` tool

    Returns:
        CompiledBulk whose `lines` holds `2 * non-delete + delete` entries

    Raises:
        ValidationError: If any operation fails `validate_operations`
    """
    validate_operations(operations)

    lines: list[dict[str, Any]] = []
    positions: list[int] = []
    for operation in operations:
        meta: dict[str, Any] = {"_index": operation.index}
        if operation.id:
            meta["_id"] = operation.id

        positions.append(len(lines))
        lines.append({operation.action: meta})

        if operation.action == "update":
            lines.append({"doc": operation.document})
        elif operation.action != "delete":
            lines.append(operation.document)

    return CompiledBulk(lines=lines, action_positions=tuple(positions))


def _item_result(position: int, operation: BulkOperation, item: Any) -> BulkItemResult:
    if not isinstance(item, Mapping) or not item:
        return BulkItemResult(
            operation_index=position,
            action=operation.action,
            document_id=operation.id or "unknown",
            index_name=operation.index,
            status=0,
            error_type="unknown_error",
            error_reason="No result returned for this operation",
        )

    action = next(iter(item))
    result = item[action] or {}
    common = {
        "operation_index": position,
        "action": action,
        "document_id": result.get("_id") or "unknown",
        "index_name": result.get("_index") or "unknown",
        "status": result.get("status") or 0,
    }

    error = result.get("error")
    if error is not None:
        if not isinstance(error, Mapping):
            error = {"reason": str(error)}
        return BulkItemResult(
            **common,
            error_type=error.get("type") or "unknown_error",
            error_reason=error.get("reason") or "Unknown error",
        )
    return BulkItemResult(**common, result=result.get("result") or "unknown")


def summarize(operations: Sequence[BulkOperation], response: Mapping[str, Any]) -> BulkSummary:
    """
    Pair each logical operation with the store item at the same position.

    Args:
        operations: The operations that were sent
        response: The `_bulk` response body ({took, errors, items})

    Returns:
        BulkSummary with exactly one item result per operation
    """
    items = response.get("items") or []
    results = tuple(
        _item_result(position, operation, items[position] if position < len(items) else None)
        for position, operation in enumerate(operations)
    )
    return BulkSummary(
        took=response.get("took") or 0,
        errors=bool(response.get("errors")),
        items=results,
    )


def render_summary(summary: BulkSummary) -> str:
    """Human-readable report with at most five failures listed."""
    text = f"Bulk operation completed in {summary.took}ms\n"
    text += f"- Total operations: {summary.total_operations}\n"
    text += f"- Successful: {summary.success_count}\n"
    text += f"- Failed: {summary.failure_count}\n"
    text += f"- Errors reported by Elasticsearch: {str(summary.errors).lower()}\n"

    if summary.failure_count:
        entries = [
            f"Operation #{failure.operation_index + 1} ({failure.action}): "
            f"{failure.error_reason} [{failure.error_type}]"
            for failure in summary.failures
        ]
        text += "\nFailures:\n" + "\n".join(format_failure_list(entries)) + "\n"

    return text
