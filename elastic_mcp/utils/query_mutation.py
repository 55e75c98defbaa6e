"""
Shared request building and reporting for update-by-query and delete-by-query.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from elastic_mcp.models.arguments import ScriptArgs
from elastic_mcp.utils.formatting import format_failure_list


def _base_params(
    index: str,
    fields: dict[str, Any],
    conflicts: str | None,
    max_docs: int | None,
    refresh: bool | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "index": index,
        **fields,
        # Only an explicit False turns refresh off.
        "refresh": refresh is not False,
    }
    if conflicts is not None:
        params["conflicts"] = conflicts
    if max_docs is not None:
        params["max_docs"] = max_docs
    return params


def build_update_by_query_params(
    index: str,
    query: dict[str, Any],
    script: ScriptArgs,
    conflicts: str | None = None,
    max_docs: int | None = None,
    refresh: bool | None = True,
) -> dict[str, Any]:
    """
    Keyword arguments for `update_by_query`.

    `conflicts` and `max_docs` are left out entirely when not given so that
    Elasticsearch applies its own defaults.
    """
    wire_script: dict[str, Any] = {"source": script.source}
    if script.params is not None:
        wire_script["params"] = script.params
    return _base_params(index, {"query": query, "script": wire_script}, conflicts, max_docs, refresh)


def build_delete_by_query_params(
    index: str,
    query: dict[str, Any],
    conflicts: str | None = None,
    max_docs: int | None = None,
    refresh: bool | None = True,
) -> dict[str, Any]:
    """Keyword arguments for `delete_by_query`."""
    return _base_params(index, {"query": query}, conflicts, max_docs, refresh)


@dataclass(frozen=True)
class QueryFailure:
    document_id: str
    reason: str


@dataclass(frozen=True)
class QueryMutationResult:
    took: int
    total: int
    affected: int
    failures: tuple[QueryFailure, ...]
    version_conflicts: int = 0

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @classmethod
    def from_response(cls, response: Mapping[str, Any], affected_key: str) -> "QueryMutationResult":
        failures = []
        for failure in response.get("failures") or []:
            cause = failure.get("cause") or {}
            failures.append(
                QueryFailure(
                    document_id=failure.get("id") or "unknown",
                    reason=cause.get("reason") or "Unknown",
                )
            )
        return cls(
            took=response.get("took") or 0,
            total=response.get("total") or 0,
            affected=response.get(affected_key) or 0,
            failures=tuple(failures),
            version_conflicts=response.get("version_conflicts") or 0,
        )


def _failure_section(result: QueryMutationResult) -> str:
    if not result.failures:
        return ""
    entries = [f"ID: {failure.document_id}, Reason: {failure.reason}" for failure in result.failures]
    return "\n\nFailures:\n" + "\n".join(format_failure_list(entries))


def render_update_by_query(index: str, result: QueryMutationResult) -> str:
    text = f"Update by query completed successfully in index '{index}':\n"
    text += f"- Total documents processed: {result.total}\n"
    text += f"- Documents updated: {result.affected}\n"
    text += f"- Documents that failed: {result.failure_count}\n"
    text += f"- Time taken: {result.took}ms"
    return text + _failure_section(result)


def render_delete_by_query(index: str, result: QueryMutationResult) -> str:
    text = f"Delete by query completed successfully in index '{index}':\n"
    text += f"- Total documents processed: {result.total}\n"
    text += f"- Documents deleted: {result.affected}\n"
    text += f"- Deletion failures: {result.failure_count}\n"
    text += f"- Time taken: {result.took}ms"
    if result.version_conflicts > 0:
        text += f"\n- Version conflicts: {result.version_conflicts}"
    return text + _failure_section(result)
