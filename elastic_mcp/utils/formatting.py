"""
Text shaping helpers shared by the tool handlers.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

MAX_REPORTED_FAILURES = 5


def format_failure_list(entries: Sequence[str], limit: int = MAX_REPORTED_FAILURES) -> list[str]:
    """
    Number the first `limit` failure descriptions and summarize the rest.

    Args:
        entries: One description per failure, in the order they occurred
        limit: How many entries to show before the overflow line

    Returns:
        Lines like "1. <entry>", plus "...and N more failures." when truncated
    """
    lines = [f"{number}. {entry}" for number, entry in enumerate(entries[:limit], start=1)]
    if len(entries) > limit:
        lines.append(f"...and {len(entries) - limit} more failures.")
    return lines


def hits_total(hits: Mapping[str, Any]) -> int:
    """`hits.total` is an int on old clusters and `{value, relation}` on newer ones."""
    total = hits.get("total")
    if isinstance(total, Mapping):
        return total.get("value", 0) or 0
    if isinstance(total, int):
        return total
    return 0


def format_hit(hit: Mapping[str, Any]) -> str:
    """Render a search hit: id and score, highlighted fields, then the remaining source fields."""
    highlighted = hit.get("highlight") or {}
    source = hit.get("_source") or {}

    text = f"Document ID: {hit.get('_id')}\nScore: {json.dumps(hit.get('_score'))}\n\n"
    for field, fragments in highlighted.items():
        if isinstance(fragments, list) and fragments:
            text += f"{field} (highlighted): {' ... '.join(str(f) for f in fragments)}\n"
    for field, value in source.items():
        if field not in highlighted:
            text += f"{field}: {json.dumps(value, default=str)}\n"
    return text.strip()
