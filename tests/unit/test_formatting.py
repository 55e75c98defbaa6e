"""Unit tests for the text shaping helpers."""

from elastic_mcp.models.envelope import ErrorResult, SuccessResult, to_json
from elastic_mcp.models.store import IndexInfo
from elastic_mcp.utils.formatting import format_failure_list, format_hit, hits_total


def test_failure_list_numbering():
    assert format_failure_list(["a", "b"]) == ["1. a", "2. b"]


def test_failure_list_overflow_line():
    lines = format_failure_list([str(i) for i in range(6)])

    assert len(lines) == 6
    assert lines[-1] == "...and 1 more failures."


def test_failure_list_empty():
    assert format_failure_list([]) == []


def test_hits_total_variants():
    assert hits_total({"total": 4}) == 4
    assert hits_total({"total": {"value": 10, "relation": "eq"}}) == 10
    assert hits_total({}) == 0


def test_format_hit_highlighted_fields_first():
    hit = {
        "_id": "42",
        "_score": 1.5,
        "_source": {"title": "Dune", "year": 1965},
        "highlight": {"title": ["<em>Dune</em>", "more <em>Dune</em>"]},
    }

    assert format_hit(hit) == (
        "Document ID: 42\n"
        "Score: 1.5\n"
        "\n"
        "title (highlighted): <em>Dune</em> ... more <em>Dune</em>\n"
        "year: 1965"
    )


def test_format_hit_without_score_or_source():
    assert format_hit({"_id": "1", "_score": None}) == "Document ID: 1\nScore: null"


def test_envelope_variants():
    success = SuccessResult.of("one", "two")
    error = ErrorResult.from_message("boom")

    assert success.to_mcp() == {
        "content": [{"type": "text", "text": "one"}, {"type": "text", "text": "two"}],
        "isError": False,
    }
    assert error.is_error
    assert error.texts == ["Error: boom"]
    assert "error_code" not in error.model_dump()


def test_to_json_uses_camel_case_for_models():
    payload = to_json([IndexInfo(index="books", docs_count=3)])

    assert '"docsCount": 3' in payload
    assert '"storeSize": "0"' in payload
