"""Unit tests for the path-prefix transport."""

from unittest.mock import AsyncMock, patch

import pytest
from elastic_transport import AsyncTransport

from elastic_mcp.store.transport import PathPrefixTransport, prefixed_transport_class


def _transport(prefix: str) -> PathPrefixTransport:
    # Skip AsyncTransport.__init__: only perform_request is under test.
    return object.__new__(prefixed_transport_class(prefix))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "prefix, target, expected",
    [
        ("/es", "/_cat/indices", "/es/_cat/indices"),
        ("/es/", "/_search", "/es//_search"),
        ("es", "/_search", "es/_search"),
        ("", "/_bulk", "/_bulk"),
    ],
)
async def test_prefix_is_concatenated_verbatim(prefix, target, expected):
    with patch.object(AsyncTransport, "perform_request", new=AsyncMock(return_value="response")) as perform:
        result = await _transport(prefix).perform_request("GET", target, headers={"accept": "x"})

    assert result == "response"
    perform.assert_awaited_once_with("GET", expected, headers={"accept": "x"})


def test_prefixed_classes_are_independent():
    first = prefixed_transport_class("/a")
    second = prefixed_transport_class("/b")

    assert first.path_prefix == "/a"
    assert second.path_prefix == "/b"
    assert PathPrefixTransport.path_prefix == ""
