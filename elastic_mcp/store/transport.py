"""
Transport that prepends a fixed prefix to every request path.

Used when Elasticsearch sits behind a reverse proxy under a sub-path. The
prefix and the original path are concatenated verbatim; separators are not
normalized.
"""

from typing import Any

from elastic_transport import AsyncTransport


class PathPrefixTransport(AsyncTransport):
    """AsyncTransport whose requests all go to `path_prefix + target`."""

    path_prefix: str = ""

    async def perform_request(self, method: str, target: str, **kwargs: Any) -> Any:  # type: ignore[override]
        return await super().perform_request(method, self.path_prefix + target, **kwargs)


def prefixed_transport_class(path_prefix: str) -> type[PathPrefixTransport]:
    """
    Build a transport class bound to `path_prefix`.

    The client instantiates its transport itself, so the prefix has to travel
    on the class rather than through the constructor.
    """
    return type("PathPrefixTransport", (PathPrefixTransport,), {"path_prefix": path_prefix})
