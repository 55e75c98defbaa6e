"""
Elasticsearch access layer.

`ElasticsearchStore` exposes one coroutine per operation the tools need and
returns plain response bodies. Client failures are re-raised as
`RemoteOperationError` so the tool layer can report them uniformly.
"""

import functools
import os
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from elastic_mcp import __version__
from elastic_mcp.config import StoreConfig
from elastic_mcp.models.errors import RemoteOperationError
from elastic_mcp.models.store import ClusterHealth, IndexInfo, ShardInfo
from elastic_mcp.store.transport import prefixed_transport_class
from elastic_mcp.utils.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = f"elastic-mcp-server/{__version__}"
REQUEST_TIMEOUT_SECONDS = 30.0
MAX_RETRIES = 5
COMPATIBILITY_HEADERS = {
    "8": {
        "accept": "application/vnd.elasticsearch+json;compatible-with=8",
        "content-type": "application/vnd.elasticsearch+json;compatible-with=8",
    },
}
CAT_INDICES_COLUMNS = "index,health,status,docs.count,store.size,pri,rep"

T = TypeVar("T")


def build_client_options(config: StoreConfig) -> dict[str, Any]:
    """
    Translate a StoreConfig into `AsyncElasticsearch` keyword arguments.

    Args:
        config: Validated store configuration

    Returns:
        Keyword arguments for the client constructor
    """
    headers = {"user-agent": USER_AGENT}
    headers.update(COMPATIBILITY_HEADERS.get(config.version, {}))

    params: dict[str, Any] = {
        "hosts": [config.url],
        "headers": headers,
        "request_timeout": REQUEST_TIMEOUT_SECONDS,
        "max_retries": MAX_RETRIES,
        "retry_on_timeout": True,
    }

    if config.path_prefix is not None:
        params["transport_class"] = prefixed_transport_class(config.path_prefix)

    # Add authentication
    if config.auth_mode == "api_key":
        params["api_key"] = config.api_key.get_secret_value()
    elif config.auth_mode == "basic":
        params["basic_auth"] = (config.username, config.password.get_secret_value())

    # Add CA certificates if provided
    if config.ca_cert:
        if os.path.isfile(config.ca_cert):
            params["ca_certs"] = config.ca_cert
        else:
            logger.warning("store.ca_cert_unreadable", ca_cert=config.ca_cert)

    if config.ssl_skip_verify:
        params["verify_certs"] = False
        params["ssl_show_warn"] = False

    return params


def _body(response: Any) -> Any:
    return getattr(response, "body", response)


def _transport_message(error: TransportError) -> str:
    # str() of a bare ConnectionError drops the message it was raised with.
    if error.errors:
        return f"{error.message}: {error}"
    return str(error.message)


def remote_operation(name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Re-raise client and transport failures of a store coroutine as RemoteOperationError."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except ApiError as e:
                raise RemoteOperationError(
                    str(e), {"operation": name, "status": e.status_code}
                ) from e
            except TransportError as e:
                raise RemoteOperationError(_transport_message(e), {"operation": name}) from e

        return wrapper

    return decorator


class ElasticsearchStore:
    """Thin async facade over `AsyncElasticsearch`."""

    def __init__(self, client: AsyncElasticsearch):
        self._client = client

    @remote_operation("list_indices")
    async def list_indices(self, index_pattern: str) -> list[IndexInfo]:
        rows = _body(
            await self._client.cat.indices(index=index_pattern, format="json", h=CAT_INDICES_COLUMNS)
        )
        return [
            IndexInfo(
                index=row.get("index"),
                health=row.get("health"),
                status=row.get("status"),
                docs_count=int(row.get("docs.count") or 0),
                store_size=row.get("store.size") or "0",
                primary_shards=int(row.get("pri") or 0),
                replica_shards=int(row.get("rep") or 0),
            )
            for row in rows
        ]

    @remote_operation("get_mappings")
    async def get_mappings(self, index: str) -> dict[str, Any]:
        response = _body(await self._client.indices.get_mapping(index=index))
        return (response.get(index) or {}).get("mappings") or {}

    @remote_operation("search")
    async def search(self, index: str, query_body: dict[str, Any]) -> dict[str, Any]:
        return _body(await self._client.search(index=index, body=query_body))

    @remote_operation("get_cluster_health")
    async def get_cluster_health(self) -> ClusterHealth:
        response = _body(await self._client.cluster.health())
        return ClusterHealth(
            status=response["status"],
            node_count=response["number_of_nodes"],
            datanode_count=response["number_of_data_nodes"],
            active_primary_shards=response["active_primary_shards"],
            active_shards=response["active_shards"],
            relocating_shards=response["relocating_shards"],
            initializing_shards=response["initializing_shards"],
            unassigned_shards=response["unassigned_shards"],
            pending_tasks=response["number_of_pending_tasks"],
        )

    @remote_operation("get_shards")
    async def get_shards(self, index: str | None = None) -> list[ShardInfo]:
        kwargs: dict[str, Any] = {"format": "json"}
        if index:
            kwargs["index"] = index
        rows = _body(await self._client.cat.shards(**kwargs))
        return [
            ShardInfo(**{key: row.get(key) for key in ShardInfo.model_fields})
            for row in rows
        ]

    @remote_operation("add_document")
    async def add_document(
        self, index: str, document: dict[str, Any], id: str | None = None
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"index": index, "document": document}
        if id:
            kwargs["id"] = id
        return _body(await self._client.index(**kwargs))

    @remote_operation("update_document")
    async def update_document(self, index: str, id: str, document: dict[str, Any]) -> dict[str, Any]:
        return _body(await self._client.update(index=index, id=id, doc=document))

    @remote_operation("delete_document")
    async def delete_document(self, index: str, id: str) -> dict[str, Any]:
        return _body(await self._client.delete(index=index, id=id))

    @remote_operation("update_by_query")
    async def update_by_query(self, params: dict[str, Any]) -> dict[str, Any]:
        return _body(await self._client.update_by_query(**params))

    @remote_operation("delete_by_query")
    async def delete_by_query(self, params: dict[str, Any]) -> dict[str, Any]:
        return _body(await self._client.delete_by_query(**params))

    @remote_operation("bulk")
    async def bulk(
        self, operations: list[dict[str, Any]], pipeline: str | None = None, refresh: bool = True
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"operations": operations, "refresh": refresh}
        if pipeline:
            kwargs["pipeline"] = pipeline
        return _body(await self._client.bulk(**kwargs))

    @remote_operation("create_index")
    async def create_index(
        self,
        index: str,
        settings: dict[str, Any] | None = None,
        mappings: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"index": index}
        if settings:
            kwargs["settings"] = settings
        if mappings:
            kwargs["mappings"] = mappings
        return _body(await self._client.indices.create(**kwargs))

    @remote_operation("delete_index")
    async def delete_index(self, index: str) -> dict[str, Any]:
        return _body(await self._client.indices.delete(index=index))

    @remote_operation("count_documents")
    async def count_documents(self, index: str, query: dict[str, Any] | None = None) -> int:
        kwargs: dict[str, Any] = {"index": index}
        if query:
            kwargs["query"] = query
        response = _body(await self._client.count(**kwargs))
        return response["count"]

    @remote_operation("get_index_templates")
    async def get_index_templates(self, name: str | None = None) -> dict[str, Any]:
        kwargs = {"name": name} if name else {}
        return _body(await self._client.indices.get_index_template(**kwargs))

    @remote_operation("get_aliases")
    async def get_aliases(self, name: str | None = None) -> dict[str, Any]:
        kwargs = {"name": name} if name else {}
        return _body(await self._client.indices.get_alias(**kwargs))

    async def close(self) -> None:
        await self._client.close()


def create_store(config: StoreConfig) -> ElasticsearchStore:
    """Build the shared store for a validated configuration."""
    logger.info(
        "store.client_configured",
        url=config.url,
        auth_mode=config.auth_mode,
        version=config.version,
        path_prefix=config.path_prefix,
    )
    return ElasticsearchStore(AsyncElasticsearch(**build_client_options(config)))
