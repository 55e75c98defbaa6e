"""Unit tests for ElasticsearchStore against a mocked AsyncElasticsearch."""

import warnings
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch import AsyncElasticsearch, NotFoundError

from elastic_mcp import __version__
from elastic_mcp.config import validate_config
from elastic_mcp.models.arguments import ScriptArgs
from elastic_mcp.models.errors import ErrorCode, RemoteOperationError
from elastic_mcp.store.client import (
    CAT_INDICES_COLUMNS,
    ElasticsearchStore,
    build_client_options,
    create_store,
)
from elastic_mcp.store.transport import PathPrefixTransport
from elastic_mcp.utils.query_mutation import build_update_by_query_params

COMPAT_8 = "application/vnd.elasticsearch+json;compatible-with=8"


@pytest.fixture
def es_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def store(es_client: AsyncMock) -> ElasticsearchStore:
    return ElasticsearchStore(es_client)


@pytest.mark.asyncio
async def test_list_indices_normalizes_rows(store, es_client):
    es_client.cat.indices.return_value = [
        {"index": "logs-1", "health": "green", "status": "open", "docs.count": "12", "store.size": "4kb", "pri": "1", "rep": "1"},
        {"index": "logs-2", "health": "red", "status": "close"},
    ]

    indices = await store.list_indices("logs-*")

    es_client.cat.indices.assert_awaited_once_with(index="logs-*", format="json", h=CAT_INDICES_COLUMNS)
    assert indices[0].docs_count == 12
    assert indices[0].primary_shards == 1
    assert indices[1].docs_count == 0
    assert indices[1].store_size == "0"
    assert indices[1].replica_shards == 0


@pytest.mark.asyncio
async def test_get_mappings_unwraps_index(store, es_client):
    es_client.indices.get_mapping.return_value = {"books": {"mappings": {"properties": {}}}}

    assert await store.get_mappings("books") == {"properties": {}}


@pytest.mark.asyncio
async def test_get_mappings_missing_index_key(store, es_client):
    es_client.indices.get_mapping.return_value = {"books-v2": {"mappings": {"properties": {}}}}

    assert await store.get_mappings("books") == {}


@pytest.mark.asyncio
async def test_response_body_is_unwrapped(store, es_client):
    es_client.search.return_value = MagicMock(body={"hits": {"hits": []}})

    assert await store.search("books", {"query": {"match_all": {}}}) == {"hits": {"hits": []}}
    es_client.search.assert_awaited_once_with(index="books", body={"query": {"match_all": {}}})


@pytest.mark.asyncio
async def test_cluster_health(store, es_client):
    es_client.cluster.health.return_value = {
        "status": "green",
        "number_of_nodes": 3,
        "number_of_data_nodes": 2,
        "active_primary_shards": 5,
        "active_shards": 10,
        "relocating_shards": 0,
        "initializing_shards": 0,
        "unassigned_shards": 0,
        "number_of_pending_tasks": 1,
    }

    health = await store.get_cluster_health()

    assert health.node_count == 3
    assert health.datanode_count == 2
    assert health.pending_tasks == 1


@pytest.mark.asyncio
async def test_get_shards_filters_by_index(store, es_client):
    es_client.cat.shards.return_value = [{"index": "books", "shard": "0", "prirep": "p", "state": "STARTED", "extra": "x"}]

    shards = await store.get_shards("books")
    await store.get_shards()

    assert shards[0].state == "STARTED"
    assert shards[0].node is None
    assert es_client.cat.shards.await_args_list[0].kwargs == {"format": "json", "index": "books"}
    assert es_client.cat.shards.await_args_list[1].kwargs == {"format": "json"}


@pytest.mark.asyncio
async def test_add_document_omits_missing_id(store, es_client):
    es_client.index.return_value = {"_id": "generated"}

    await store.add_document("books", {"t": 1})
    await store.add_document("books", {"t": 1}, "")
    await store.add_document("books", {"t": 1}, "b1")

    calls = [call.kwargs for call in es_client.index.await_args_list]
    assert calls[0] == {"index": "books", "document": {"t": 1}}
    assert calls[1] == {"index": "books", "document": {"t": 1}}
    assert calls[2] == {"index": "books", "document": {"t": 1}, "id": "b1"}


@pytest.mark.asyncio
async def test_update_and_delete_document(store, es_client):
    await store.update_document("books", "1", {"t": 2})
    await store.delete_document("books", "1")

    es_client.update.assert_awaited_once_with(index="books", id="1", doc={"t": 2})
    es_client.delete.assert_awaited_once_with(index="books", id="1")


@pytest.mark.asyncio
async def test_query_mutations_forward_params(store, es_client):
    params = {"index": "books", "query": {"match_all": {}}, "refresh": True}

    await store.update_by_query(params)
    await store.delete_by_query(params)

    es_client.update_by_query.assert_awaited_once_with(**params)
    es_client.delete_by_query.assert_awaited_once_with(**params)


@pytest.mark.asyncio
async def test_update_by_query_request_body_without_deprecation_warning():
    client = AsyncElasticsearch(hosts=["http://localhost:9200"])
    store = ElasticsearchStore(client)
    params = build_update_by_query_params(
        "a", {"match_all": {}}, ScriptArgs(source="x"), conflicts="proceed", max_docs=2
    )

    with patch.object(client, "perform_request", AsyncMock(return_value={"updated": 0})) as perform:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            await store.update_by_query(params)

    assert not [w for w in caught if issubclass(w.category, DeprecationWarning)]
    sent = perform.await_args.kwargs
    assert sent["body"] == {"query": {"match_all": {}}, "script": {"source": "x"}, "max_docs": 2}
    assert sent["params"]["conflicts"] == "proceed"
    assert sent["params"]["refresh"] in (True, "true")
    await client.close()


@pytest.mark.asyncio
async def test_bulk_pipeline_only_when_given(store, es_client):
    lines = [{"delete": {"_index": "a", "_id": "1"}}]

    await store.bulk(lines)
    await store.bulk(lines, pipeline="p", refresh=False)

    assert es_client.bulk.await_args_list[0].kwargs == {"operations": lines, "refresh": True}
    assert es_client.bulk.await_args_list[1].kwargs == {"operations": lines, "refresh": False, "pipeline": "p"}


@pytest.mark.asyncio
async def test_create_index_sends_only_given_sections(store, es_client):
    await store.create_index("books")
    await store.create_index("books", mappings={"properties": {}})

    assert es_client.indices.create.await_args_list[0].kwargs == {"index": "books"}
    assert es_client.indices.create.await_args_list[1].kwargs == {"index": "books", "mappings": {"properties": {}}}


@pytest.mark.asyncio
async def test_count_documents(store, es_client):
    es_client.count.return_value = {"count": 9}

    assert await store.count_documents("books") == 9
    await store.count_documents("books", {"term": {"y": 1}})

    assert es_client.count.await_args_list[0].kwargs == {"index": "books"}
    assert es_client.count.await_args_list[1].kwargs == {"index": "books", "query": {"term": {"y": 1}}}


@pytest.mark.asyncio
async def test_templates_and_aliases_name_filter(store, es_client):
    await store.get_index_templates()
    await store.get_aliases("library")

    es_client.indices.get_index_template.assert_awaited_once_with()
    es_client.indices.get_alias.assert_awaited_once_with(name="library")


@pytest.mark.asyncio
async def test_api_error_becomes_remote_operation_error(store, es_client):
    es_client.indices.delete.side_effect = NotFoundError("index_not_found_exception", MagicMock(status=404), {})

    with pytest.raises(RemoteOperationError) as exc_info:
        await store.delete_index("missing")

    assert exc_info.value.code == ErrorCode.STORE_ERROR
    assert exc_info.value.details == {"operation": "delete_index", "status": 404}
    assert "index_not_found_exception" in exc_info.value.message


@pytest.mark.asyncio
async def test_connection_error_becomes_remote_operation_error(store, es_client):
    es_client.cluster.health.side_effect = ESConnectionError("Connection refused")

    with pytest.raises(RemoteOperationError, match="Connection refused") as exc_info:
        await store.get_cluster_health()

    assert exc_info.value.details == {"operation": "get_cluster_health"}


@pytest.mark.asyncio
async def test_connection_error_keeps_underlying_cause(store, es_client):
    es_client.cluster.health.side_effect = ESConnectionError(
        "Connection failed", errors=(OSError("Connection refused"),)
    )

    with pytest.raises(RemoteOperationError) as exc_info:
        await store.get_cluster_health()

    assert exc_info.value.message.startswith("Connection failed: ")
    assert "Connection refused" in exc_info.value.message


@pytest.mark.asyncio
async def test_close(store, es_client):
    await store.close()
    es_client.close.assert_awaited_once()


def test_client_options_defaults():
    options = build_client_options(validate_config({"url": "http://localhost:9200"}))

    assert options["hosts"] == ["http://localhost:9200"]
    assert options["request_timeout"] == 30
    assert options["max_retries"] == 5
    assert options["headers"] == {
        "user-agent": f"elastic-mcp-server/{__version__}",
        "accept": COMPAT_8,
        "content-type": COMPAT_8,
    }
    for key in ("api_key", "basic_auth", "ca_certs", "verify_certs", "transport_class"):
        assert key not in options


def test_client_options_version_9_has_no_compat_headers():
    options = build_client_options(validate_config({"url": "http://localhost:9200", "version": "9"}))
    assert "accept" not in options["headers"]


def test_client_options_api_key_preferred():
    options = build_client_options(
        validate_config({"url": "http://es:9200", "api_key": "k", "username": "u", "password": "p"})
    )

    assert options["api_key"] == "k"
    assert "basic_auth" not in options


def test_client_options_basic_auth():
    options = build_client_options(validate_config({"url": "http://es:9200", "username": "u", "password": "p"}))
    assert options["basic_auth"] == ("u", "p")


def test_client_options_ca_cert(tmp_path):
    ca_file = tmp_path / "ca.pem"
    ca_file.write_text("-----BEGIN CERTIFICATE-----\n")

    present = build_client_options(validate_config({"url": "https://es:9200", "ca_cert": str(ca_file)}))
    missing = build_client_options(validate_config({"url": "https://es:9200", "ca_cert": str(tmp_path / "nope.pem")}))

    assert present["ca_certs"] == str(ca_file)
    assert "ca_certs" not in missing


def test_client_options_skip_verify():
    options = build_client_options(validate_config({"url": "https://es:9200", "ssl_skip_verify": True}))
    assert options["verify_certs"] is False


def test_client_options_path_prefix():
    options = build_client_options(validate_config({"url": "http://proxy:80", "path_prefix": "/es"}))

    transport_class = options["transport_class"]
    assert issubclass(transport_class, PathPrefixTransport)
    assert transport_class.path_prefix == "/es"


def test_create_store_builds_client():
    with patch("elastic_mcp.store.client.AsyncElasticsearch") as client_class:
        store = create_store(validate_config({"url": "http://localhost:9200"}))

    client_class.assert_called_once()
    assert client_class.call_args.kwargs["hosts"] == ["http://localhost:9200"]
    assert store._client is client_class.return_value
