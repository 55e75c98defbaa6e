"""Normalized shapes for Elasticsearch cat and cluster responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _StoreModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class IndexInfo(_StoreModel):
    """One row of `_cat/indices`."""

    index: str
    health: str | None = None
    status: str | None = None
    docs_count: int = 0
    store_size: str = "0"
    primary_shards: int = 0
    replica_shards: int = 0


class ShardInfo(_StoreModel):
    """One row of `_cat/shards`."""

    index: str | None = None
    shard: str | None = None
    prirep: str | None = None
    state: str | None = None
    docs: str | None = None
    store: str | None = None
    ip: str | None = None
    node: str | None = None


class ClusterHealth(_StoreModel):
    """Summary of `_cluster/health`."""

    status: str
    node_count: int
    datanode_count: int
    active_primary_shards: int
    active_shards: int
    relocating_shards: int
    initializing_shards: int
    unassigned_shards: int
    pending_tasks: int
