"""Entry point for running the Elasticsearch MCP server."""

import asyncio
import sys

import uvicorn

from elastic_mcp.config import get_config
from elastic_mcp.mcp_server import run_stdio
from elastic_mcp.models.errors import ConfigurationError
from elastic_mcp.registry.catalog import build_registry
from elastic_mcp.server import create_app
from elastic_mcp.store.client import ElasticsearchStore, create_store
from elastic_mcp.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def _serve_stdio(store: ElasticsearchStore) -> None:
    try:
        await run_stdio(build_registry(store))
    finally:
        await store.close()


def main() -> None:
    """Load configuration, build the store and registry, and run the selected transport."""
    config = get_config()
    configure_logging(config.log_level)

    try:
        store_config = config.store_config()
    except ConfigurationError as e:
        logger.error("Invalid configuration", error=e.message)
        sys.exit(1)

    store = create_store(store_config)

    if config.mcp_transport == "stdio":
        asyncio.run(_serve_stdio(store))
        return

    app = create_app(build_registry(store), store)
    logger.info("Starting HTTP server", host=config.server_host, port=config.mcp_port)
    uvicorn.run(
        app,
        host=config.server_host,
        port=config.mcp_port,
        log_config=None,  # Use our custom structlog configuration
        access_log=False,
    )


if __name__ == "__main__":
    main()
