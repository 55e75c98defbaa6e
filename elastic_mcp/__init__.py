"""MCP server exposing Elasticsearch operations as tools."""

__version__ = "0.1.0"
