"""Relational storage for variation sources."""

from .base import SourceNotFoundError, SourceStore
from .duckdb_source import DuckDBSourceStore

__all__ = ["DuckDBSourceStore", "SourceNotFoundError", "SourceStore"]
