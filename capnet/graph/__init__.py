"""DuckDB-backed dependency graph."""

from .closure import resolve_closure
from .graph import DependencyGraph
from .loader import GraphLoader
from .schema import create_schema, get_connection

__all__ = [
    "create_schema",
    "get_connection",
    "DependencyGraph",
    "GraphLoader",
    "resolve_closure",
]
