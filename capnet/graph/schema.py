"""DuckDB schema definitions for the dependency graph."""

import duckdb


def get_connection(path: str = ":memory:") -> duckdb.DuckDBPyConnection:
    """Get a DuckDB connection."""
    return duckdb.connect(path)


def create_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create DuckDB tables for components and their dependency edges."""

    conn.execute("""
        CREATE TABLE IF NOT EXISTS components (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            version VARCHAR,
            root_dir VARCHAR,
            raw_yaml JSON
        )
    """)

    # Edges may point at ids that are not in the components table
    conn.execute("""
        CREATE TABLE IF NOT EXISTS component_dependencies (
            id INTEGER PRIMARY KEY,
            source_id VARCHAR NOT NULL,
            target_id VARCHAR NOT NULL,
            dependency_type VARCHAR NOT NULL
        )
    """)

    conn.execute("""
        CREATE SEQUENCE IF NOT EXISTS component_dependencies_id_seq START 1
    """)

    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_deps_source ON component_dependencies(source_id)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_deps_target ON component_dependencies(target_id)"
    )
