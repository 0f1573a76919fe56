"""Load components into DuckDB."""

import json

import duckdb

from ..models import Component, DependencyKind


class GraphLoader:
    """Load components and their typed dependency edges into DuckDB."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def load_components(self, components: list[Component]) -> None:
        """Replace the graph contents with the given components."""
        self.conn.execute("DELETE FROM component_dependencies")
        self.conn.execute("DELETE FROM components")
        self.conn.execute("DROP SEQUENCE IF EXISTS component_dependencies_id_seq")
        self.conn.execute("CREATE SEQUENCE component_dependencies_id_seq START 1")

        for component in components:
            self._insert_component(component)

        for component in components:
            self._insert_dependencies(component)

    def _insert_component(self, component: Component) -> None:
        self.conn.execute(
            """
            INSERT INTO components (id, name, version, root_dir, raw_yaml)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                str(component.id),
                component.metadata.name,
                component.metadata.version,
                component.spec.rootDir,
                json.dumps(
                    component.model_dump(
                        mode="json",
                        exclude={"files", "dists", "files_to_persist"},
                    )
                ),
            ],
        )

    def _insert_dependencies(self, component: Component) -> None:
        source_id = str(component.id)
        for kind in DependencyKind:
            for dep_id in component.dependency_ids(kind):
                self.conn.execute(
                    """
                    INSERT INTO component_dependencies
                        (id, source_id, target_id, dependency_type)
                    VALUES (nextval('component_dependencies_id_seq'), ?, ?, ?)
                    """,
                    [source_id, str(dep_id), kind.value],
                )
