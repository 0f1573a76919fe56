"""Component dependency graph backed by DuckDB."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

import duckdb

from ..errors import ResolutionFailure
from ..models import Component, ComponentID, DependencyKind
from .loader import GraphLoader
from .schema import create_schema, get_connection

if TYPE_CHECKING:
    from ..workspace import Scope, Workspace

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Directed multigraph of components with typed dependency edges.

    Nodes are keyed by the string form of their ComponentID. Edges may point
    at ids that are not nodes (e.g. unregistered packages); ``node`` returns
    None for those.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection | None = None):
        self.conn = conn or get_connection()
        create_schema(self.conn)
        self._nodes: dict[str, Component] = {}

    @classmethod
    def from_components(cls, components: Iterable[Component]) -> DependencyGraph:
        """Build a graph from components.

        Raises:
            ResolutionFailure: If two components share an id.
        """
        graph = cls()
        nodes: dict[str, Component] = {}
        for component in components:
            key = str(component.id)
            if key in nodes:
                raise ResolutionFailure(f"Duplicate component id: {key}")
            nodes[key] = component

        GraphLoader(graph.conn).load_components(list(nodes.values()))
        graph._nodes = nodes
        logger.debug(f"Built dependency graph with {len(nodes)} component(s)")
        return graph

    @classmethod
    def build_from_workspace(cls, workspace: Workspace) -> DependencyGraph:
        return cls.from_components(workspace.load_components())

    @classmethod
    def build_from_scope(cls, scope: Scope) -> DependencyGraph:
        return cls.from_components(scope.load_components())

    def __contains__(self, component_id: object) -> bool:
        return str(component_id) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, component_id: ComponentID | str) -> Component | None:
        """Get a component by id, or None if it is not in the graph."""
        return self._nodes.get(str(component_id))

    def node_ids(self) -> list[str]:
        return list(self._nodes.keys())

    def nodes(self) -> list[Component]:
        return list(self._nodes.values())

    def successors(
        self,
        component_id: ComponentID | str,
        kinds: list[DependencyKind] | None = None,
    ) -> list[str]:
        """Get direct dependency ids of a component."""
        kind_values = _kind_values(kinds)
        placeholders = ", ".join(["?"] * len(kind_values))
        result = self.conn.execute(
            f"""
            SELECT DISTINCT target_id FROM component_dependencies
            WHERE source_id = ? AND dependency_type IN ({placeholders})
            ORDER BY target_id
            """,
            [str(component_id), *kind_values],
        ).fetchall()
        return [row[0] for row in result]

    def predecessors(
        self,
        component_id: ComponentID | str,
        kinds: list[DependencyKind] | None = None,
    ) -> list[str]:
        """Get ids of components that directly depend on this one."""
        kind_values = _kind_values(kinds)
        placeholders = ", ".join(["?"] * len(kind_values))
        result = self.conn.execute(
            f"""
            SELECT DISTINCT source_id FROM component_dependencies
            WHERE target_id = ? AND dependency_type IN ({placeholders})
            ORDER BY source_id
            """,
            [str(component_id), *kind_values],
        ).fetchall()
        return [row[0] for row in result]

    def successors_recursive(
        self,
        component_id: ComponentID | str,
        kinds: list[DependencyKind] | None = None,
        max_depth: int | None = None,
    ) -> list[str]:
        """Find transitive dependency ids, one dependency level at a time.

        Follows every dependency kind unless ``kinds`` narrows it. Results are
        distinct and ordered by shortest depth, then id. The start id is never
        included, even when a cycle leads back to it. Without ``max_depth`` the
        walk continues until no new ids are found.
        """
        kind_values = _kind_values(kinds)
        kind_placeholders = ", ".join(["?"] * len(kind_values))
        start = str(component_id)
        visited = {start}
        found: list[str] = []
        frontier = [start]
        depth = 0
        while frontier and (max_depth is None or depth < max_depth):
            placeholders = ", ".join(["?"] * len(frontier))
            result = self.conn.execute(
                f"""
                SELECT DISTINCT target_id FROM component_dependencies
                WHERE source_id IN ({placeholders})
                  AND dependency_type IN ({kind_placeholders})
                ORDER BY target_id
                """,
                [*frontier, *kind_values],
            ).fetchall()
            frontier = [row[0] for row in result if row[0] not in visited]
            visited.update(frontier)
            found.extend(frontier)
            depth += 1
        return found


def _kind_values(kinds: list[DependencyKind] | None) -> list[str]:
    return [kind.value for kind in (kinds or list(DependencyKind))]
