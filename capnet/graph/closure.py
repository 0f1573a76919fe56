"""Expand seed ids into their full dependency closure."""

from __future__ import annotations

import logging
from typing import Iterable

from ..models import Component, ComponentID
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


def resolve_closure(
    seed_ids: Iterable[ComponentID | str], graph: DependencyGraph
) -> list[Component]:
    """Resolve seeds plus everything reachable from them.

    Seeds are processed in the given order, each followed by its recursive
    successors. Ids are de-duplicated; ids the graph does not know are dropped.
    """
    ordered: dict[str, None] = {}
    for seed in seed_ids:
        seed_key = str(ComponentID.of(seed))
        ordered.setdefault(seed_key, None)
        for successor in graph.successors_recursive(seed_key):
            ordered.setdefault(successor, None)

    components: list[Component] = []
    for component_id in ordered:
        component = graph.node(component_id)
        if component is None:
            logger.debug(f"Skipping {component_id}: not a component in the graph")
            continue
        components.append(component)
    return components
