"""Compute the directory shared by a component's files."""

from __future__ import annotations

from pathlib import PurePosixPath

from ..models import ComponentWithDependencies


def get_shared_dir(paths: list[str]) -> str | None:
    """Longest directory containing every path, or None if there is none."""
    if not paths:
        return None

    parents = [PurePosixPath(path).parent.parts for path in paths]
    common: list[str] = []
    for parts in zip(*parents):
        if any(part != parts[0] for part in parts):
            break
        common.append(parts[0])

    common = [part for part in common if part != "."]
    return "/".join(common) or None


def get_manipulate_dir_data(
    component_with_dependencies: ComponentWithDependencies,
) -> dict[str, str | None]:
    """Map each component id in the set to its originally shared dir."""
    all_components = [
        component_with_dependencies.component,
        *component_with_dependencies.all_dependencies,
    ]
    return {
        str(component.id): get_shared_dir([f.path for f in component.files])
        for component in all_components
    }
