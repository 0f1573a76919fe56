"""Generate link files wiring a capsule to its dependencies' capsules."""

from __future__ import annotations

import json
import logging
from pathlib import PurePosixPath

from ..capsule import CapsulePaths
from ..models import Component, ComponentID, DataToPersist, SourceFile

logger = logging.getLogger(__name__)

REGISTRY_PREFIX = "@capnet"


def component_package_name(
    component_id: ComponentID, exclude_registry_prefix: bool = False
) -> str:
    """Package name under which a component is installed.

    ``pkg/a`` becomes ``@capnet/pkg.a``, or ``pkg.a`` without the prefix.
    """
    name = component_id.name.lstrip("@").replace("/", ".")
    if exclude_registry_prefix:
        return name
    return f"{REGISTRY_PREFIX}/{name}"


class LinkGenerator:
    """Compute ``node_modules`` shims pointing into dependency capsules."""

    def __init__(self, exclude_registry_prefix: bool = False):
        self.exclude_registry_prefix = exclude_registry_prefix

    def compute_links(
        self,
        component: Component,
        dependencies: list[Component],
        capsule_paths: CapsulePaths,
        create_npm_link_files: bool = False,
    ) -> DataToPersist:
        """Build link files for every dependency that has a capsule."""
        links = DataToPersist()
        for dependency in dependencies:
            if str(dependency.id) == str(component.id):
                continue

            dep_path = capsule_paths.get_value(dependency.id)
            if dep_path is None:
                logger.debug(f"No capsule for {dependency.id}, not linking from {component.id}")
                continue

            package_name = component_package_name(
                dependency.id, self.exclude_registry_prefix
            )
            link_dir = PurePosixPath("node_modules") / package_name
            target = PurePosixPath(dep_path.as_posix()) / (dependency.main_file or "index.js")

            links.add_file(
                SourceFile(
                    path=str(link_dir / "index.js"),
                    contents=(
                        f"// linked to {dependency.id}\n"
                        f"module.exports = require({json.dumps(str(target))});\n"
                    ),
                )
            )
            if create_npm_link_files:
                links.add_file(
                    SourceFile(
                        path=str(link_dir / "package.json"),
                        contents=json.dumps(
                            {
                                "name": package_name,
                                "version": dependency.id.version or "0.0.0",
                                "main": "index.js",
                            },
                            indent=2,
                        )
                        + "\n",
                    )
                )
        return links
