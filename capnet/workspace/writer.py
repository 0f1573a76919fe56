"""Populate component files to write into capsules."""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

from ..capsule import CapsulePaths
from ..config import CapsuleOptions
from ..models import Component, ComponentWithDependencies, DataToPersist, SourceFile
from .links import component_package_name

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
COMPONENT_CONFIG = "capnet.component.yaml"


class ManyComponentsWriter:
    """Fill each component's ``files_to_persist`` from its sources.

    Nothing is written to disk here; persisting is done per capsule.
    """

    def __init__(
        self,
        components_with_dependencies: list[ComponentWithDependencies],
        options: CapsuleOptions,
        capsule_paths: CapsulePaths | None = None,
        write_to_path: str = ".",
    ):
        self.components_with_dependencies = components_with_dependencies
        self.options = options
        self.capsule_paths = capsule_paths or CapsulePaths()
        self.write_to_path = write_to_path
        self.written_components: list[Component] = []

    def populate_components_files_to_write(self) -> list[Component]:
        """Populate files for every component and return them."""
        self.written_components = []
        for component_with_dependencies in self.components_with_dependencies:
            self._populate_component(component_with_dependencies)
            self.written_components.append(component_with_dependencies.component)
        return self.written_components

    def _populate_component(self, cwd: ComponentWithDependencies) -> None:
        component = cwd.component
        data = DataToPersist()
        data.add_many_files([f.relocated(self.write_to_path) for f in component.files])

        if self.options.write_dists:
            data.add_many_files(
                [f.relocated(self._join("dist")) for f in component.dists]
            )

        if self.options.save_dependencies_as_components:
            for dependency in cwd.all_dependencies:
                base = self._join(f"components/{dependency.id.to_dir_token()}")
                data.add_many_files([f.relocated(base) for f in dependency.files])

        if self.options.write_config:
            data.add_file(
                SourceFile(path=self._join(COMPONENT_CONFIG), contents=self.component_config(component))
            )

        if self.options.write_package_json:
            data.add_file(
                SourceFile(
                    path=self._join(PACKAGE_JSON),
                    contents=json.dumps(self.package_json(cwd), indent=2) + "\n",
                )
            )

        component.files_to_persist = data
        logger.debug(f"Populated {len(data.files)} file(s) for {component.id}")

    def package_json(self, cwd: ComponentWithDependencies) -> dict[str, Any]:
        """Build the package manifest for a component."""
        component = cwd.component
        manifest: dict[str, Any] = {
            "name": component_package_name(
                component.id, self.options.exclude_registry_prefix
            ),
            "version": component.id.version or "0.0.0",
            "main": component.main_file or "index.js",
            "dependencies": dict(component.spec.packageDependencies),
        }

        if self.options.write_bit_dependencies:
            manifest["dependencies"].update(self._file_dependencies(cwd.dependencies))
            dev = self._file_dependencies(
                [
                    *cwd.dev_dependencies,
                    *cwd.compiler_dependencies,
                    *cwd.tester_dependencies,
                ]
            )
            if dev:
                manifest["devDependencies"] = dev

        return manifest

    def component_config(self, component: Component) -> str:
        """Render the component definition as YAML."""
        data = component.model_dump(
            exclude_none=True,
            mode="json",
            include={"apiVersion", "kind", "metadata", "spec"},
        )
        return yaml.dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    def _file_dependencies(self, dependencies: list[Component]) -> dict[str, str]:
        result: dict[str, str] = {}
        for dependency in dependencies:
            path = self.capsule_paths.get_value(dependency.id)
            if path is None:
                continue
            name = component_package_name(
                dependency.id, self.options.exclude_registry_prefix
            )
            result[name] = f"file:{path.as_posix()}"
        return result

    def _join(self, path: str) -> str:
        if self.write_to_path in ("", "."):
            return path
        return f"{self.write_to_path.rstrip('/')}/{path}"
