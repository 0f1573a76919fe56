"""Build networks of capsules for a component and its dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..capsule import (
    Capsule,
    CapsuleList,
    CapsuleOrchestrator,
    CapsulePaths,
    PackageManager,
)
from ..concurrency import run_parallel
from ..config import CapnetConfig, CapsuleOptions, OrchestrationOptions
from ..errors import (
    CapnetError,
    CapsuleAcquisitionFailure,
    MaterializationFailure,
    ResolutionFailure,
)
from ..graph import DependencyGraph, resolve_closure
from ..models import Component, ComponentID, ComponentWithDependencies, DependencyKind
from ..workspace import (
    LinkGenerator,
    ManyComponentsWriter,
    Workspace,
    get_manipulate_dir_data,
    load_scope,
    load_workspace_if_exist,
)
from .install import get_package_json_in_capsules, select_capsules_to_install
from .keys import derive_resource_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubNetwork:
    """Result of one network build."""

    capsules: CapsuleList
    components: DependencyGraph


class Network:
    """Creates and reuses capsules for components and wires them together."""

    def __init__(
        self,
        orchestrator: CapsuleOrchestrator,
        package_manager: PackageManager,
        workspace_name: str = "any",
        project_path: Path | None = None,
        default_options: CapsuleOptions | None = None,
        max_workers: int = 5,
    ):
        """Initialize the network.

        Args:
            orchestrator: Capsule pool. Must have been built.
            package_manager: Runs installs in capsules.
            workspace_name: Pool namespace used when options name none.
            project_path: Where the workspace or scope is looked up.
                Defaults to the current directory.
            default_options: Capsule options every call starts from.
            max_workers: Max parallel tasks per phase.
        """
        self.orchestrator = orchestrator
        self.package_manager = package_manager
        self.workspace_name = workspace_name
        self.project_path = project_path
        self.default_options = default_options or CapsuleOptions()
        self.max_workers = max_workers

    @classmethod
    def provide(
        cls,
        config: CapnetConfig,
        package_manager: PackageManager | None = None,
        project_path: Path | None = None,
    ) -> Network:
        """Create a network with a freshly built capsule pool."""
        orchestrator = CapsuleOrchestrator()
        orchestrator.build_pools()
        settings = config.settings
        return cls(
            orchestrator,
            package_manager
            or PackageManager(
                settings.package_manager, settings.install_timeout, settings.max_workers
            ),
            workspace_name=settings.workspace_name,
            project_path=project_path,
            default_options=config.capsule,
            max_workers=settings.max_workers,
        )

    def create_sub_network(
        self,
        seeders: list[ComponentID | str],
        config: CapsuleOptions | Mapping[str, Any] | None = None,
        orchestration_options: OrchestrationOptions | None = None,
        workspace: Workspace | None = None,
    ) -> SubNetwork:
        """Create capsules for the seeds and everything they depend on.

        Phases run strictly in order: resolve, acquire capsules, materialize,
        diff manifests, install. Any failure aborts the build; capsules
        already written are left as they are.

        Raises:
            ResolutionFailure: No workspace or scope, or a bad graph.
            CapsuleAcquisitionFailure: A capsule could not be created.
            MaterializationFailure: Files or links could not be written.
            InstallFailure: The package manager failed.
        """
        options = self.default_options.merged(config)
        orch_options = orchestration_options or OrchestrationOptions()

        try:
            graph = self._build_graph(workspace)
            components = resolve_closure(seeders, graph)
        except ValueError as e:
            raise ResolutionFailure(f"Cannot resolve dependency graph: {e}") from e
        logger.info(
            f"Resolved {len(components)} component(s) from {len(seeders)} seed(s)"
        )

        capsules: list[Capsule] = run_parallel(
            lambda component: self.create_capsule(component.id, options, orch_options),
            components,
            self.max_workers,
        )
        capsule_list = CapsuleList.from_capsules(capsules)

        before = get_package_json_in_capsules(capsules, self.max_workers)
        self.isolate_components_in_capsules(
            components, graph, capsule_list.to_paths(), capsule_list, options
        )
        after = get_package_json_in_capsules(capsules, self.max_workers)

        if options.install_packages:
            to_install = select_capsules_to_install(capsules, before, after)
            if to_install:
                self.package_manager.run_install(
                    to_install,
                    package_manager=options.package_manager,
                    silent=options.silent_package_manager_result,
                )
        else:
            logger.debug("Package installs disabled, skipping")

        return SubNetwork(capsules=capsule_list, components=graph)

    def create_capsule(
        self,
        component_id: ComponentID | str,
        capsule_options: CapsuleOptions | Mapping[str, Any] | None = None,
        orchestration_options: OrchestrationOptions | None = None,
    ) -> Capsule:
        """Get the capsule for one component, creating it if needed."""
        options = self.default_options.merged(capsule_options)
        component_id = ComponentID.of(component_id)
        resource_config = derive_resource_config(
            component_id, options, orchestration_options
        )
        try:
            return self.orchestrator.get_capsule(
                options.workspace or self.workspace_name,
                resource_config,
                orchestration_options,
            )
        except CapnetError:
            raise
        except Exception as e:
            raise CapsuleAcquisitionFailure(
                f"Cannot acquire capsule for {component_id}: {e}"
            ) from e

    def isolate_components_in_capsules(
        self,
        components: list[Component],
        graph: DependencyGraph,
        capsule_paths: CapsulePaths,
        capsule_list: CapsuleList,
        options: CapsuleOptions | None = None,
    ) -> list[Component]:
        """Write each component, with links to its dependencies, into its capsule.

        Returns:
            The components that were written. Components without a capsule
            are left out.
        """
        options = options or self.default_options
        write_to_path = "."

        components_with_dependencies = [
            self._with_dependencies(component, graph) for component in components
        ]
        for component_with_dependencies in components_with_dependencies:
            self._manipulate_dir(component_with_dependencies)

        writer = ManyComponentsWriter(
            components_with_dependencies, options, capsule_paths, write_to_path
        )
        link_generator = LinkGenerator(options.exclude_registry_prefix)
        try:
            writer.populate_components_files_to_write()
            for component_with_dependencies in components_with_dependencies:
                component = component_with_dependencies.component
                links = link_generator.compute_links(
                    component,
                    component_with_dependencies.all_dependencies,
                    capsule_paths,
                    options.create_npm_link_files,
                )
                component.files_to_persist.prepend(links)
        except CapnetError:
            raise
        except Exception as e:
            raise MaterializationFailure(f"Failed to prepare component files: {e}") from e

        to_write = [
            (component, capsule_list.get_value(component.id))
            for component in writer.written_components
        ]
        to_write = [(component, capsule) for component, capsule in to_write if capsule]

        def persist(item: tuple[Component, Capsule]) -> Component:
            component, capsule = item
            try:
                component.files_to_persist.persist_all_to_capsule(
                    capsule, keep_existing_capsule=True
                )
            except (OSError, ValueError) as e:
                raise MaterializationFailure(
                    f"Failed to write {component.id} into {capsule.wrk_dir}: {e}"
                ) from e
            return component

        written = run_parallel(persist, to_write, self.max_workers)
        logger.info(f"Materialized {len(written)} component(s) into capsules")
        return written

    def list(self) -> list[Capsule]:
        """List capsules of this network's workspace."""
        return self.orchestrator.list_capsules(self.workspace_name)

    def list_all(self) -> dict[str, list[Capsule]]:
        """List capsules from all workspaces."""
        return {
            workspace: self.orchestrator.list_capsules(workspace)
            for workspace in self.orchestrator.list_workspaces()
        }

    def _build_graph(self, workspace: Workspace | None) -> DependencyGraph:
        loaded = workspace or load_workspace_if_exist(self.project_path)
        if loaded is not None:
            return DependencyGraph.build_from_workspace(loaded)

        scope = load_scope(self.project_path)
        if scope is not None:
            return DependencyGraph.build_from_scope(scope)

        raise ResolutionFailure(
            f"No workspace or scope found at {self.project_path or Path.cwd()}"
        )

    def _with_dependencies(
        self, component: Component, graph: DependencyGraph
    ) -> ComponentWithDependencies:
        def lookup(kind: DependencyKind) -> list[Component]:
            found = (graph.node(dep_id) for dep_id in component.dependency_ids(kind))
            return [dep for dep in found if dep is not None]

        return ComponentWithDependencies(
            component=component,
            dependencies=lookup(DependencyKind.RUNTIME),
            dev_dependencies=lookup(DependencyKind.DEV),
            compiler_dependencies=lookup(DependencyKind.COMPILER),
            tester_dependencies=lookup(DependencyKind.TESTER),
        )

    def _manipulate_dir(self, component_with_dependencies: ComponentWithDependencies) -> None:
        manipulate_dir_data = get_manipulate_dir_data(component_with_dependencies)
        for component in (
            component_with_dependencies.component,
            *component_with_dependencies.all_dependencies,
        ):
            component.strip_originally_shared_dir(manipulate_dir_data)
