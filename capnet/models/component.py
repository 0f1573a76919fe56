"""Component entity model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field, PrivateAttr

from .base import ComponentID, DataToPersist, DependencyKind, SourceFile


class ComponentMetadata(BaseModel):
    """Identifying metadata for a component."""

    name: str = Field(..., title="Name", description="Component name, may contain '/'")
    version: str | None = Field(default=None, title="Version")
    description: str | None = Field(default=None, title="Description")


class ComponentSpec(BaseModel):
    """Spec for Component entity."""

    rootDir: str = Field(
        default=".", title="Root Dir", description="Directory holding the sources"
    )
    mainFile: str = Field(default="index.js", title="Main File")
    files: list[str] = Field(
        default_factory=lambda: ["**/*"],
        title="Files",
        description="Glob patterns relative to rootDir",
    )
    distDir: str | None = Field(default=None, title="Dist Dir")
    dependencies: list[str] = Field(default_factory=list, title="Dependencies")
    devDependencies: list[str] = Field(default_factory=list, title="Dev Dependencies")
    compilerDependencies: list[str] = Field(
        default_factory=list, title="Compiler Dependencies"
    )
    testerDependencies: list[str] = Field(
        default_factory=list, title="Tester Dependencies"
    )
    packageDependencies: dict[str, str] = Field(
        default_factory=dict, title="Package Dependencies"
    )


class Component(BaseModel):
    """Versioned software component with typed dependencies."""

    apiVersion: str = "capnet/v1"
    kind: Literal["Component"] = "Component"
    metadata: ComponentMetadata
    spec: ComponentSpec = Field(default_factory=ComponentSpec)

    # Loaded sources (paths relative to the workspace root until stripped)
    files: list[SourceFile] = Field(default_factory=list)
    dists: list[SourceFile] = Field(default_factory=list)  # relative to distDir
    main_file: str | None = None

    files_to_persist: DataToPersist = Field(default_factory=DataToPersist)

    _stripped_dir: str | None = PrivateAttr(default=None)

    @property
    def id(self) -> ComponentID:
        return ComponentID(name=self.metadata.name, version=self.metadata.version)

    def dependency_ids(self, kind: DependencyKind) -> list[ComponentID]:
        """Get parsed dependency ids of one kind."""
        return [ComponentID.parse(dep) for dep in getattr(self.spec, kind.value)]

    def all_dependency_ids(self) -> list[ComponentID]:
        """Get dependency ids of every kind, de-duplicated."""
        seen: dict[str, ComponentID] = {}
        for kind in DependencyKind:
            for dep_id in self.dependency_ids(kind):
                seen.setdefault(str(dep_id), dep_id)
        return list(seen.values())

    @property
    def originally_shared_dir(self) -> str | None:
        """Directory stripped from this component's paths, if any."""
        return self._stripped_dir

    def strip_originally_shared_dir(
        self, manipulate_dir_data: dict[str, str | None]
    ) -> None:
        """Remove the shared root directory from in-memory file paths.

        Only touches in-memory state. A component is stripped at most once,
        even when it appears in several dependency sets.
        """
        if self._stripped_dir is not None:
            return
        shared_dir = manipulate_dir_data.get(str(self.id))
        if not shared_dir:
            return

        prefix = shared_dir.rstrip("/") + "/"

        def strip(path: str) -> str:
            return path[len(prefix) :] if path.startswith(prefix) else path

        self.files = [SourceFile(path=strip(f.path), contents=f.contents) for f in self.files]
        if self.main_file:
            self.main_file = strip(self.main_file)
        self._stripped_dir = shared_dir


@dataclass
class ComponentWithDependencies:
    """A component together with its resolved dependency components."""

    component: Component
    dependencies: list[Component] = field(default_factory=list)
    dev_dependencies: list[Component] = field(default_factory=list)
    compiler_dependencies: list[Component] = field(default_factory=list)
    tester_dependencies: list[Component] = field(default_factory=list)

    @property
    def all_dependencies(self) -> list[Component]:
        """All dependency components, de-duplicated by id."""
        seen: dict[str, Component] = {}
        for dep in (
            *self.dependencies,
            *self.dev_dependencies,
            *self.compiler_dependencies,
            *self.tester_dependencies,
        ):
            seen.setdefault(str(dep.id), dep)
        return list(seen.values())
