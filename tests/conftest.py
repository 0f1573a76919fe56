from pathlib import Path

import pytest
import yaml

from capnet.capsule import CapsuleOrchestrator, PackageManager
from capnet.config import CapsuleOptions
from capnet.models import Component, ComponentMetadata, ComponentSpec
from capnet.network import Network


class RecordingPackageManager(PackageManager):
    """Package manager that records install batches instead of running them."""

    def __init__(self):
        super().__init__("npm")
        self.calls: list[tuple[list[str], str | None]] = []

    def run_install(self, capsules, package_manager=None, silent=False):
        self.calls.append(
            (sorted(str(capsule.component_id) for capsule in capsules), package_manager)
        )


def make_component(name: str, version: str | None = "1.0.0", **spec) -> Component:
    """In-memory component, without files."""
    return Component(
        metadata=ComponentMetadata(name=name, version=version),
        spec=ComponentSpec(**spec),
    )


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    (root / "components").mkdir(parents=True)
    return root


@pytest.fixture
def add_component(workspace_root):
    """Write a component definition and its sources into the workspace."""

    def add(name: str, version: str = "1.0.0", sources: dict[str, str] | None = None, **spec):
        short = name.replace("/", "_")
        root_dir = f"src/{short}"
        sources = sources or {"index.js": f"module.exports = {name!r};\n"}
        for relative, contents in sources.items():
            path = workspace_root / root_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")

        data = {
            "apiVersion": "capnet/v1",
            "kind": "Component",
            "metadata": {"name": name, "version": version},
            "spec": {"rootDir": root_dir, **spec},
        }
        with open(workspace_root / "components" / f"{short}.yaml", "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return workspace_root / root_dir

    return add


@pytest.fixture
def capsules_dir(tmp_path: Path) -> Path:
    return tmp_path / "capsules"


@pytest.fixture
def package_manager() -> RecordingPackageManager:
    return RecordingPackageManager()


@pytest.fixture
def network(workspace_root, capsules_dir, package_manager) -> Network:
    orchestrator = CapsuleOrchestrator()
    orchestrator.build_pools()
    return Network(
        orchestrator,
        package_manager,
        project_path=workspace_root,
        default_options=CapsuleOptions(base_dir=capsules_dir),
    )
