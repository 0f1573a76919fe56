"""Component sources: a working tree (workspace) or an exported scope."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from ..models import Component
from .reader import ComponentReader
from .scanner import ComponentScanner

logger = logging.getLogger(__name__)


class Workspace:
    """A directory whose ``components/`` folder defines components.

    Component sources are read from ``spec.rootDir`` relative to the root.
    """

    def __init__(self, root_path: str | Path):
        self.root = Path(root_path).resolve()
        self._scanner = ComponentScanner(self.root)
        self._reader = ComponentReader()

    def load_components(self) -> list[Component]:
        """Load every valid component with its files."""
        components = []
        for path, data in self._scanner.scan():
            component = self._reader.parse_component(data, str(path))
            if component:
                components.append(self._reader.load_sources(component, self.root))
        logger.info(f"Loaded {len(components)} component(s) from workspace {self.root}")
        return components


class Scope:
    """Exported components with inline file contents.

    Layout: ``<path>/.capnet/scope/*.yaml``.
    """

    SCOPE_DIR = Path(".capnet") / "scope"

    def __init__(self, path: str | Path):
        self.path = Path(path).resolve() / self.SCOPE_DIR
        self._reader = ComponentReader()

    def exists(self) -> bool:
        return self.path.is_dir()

    def load_components(self) -> list[Component]:
        """Load every valid component stored in the scope."""
        components = []
        for yaml_file in sorted(self.path.glob("*.yaml")):
            try:
                with open(yaml_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (yaml.YAMLError, OSError) as e:
                logger.warning(f"Failed to parse {yaml_file}: {e}")
                continue
            if not isinstance(data, dict):
                logger.warning(f"Skipping {yaml_file}: not a mapping")
                continue
            component = self._reader.parse_component(data, str(yaml_file))
            if component:
                components.append(component)
        logger.info(f"Loaded {len(components)} component(s) from scope {self.path}")
        return components

    def export(self, components: list[Component]) -> list[Path]:
        """Write components, with their file contents, into the scope."""
        self.path.mkdir(parents=True, exist_ok=True)
        written = []
        for component in components:
            target = self.path / f"{component.id.to_dir_token()}.yaml"
            data = component.model_dump(
                exclude_none=True, mode="json", exclude={"files_to_persist"}
            )
            with open(target, "w", encoding="utf-8") as f:
                yaml.dump(
                    data,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
            written.append(target)
        logger.info(f"Exported {len(written)} component(s) to scope {self.path}")
        return written


def load_workspace_if_exist(path: str | Path | None = None) -> Workspace | None:
    """Return the workspace at ``path`` (default: cwd) if it has components."""
    root = Path(path) if path else Path.cwd()
    if not (root / ComponentScanner.COMPONENTS_DIR).is_dir():
        return None
    return Workspace(root)


def load_scope(path: str | Path | None = None) -> Scope | None:
    """Return the scope under ``path`` (default: cwd) if one was exported."""
    scope = Scope(Path(path) if path else Path.cwd())
    return scope if scope.exists() else None
