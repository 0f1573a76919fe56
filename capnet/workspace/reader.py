"""Read and parse component YAML definitions and their sources."""

import logging
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import ValidationError

from ..models import Component, SourceFile

logger = logging.getLogger(__name__)


class ComponentReader:
    """Parse component definitions and load their files from disk."""

    # Never treated as component sources
    SKIP_DIRS = {"node_modules", ".git", ".capnet", "components"}

    def parse_component(self, data: dict[str, Any], source: str = "") -> Component | None:
        """Parse dict to a Component, or None if it is not a valid one."""
        kind = data.get("kind")
        if kind != "Component":
            logger.warning(f"Skipping {source or 'document'}: unsupported kind {kind!r}")
            return None

        try:
            return Component.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Failed to validate component {source}: {e}")
            return None

    def load_sources(self, component: Component, workspace_root: Path) -> Component:
        """Attach files, dists and main file read from the workspace.

        File paths are stored relative to the workspace root.
        """
        root_dir = workspace_root / component.spec.rootDir
        matched: dict[str, Path] = {}
        for pattern in component.spec.files:
            for path in sorted(root_dir.glob(pattern)):
                if not path.is_file():
                    continue
                relative = path.relative_to(workspace_root)
                if self.SKIP_DIRS.intersection(relative.parts[:-1]):
                    continue
                matched.setdefault(relative.as_posix(), path)

        component.files = self._read_files(matched)
        component.main_file = (
            PurePosixPath(Path(component.spec.rootDir).as_posix()) / component.spec.mainFile
        ).as_posix()
        if component.main_file.startswith("./"):
            component.main_file = component.main_file[2:]

        if component.spec.distDir:
            dist_dir = workspace_root / component.spec.distDir
            dists = {
                path.relative_to(dist_dir).as_posix(): path
                for path in sorted(dist_dir.rglob("*"))
                if path.is_file()
            }
            component.dists = self._read_files(dists)

        return component

    def _read_files(self, paths: dict[str, Path]) -> list[SourceFile]:
        files = []
        for relative, path in paths.items():
            try:
                files.append(
                    SourceFile(path=relative, contents=path.read_text(encoding="utf-8"))
                )
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {path}: {e}")
        return files
