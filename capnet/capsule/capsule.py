"""Capsule: an isolated working directory holding one component."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from ..models import ComponentID

logger = logging.getLogger(__name__)


class Capsule:
    """Handle to a capsule directory with file and exec capabilities."""

    def __init__(self, wrk_dir: Path, component_id: ComponentID, resource_id: str):
        self.wrk_dir = Path(wrk_dir)
        self.component_id = component_id
        self.resource_id = resource_id

    def __repr__(self) -> str:
        return f"Capsule({self.component_id}, {self.wrk_dir})"

    def path_of(self, relative_path: str) -> Path:
        """Resolve a capsule-relative path, refusing paths that escape it."""
        target = (self.wrk_dir / relative_path).resolve()
        root = self.wrk_dir.resolve()
        if target != root and root not in target.parents:
            raise ValueError(f"Path {relative_path} escapes capsule {self.wrk_dir}")
        return target

    def exists(self, relative_path: str) -> bool:
        return self.path_of(relative_path).exists()

    def read_file(self, relative_path: str) -> str:
        """Read a file from the capsule. Raises OSError if missing."""
        return self.path_of(relative_path).read_text(encoding="utf-8")

    def output_file(self, relative_path: str, contents: str) -> None:
        """Write a file into the capsule, creating parent directories."""
        path = self.path_of(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")

    def clear(self) -> None:
        """Remove everything inside the capsule, keeping the directory."""
        for child in self.wrk_dir.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        logger.debug(f"Cleared capsule {self.wrk_dir}")

    def exec(
        self, command: list[str], timeout: int | None = None
    ) -> subprocess.CompletedProcess:
        """Run a command with the capsule as working directory."""
        logger.debug(f"Running {' '.join(command)} in {self.wrk_dir}")
        return subprocess.run(
            command,
            cwd=self.wrk_dir,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
