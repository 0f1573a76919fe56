"""Scan a workspace for component YAML files."""

import logging
from pathlib import Path
from typing import Iterator

import yaml

logger = logging.getLogger(__name__)


class ComponentScanner:
    """Scan the components directory for YAML component files."""

    COMPONENTS_DIR = "components"

    def __init__(self, root_path: str | Path):
        self.root = Path(root_path)
        self.components_dir = self.root / self.COMPONENTS_DIR

    def scan(self) -> Iterator[tuple[Path, dict]]:
        """Yield (file_path, parsed_yaml) for all YAML files."""
        if not self.components_dir.exists():
            return

        yaml_files = sorted(
            [*self.components_dir.rglob("*.yaml"), *self.components_dir.rglob("*.yml")]
        )
        for yaml_file in yaml_files:
            try:
                with open(yaml_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                if data and isinstance(data, dict):
                    yield yaml_file, data
                else:
                    logger.warning(f"Skipping {yaml_file}: not a mapping")
            except (yaml.YAMLError, OSError) as e:
                logger.warning(f"Failed to parse {yaml_file}: {e}")
