"""Layered ``capnet.yaml`` loading and saving."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import CapnetConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Read capnet configuration from the user and project levels.

    The user file (``~/.capnet/capnet.yaml``) is the base layer and the
    project file overrides it key by key within each section, so a project
    can change one capsule option without restating the rest.
    """

    CONFIG_FILENAME = "capnet.yaml"
    USER_CONFIG_DIR = Path.home() / ".capnet"

    def __init__(self, project_path: Path | None = None):
        self._project_path = project_path or Path.cwd()

    @property
    def project_config_path(self) -> Path:
        return self._project_path / self.CONFIG_FILENAME

    @property
    def user_config_path(self) -> Path:
        return self.USER_CONFIG_DIR / self.CONFIG_FILENAME

    def load(self) -> CapnetConfig:
        """Merge the existing layers into one config.

        A layer that cannot be parsed is skipped with a warning. If the merged
        result does not validate, defaults are used.
        """
        merged: dict[str, Any] = {}
        sources = []
        for path in (self.user_config_path, self.project_config_path):
            layer = self._read_layer(path)
            if layer is None:
                continue
            sources.append(path)
            for section, values in layer.items():
                if isinstance(values, dict) and isinstance(merged.get(section), dict):
                    merged[section] = {**merged[section], **values}
                else:
                    merged[section] = values

        if not sources:
            logger.debug("No config file found, using defaults")
            return CapnetConfig()

        try:
            config = CapnetConfig.model_validate(merged)
        except ValidationError as e:
            names = ", ".join(str(path) for path in sources)
            logger.warning(f"Invalid config in {names}, using defaults: {e}")
            return CapnetConfig()

        logger.info(f"Loaded config from: {', '.join(str(path) for path in sources)}")
        return config

    def save(self, config: CapnetConfig, user_level: bool = False) -> Path:
        """Write ``config`` to the project file, or the user file if ``user_level``."""
        config_path = self.user_config_path if user_level else self.project_config_path
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                config.model_dump(exclude_none=True, mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

        logger.info(f"Saved config to: {config_path}")
        return config_path

    def _read_layer(self, path: Path) -> dict[str, Any] | None:
        if not path.is_file():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.warning(f"Failed to read config {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: not a mapping")
            return None
        return data


def load_config(project_path: Path | str | None = None) -> CapnetConfig:
    """Load the layered configuration for a project directory (default: cwd)."""
    return ConfigLoader(Path(project_path) if project_path else None).load()
