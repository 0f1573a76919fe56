"""Configuration models for capnet."""

from __future__ import annotations

import json
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CapsuleOptions(BaseModel):
    """Options controlling where capsules live and what is written into them.

    Every recognized option is a field with its default. Anything else must go
    through ``extra``. capnet does not interpret it; it is part of the capsule
    key, so different ``extra`` values get different capsules, and callers
    read it back from the options they passed.
    """

    model_config = ConfigDict(extra="forbid")

    base_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Root directory for all capsules",
    )
    write_dists: bool = Field(default=True)
    write_bit_dependencies: bool = Field(
        default=True, description="Write component dependencies into package.json"
    )
    install_packages: bool = Field(default=True)
    workspace: str | None = Field(default=None, description="Capsule pool namespace")
    package_manager: str | None = Field(
        default=None, description="Override of the default package manager"
    )

    # Consumed by the materializer
    write_package_json: bool = Field(default=True)
    write_config: bool = Field(default=False)
    create_npm_link_files: bool = Field(default=False)
    save_dependencies_as_components: bool = Field(default=False)
    exclude_registry_prefix: bool = Field(default=False)
    silent_package_manager_result: bool = Field(default=False)
    verbose: bool = Field(default=False)

    extra: dict[str, Any] = Field(default_factory=dict)

    def merged(
        self, overrides: CapsuleOptions | Mapping[str, Any] | None = None
    ) -> CapsuleOptions:
        """Return a new options value with ``overrides`` applied on top.

        Only fields explicitly set on ``overrides`` win, so an override built
        from partial data does not reset the receiver's values to defaults.
        """
        if overrides is None:
            return self.model_copy(deep=True)
        if isinstance(overrides, CapsuleOptions):
            updates = overrides.model_dump(exclude_unset=True)
        else:
            updates = dict(overrides)
        return CapsuleOptions.model_validate({**self.model_dump(), **updates})

    def canonical_json(self) -> str:
        """Serialize with defaults applied and keys sorted."""
        return json.dumps(
            self.model_dump(mode="json"), sort_keys=True, separators=(",", ":")
        )


class OrchestrationOptions(BaseModel):
    """Options controlling capsule reuse."""

    model_config = ConfigDict(extra="forbid")

    always_new: bool = Field(
        default=False, description="Force a fresh capsule regardless of cache key"
    )
    name: str | None = Field(
        default=None, description="Explicit suffix overriding the options hash"
    )


class CapnetSettings(BaseModel):
    """Global settings."""

    max_workers: int = Field(default=5, description="Max parallel capsule tasks")
    package_manager: str = Field(default="npm", description="Default package manager")
    install_timeout: int = Field(default=600, description="Install timeout in seconds")
    workspace_name: str = Field(default="any", description="Default pool namespace")


class CapnetConfig(BaseModel):
    """Root configuration model."""

    version: int = Field(default=1)
    capsule: CapsuleOptions = Field(default_factory=CapsuleOptions)
    settings: CapnetSettings = Field(default_factory=CapnetSettings)
