"""Capsule pool: creates or reuses capsules keyed by resource id."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from ..config import CapsuleOptions, OrchestrationOptions
from ..errors import CapsuleAcquisitionFailure
from ..models import ComponentID
from .capsule import Capsule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceConfig:
    """Pool request for one capsule."""

    resource_id: str
    wrk_dir: Path
    component_id: ComponentID
    options: CapsuleOptions


class CapsuleOrchestrator:
    """Manages per-workspace pools of capsules.

    Creation-or-reuse is atomic: concurrent requests for the same
    (workspace, resource id) receive the same Capsule handle.
    """

    def __init__(self):
        self._pools: dict[str, dict[str, Capsule]] = {}
        self._lock = threading.Lock()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def build_pools(self) -> None:
        """Initialize the pools. Safe to call more than once."""
        with self._lock:
            if self._loaded:
                return
            self._pools = {}
            self._loaded = True
        logger.debug("Capsule pools ready")

    def get_capsule(
        self,
        workspace: str,
        resource_config: ResourceConfig,
        orchestration_options: OrchestrationOptions | None = None,
    ) -> Capsule:
        """Get the capsule for a resource, creating it on first use.

        Raises:
            CapsuleAcquisitionFailure: If pools are not built or the directory
                cannot be created.
        """
        with self._lock:
            if not self._loaded:
                raise CapsuleAcquisitionFailure(
                    "Capsule pools are not built; call build_pools() first"
                )

            pool = self._pools.setdefault(workspace, {})
            existing = pool.get(resource_config.resource_id)
            if existing is not None:
                logger.debug(f"Reusing capsule {existing.wrk_dir}")
                return existing

            wrk_dir = resource_config.wrk_dir
            reused_dir = wrk_dir.exists()
            try:
                wrk_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CapsuleAcquisitionFailure(
                    f"Cannot create capsule for {resource_config.component_id} at {wrk_dir}: {e}"
                ) from e

            capsule = Capsule(
                wrk_dir, resource_config.component_id, resource_config.resource_id
            )
            pool[resource_config.resource_id] = capsule

        if reused_dir:
            logger.info(f"Attached existing capsule directory {wrk_dir}")
        else:
            logger.info(f"Created capsule {wrk_dir}")
        return capsule

    def list_capsules(self, workspace: str) -> list[Capsule]:
        """List capsules in a workspace pool."""
        with self._lock:
            return list(self._pools.get(workspace, {}).values())

    def list_workspaces(self) -> list[str]:
        with self._lock:
            return list(self._pools.keys())
