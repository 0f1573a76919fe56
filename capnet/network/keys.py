"""Derive capsule directories and pool resource ids."""

from __future__ import annotations

import hashlib
import uuid

from ..capsule import ResourceConfig
from ..config import CapsuleOptions, OrchestrationOptions
from ..models import ComponentID


def content_hash(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def capsule_suffix(options: CapsuleOptions, orchestration: OrchestrationOptions) -> str:
    """Pick the directory suffix that decides capsule reuse.

    A random token when ``always_new`` is set, the explicit ``name`` when
    given, otherwise a hash of the fully defaulted options.
    """
    if orchestration.always_new:
        return uuid.uuid4().hex
    if orchestration.name:
        return orchestration.name
    return content_hash(options.canonical_json())


def derive_resource_config(
    component_id: ComponentID,
    options: CapsuleOptions,
    orchestration: OrchestrationOptions | None = None,
) -> ResourceConfig:
    """Compute working directory and resource id for a component's capsule.

    Deterministic for fixed inputs unless ``always_new`` is set.
    """
    orchestration = orchestration or OrchestrationOptions()
    token = component_id.to_dir_token()
    wrk_dir = options.base_dir / f"{token}_{capsule_suffix(options, orchestration)}"
    return ResourceConfig(
        resource_id=f"{component_id}_{content_hash(str(wrk_dir))}",
        wrk_dir=wrk_dir,
        component_id=component_id,
        options=options,
    )
