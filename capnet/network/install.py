"""Decide which capsules need a package install."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..capsule import Capsule
from ..concurrency import run_parallel
from ..workspace.writer import PACKAGE_JSON

logger = logging.getLogger(__name__)


def read_package_json(capsule: Capsule) -> Any:
    """Parsed package.json of a capsule, or None if missing or unparsable."""
    try:
        return json.loads(capsule.read_file(PACKAGE_JSON))
    except (OSError, ValueError) as e:
        logger.debug(f"No readable {PACKAGE_JSON} in {capsule.wrk_dir}: {e}")
        return None


def get_package_json_in_capsules(
    capsules: list[Capsule], max_workers: int = 5
) -> list[Any]:
    """Read every capsule's manifest, in capsule order."""
    return run_parallel(read_package_json, capsules, max_workers)


def manifest_changed(before: Any, after: Any) -> bool:
    """Structural comparison of parsed manifests.

    A manifest that could not be read before counts as changed as long as
    there is one after.
    """
    if before is None:
        return after is not None
    return before != after


def select_capsules_to_install(
    capsules: list[Capsule], before: list[Any], after: list[Any]
) -> list[Capsule]:
    """Capsules whose manifest changed during materialization."""
    selected = [
        capsule
        for capsule, old, new in zip(capsules, before, after)
        if manifest_changed(old, new)
    ]
    logger.debug(f"{len(selected)} of {len(capsules)} capsule(s) need an install")
    return selected
