"""Capsules, the capsule pool and the package manager."""

from .capsule import Capsule
from .capsule_list import CapsuleList, CapsulePaths
from .orchestrator import CapsuleOrchestrator, ResourceConfig
from .package_manager import PackageManager

__all__ = [
    "Capsule",
    "CapsuleList",
    "CapsuleOrchestrator",
    "CapsulePaths",
    "PackageManager",
    "ResourceConfig",
]
