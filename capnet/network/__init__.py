"""Capsule network builder."""

from .install import (
    get_package_json_in_capsules,
    manifest_changed,
    read_package_json,
    select_capsules_to_install,
)
from .keys import capsule_suffix, derive_resource_config
from .network import Network, SubNetwork

__all__ = [
    "Network",
    "SubNetwork",
    "capsule_suffix",
    "derive_resource_config",
    "get_package_json_in_capsules",
    "manifest_changed",
    "read_package_json",
    "select_capsules_to_install",
]
