"""capnet: isolate components and their dependency closure into capsules."""

from .config import CapnetConfig, CapsuleOptions, OrchestrationOptions
from .errors import (
    CapnetError,
    CapsuleAcquisitionFailure,
    InstallFailure,
    MaterializationFailure,
    ResolutionFailure,
)
from .network import Network, SubNetwork

__all__ = [
    "CapnetConfig",
    "CapnetError",
    "CapsuleAcquisitionFailure",
    "CapsuleOptions",
    "InstallFailure",
    "MaterializationFailure",
    "Network",
    "OrchestrationOptions",
    "ResolutionFailure",
    "SubNetwork",
]
