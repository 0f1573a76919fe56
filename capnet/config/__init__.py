"""Configuration module for capnet."""

from .loader import ConfigLoader, load_config
from .models import CapnetConfig, CapnetSettings, CapsuleOptions, OrchestrationOptions

__all__ = [
    "CapnetConfig",
    "CapnetSettings",
    "CapsuleOptions",
    "ConfigLoader",
    "OrchestrationOptions",
    "load_config",
]
