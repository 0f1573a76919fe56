"""Pydantic models for components."""

from .base import ComponentID, DataToPersist, DependencyKind, SourceFile
from .component import (
    Component,
    ComponentMetadata,
    ComponentSpec,
    ComponentWithDependencies,
)

__all__ = [
    "ComponentID",
    "DataToPersist",
    "DependencyKind",
    "SourceFile",
    "Component",
    "ComponentMetadata",
    "ComponentSpec",
    "ComponentWithDependencies",
]
