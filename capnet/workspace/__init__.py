"""Reading components from disk and preparing their files for capsules."""

from .links import LinkGenerator, component_package_name
from .manipulate_dir import get_manipulate_dir_data, get_shared_dir
from .reader import ComponentReader
from .scanner import ComponentScanner
from .workspace import Scope, Workspace, load_scope, load_workspace_if_exist
from .writer import ManyComponentsWriter

__all__ = [
    "ComponentReader",
    "ComponentScanner",
    "LinkGenerator",
    "ManyComponentsWriter",
    "Scope",
    "Workspace",
    "component_package_name",
    "get_manipulate_dir_data",
    "get_shared_dir",
    "load_scope",
    "load_workspace_if_exist",
]
