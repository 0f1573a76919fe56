"""Base models shared by components and capsules."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..capsule.capsule import Capsule

_UNSAFE_PATH_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class DependencyKind(str, Enum):
    """Typed dependency edges between components."""

    RUNTIME = "dependencies"
    DEV = "devDependencies"
    COMPILER = "compilerDependencies"
    TESTER = "testerDependencies"


class ComponentID(BaseModel):
    """Immutable component identifier (name@version format)."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str | None = None

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name

    def __lt__(self, other: "ComponentID") -> bool:
        return str(self) < str(other)

    @classmethod
    def parse(cls, id_str: str) -> "ComponentID":
        """Parse component id string.

        Formats:
        - name@version
        - @scope/name@version (the leading @ belongs to the name)
        - name (no version)
        """
        id_str = id_str.strip()
        if not id_str:
            raise ValueError("Empty component id")

        at = id_str.rfind("@")
        if at > 0:
            return cls(name=id_str[:at], version=id_str[at + 1 :] or None)
        return cls(name=id_str)

    def to_dir_token(self) -> str:
        """Filesystem-safe directory name for this id."""
        token = _UNSAFE_PATH_CHARS.sub("_", str(self)).strip(". ")
        return token or "_"

    @classmethod
    def of(cls, value: "ComponentID | str") -> "ComponentID":
        """Coerce a string or id into a ComponentID."""
        return value if isinstance(value, ComponentID) else cls.parse(value)


class SourceFile(BaseModel):
    """A single file with a relative posix path."""

    path: str
    contents: str = ""

    def relocated(self, base: str) -> "SourceFile":
        """Return a copy placed under ``base`` (``.`` keeps the path)."""
        if base in ("", "."):
            return self.model_copy()
        return SourceFile(path=str(PurePosixPath(base) / self.path), contents=self.contents)


class DataToPersist(BaseModel):
    """Ordered collection of files waiting to be written into a capsule."""

    files: list[SourceFile] = Field(default_factory=list)

    def add_file(self, file: SourceFile) -> None:
        """Add a file, replacing any earlier file with the same path."""
        self.files = [f for f in self.files if f.path != file.path]
        self.files.append(file)

    def add_many_files(self, files: list[SourceFile]) -> None:
        for file in files:
            self.add_file(file)

    def prepend(self, other: "DataToPersist") -> None:
        """Put ``other``'s files ahead of the current ones."""
        self.files = [*other.files, *self.files]

    def persist_all_to_capsule(
        self, capsule: Capsule, keep_existing_capsule: bool = True
    ) -> None:
        """Write every file into the capsule.

        Args:
            capsule: Target capsule.
            keep_existing_capsule: If False, the capsule directory is emptied
                first. Otherwise files not in this collection are left alone.
        """
        if not keep_existing_capsule:
            capsule.clear()
        for file in self.files:
            capsule.output_file(file.path, file.contents)
