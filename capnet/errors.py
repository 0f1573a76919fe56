"""Error taxonomy for capsule network builds."""

from __future__ import annotations


class CapnetError(Exception):
    """Base class for all capnet failures."""


class ResolutionFailure(CapnetError):
    """Raised when the dependency graph cannot be built."""


class CapsuleAcquisitionFailure(CapnetError):
    """Raised when the capsule pool cannot create or return a capsule."""


class MaterializationFailure(CapnetError):
    """Raised when files or links for a component cannot be produced or written."""


class InstallFailure(CapnetError):
    """Raised when the package manager fails in one or more capsules.

    Attributes:
        failures: Mapping of capsule working directory to failure message.
    """

    def __init__(self, failures: dict[str, str]):
        self.failures = failures
        details = "; ".join(f"{path}: {message}" for path, message in failures.items())
        super().__init__(f"Package install failed in {len(failures)} capsule(s): {details}")
