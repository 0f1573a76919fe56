"""Package manager invocation inside capsules."""

from __future__ import annotations

import logging
import subprocess

from ..concurrency import run_parallel
from ..errors import InstallFailure
from .capsule import Capsule

logger = logging.getLogger(__name__)


class PackageManager:
    """Runs ``<package manager> install`` in capsules."""

    def __init__(
        self,
        default_package_manager: str = "npm",
        timeout: int = 600,
        max_workers: int = 5,
    ):
        self.default_package_manager = default_package_manager
        self.timeout = timeout
        self.max_workers = max_workers

    def install_command(self, package_manager: str) -> list[str]:
        return [package_manager, "install"]

    def run_install(
        self,
        capsules: list[Capsule],
        package_manager: str | None = None,
        silent: bool = False,
    ) -> None:
        """Install packages in every capsule.

        All capsules are attempted; failures are collected and raised together.

        Raises:
            InstallFailure: If the install failed in any capsule.
        """
        if not capsules:
            return

        command = self.install_command(package_manager or self.default_package_manager)
        logger.info(f"Running {' '.join(command)} in {len(capsules)} capsule(s)")

        results = run_parallel(
            lambda capsule: self._install_one(capsule, command, silent),
            capsules,
            self.max_workers,
        )

        failures = {
            str(capsule.wrk_dir): error
            for capsule, error in zip(capsules, results)
            if error is not None
        }
        if failures:
            raise InstallFailure(failures)

    def _install_one(
        self, capsule: Capsule, command: list[str], silent: bool
    ) -> str | None:
        """Install in one capsule. Returns an error message or None."""
        try:
            result = capsule.exec(command, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            logger.error(f"Timeout installing packages in {capsule.wrk_dir}")
            return f"timed out after {self.timeout}s"
        except FileNotFoundError:
            logger.error(f"{command[0]} not found. Please install it.")
            return f"{command[0]} not found"

        if result.returncode != 0:
            logger.error(f"Install failed in {capsule.wrk_dir}: {result.stderr}")
            return result.stderr.strip() or f"exit code {result.returncode}"

        if not silent and result.stdout:
            logger.info(f"{capsule.component_id}: {result.stdout.strip()}")
        return None
