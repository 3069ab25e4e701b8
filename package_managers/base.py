"""Base class for package managers."""

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from schemas.errors import ProcessSpawnError

logger = logging.getLogger(__name__)


class ProcessHandle:
    """A spawned package manager process.

    A handle either wraps a running process or remembers why the process
    could not be started. ``wait`` turns those into the two outcomes the
    init workflow cares about: an exit code, or a ``ProcessSpawnError``.
    """

    def __init__(
        self,
        process: subprocess.Popen | None = None,
        error: OSError | None = None,
    ):
        self.process = process
        self.error = error

    @classmethod
    def spawn(cls, command: list[str], cwd: Path) -> "ProcessHandle":
        """Start ``command`` in ``cwd`` with inherited stdio.

        On Windows the command goes through the shell so that ``npm.cmd``
        style shims resolve; elsewhere it is executed directly.
        """
        use_shell = sys.platform == "win32"
        args: str | list[str] = subprocess.list2cmdline(command) if use_shell else command

        logger.info("Spawning %s in %s", " ".join(command), cwd)
        try:
            process = subprocess.Popen(args, cwd=cwd, shell=use_shell)
        except OSError as e:
            logger.warning("Could not start %s: %s", command[0], e)
            return cls(error=e)
        return cls(process=process)

    def wait(self) -> int:
        """Block until the process exits.

        Returns:
            The process exit code.

        Raises:
            ProcessSpawnError: If the process could not be started.
        """
        if self.error is not None:
            raise ProcessSpawnError(str(self.error))
        return self.process.wait()


class PackageManager(ABC):
    """Abstract base class for package managers.

    Package managers bootstrap the project manifest (package.json) and
    install dependencies in a project directory.
    """

    name: str
    """Package manager name (e.g., 'npm', 'yarn')"""

    executable: str
    """Command used to invoke the package manager"""

    manifest_file: str = "package.json"

    lockfiles: tuple[str, ...] = ()
    """Lock files whose presence identifies this package manager"""

    @abstractmethod
    def init_args(self) -> list[str]:
        """Arguments that create a new manifest."""
        pass

    @abstractmethod
    def install_args(self) -> list[str]:
        """Arguments that install the manifest's dependencies."""
        pass

    def run_args(self, script: str) -> list[str]:
        """Full command running a manifest script."""
        return [self.executable, "run", script]

    def init(self, cwd: Path) -> ProcessHandle:
        """Start manifest initialization in ``cwd``."""
        return ProcessHandle.spawn([self.executable, *self.init_args()], cwd)

    def install(self, cwd: Path) -> ProcessHandle:
        """Start dependency installation in ``cwd``."""
        return ProcessHandle.spawn([self.executable, *self.install_args()], cwd)

    def version(self) -> str | None:
        """Installed version of the package manager, None if not available."""
        try:
            result = subprocess.run(
                [self.executable, "--version"],
                capture_output=True,
                text=True,
                check=False,
                shell=sys.platform == "win32",
            )
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
