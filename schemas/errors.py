"""Error taxonomy for starterkit commands.

Every error carries the status that ends up in the result log when the
orchestrator catches it, so a failed stage is reported as exactly one
``{Status, Message}`` entry.
"""

from schemas.results import CliStatus


class StarterkitError(Exception):
    """Base class for errors reported through the result log."""

    default_status: int = CliStatus.ERROR

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = self.default_status if status is None else status


class NetworkError(StarterkitError):
    """Raised when a catalog or backend request fails."""

    pass


class AuthorizationError(StarterkitError):
    """Raised when the backend rejects (or we lack) credentials."""

    default_status = CliStatus.UNAUTHORIZED


class AcquisitionError(StarterkitError):
    """Raised when cloning or extracting project sources fails."""

    pass


class FilesystemError(StarterkitError):
    """Raised when a project directory cannot be created or erased."""

    pass


class ProcessSpawnError(StarterkitError):
    """Raised when a package manager process fails to start or exits non-zero."""

    pass


class DeserializationError(StarterkitError):
    """Raised when a manifest cannot be read or parsed."""

    default_status = CliStatus.INTERNAL_SERVER_ERROR


class SerializationError(StarterkitError):
    """Raised when a manifest cannot be written."""

    default_status = CliStatus.INTERNAL_SERVER_ERROR


class UnknownPackageManagerError(StarterkitError):
    """Raised when a package manager name is not registered."""

    pass
