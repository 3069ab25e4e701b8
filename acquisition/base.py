"""Common interface for project source acquisition."""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping

from schemas.errors import AcquisitionError, FilesystemError
from schemas.product import Product, ProductKind

logger = logging.getLogger(__name__)


def erase_directory(path: Path) -> None:
    """Remove ``path`` and everything in it.

    A missing directory is not an error.

    Raises:
        FilesystemError: If the directory exists but cannot be removed.
    """
    if not path.exists() and not path.is_symlink():
        return
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise FilesystemError(f"Could not erase {path}: {e}") from e
    logger.info("Erased %s", path)


class AcquisitionBackend(ABC):
    """Materializes a product's sources in a project directory.

    Implementations erase the target directory first and leave whatever
    they managed to write in place when they fail.
    """

    name: str

    completed_message: str = "Initialization completed."

    @abstractmethod
    def acquire(self, product: Product, project_root: Path) -> None:
        """Fill ``project_root`` with the sources of ``product``.

        Raises:
            AcquisitionError: If the sources cannot be fetched or unpacked.
            AuthorizationError: If the backend rejects the credentials.
            FilesystemError: If the directory cannot be prepared.
        """
        pass


class BackendRegistry:
    """Selects the acquisition backend for a product kind.

    Usage:
        registry = BackendRegistry({
            ProductKind.BLANK: BlankDirectory(),
            ProductKind.FREE: RepositoryClone(template),
            ProductKind.PAID: ArchiveDownload(backend_client),
        })
        registry.for_product(product).acquire(product, root)
    """

    def __init__(self, backends: Mapping[ProductKind, AcquisitionBackend]):
        self._backends = dict(backends)

    def for_product(self, product: Product) -> AcquisitionBackend:
        try:
            return self._backends[product.kind]
        except KeyError:
            raise AcquisitionError(f"No acquisition backend for {product.kind.value} products")
