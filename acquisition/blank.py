"""Empty local scaffold for blank projects."""

from pathlib import Path

from acquisition.base import AcquisitionBackend, erase_directory
from schemas.errors import FilesystemError
from schemas.product import Product


class BlankDirectory(AcquisitionBackend):
    """Creates an empty project directory. No network access."""

    name = "blank"

    def acquire(self, product: Product, project_root: Path) -> None:
        erase_directory(project_root)
        try:
            project_root.mkdir(parents=True)
        except OSError as e:
            raise FilesystemError(f"Error: {e}") from e
