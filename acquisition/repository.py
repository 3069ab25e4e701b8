"""Repository clone backend for free products."""

import logging
import subprocess
from pathlib import Path

from acquisition.base import AcquisitionBackend, erase_directory
from schemas.errors import AcquisitionError
from schemas.product import Product

logger = logging.getLogger(__name__)


class RepositoryClone(AcquisitionBackend):
    """Clones a starter repository and drops its git history.

    The new project must not end up sharing history with the starter, so
    ``.git`` is removed after the clone.

    Example:
        >>> backend = RepositoryClone("https://github.com/starterkit-templates/{slug}.git")
        >>> backend.acquire(product, Path("my-app"))
    """

    name = "repository"

    def __init__(self, url_template: str, depth: int | None = 1):
        """Initialize the backend.

        Args:
            url_template: Clone URL, ``{slug}`` is replaced by the product slug.
            depth: Shallow clone depth, None for a full clone.
        """
        self.url_template = url_template
        self.depth = depth

    def clone_url(self, product: Product) -> str:
        return self.url_template.format(slug=product.product_slug)

    def acquire(self, product: Product, project_root: Path) -> None:
        erase_directory(project_root)

        url = self.clone_url(product)
        cmd = ["git", "clone"]
        if self.depth:
            cmd += ["--depth", str(self.depth)]
        cmd += [url, str(project_root)]

        logger.info("Cloning %s into %s", url, project_root)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise AcquisitionError("Git is not installed or not in PATH") from e

        if result.returncode != 0:
            raise AcquisitionError(
                f"Could not clone {url}: {result.stderr.strip() or 'git exited with ' + str(result.returncode)}"
            )

        erase_directory(project_root / ".git")
