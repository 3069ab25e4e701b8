"""Authenticated archive download backend for paid products."""

import io
import logging
import shutil
import tarfile
import tempfile
import zipfile
import zlib
from pathlib import Path

from acquisition.base import AcquisitionBackend, erase_directory
from integrations.base import BackendClient
from schemas.errors import AcquisitionError, AuthorizationError, NetworkError
from schemas.product import Product

logger = logging.getLogger(__name__)

DOWNLOAD_ENDPOINT = "/packages/download/{slug}"


class ArchiveDownload(AcquisitionBackend):
    """Downloads a product archive and unpacks it into the project root.

    Gzipped tarballs and zip files are both accepted; the format is sniffed
    from the payload. A single top-level directory in the archive is
    flattened away.
    """

    name = "archive"

    def __init__(self, backend: BackendClient, timeout: float = 60.0):
        self.backend = backend
        self.timeout = timeout

    def acquire(self, product: Product, project_root: Path) -> None:
        headers = self.backend.auth.require_token()

        erase_directory(project_root)

        content = self._download(product, headers)
        self._extract(content, project_root)

    def _download(self, product: Product, headers: dict[str, str]) -> bytes:
        endpoint = DOWNLOAD_ENDPOINT.format(slug=product.product_slug)
        logger.info("Downloading %s", product.product_slug)
        try:
            response = self.backend.send("GET", endpoint, headers=headers, timeout=self.timeout)
        except AuthorizationError:
            raise
        except NetworkError as e:
            raise AcquisitionError(f"Failed to download {product.product_slug}: {e.message}") from e

        if not response.content:
            raise AcquisitionError(f"Empty archive received for {product.product_slug}")
        return response.content

    def _extract(self, content: bytes, project_root: Path) -> None:
        """Extract archive bytes into ``project_root``."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)

            try:
                if zipfile.is_zipfile(io.BytesIO(content)):
                    with zipfile.ZipFile(io.BytesIO(content)) as archive:
                        archive.extractall(tmp_path)
                else:
                    with tarfile.open(fileobj=io.BytesIO(content), mode="r:*") as tar:
                        tar.extractall(tmp_path, filter="data")
            # Truncated gzip streams surface as EOFError, zlib.error or OSError
            except (tarfile.TarError, zipfile.BadZipFile, EOFError, zlib.error, OSError) as e:
                raise AcquisitionError(f"Failed to extract archive: {e}") from e

            # Find the extracted root
            extracted = list(tmp_path.iterdir())
            if len(extracted) == 1 and extracted[0].is_dir():
                source = extracted[0]
            else:
                source = tmp_path

            try:
                project_root.mkdir(parents=True, exist_ok=True)
                for item in source.iterdir():
                    shutil.move(str(item), str(project_root / item.name))
            except OSError as e:
                raise AcquisitionError(f"Failed to unpack archive into {project_root}: {e}") from e
