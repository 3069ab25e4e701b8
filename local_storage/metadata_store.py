"""Project metadata stored in the package manifest.

The manifest (package.json) belongs to the project, not to us: every save
is a read-modify-write so fields we do not know about survive untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from schemas.errors import DeserializationError, SerializationError
from schemas.project_metadata import ProjectMetadata

logger = logging.getLogger(__name__)


class MetadataStore:
    """Reads and writes project metadata in a JSON manifest.

    Example:
        >>> store = MetadataStore()
        >>> metadata = store.load(Path("my-app/package.json"))
        >>> store.save(Path("my-app/package.json"), ProjectMetadata(domainName="my-app.dev"))
    """

    def read_raw(self, path: Path) -> dict[str, Any]:
        """Load the whole manifest document.

        Raises:
            DeserializationError: If the file is missing, unreadable, not
                valid JSON, or not a JSON object.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DeserializationError(f"Manifest not found: {path}") from e
        except json.JSONDecodeError as e:
            raise DeserializationError(f"Invalid JSON in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DeserializationError(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise DeserializationError(f"Could not read {path}: {e}") from e

        if not isinstance(data, dict):
            raise DeserializationError(f"Manifest {path} is not a JSON object")
        return data

    def load(self, path: Path) -> ProjectMetadata:
        """Load the manifest as ``ProjectMetadata``.

        Raises:
            DeserializationError: If the manifest cannot be read or its
                known fields have the wrong types.
        """
        data = self.read_raw(path)
        try:
            return ProjectMetadata.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(f"Invalid manifest {path}: {e}") from e

    def save(self, path: Path, metadata: ProjectMetadata) -> None:
        """Merge ``metadata`` into the manifest at ``path``.

        A missing manifest is created. Fields of ``metadata`` that are None
        are left as they are in the file.

        Raises:
            DeserializationError: If an existing manifest cannot be parsed.
            SerializationError: If the manifest cannot be written.
        """
        document: dict[str, Any] = self.read_raw(path) if path.exists() else {}
        document.update(metadata.to_manifest())

        try:
            content = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Could not serialize metadata: {e}") from e

        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SerializationError(f"Could not write {path}: {e}") from e

        logger.debug("Saved metadata to %s", path)