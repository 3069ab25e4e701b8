"""Workflows that edit a single field of an existing project manifest."""

import logging
from pathlib import Path

from local_storage.metadata_store import MetadataStore
from orchestrator.prompts import Prompter
from schemas.errors import DeserializationError, SerializationError
from schemas.project_metadata import ProjectMetadata
from schemas.results import CliStatus, ResultEntry

logger = logging.getLogger(__name__)

READ_FAILED_MESSAGE = "Problem with reading package.json"
SAVE_FAILED_MESSAGE = "Problem with saving package.json"


class _ManifestFieldWorkflow:
    """Read the manifest, ask for a value, write it back if it changed."""

    field_name: str
    prompt_message: str
    empty_message: str

    def __init__(self, manifest_path: Path, store: MetadataStore, prompter: Prompter):
        self.manifest_path = Path(manifest_path)
        self.store = store
        self.prompter = prompter
        self.results: list[ResultEntry] = []

    def _add_result(self, status: int, message: str) -> None:
        self.results.append(ResultEntry(status=int(status), message=message))

    def _same_message(self) -> str:
        raise NotImplementedError

    def _changed_message(self, old: str | None, new: str) -> str:
        raise NotImplementedError

    def run(self, value: str | None = None) -> list[ResultEntry]:
        """Update the field and return the result log.

        Args:
            value: New value; prompted for when not given.
        """
        try:
            metadata = self.store.load(self.manifest_path)
        except DeserializationError as e:
            logger.warning("Could not read %s: %s", self.manifest_path, e.message)
            self._add_result(CliStatus.INTERNAL_SERVER_ERROR, READ_FAILED_MESSAGE)
            return self.results

        if not value:
            value = self.prompter.text(self.prompt_message, self.empty_message)

        current = getattr(metadata, self.field_name)
        if current == value:
            self._add_result(CliStatus.SUCCESS, self._same_message())
            return self.results

        update = ProjectMetadata(**{self.field_name: value})
        try:
            self.store.save(self.manifest_path, update)
        except (DeserializationError, SerializationError) as e:
            logger.warning("Could not save %s: %s", self.manifest_path, e.message)
            self._add_result(CliStatus.INTERNAL_SERVER_ERROR, SAVE_FAILED_MESSAGE)
            return self.results

        logger.info("Changed %s from %r to %r", self.field_name, current, value)
        self._add_result(CliStatus.SUCCESS, self._changed_message(current, value))
        return self.results


class SetNameWorkflow(_ManifestFieldWorkflow):
    """Rename the project in its manifest."""

    field_name = "name"
    prompt_message = "Enter new project name"
    empty_message = "Project name must not be empty."

    def _same_message(self) -> str:
        return "Project names are the same."

    def _changed_message(self, old: str | None, new: str) -> str:
        return f"Project name has been successfully changed from {old} to {new}."


class SetDomainNameWorkflow(_ManifestFieldWorkflow):
    """Set the domain the project is published under."""

    field_name = "domain_name"
    prompt_message = "Enter domain name"
    empty_message = "Domain name must not be empty."

    def _same_message(self) -> str:
        return "Domain names are the same."

    def _changed_message(self, old: str | None, new: str) -> str:
        return f"Domain name has been changed to {new} successfully"
