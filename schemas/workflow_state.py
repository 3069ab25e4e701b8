"""Init workflow state schema.

State machine representation for the project initialization workflow.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemas.product import Product
from schemas.results import ResultEntry


class Stage(str, Enum):
    """Init workflow stages."""

    IDLE = "idle"
    SELECTING_PRODUCT = "selecting_product"
    RESOLVING_NAME = "resolving_name"
    ACQUIRING = "acquiring"
    INITIALIZING_MANIFEST = "initializing_manifest"
    PERSISTING_METADATA = "persisting_metadata"
    NOTIFYING = "notifying"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STAGES = frozenset({Stage.DONE, Stage.FAILED})


class WorkflowArgs(BaseModel):
    """Parsed options of the ``init`` command."""

    model_config = ConfigDict(frozen=True)

    project_name: str | None = Field(None, description="Explicit project name")
    blank: bool = Field(False, description="Force an empty scaffold")
    package_manager: str | None = Field(None, description="Explicit package manager name")


class WorkflowState(BaseModel):
    """Mutable session state owned by the init orchestrator.

    Never persisted. ``results`` is append-only; use ``add_result``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    args: WorkflowArgs = Field(default_factory=WorkflowArgs)
    cwd: Path = Field(..., description="Directory the project is created in")
    stage: Stage = Field(Stage.IDLE, description="Current stage")
    visited: list[Stage] = Field(
        default_factory=lambda: [Stage.IDLE],
        description="Stages entered so far, in order",
    )

    product: Product | None = Field(None, description="Selected product or blank sentinel")
    project_name: str | None = Field(None, description="Resolved project name")
    package_manager: Any = Field(None, exclude=True, description="Chosen package manager")

    results: list[ResultEntry] = Field(default_factory=list)
    prompt_count: int = Field(0, description="Times the product prompt was shown")
    failure_reason: str | None = Field(None, description="Error message if failed")

    @property
    def project_root(self) -> Path | None:
        """Absolute project directory, always derived from the current name."""
        if self.project_name is None:
            return None
        return self.cwd / self.project_name

    @property
    def failed(self) -> bool:
        return self.stage == Stage.FAILED

    def add_result(self, status: int, message: str) -> ResultEntry:
        entry = ResultEntry(status=int(status), message=message)
        self.results.append(entry)
        return entry
