"""Schemas module for starterkit.

Provides Pydantic models for:
- Catalog products and the blank sentinel
- Init workflow arguments and state
- Project metadata stored in the manifest
- Result log entries and status codes
- The error taxonomy reported through the result log
"""

from .errors import (
    AcquisitionError,
    AuthorizationError,
    DeserializationError,
    FilesystemError,
    NetworkError,
    ProcessSpawnError,
    SerializationError,
    StarterkitError,
    UnknownPackageManagerError,
)
from .product import BLANK_PRODUCT, BLANK_SLUG, Product, ProductKind
from .project_metadata import ProjectMetadata
from .results import CliStatus, ResultEntry
from .workflow_state import TERMINAL_STAGES, Stage, WorkflowArgs, WorkflowState

__all__ = [
    # Errors
    "StarterkitError",
    "NetworkError",
    "AuthorizationError",
    "AcquisitionError",
    "FilesystemError",
    "ProcessSpawnError",
    "DeserializationError",
    "SerializationError",
    "UnknownPackageManagerError",
    # Products
    "BLANK_PRODUCT",
    "BLANK_SLUG",
    "Product",
    "ProductKind",
    # Metadata
    "ProjectMetadata",
    # Results
    "CliStatus",
    "ResultEntry",
    # Workflow
    "Stage",
    "TERMINAL_STAGES",
    "WorkflowArgs",
    "WorkflowState",
]
