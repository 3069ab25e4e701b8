"""Project metadata merged into the package manifest."""

from pydantic import BaseModel, ConfigDict, Field


class ProjectMetadata(BaseModel):
    """Known manifest fields plus every unknown field as an extra.

    Serialize with ``by_alias=True`` so the keys match the manifest
    (``packageManager``, ``domainName``).
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = Field(None, description="Project name")
    package_manager: str | None = Field(
        None,
        alias="packageManager",
        description="Package manager identifier (npm, yarn, ...)",
    )
    domain_name: str | None = Field(
        None,
        alias="domainName",
        description="Domain the project is published under",
    )

    def to_manifest(self) -> dict:
        """Return the fields that should be written to the manifest."""
        return self.model_dump(by_alias=True, exclude_none=True)
