"""Result log entries reported to the user at the end of a command."""

from enum import IntEnum

from pydantic import BaseModel, Field


class CliStatus(IntEnum):
    """Status codes shown in the result table."""

    SUCCESS = 0
    ERROR = 1
    SEE_OTHER = 303
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


class ResultEntry(BaseModel):
    """A single {Status, Message} row of the result log.

    ``status`` is either a ``CliStatus`` value or the raw exit code of a
    package manager process, so it is kept as a plain int.
    """

    status: int = Field(..., description="Symbolic status or process exit code")
    message: str = Field(..., description="Human readable outcome")

    @property
    def ok(self) -> bool:
        return self.status == CliStatus.SUCCESS

    def as_row(self) -> dict[str, int | str]:
        """Return the entry in the shape printed by the CLI."""
        return {"Status": int(self.status), "Message": self.message}
