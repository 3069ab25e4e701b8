"""Project name collision handling."""

import logging
import os
from pathlib import Path, PurePosixPath, PureWindowsPath

from orchestrator.prompts import PromptLimitExceeded, Prompter

logger = logging.getLogger(__name__)


def is_valid_project_name(name: str) -> bool:
    """Whether ``name`` is a single directory entry inside the working directory.

    Absolute paths, path separators and the ``.``/``..`` entries would put
    the project root somewhere other than ``cwd / name``.
    """
    if not name or name.strip() != name or name in (".", ".."):
        return False
    if any(sep and sep in name for sep in ("/", "\\", os.sep, os.altsep)):
        return False
    return not (PurePosixPath(name).is_absolute() or PureWindowsPath(name).drive)


class NamingResolver:
    """Negotiates a project name that does not clash with the filesystem.

    Asks before renaming and never touches the disk: if the user keeps a
    name whose folder already exists, deciding whether that is acceptable
    is up to the caller. Names that are not a plain folder name are
    always asked again.
    """

    def __init__(self, prompter: Prompter, cwd: Path, max_prompts: int = 10):
        """Initialize the resolver.

        Args:
            prompter: Interactive prompt implementation.
            cwd: Directory the project will be created in.
            max_prompts: Maximum number of rename rounds.
        """
        self.prompter = prompter
        self.cwd = cwd
        self.max_prompts = max_prompts

    def resolve(self, requested_name: str) -> tuple[str, Path]:
        """Return the final project name and root.

        The root is always a direct child of ``cwd``.

        Raises:
            PromptLimitExceeded: If the user renames more than
                ``max_prompts`` times and still collides or still gives
                an invalid name.
        """
        candidate = requested_name
        renames = 0

        while True:
            if is_valid_project_name(candidate):
                project_root = self.cwd / candidate
                if not project_root.exists():
                    return candidate, project_root

                logger.info("Project folder %s already exists", project_root)
                wants_rename = self.prompter.confirm(
                    f"Folder {candidate} already exists, do you want to rename "
                    "project you are creating now?",
                    default=True,
                )
                if not wants_rename:
                    return candidate, project_root
                message = "Enter new project name"
            else:
                logger.warning("Rejected project name %r", candidate)
                message = (
                    f"Project name {candidate!r} must be a plain folder name. "
                    "Enter new project name"
                )

            renames += 1
            if renames > self.max_prompts:
                raise PromptLimitExceeded(self.max_prompts)

            candidate = self.prompter.text(message, "Project name must not be empty.")
