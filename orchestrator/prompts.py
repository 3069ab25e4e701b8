"""Interactive prompts used by the workflows."""

from typing import Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt


class PromptLimitExceeded(Exception):
    """Raised when an interactive loop hits its retry bound.

    Not an error: the workflow answers it by pointing the user at other
    resources and ending the process successfully.
    """

    def __init__(self, limit: int):
        super().__init__(f"Prompt shown more than {limit} times")
        self.limit = limit


class Prompter(Protocol):
    """What the workflows need from an interactive prompt library."""

    def select(
        self,
        message: str,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
    ) -> str:
        """Pick one of ``choices`` (label, value) and return its value."""
        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        ...

    def text(self, message: str, error_message: str = "Value must not be empty.") -> str:
        """Ask for a non-empty string."""
        ...


class ConsolePrompter:
    """Prompter backed by rich prompts."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def select(
        self,
        message: str,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
    ) -> str:
        if not choices:
            raise ValueError("Nothing to select from")

        self.console.print(f"[bold]{message}[/bold]")
        default_index = "1"
        for index, (label, value) in enumerate(choices, 1):
            self.console.print(f"  [cyan]{index}[/cyan]) {label}")
            if value == default:
                default_index = str(index)

        answer = Prompt.ask(
            "Your choice",
            choices=[str(i) for i in range(1, len(choices) + 1)],
            default=default_index,
            show_choices=False,
            console=self.console,
        )
        return choices[int(answer) - 1][1]

    def confirm(self, message: str, default: bool = True) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def text(self, message: str, error_message: str = "Value must not be empty.") -> str:
        while True:
            answer = Prompt.ask(message, console=self.console).strip()
            if answer:
                return answer
            self.console.print(f"[red]{error_message}[/red]")
