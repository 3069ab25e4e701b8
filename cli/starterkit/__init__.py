"""starterkit CLI.

Command-line interface for scaffolding projects.
"""

__version__ = "0.1.0"

from cli.starterkit.cli import app, main

__all__ = ["__version__", "app", "main"]
