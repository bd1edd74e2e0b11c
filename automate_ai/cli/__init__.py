"""CLI application setup using Typer.

Provides the command-line interface for automate-ai operations.
"""

from automate_ai.cli.main import app

__all__ = ["app"]
