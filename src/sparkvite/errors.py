"""
sparkvite.errors - Exception Types
==================================

Every failure sparkvite knows how to report derives from ``SparkviteError``.
The CLI catches the base class, prints the message, and exits with status 1,
except for ``OverwriteDeclined`` which ends the run cleanly with status 0.
"""

from __future__ import annotations

from pathlib import Path


class SparkviteError(Exception):
    """Base exception for sparkvite."""
    pass


class InvalidInput(SparkviteError, ValueError):
    """A user-supplied answer is outside its allowed domain."""
    pass


class CommandExecutionFailure(SparkviteError):
    """A planned external command exited with a non-zero status."""

    def __init__(self, command: str, returncode: int):
        super().__init__(f"Command failed with exit code {returncode}: {command}")
        self.command = command
        self.returncode = returncode


class FileSystemFailure(SparkviteError):
    """Reading, writing, or creating a path in the project failed."""

    def __init__(self, message: str, path: Path):
        super().__init__(f"{message}: {path}")
        self.path = path


class OverwriteDeclined(SparkviteError):
    """The user chose to keep an existing directory. Not an error."""

    def __init__(self, path: Path):
        super().__init__(f"Directory '{path}' already exists; nothing was changed.")
        self.path = path
