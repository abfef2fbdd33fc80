"""
sparkvite - Interactive Vite + React Project Scaffolder
=======================================================

A CLI tool that asks a handful of questions and then creates a ready-to-run
Vite + React project with Tailwind CSS, path aliases, and optional routing,
state management, testing, linting, PWA support, and shadcn/ui.

Quick Start
-----------
```bash
# Install sparkvite
pip install sparkvite

# Answer the questions and create a project
sparkvite

# Or skip the questions with an answers file
sparkvite --config answers.toml
```

Example
-------
>>> from sparkvite import Answers, plan_commands
>>> answers = Answers(project_name="demo")
>>> [c.label for c in plan_commands(answers)]
['Creating Vite app', 'Installing dependencies', 'Installing Tailwind CSS']

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface and questionary prompts
- ``models``: Pydantic ``Answers`` model and choice enums
- ``commands``: Command planner (answers -> shell commands)
- ``files``: File planner (answers -> files, directories and JSON patches)
- ``generator``: Orchestrator that runs the plan and rolls back on failure
- ``errors``: Exception types shared by all modules
- ``templates``: Jinja2 templates for generated source files

License
-------
MIT License.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from sparkvite.commands import CommandSpec, CommandStage, plan_commands
from sparkvite.errors import (
    CommandExecutionFailure,
    FileSystemFailure,
    InvalidInput,
    OverwriteDeclined,
    SparkviteError,
)
from sparkvite.files import Directory, JsonPatch, TextFile, plan_files
from sparkvite.generator import create_project
from sparkvite.models import (
    Answers,
    Language,
    PackageManager,
    StateManagement,
    UiLibrary,
)


__all__ = [
    "Answers",
    "CommandExecutionFailure",
    "CommandSpec",
    "CommandStage",
    "Directory",
    "FileSystemFailure",
    "InvalidInput",
    "JsonPatch",
    "Language",
    "OverwriteDeclined",
    "PackageManager",
    "SparkviteError",
    "StateManagement",
    "TextFile",
    "UiLibrary",
    "__version__",
    "create_project",
    "plan_commands",
    "plan_files",
]
