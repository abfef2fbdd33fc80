"""
sparkvite.cli - Command Line Interface
======================================

This module provides the command-line interface for sparkvite using Typer
for argument parsing and questionary for the interactive questions.

Architecture
------------
    sparkvite (single command)
    ├── questions      name → package manager → language → UI library →
    │                  state management → testing → linting → git →
    │                  router → PWA
    ├── overwrite      confirm before deleting an existing directory
    └── generation     generator.create_project

Every option is optional; running ``sparkvite`` with no arguments asks all
the questions. ``--config`` reads the answers from a TOML file instead.

Usage Examples
--------------
Interactive mode:
    $ sparkvite

From an answers file:
    $ sparkvite --config answers.toml

Preview the plan without running anything:
    $ sparkvite --config answers.toml --dry-run

See Also
--------
- generator.py: Runs the command and file plans
- models.py: Answer schema
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Annotated

import questionary
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sparkvite import __version__
from sparkvite.commands import plan_commands
from sparkvite.errors import FileSystemFailure, InvalidInput, OverwriteDeclined
from sparkvite.files import Directory, JsonPatch, plan_files
from sparkvite.generator import create_project
from sparkvite.models import (
    Answers,
    Language,
    PackageManager,
    StateManagement,
    UiLibrary,
    validate_project_name,
)


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="sparkvite",
    help="Scaffold a Vite + React project with Tailwind CSS and the extras you pick.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]sparkvite[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Vite + React project scaffolder[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def _check_name(value: str) -> bool | str:
    """questionary validator: True when valid, otherwise the error message."""
    try:
        validate_project_name(value)
    except InvalidInput as e:
        return str(e)
    return True


def _ask(question: questionary.Question):
    """Ask a question, turning Ctrl-C (``None``) into an abort."""
    result = question.ask()
    if result is None:
        raise typer.Abort()
    return result


def prompt_project_name() -> str:
    """Ask for the project name, re-prompting until it is valid."""
    name = _ask(questionary.text("Project name:", validate=_check_name))
    return validate_project_name(name)


def prompt_package_manager() -> PackageManager:
    choices = [questionary.Choice(title=pm.value, value=pm) for pm in PackageManager]
    return _ask(questionary.select(
        "Package manager?",
        choices=choices,
        default=PackageManager.NPM,
    ))


def prompt_language() -> Language:
    choices = [questionary.Choice(title=lang.description, value=lang) for lang in Language]
    return _ask(questionary.select(
        "Language?",
        choices=choices,
        default=Language.TYPESCRIPT,
    ))


def prompt_ui_library() -> UiLibrary:
    choices = [questionary.Choice(title=ui.description, value=ui) for ui in UiLibrary]
    return _ask(questionary.select(
        "UI component library?",
        choices=choices,
        default=UiLibrary.NONE,
    ))


def prompt_state_management() -> StateManagement:
    choices = [
        questionary.Choice(title=sm.description, value=sm) for sm in StateManagement
    ]
    return _ask(questionary.select(
        "State management?",
        choices=choices,
        default=StateManagement.NONE,
    ))


def prompt_yes_no(message: str, default: bool) -> bool:
    return _ask(questionary.confirm(message, default=default))


def collect_answers() -> Answers:
    """
    Ask every question once, in order, and build the answers.

    Returns
    -------
    Answers
        Validated answers.
    """
    project_name = prompt_project_name()
    package_manager = prompt_package_manager()
    language = prompt_language()
    ui_library = prompt_ui_library()
    state_management = prompt_state_management()
    testing = prompt_yes_no("Set up testing (Vitest)?", default=False)
    linting = prompt_yes_no("Set up linting and formatting (ESLint + Prettier)?", default=True)
    git = prompt_yes_no("Initialize a git repository?", default=True)
    router = prompt_yes_no("Set up React Router?", default=True)
    pwa = prompt_yes_no("Add PWA support?", default=False)

    return Answers(
        project_name=project_name,
        package_manager=package_manager,
        language=language,
        ui_library=ui_library,
        state_management=state_management,
        testing=testing,
        linting=linting,
        git=git,
        router=router,
        pwa=pwa,
    )


def prompt_overwrite(project_dir: Path) -> bool:
    """Ask whether an existing directory may be deleted."""
    return _ask(questionary.confirm(
        f"Delete '{project_dir}' and everything in it?",
        default=False,
    ))


def ensure_target_available(project_dir: Path) -> None:
    """
    Make sure the project directory does not exist before generation.

    If it exists the user is warned and asked to confirm deletion.

    Raises
    ------
    OverwriteDeclined
        If the user keeps the existing directory.
    FileSystemFailure
        If the existing directory cannot be deleted.
    """
    if not project_dir.exists():
        return

    console.print()
    console.print(Panel(
        f"[bold red]Directory '{project_dir.name}' already exists.[/]\n\n"
        "Continuing will permanently delete it and all of its contents.\n"
        "This cannot be undone.",
        title="[bold red]Warning[/]",
        border_style="red",
    ))

    if not prompt_overwrite(project_dir):
        raise OverwriteDeclined(project_dir)

    try:
        shutil.rmtree(project_dir)
    except OSError as e:
        raise FileSystemFailure(f"Could not delete existing directory ({e})", project_dir) from e

    console.print(f"[dim]Removed {project_dir}[/]")


# =============================================================================
# Output Helpers
# =============================================================================

def show_answers(answers: Answers) -> None:
    """Print a summary table of the answers."""
    table = Table(title="Project Configuration", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", answers.project_name)
    table.add_row("Package manager", answers.package_manager.value)
    table.add_row("Language", answers.language.description)
    table.add_row("UI library", answers.ui_library.value)
    table.add_row("State management", answers.state_management.value)
    table.add_row("Features", ", ".join(answers.enabled_features) or "none")

    console.print(table)


def show_plan(answers: Answers) -> None:
    """Print the command plan and the file plan without running them."""
    commands_table = Table(title="Commands", show_header=True)
    commands_table.add_column("#", style="dim", width=3)
    commands_table.add_column("Step", style="cyan")
    commands_table.add_column("Command", style="green")
    commands_table.add_column("Stage", style="dim")

    for i, spec in enumerate(plan_commands(answers), 1):
        commands_table.add_row(str(i), spec.label, spec.command, spec.stage.value)

    files_table = Table(title="Files", show_header=True)
    files_table.add_column("Path", style="cyan")
    files_table.add_column("Action", style="dim")

    for artifact in plan_files(answers):
        if isinstance(artifact, Directory):
            action = "mkdir"
        elif isinstance(artifact, JsonPatch):
            action = f"merge ({artifact.if_missing.value} if missing)"
        else:
            action = "write"
        files_table.add_row(str(artifact.path), action)

    console.print(commands_table)
    console.print()
    console.print(files_table)


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def create(
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML file with answers; skips the questions",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show the commands and files that would be created, then exit",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print errors and prompts",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Create a new Vite + React project.

    Asks a few questions, then runs create-vite, installs Tailwind CSS and
    the extras you chose, and writes starter files:

    - [cyan]Tailwind CSS[/] and an [cyan]@/[/] path alias, always
    - [cyan]React Router[/], [cyan]shadcn/ui[/], [cyan]Context / Zustand / Redux Toolkit[/]
    - [cyan]Vitest[/], [cyan]ESLint + Prettier[/], [cyan]PWA[/], [cyan]git[/]

    [bold]Examples:[/]

        sparkvite

        sparkvite --config answers.toml --output ~/projects
    """
    output_dir = (output_dir or Path.cwd()).resolve()

    if not quiet:
        console.print(Panel.fit("[bold]Welcome to sparkvite![/]", border_style="magenta"))

    if config is not None:
        try:
            answers = Answers.from_toml(config)
        except (OSError, ValueError) as e:
            rprint(f"[red]Error:[/] Could not load answers from {config}: {escape(str(e))}")
            raise typer.Exit(1)
    else:
        answers = collect_answers()

    if not quiet:
        console.print()
        show_answers(answers)

    if dry_run:
        console.print()
        show_plan(answers)
        return

    try:
        ensure_target_available(answers.project_dir(output_dir))
        create_project(answers, output_dir=output_dir, verbose=not quiet)

    except OverwriteDeclined as e:
        rprint(f"[yellow]Aborted:[/] {escape(str(e))}")
        raise typer.Exit(0)
    except typer.Abort:
        raise
    except Exception as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        # Rollback problems travel as notes on the original error
        for note in getattr(e, "__notes__", []):
            rprint(f"[yellow]Warning:[/] {escape(note)}")
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
