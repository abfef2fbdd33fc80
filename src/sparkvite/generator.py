"""
sparkvite.generator - Project Generation Pipeline
=================================================

This module runs the plans produced by ``commands.py`` and ``files.py``.

Architecture
------------
The generator follows a pipeline pattern:

    1. Plan commands and file artifacts (pure)
    2. Run install-stage commands (create-vite, dependency installs)
    3. Apply file artifacts (directories, files, JSON patches)
    4. Run finalize-stage commands (shadcn CLI, git)

Every step is sequential and blocking. Commands inherit the terminal's
standard streams, so the output of npm, create-vite, and friends shows up
directly. There are no timeouts: a hung upstream tool hangs the run.

Failure Handling
----------------
Any failure is fatal. If the project directory exists when a step fails it
is removed before the error propagates, so a failed run leaves nothing
behind. A failed removal is reported as a warning and never replaces the
original error.

Usage Example
-------------
>>> from sparkvite.generator import create_project
>>> from sparkvite.models import Answers
>>> result = create_project(Answers(project_name="demo"), output_dir=Path.cwd())
>>> result.success
True
"""

from __future__ import annotations

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from sparkvite.commands import CommandSpec, CommandStage, plan_commands
from sparkvite.errors import CommandExecutionFailure, FileSystemFailure
from sparkvite.files import (
    Directory,
    FileArtifact,
    JsonPatch,
    MissingTarget,
    TextFile,
    deep_merge,
    dumps_json,
    loads_jsonc,
    plan_files,
)
from sparkvite.models import Answers


# Console for rich output
console = Console()


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class GenerationResult:
    """
    Result of a project generation run.

    Attributes
    ----------
    success : bool
        Whether the project was created successfully.

    project_path : Path
        Path to the project directory.

    commands_run : list[str]
        Commands that exited successfully, in order.

    files_written : list[Path]
        Files written or patched, relative to the project directory.

    warnings : list[str]
        Non-fatal problems (currently only rollback failures).
    """

    success: bool
    project_path: Path
    commands_run: list[str] = field(default_factory=list)
    files_written: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# =============================================================================
# Command Execution
# =============================================================================

def run_command(spec: CommandSpec, output_dir: Path, *, verbose: bool = True) -> None:
    """
    Run one planned command and wait for it to finish.

    Parameters
    ----------
    spec : CommandSpec
        Command to run. ``spec.cwd`` is resolved against ``output_dir``.

    output_dir : Path
        Directory the project is created in.

    verbose : bool, default=True
        Print the label and the command line before running it.

    Raises
    ------
    CommandExecutionFailure
        If the command exits with a non-zero status.
    FileSystemFailure
        If the command cannot be started in its working directory.
    """
    if verbose:
        console.print()
        console.print(f"[bold]{spec.label}...[/]")
        console.print(f"  [dim]$ {spec.command}[/]")

    cwd = output_dir / spec.cwd
    try:
        completed = subprocess.run(
            spec.command,
            shell=True,
            cwd=cwd,
            check=False,
        )
    except OSError as e:
        # Raised before the command starts, e.g. a missing working directory
        raise FileSystemFailure(e.strerror or str(e), cwd) from e
    if completed.returncode != 0:
        raise CommandExecutionFailure(spec.command, completed.returncode)


# =============================================================================
# Artifact Application
# =============================================================================

def apply_json_patch(project_dir: Path, patch: JsonPatch) -> bool:
    """
    Merge ``patch.updates`` into an existing JSON file.

    Returns
    -------
    bool
        True if the file was written, False if it was missing and the
        patch allows skipping it.

    Raises
    ------
    FileSystemFailure
        If the file is missing and the patch requires it, or if the
        existing content is not valid JSON.
    """
    path = project_dir / patch.path

    if not path.exists():
        if patch.if_missing is MissingTarget.SKIP:
            return False
        if patch.if_missing is MissingTarget.ERROR:
            raise FileSystemFailure("Cannot patch missing file", patch.path)
        current: dict = {}
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FileSystemFailure(f"Not valid UTF-8 ({e.reason})", patch.path) from e
        try:
            current = loads_jsonc(text) if patch.jsonc else json.loads(text)
        except json.JSONDecodeError as e:
            raise FileSystemFailure(f"Invalid JSON ({e.msg})", patch.path) from e
        if not isinstance(current, dict):
            raise FileSystemFailure("Expected a JSON object", patch.path)

    path.write_text(dumps_json(deep_merge(current, patch.updates)), encoding="utf-8")
    return True


def apply_artifact(project_dir: Path, artifact: FileArtifact) -> bool:
    """
    Apply a single planned artifact inside ``project_dir``.

    Returns
    -------
    bool
        True if a file was written or patched.

    Raises
    ------
    FileSystemFailure
        On any read, write, or mkdir error.
    """
    try:
        if isinstance(artifact, Directory):
            (project_dir / artifact.path).mkdir(parents=True, exist_ok=True)
            return False

        if isinstance(artifact, TextFile):
            full_path = project_dir / artifact.path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(artifact.content, encoding="utf-8")
            return True

        return apply_json_patch(project_dir, artifact)

    except OSError as e:
        raise FileSystemFailure(e.strerror or str(e), artifact.path) from e


def apply_artifacts(
    project_dir: Path,
    artifacts: list[FileArtifact],
    *,
    verbose: bool = True,
) -> list[Path]:
    """
    Apply every artifact in order.

    Returns
    -------
    list[Path]
        Paths (relative to ``project_dir``) of the files written or patched.
    """
    written: list[Path] = []

    for artifact in artifacts:
        if apply_artifact(project_dir, artifact):
            written.append(artifact.path)
            if verbose:
                action = "Patched" if isinstance(artifact, JsonPatch) else "Created"
                console.print(f"  {action} {artifact.path}")
        elif verbose and isinstance(artifact, JsonPatch):
            console.print(f"  [dim]Skipped {artifact.path} (not present)[/]")

    return written


# =============================================================================
# Cleanup
# =============================================================================

def remove_project_dir(project_dir: Path) -> str | None:
    """
    Best-effort removal of a partially created project.

    Returns
    -------
    str | None
        A warning message if the directory could not be removed.
    """
    if not project_dir.exists():
        return None
    try:
        shutil.rmtree(project_dir)
    except OSError as e:
        return f"Could not remove {project_dir}: {e}"
    return None


# =============================================================================
# Main Generation Function
# =============================================================================

def create_project(
    answers: Answers,
    *,
    output_dir: Path,
    verbose: bool = True,
) -> GenerationResult:
    """
    Create a new Vite + React project from the given answers.

    This is the main entry point for project generation. It runs the
    command plan and the file plan in order and removes the project
    directory if anything fails.

    Parameters
    ----------
    answers : Answers
        Resolved configuration.

    output_dir : Path
        Directory in which the project directory is created. The project
        directory must not exist yet.

    verbose : bool, default=True
        If True, display progress information to the console.

    Returns
    -------
    GenerationResult
        Result object with the commands run and files written.

    Raises
    ------
    CommandExecutionFailure
        If any external command exits with a non-zero status.
    FileSystemFailure
        If a file or directory cannot be read or written, or if the
        project directory already exists.
    """
    project_dir = answers.project_dir(output_dir)
    result = GenerationResult(success=False, project_path=project_dir)

    # Rollback deletes the project directory, so never start inside one
    if project_dir.exists():
        raise FileSystemFailure("Project directory already exists", project_dir)

    commands = plan_commands(answers)
    artifacts = plan_files(answers)

    try:
        if verbose:
            console.print()
            console.print(
                Panel(
                    f"[bold blue]Creating project:[/] [green]{answers.project_name}[/]\n"
                    f"[dim]{answers.language.description} | "
                    f"{answers.package_manager.value} | "
                    f"State: {answers.state_management.value} | "
                    f"UI: {answers.ui_library.value}[/]",
                    title="[bold]sparkvite[/]",
                    border_style="blue",
                )
            )

        # Step 1: Scaffold and install
        for spec in commands:
            if spec.stage is CommandStage.INSTALL:
                run_command(spec, output_dir, verbose=verbose)
                result.commands_run.append(spec.command)

        # Step 2: Write and patch files
        if verbose:
            console.print()
            console.print("[bold]Writing project files...[/]")

        result.files_written.extend(apply_artifacts(project_dir, artifacts, verbose=verbose))

        # Step 3: Component kit and git
        for spec in commands:
            if spec.stage is CommandStage.FINALIZE:
                run_command(spec, output_dir, verbose=verbose)
                result.commands_run.append(spec.command)

        result.success = True

        if verbose:
            run = answers.package_manager.run_prefix
            console.print()
            console.print(
                Panel(
                    f"[bold green]Project created successfully![/]\n\n"
                    f"[dim]Location:[/] {project_dir}\n\n"
                    f"[bold]Next steps:[/]\n"
                    f"  cd {answers.project_name}\n"
                    f"  {run} dev",
                    title="[bold green]Success[/]",
                    border_style="green",
                )
            )

    except Exception as e:
        # Clean up partial project; the caller reports the error and its notes
        created = project_dir.exists()
        warning = remove_project_dir(project_dir)

        if warning:
            result.warnings.append(warning)
            e.add_note(warning)
        elif created and verbose:
            console.print("\n[dim]Partial project directory was removed.[/]")

        raise

    return result
