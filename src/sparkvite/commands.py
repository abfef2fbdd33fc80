"""
sparkvite.commands - Command Planner
====================================

Turns an ``Answers`` object into the ordered list of shell commands that
build the project: the create-vite scaffold, dependency installs, the shadcn
CLI, and git. Planning has no side effects; ``generator.py`` runs the plan.

Ordering
--------
    install stage (before files are written)
    ├── scaffold          create-vite with the react / react-ts template
    ├── base install      plus @types/node for TypeScript projects
    ├── tailwind          always
    ├── router            react-router-dom
    ├── component kit     shadcn runtime dependencies
    ├── state library     zustand or Redux Toolkit (+ types)
    ├── testing           vitest + Testing Library (dev)
    ├── linting           eslint + prettier (dev)
    └── pwa               vite-plugin-pwa (dev)
    finalize stage (after files are written)
    ├── shadcn init / add button
    └── git init / initial commit

Packages of one category are installed in a single command. Every argument
is shell-quoted with ``shlex.join``.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sparkvite.models import Answers, Language, StateManagement, UiLibrary


# =============================================================================
# Package Sets
# =============================================================================

TAILWIND_PACKAGES = ["tailwindcss", "@tailwindcss/vite"]
ROUTER_PACKAGES = ["react-router-dom"]
COMPONENT_KIT_PACKAGES = [
    "class-variance-authority",
    "clsx",
    "tailwind-merge",
    "lucide-react",
]
TEST_PACKAGES = [
    "vitest",
    "@testing-library/react",
    "@testing-library/jest-dom",
    "jsdom",
]
LINT_PACKAGES = [
    "eslint",
    "@eslint/js",
    "globals",
    "eslint-plugin-react-hooks",
    "eslint-plugin-react-refresh",
    "prettier",
    "eslint-config-prettier",
]
TYPED_LINT_PACKAGES = ["typescript-eslint"]
PWA_PACKAGES = ["vite-plugin-pwa"]
NODE_TYPES_PACKAGES = ["@types/node"]

# state option -> (runtime packages, extra dev packages for TypeScript)
STATE_PACKAGES: dict[StateManagement, tuple[list[str], list[str]]] = {
    StateManagement.NONE: ([], []),
    StateManagement.CONTEXT: ([], []),
    StateManagement.ZUSTAND: (["zustand"], []),
    StateManagement.REDUX: (["@reduxjs/toolkit", "react-redux"], ["@types/react-redux"]),
}

SHADCN_PACKAGE = "shadcn@latest"
SHADCN_COMPONENTS = ["button"]

INITIAL_COMMIT_MESSAGE = "Initial commit from sparkvite"


# =============================================================================
# Command Data Classes
# =============================================================================

class CommandStage(str, Enum):
    """
    When a command runs relative to the file writes.

    INSTALL commands run before any file is written. FINALIZE commands run
    after, because the shadcn CLI reads the generated alias config and
    stylesheet and git has to commit the final tree.
    """

    INSTALL = "install"
    FINALIZE = "finalize"


@dataclass(frozen=True)
class CommandSpec:
    """
    A single shell command in the build plan.

    Attributes
    ----------
    command : str
        Shell command line, already quoted.

    cwd : Path
        Working directory relative to the output directory.

    label : str
        Short human-readable description shown before the command runs.

    stage : CommandStage
        Whether the command runs before or after files are written.
    """

    command: str
    cwd: Path
    label: str
    stage: CommandStage = CommandStage.INSTALL


# =============================================================================
# Command Builders
# =============================================================================

def install_command(answers: Answers, packages: list[str], *, dev: bool = False) -> str:
    """
    Build the install command for a batch of packages.

    Examples
    --------
    >>> install_command(Answers(project_name="x"), ["zustand"])
    'npm install zustand'
    >>> install_command(
    ...     Answers(project_name="x", package_manager="bun"), ["vitest"], dev=True
    ... )
    'bun add -d vitest'
    """
    pm = answers.package_manager
    args = [pm.value, pm.install_verb]
    if dev:
        args.append(pm.dev_flag)
    args.extend(packages)
    return shlex.join(args)


def base_install_command(answers: Answers) -> str:
    """
    Install the scaffold's own dependencies.

    TypeScript projects add ``@types/node`` as a dev dependency in the same
    step; adding a package installs everything else in the manifest too.
    """
    if answers.is_typed:
        return install_command(answers, NODE_TYPES_PACKAGES, dev=True)
    return shlex.join([answers.package_manager.value, "install"])


def exec_command(answers: Answers, *args: str) -> str:
    """Run a package binary through the manager's one-off runner."""
    return shlex.join([*answers.package_manager.exec_prefix, *args])


# =============================================================================
# Planner
# =============================================================================

def plan_commands(answers: Answers) -> list[CommandSpec]:
    """
    Plan every external command needed to build the project.

    Parameters
    ----------
    answers : Answers
        Resolved user configuration.

    Returns
    -------
    list[CommandSpec]
        Commands in execution order. Install-stage commands always precede
        finalize-stage commands.

    Examples
    --------
    >>> plan = plan_commands(Answers(project_name="demo", language="javascript"))
    >>> [c.command for c in plan][1:]
    ['npm install', 'npm install tailwindcss @tailwindcss/vite']
    """
    project = Path(answers.project_name)
    commands: list[CommandSpec] = []

    def add(command: str, label: str, stage: CommandStage = CommandStage.INSTALL) -> None:
        commands.append(CommandSpec(command=command, cwd=project, label=label, stage=stage))

    # Scaffold runs from the output directory and creates the project dir
    commands.append(CommandSpec(
        command=shlex.join(answers.package_manager.create_args(
            answers.project_name, answers.language.template,
        )),
        cwd=Path("."),
        label="Creating Vite app",
    ))

    add(base_install_command(answers), "Installing dependencies")
    add(install_command(answers, TAILWIND_PACKAGES), "Installing Tailwind CSS")

    if answers.router:
        add(install_command(answers, ROUTER_PACKAGES), "Installing React Router")

    if answers.ui_library is UiLibrary.SHADCN:
        add(install_command(answers, COMPONENT_KIT_PACKAGES), "Installing shadcn/ui dependencies")

    runtime, typed_extras = STATE_PACKAGES[answers.state_management]
    if runtime:
        label = f"Installing {answers.state_management.description}"
        add(install_command(answers, runtime), label)
    if typed_extras and answers.is_typed:
        add(install_command(answers, typed_extras, dev=True), "Installing state type declarations")

    if answers.testing:
        add(install_command(answers, TEST_PACKAGES, dev=True), "Installing Vitest")

    if answers.linting:
        packages = list(LINT_PACKAGES)
        if answers.language is Language.TYPESCRIPT:
            packages.extend(TYPED_LINT_PACKAGES)
        add(install_command(answers, packages, dev=True), "Installing ESLint and Prettier")

    if answers.pwa:
        add(install_command(answers, PWA_PACKAGES, dev=True), "Installing PWA plugin")

    if answers.ui_library is UiLibrary.SHADCN:
        add(
            exec_command(answers, SHADCN_PACKAGE, "init", "-y"),
            "Initializing shadcn/ui",
            CommandStage.FINALIZE,
        )
        add(
            exec_command(answers, SHADCN_PACKAGE, "add", *SHADCN_COMPONENTS, "-y"),
            "Adding shadcn/ui Button",
            CommandStage.FINALIZE,
        )

    if answers.git:
        add(shlex.join(["git", "init"]), "Initializing git repository", CommandStage.FINALIZE)
        add(
            shlex.join(["git", "add", "-A"])
            + " && "
            + shlex.join(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE]),
            "Creating initial commit",
            CommandStage.FINALIZE,
        )

    return commands
