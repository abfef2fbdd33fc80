"""
sparkvite.models - Pydantic Models for Scaffold Answers
=======================================================

This module defines the answer schema that drives every planner. The
interactive prompts, a TOML answers file, and the Python API all end up
building the same frozen ``Answers`` object, so the planners never have to
care where the configuration came from.

Architecture Notes
------------------
    Answers (frozen)
    ├── project_name: str
    ├── package_manager: PackageManager (npm, yarn, pnpm, bun)
    ├── language: Language (javascript, typescript)
    ├── ui_library: UiLibrary (none, shadcn)
    ├── state_management: StateManagement (none, context, zustand, redux)
    └── testing / linting / git / router / pwa: bool

Each enum carries the small lookup tables the planners need (install verb,
dev flag, file extensions, ...). The tables are dicts keyed on every member,
so adding a member without extending a table fails loudly on first use.

Usage Example
-------------
>>> from sparkvite.models import Answers, PackageManager
>>> answers = Answers(project_name="demo", package_manager=PackageManager.BUN)
>>> answers.package_manager.dev_flag
'-d'
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sparkvite.errors import InvalidInput


PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# =============================================================================
# Enumerations
# =============================================================================

class PackageManager(str, Enum):
    """
    Supported JavaScript package managers.

    The managers differ in how they add packages (``npm install`` versus
    ``yarn/pnpm/bun add``), in the dev-dependency flag (bun uses ``-d``),
    and in how scripts and one-off binaries are invoked.

    Examples
    --------
    >>> PackageManager.NPM.install_verb
    'install'
    >>> PackageManager.PNPM.run_prefix
    'pnpm'
    """

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"

    @property
    def install_verb(self) -> str:
        """Sub-command that adds packages to the manifest."""
        verbs = {
            PackageManager.NPM: "install",
            PackageManager.YARN: "add",
            PackageManager.PNPM: "add",
            PackageManager.BUN: "add",
        }
        return verbs[self]

    @property
    def dev_flag(self) -> str:
        """Flag that marks an install as a dev dependency."""
        flags = {
            PackageManager.NPM: "-D",
            PackageManager.YARN: "-D",
            PackageManager.PNPM: "-D",
            PackageManager.BUN: "-d",
        }
        return flags[self]

    @property
    def run_prefix(self) -> str:
        """Prefix used to run a package.json script (``npm run dev``)."""
        prefixes = {
            PackageManager.NPM: "npm run",
            PackageManager.YARN: "yarn",
            PackageManager.PNPM: "pnpm",
            PackageManager.BUN: "bun run",
        }
        return prefixes[self]

    @property
    def exec_prefix(self) -> list[str]:
        """
        Argv prefix used to run a package binary without installing it.

        Yarn Classic has no ``dlx``; plain ``yarn <package>`` works on Yarn 1
        and Yarn 2+.
        """
        prefixes = {
            PackageManager.NPM: ["npx"],
            PackageManager.YARN: ["yarn"],
            PackageManager.PNPM: ["pnpm", "dlx"],
            PackageManager.BUN: ["bunx"],
        }
        return list(prefixes[self])

    def create_args(self, project_name: str, template: str) -> list[str]:
        """
        Argv for scaffolding a Vite project with this manager.

        npm needs ``--`` before the template flag so that the arguments
        reach create-vite instead of npm itself.

        Parameters
        ----------
        project_name : str
            Directory name passed to create-vite.

        template : str
            create-vite template name (``react`` or ``react-ts``).

        Returns
        -------
        list[str]
            Arguments ready for ``shlex.join``.
        """
        if self is PackageManager.NPM:
            return [
                "npm", "create", "vite@latest", project_name,
                "--", "--template", template, "--no-interactive",
            ]
        return [
            self.value, "create", "vite", project_name,
            "--template", template, "--no-interactive",
        ]


class Language(str, Enum):
    """
    Source language of the generated project.

    Attributes
    ----------
    JAVASCRIPT : str
        Plain JavaScript with JSX. Path aliases go into ``jsconfig.json``.

    TYPESCRIPT : str
        TypeScript with TSX. Path aliases are merged into the generated
        ``tsconfig.json`` and ``tsconfig.app.json``.
    """

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @property
    def is_typed(self) -> bool:
        return self is Language.TYPESCRIPT

    @property
    def template(self) -> str:
        """create-vite template name."""
        templates = {
            Language.JAVASCRIPT: "react",
            Language.TYPESCRIPT: "react-ts",
        }
        return templates[self]

    @property
    def component_ext(self) -> str:
        """Extension for files containing JSX."""
        extensions = {
            Language.JAVASCRIPT: "jsx",
            Language.TYPESCRIPT: "tsx",
        }
        return extensions[self]

    @property
    def script_ext(self) -> str:
        """Extension for plain modules and the Vite config."""
        extensions = {
            Language.JAVASCRIPT: "js",
            Language.TYPESCRIPT: "ts",
        }
        return extensions[self]

    @property
    def description(self) -> str:
        descriptions = {
            Language.JAVASCRIPT: "JavaScript",
            Language.TYPESCRIPT: "TypeScript",
        }
        return descriptions[self]


class UiLibrary(str, Enum):
    """Optional pre-built component kit."""

    NONE = "none"
    SHADCN = "shadcn"

    @property
    def description(self) -> str:
        descriptions = {
            UiLibrary.NONE: "No component library",
            UiLibrary.SHADCN: "shadcn/ui (adds a Button component)",
        }
        return descriptions[self]


class StateManagement(str, Enum):
    """
    State management approach for the generated app.

    Attributes
    ----------
    NONE : str
        Component state only.

    CONTEXT : str
        React Context with a provider component and an accessor hook.

    ZUSTAND : str
        Lightweight external store; a single hook-store module.

    REDUX : str
        Redux Toolkit; a slice module plus a root store module.
    """

    NONE = "none"
    CONTEXT = "context"
    ZUSTAND = "zustand"
    REDUX = "redux"

    @property
    def description(self) -> str:
        descriptions = {
            StateManagement.NONE: "None",
            StateManagement.CONTEXT: "React Context",
            StateManagement.ZUSTAND: "Zustand (lightweight store)",
            StateManagement.REDUX: "Redux Toolkit (full store)",
        }
        return descriptions[self]

    @property
    def uses_store_dir(self) -> bool:
        """Whether ``src/stores`` is part of the folder skeleton."""
        return self is not StateManagement.NONE


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_project_name(name: str) -> str:
    """
    Check that a project name is safe to use as a directory and npm name.

    Parameters
    ----------
    name : str
        Raw name as typed by the user.

    Returns
    -------
    str
        The name with surrounding whitespace removed.

    Raises
    ------
    InvalidInput
        If the name is empty or contains characters other than letters,
        digits, hyphens, and underscores.
    """
    name = name.strip()
    if not name:
        raise InvalidInput("Project name cannot be empty.")
    if not PROJECT_NAME_PATTERN.match(name):
        raise InvalidInput(
            f"Invalid project name '{name}'. Use only letters, numbers, "
            "hyphens, and underscores."
        )
    return name


# =============================================================================
# Main Answers Model
# =============================================================================

class Answers(BaseModel):
    """
    The fully resolved configuration for one scaffolding run.

    Answers are frozen once built; the command and file planners are pure
    functions of this object.

    Attributes
    ----------
    project_name : str
        Name of the directory to create and of the npm package.

    package_manager : PackageManager
        Tool used for every install and script invocation.

    language : Language
        JavaScript or TypeScript.

    ui_library : UiLibrary
        Optional component kit.

    state_management : StateManagement
        Optional state management library.

    testing, linting, git, router, pwa : bool
        Feature toggles.

    Examples
    --------
    >>> answers = Answers(project_name="demo", router=True)
    >>> answers.language.component_ext
    'tsx'
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(description="Project directory name")
    package_manager: PackageManager = Field(
        default=PackageManager.NPM,
        description="Package manager used for installs and scripts",
    )
    language: Language = Field(
        default=Language.TYPESCRIPT,
        description="Source language",
    )
    ui_library: UiLibrary = Field(
        default=UiLibrary.NONE,
        description="Optional component kit",
    )
    state_management: StateManagement = Field(
        default=StateManagement.NONE,
        description="Optional state management library",
    )
    testing: bool = Field(default=False, description="Set up Vitest")
    linting: bool = Field(default=False, description="Set up ESLint and Prettier")
    git: bool = Field(default=False, description="Initialize a git repository")
    router: bool = Field(default=False, description="Set up React Router")
    pwa: bool = Field(default=False, description="Add vite-plugin-pwa")

    @field_validator("project_name")
    @classmethod
    def check_project_name(cls, v: str) -> str:
        return validate_project_name(v)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_typed(self) -> bool:
        return self.language.is_typed

    def project_dir(self, output_dir: Path) -> Path:
        """Directory the project is created in."""
        return output_dir / self.project_name

    @property
    def enabled_features(self) -> list[str]:
        """Names of boolean features that are switched on."""
        return [
            name for name in ("testing", "linting", "git", "router", "pwa")
            if getattr(self, name)
        ]

    # -------------------------------------------------------------------------
    # Serialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_toml(cls, path: Path) -> Answers:
        """
        Load answers from a TOML file instead of prompting.

        The file holds the model fields at top level, with enum fields given
        by value::

            project_name = "demo"
            package_manager = "pnpm"
            language = "typescript"
            router = true

        Raises
        ------
        FileNotFoundError
            If the answers file doesn't exist.
        ValidationError
            If the file has invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        return cls(**data)
