"""
sparkvite.files - File Planner
==============================

Turns an ``Answers`` object into the list of filesystem changes that finish
the project after create-vite and the installs have run. Planning is pure:
``plan_files`` only renders strings and describes patches; ``generator.py``
applies them.

Artifact Kinds
--------------
    Directory    idempotent mkdir
    TextFile     full overwrite with rendered content
    JsonPatch    read-merge-write of a JSON file the scaffold produced

Template System
---------------
Source files are Jinja2 templates in the ``templates/`` package directory.
Each template receives ``project_name``, ``typed`` and the feature flags it
needs. Small static files (stylesheet, Prettier settings, env sample) are
built inline.

JSON With Comments
------------------
``tsconfig.app.json`` as generated by create-vite contains ``/* */`` and
``//`` comments. ``strip_json_comments`` removes them (and trailing commas)
while leaving string literals alone, so a value such as
``"https://example.com"`` is never cut in half. Comments are not written
back; patched files are plain JSON.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from sparkvite import __version__
from sparkvite.models import Answers, StateManagement, UiLibrary


# =============================================================================
# Module-Level Configuration
# =============================================================================

SOURCE_DIR = Path("src")

# Always created under src/; "stores" is added when state management is on
SKELETON_DIRS = ["components", "pages", "utils", "hooks", "context", "layouts"]
STORES_DIR = "stores"

STYLESHEET = '@import "tailwindcss";\n\n/* Add custom theme values with @theme */\n'

ENV_SAMPLE = "VITE_API_URL=http://localhost:3000\n"

PRETTIER_SETTINGS = {
    "semi": True,
    "singleQuote": False,
    "trailingComma": "all",
    "printWidth": 100,
}

# Known inconsistency: lint:fix always goes through npm, whatever manager
# the project was created with. Every manager can still run it.
LINT_SCRIPTS = {
    "lint": "eslint .",
    "lint:fix": "npm run lint -- --fix",
    "format": "prettier --write .",
}
TEST_SCRIPTS = {
    "test": "vitest",
}

ALIAS = "@/*"


# =============================================================================
# Artifact Data Classes
# =============================================================================

class MissingTarget(str, Enum):
    """What a JSON patch does when its target file does not exist."""

    ERROR = "error"
    SKIP = "skip"
    CREATE = "create"


@dataclass(frozen=True)
class Directory:
    """A directory to create (no error if it already exists)."""

    path: Path


@dataclass(frozen=True)
class TextFile:
    """A file whose whole content is written, replacing any existing file."""

    path: Path
    content: str


@dataclass(frozen=True)
class JsonPatch:
    """
    A read-merge-write update of a JSON file.

    Attributes
    ----------
    path : Path
        File to patch, relative to the project root.

    updates : dict[str, Any]
        Keys to set. Nested dicts merge into existing dicts key by key;
        any other value replaces what was there.

    if_missing : MissingTarget
        ``ERROR`` raises when the file is absent, ``SKIP`` leaves it absent,
        ``CREATE`` writes ``updates`` as a new file.

    jsonc : bool
        Accept comments and trailing commas in the existing file.
    """

    path: Path
    updates: dict[str, Any] = field(default_factory=dict)
    if_missing: MissingTarget = MissingTarget.ERROR
    jsonc: bool = False


FileArtifact = Directory | TextFile | JsonPatch


@dataclass(frozen=True)
class Wrapper:
    """A component that wraps the app in the entry file."""

    imports: tuple[str, ...]
    opening: str
    closing: str


STATE_WRAPPERS: dict[StateManagement, Wrapper | None] = {
    StateManagement.NONE: None,
    StateManagement.CONTEXT: Wrapper(
        imports=('import { AppProvider } from "./context/AppContext";',),
        opening="<AppProvider>",
        closing="</AppProvider>",
    ),
    StateManagement.ZUSTAND: Wrapper(
        imports=('import { AppStoreProvider } from "./stores/appStore";',),
        opening="<AppStoreProvider>",
        closing="</AppStoreProvider>",
    ),
    StateManagement.REDUX: Wrapper(
        imports=(
            'import { Provider } from "react-redux";',
            'import { store } from "./stores/store";',
        ),
        opening="<Provider store={store}>",
        closing="</Provider>",
    ),
}

ROUTER_WRAPPER = Wrapper(
    imports=('import { BrowserRouter } from "react-router-dom";',),
    opening="<BrowserRouter>",
    closing="</BrowserRouter>",
)


# =============================================================================
# JSON Helpers
# =============================================================================

def strip_json_comments(text: str) -> str:
    """
    Remove comments and trailing commas from JSON-with-comments text.

    String literals are copied through untouched, including escaped quotes,
    so ``//`` or ``/*`` inside a string value is preserved.

    Parameters
    ----------
    text : str
        JSONC source, e.g. a ``tsconfig.app.json`` written by create-vite.

    Returns
    -------
    str
        Text that ``json.loads`` accepts if the input was otherwise valid.

    Examples
    --------
    >>> strip_json_comments('{"a": "http://x", // note\\n "b": 1,}')
    '{"a": "http://x", \\n "b": 1}'
    """
    return _strip_trailing_commas(_strip_comments(text))


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j >= n or text[j] not in "}]":
                out.append(ch)
        else:
            out.append(ch)
        i += 1

    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas."""
    return json.loads(strip_json_comments(text))


def deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``updates`` into a copy of ``base``.

    Dicts present on both sides merge recursively; every other value in
    ``updates`` replaces the one in ``base``. Keys only in ``base`` are kept.

    Examples
    --------
    >>> deep_merge({"scripts": {"dev": "vite"}}, {"scripts": {"test": "vitest"}})
    {'scripts': {'dev': 'vite', 'test': 'vitest'}}
    """
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def dumps_json(data: Any) -> str:
    """Serialize JSON the way package managers write it."""
    return json.dumps(data, indent=2) + "\n"


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for source templates.

    Autoescaping is off because the output is JavaScript and Markdown,
    not HTML.
    """
    return Environment(
        loader=PackageLoader("sparkvite", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def compose_tree(wrappers: list[Wrapper], inner: str = "<App />", indent: int = 4) -> str:
    """
    Nest ``inner`` inside ``wrappers``, first wrapper outermost.

    Examples
    --------
    >>> print(compose_tree([ROUTER_WRAPPER], indent=0))
    <BrowserRouter>
      <App />
    </BrowserRouter>
    """
    lines = [" " * (indent + 2 * depth) + w.opening for depth, w in enumerate(wrappers)]
    lines.append(" " * (indent + 2 * len(wrappers)) + inner)
    for depth in reversed(range(len(wrappers))):
        lines.append(" " * (indent + 2 * depth) + wrappers[depth].closing)
    return "\n".join(lines)


def entry_wrappers(answers: Answers) -> list[Wrapper]:
    """Wrappers around ``<App />``, outermost first: state, then router."""
    wrappers: list[Wrapper] = []
    state = STATE_WRAPPERS[answers.state_management]
    if state is not None:
        wrappers.append(state)
    if answers.router:
        wrappers.append(ROUTER_WRAPPER)
    return wrappers


# =============================================================================
# Planner Sections
# =============================================================================

def _skeleton(answers: Answers) -> list[FileArtifact]:
    dirs = list(SKELETON_DIRS)
    if answers.state_management.uses_store_dir:
        dirs.append(STORES_DIR)
    return [Directory(SOURCE_DIR / name) for name in dirs]


def _path_aliases(answers: Answers) -> list[FileArtifact]:
    if answers.is_typed:
        return [
            JsonPatch(
                Path("tsconfig.json"),
                {"compilerOptions": {"baseUrl": "./src", "paths": {ALIAS: ["./*"]}}},
                if_missing=MissingTarget.ERROR,
                jsonc=True,
            ),
            JsonPatch(
                Path("tsconfig.app.json"),
                {"compilerOptions": {"baseUrl": ".", "paths": {ALIAS: ["./src/*"]}}},
                if_missing=MissingTarget.SKIP,
                jsonc=True,
            ),
        ]
    jsconfig = {"compilerOptions": {"baseUrl": "./src", "paths": {ALIAS: ["./*"]}}}
    return [TextFile(Path("jsconfig.json"), dumps_json(jsconfig))]


def _state_modules(answers: Answers, env: Environment, context: dict[str, Any]) -> list[FileArtifact]:
    lang = answers.language
    state = answers.state_management
    modules = {
        StateManagement.NONE: [],
        StateManagement.CONTEXT: [
            ("AppContext.j2", SOURCE_DIR / "context" / f"AppContext.{lang.component_ext}"),
        ],
        StateManagement.ZUSTAND: [
            ("appStore.j2", SOURCE_DIR / STORES_DIR / f"appStore.{lang.component_ext}"),
        ],
        StateManagement.REDUX: [
            ("counterSlice.j2", SOURCE_DIR / STORES_DIR / f"counterSlice.{lang.script_ext}"),
            ("store.j2", SOURCE_DIR / STORES_DIR / f"store.{lang.script_ext}"),
        ],
    }
    return [
        TextFile(path, env.get_template(name).render(**context))
        for name, path in modules[state]
    ]


def _manifest_scripts(answers: Answers) -> dict[str, str]:
    scripts: dict[str, str] = {}
    if answers.linting:
        scripts.update(LINT_SCRIPTS)
    if answers.testing:
        scripts.update(TEST_SCRIPTS)
    return scripts


# =============================================================================
# Planner
# =============================================================================

def plan_files(answers: Answers) -> list[FileArtifact]:
    """
    Plan every directory, file, and JSON patch for the project.

    Parameters
    ----------
    answers : Answers
        Resolved user configuration.

    Returns
    -------
    list[FileArtifact]
        Artifacts in the order they should be applied. Directories come
        first so every later file has an existing parent.
    """
    env = create_jinja_env()
    lang = answers.language
    ext = lang.component_ext
    context: dict[str, Any] = {
        "project_name": answers.project_name,
        "typed": answers.is_typed,
        "router": answers.router,
        "testing": answers.testing,
        "linting": answers.linting,
        "pwa": answers.pwa,
    }

    def render(template_name: str, **extra: Any) -> str:
        return env.get_template(template_name).render(**context, **extra)

    artifacts: list[FileArtifact] = []
    artifacts.extend(_skeleton(answers))

    artifacts.append(TextFile(SOURCE_DIR / "index.css", STYLESHEET))
    artifacts.append(TextFile(Path(f"vite.config.{lang.script_ext}"), render("vite.config.j2")))
    artifacts.extend(_path_aliases(answers))

    # Pages and routing
    artifacts.append(TextFile(SOURCE_DIR / "pages" / f"Home.{ext}", render("Home.j2")))
    if answers.router:
        artifacts.append(
            TextFile(SOURCE_DIR / "layouts" / f"MainLayout.{ext}", render("MainLayout.j2"))
        )
        artifacts.append(TextFile(SOURCE_DIR / "pages" / f"About.{ext}", render("About.j2")))
        artifacts.append(TextFile(SOURCE_DIR / f"App.{ext}", render("App.j2")))

    # State management and the entry file that wires it in
    artifacts.extend(_state_modules(answers, env, context))
    wrappers = entry_wrappers(answers)
    imports = [line for wrapper in wrappers for line in wrapper.imports]
    artifacts.append(TextFile(
        SOURCE_DIR / f"main.{ext}",
        render("main.j2", imports=imports, tree=compose_tree(wrappers)),
    ))

    if answers.linting:
        artifacts.append(TextFile(Path("eslint.config.js"), render("eslint.config.j2")))
        artifacts.append(TextFile(Path(".prettierrc"), dumps_json(PRETTIER_SETTINGS)))

    if answers.testing:
        artifacts.append(TextFile(SOURCE_DIR / f"App.test.{ext}", render("App.test.j2")))

    scripts = _manifest_scripts(answers)
    if scripts:
        artifacts.append(JsonPatch(Path("package.json"), {"scripts": scripts}))

    features = [
        answers.ui_library.description if answers.ui_library is not UiLibrary.NONE else None,
        answers.state_management.description if answers.state_management.uses_store_dir else None,
        "React Router" if answers.router else None,
        "Vitest + Testing Library" if answers.testing else None,
        "ESLint + Prettier" if answers.linting else None,
        "PWA (vite-plugin-pwa)" if answers.pwa else None,
    ]
    artifacts.append(TextFile(Path(".gitignore"), render("gitignore.j2")))
    artifacts.append(TextFile(Path(".env.example"), ENV_SAMPLE))
    artifacts.append(TextFile(Path("README.md"), render(
        "README.md.j2",
        sparkvite_version=__version__,
        language=lang.description,
        run=answers.package_manager.run_prefix,
        stores=answers.state_management.uses_store_dir,
        features=[f for f in features if f],
    )))

    return artifacts
