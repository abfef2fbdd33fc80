"""
pytest configuration and shared fixtures for sparkvite tests.

Fixtures defined here are automatically available to all tests.

Fixtures
--------
minimal_answers : Answers
    TypeScript project with every optional feature switched off.

tsconfig_app_jsonc : str
    A tsconfig.app.json as create-vite writes it, comments included.

fake_run : Callable
    Factory for a ``subprocess.run`` stand-in that fakes create-vite.
"""

import json
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from sparkvite.models import Answers, Language, PackageManager


TSCONFIG_APP_JSONC = """{
  "compilerOptions": {
    "tsBuildInfoFile": "./node_modules/.tmp/tsconfig.app.tsbuildinfo",
    "target": "ES2022",
    "lib": ["ES2022", "DOM", "DOM.Iterable"],

    /* Bundler mode */
    "moduleResolution": "bundler",
    "jsx": "react-jsx",

    // Linting
    "strict": true,
    "noUnusedLocals": true,
  },
  "include": ["src"]
}
"""


def write_vite_scaffold(project_dir: Path, *, typed: bool = True, app_config: bool = True) -> None:
    """Lay down the files create-vite would produce."""
    ext = "tsx" if typed else "jsx"
    (project_dir / "src").mkdir(parents=True)
    (project_dir / "src" / f"App.{ext}").write_text("export default function App() {}\n")
    (project_dir / "src" / f"main.{ext}").write_text("// original entry\n")
    (project_dir / "src" / "index.css").write_text(":root {}\n")
    (project_dir / "package.json").write_text(json.dumps({
        "name": project_dir.name,
        "private": True,
        "type": "module",
        "scripts": {"dev": "vite", "build": "vite build", "preview": "vite preview"},
        "dependencies": {"react": "^19.0.0"},
    }, indent=2))
    if typed:
        (project_dir / "tsconfig.json").write_text(json.dumps({
            "files": [],
            "references": [
                {"path": "./tsconfig.app.json"},
                {"path": "./tsconfig.node.json"},
            ],
        }, indent=2))
        if app_config:
            (project_dir / "tsconfig.app.json").write_text(TSCONFIG_APP_JSONC)


@pytest.fixture
def minimal_answers() -> Answers:
    """A TypeScript project with nothing optional enabled."""
    return Answers(
        project_name="demo",
        package_manager=PackageManager.YARN,
        language=Language.TYPESCRIPT,
    )


@pytest.fixture
def tsconfig_app_jsonc() -> str:
    """tsconfig.app.json content with comments and a trailing comma."""
    return TSCONFIG_APP_JSONC


@pytest.fixture
def fake_run() -> Callable[..., Callable[..., subprocess.CompletedProcess]]:
    """
    Build a fake ``subprocess.run``.

    The fake creates a Vite scaffold when it sees the create command,
    records every call in ``fake.calls``, and returns a non-zero exit code
    for the call numbers listed in ``fail_on`` (1-based).
    """

    def factory(
        *,
        typed: bool = True,
        app_config: bool = True,
        fail_on: tuple[int, ...] = (),
        on_call: Callable[[str, Path], None] | None = None,
    ) -> Callable[..., subprocess.CompletedProcess]:
        calls: list[tuple[str, Path]] = []

        def run(command: str, *, shell: bool, cwd: Path, check: bool) -> subprocess.CompletedProcess:
            calls.append((command, Path(cwd)))
            if on_call is not None:
                on_call(command, Path(cwd))
            if len(calls) in fail_on:
                return subprocess.CompletedProcess(command, 1)
            if " create vite" in command:
                # "<pm> create vite[@latest] <name> ..."
                name = command.split()[3]
                write_vite_scaffold(Path(cwd) / name, typed=typed, app_config=app_config)
            return subprocess.CompletedProcess(command, 0)

        run.calls = calls  # type: ignore[attr-defined]
        return run

    return factory

