"""
Tests for sparkvite.models
==========================

Test Organization
-----------------
- TestPackageManager: Lookup tables for the four package managers
- TestLanguage: Template names and file extensions
- TestStateManagement: Store directory rule
- TestProjectNameValidation: Name pattern checks
- TestAnswers: The frozen answers model and TOML loading
"""

import pytest
from pathlib import Path
from pydantic import ValidationError

from sparkvite.errors import InvalidInput
from sparkvite.models import (
    Answers,
    Language,
    PackageManager,
    StateManagement,
    UiLibrary,
    validate_project_name,
)


# =============================================================================
# PackageManager Tests
# =============================================================================

class TestPackageManager:
    """Tests for the PackageManager enumeration."""

    def test_every_member_has_lookups(self) -> None:
        """Every manager is covered by every lookup table."""
        for pm in PackageManager:
            assert pm.install_verb in {"install", "add"}
            assert pm.dev_flag in {"-D", "-d"}
            assert pm.run_prefix.startswith(pm.value)
            assert pm.exec_prefix

    def test_npm_uses_install(self) -> None:
        assert PackageManager.NPM.install_verb == "install"
        assert PackageManager.YARN.install_verb == "add"

    def test_bun_dev_flag(self) -> None:
        """bun marks dev dependencies with a lowercase flag."""
        assert PackageManager.BUN.dev_flag == "-d"
        assert PackageManager.PNPM.dev_flag == "-D"

    def test_npm_create_passes_template_after_separator(self) -> None:
        args = PackageManager.NPM.create_args("demo", "react-ts")
        assert args[:4] == ["npm", "create", "vite@latest", "demo"]
        assert args.index("--") < args.index("--template")

    def test_other_managers_create_without_separator(self) -> None:
        for pm in (PackageManager.YARN, PackageManager.PNPM, PackageManager.BUN):
            args = pm.create_args("demo", "react")
            assert args[:4] == [pm.value, "create", "vite", "demo"]
            assert "--" not in args

    def test_exec_prefix_returns_copy(self) -> None:
        prefix = PackageManager.PNPM.exec_prefix
        prefix.append("oops")
        assert PackageManager.PNPM.exec_prefix == ["pnpm", "dlx"]


# =============================================================================
# Language Tests
# =============================================================================

class TestLanguage:
    """Tests for the Language enumeration."""

    def test_templates(self) -> None:
        assert Language.JAVASCRIPT.template == "react"
        assert Language.TYPESCRIPT.template == "react-ts"

    def test_extensions(self) -> None:
        assert Language.JAVASCRIPT.component_ext == "jsx"
        assert Language.TYPESCRIPT.component_ext == "tsx"
        assert Language.JAVASCRIPT.script_ext == "js"
        assert Language.TYPESCRIPT.script_ext == "ts"

    def test_is_typed(self) -> None:
        assert Language.TYPESCRIPT.is_typed is True
        assert Language.JAVASCRIPT.is_typed is False


# =============================================================================
# StateManagement Tests
# =============================================================================

class TestStateManagement:
    """Tests for the StateManagement enumeration."""

    def test_store_dir_for_every_option_but_none(self) -> None:
        assert StateManagement.NONE.uses_store_dir is False
        for sm in StateManagement:
            if sm is not StateManagement.NONE:
                assert sm.uses_store_dir is True

    def test_descriptions_exist(self) -> None:
        for sm in StateManagement:
            assert sm.description
        for ui in UiLibrary:
            assert ui.description


# =============================================================================
# Name Validation Tests
# =============================================================================

class TestProjectNameValidation:
    """Tests for validate_project_name."""

    @pytest.mark.parametrize("name", ["demo", "my-app", "my_app", "App2", "a"])
    def test_valid_names(self, name: str) -> None:
        assert validate_project_name(name) == name

    def test_strips_whitespace(self) -> None:
        assert validate_project_name("  demo  ") == "demo"

    @pytest.mark.parametrize("name", ["", "   ", "my app", "../escape", "app!", "näme"])
    def test_invalid_names(self, name: str) -> None:
        with pytest.raises(InvalidInput):
            validate_project_name(name)

    def test_invalid_input_is_value_error(self) -> None:
        """InvalidInput still behaves like a ValueError for callers."""
        with pytest.raises(ValueError):
            validate_project_name("bad name")


# =============================================================================
# Answers Tests
# =============================================================================

class TestAnswers:
    """Tests for the Answers model."""

    def test_defaults(self) -> None:
        answers = Answers(project_name="demo")
        assert answers.package_manager == PackageManager.NPM
        assert answers.language == Language.TYPESCRIPT
        assert answers.ui_library == UiLibrary.NONE
        assert answers.state_management == StateManagement.NONE
        assert answers.enabled_features == []

    def test_invalid_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Answers(project_name="not valid")

    def test_enum_values_from_strings(self) -> None:
        answers = Answers(
            project_name="demo",
            package_manager="bun",
            language="javascript",
            state_management="redux",
        )
        assert answers.package_manager is PackageManager.BUN
        assert answers.language is Language.JAVASCRIPT
        assert answers.state_management is StateManagement.REDUX

    def test_unknown_enum_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Answers(project_name="demo", package_manager="pip")

    def test_frozen(self) -> None:
        """Answers cannot change once collected."""
        answers = Answers(project_name="demo")
        with pytest.raises(ValidationError):
            answers.router = True  # type: ignore[misc]

    def test_equal_answers_compare_equal(self) -> None:
        assert Answers(project_name="demo", git=True) == Answers(project_name="demo", git=True)

    def test_enabled_features(self) -> None:
        answers = Answers(project_name="demo", testing=True, router=True)
        assert answers.enabled_features == ["testing", "router"]

    def test_project_dir(self, tmp_path: Path) -> None:
        assert Answers(project_name="demo").project_dir(tmp_path) == tmp_path / "demo"

    def test_from_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "answers.toml"
        path.write_text(
            'project_name = "shop"\n'
            'package_manager = "pnpm"\n'
            'language = "javascript"\n'
            'state_management = "zustand"\n'
            "router = true\n"
        )

        answers = Answers.from_toml(path)

        assert answers.project_name == "shop"
        assert answers.package_manager is PackageManager.PNPM
        assert answers.language is Language.JAVASCRIPT
        assert answers.state_management is StateManagement.ZUSTAND
        assert answers.router is True
        assert answers.git is False

    def test_from_toml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Answers.from_toml(tmp_path / "nope.toml")
