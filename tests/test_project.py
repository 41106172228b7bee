# tests/test_project.py

"""Tests for target project detection and per-project configuration."""

import json
from pathlib import Path

import pytest

from compkit.core.config import ProjectConfig
from compkit.core.console import ConsoleAware
from compkit.core.constants import DEFAULT_COMPONENTS_DIR
from compkit.core.models import ProjectFlavor
from compkit.core.project import detect_project_context, detect_project_flavor, is_typescript_project


def _package_json(root: Path, data) -> None:
    (root / "package.json").write_text(json.dumps(data), encoding="utf-8")


def test_next_detected_from_dependencies(tmp_path: Path):
    _package_json(tmp_path, {"dependencies": {"next": "14.0.0", "react": "18.0.0"}})
    assert detect_project_flavor(tmp_path) == ProjectFlavor.NEXT


def test_next_detected_from_dev_dependencies(tmp_path: Path):
    _package_json(tmp_path, {"devDependencies": {"next": "14.0.0"}})
    assert detect_project_flavor(tmp_path) == ProjectFlavor.NEXT


def test_plain_react_project(project_dir: Path):
    assert detect_project_flavor(project_dir) == ProjectFlavor.REACT


@pytest.mark.parametrize("content", ["{ broken", "[1, 2]", '{"dependencies": ["next"]}'])
def test_unreadable_package_json_falls_back_to_react(tmp_path: Path, content: str):
    (tmp_path / "package.json").write_text(content, encoding="utf-8")
    assert detect_project_flavor(tmp_path) == ProjectFlavor.REACT


def test_missing_package_json_warns_and_assumes_react(tmp_path: Path, console):
    assert detect_project_flavor(tmp_path, ConsoleAware(console)) == ProjectFlavor.REACT
    assert "No package.json found" in console.output


def test_typescript_detection(tmp_path: Path):
    assert is_typescript_project(tmp_path)

    (tmp_path / "jsconfig.json").write_text("{}", encoding="utf-8")
    assert not is_typescript_project(tmp_path)

    (tmp_path / "tsconfig.json").write_text("{}", encoding="utf-8")
    assert is_typescript_project(tmp_path)


def test_context_defaults(project_dir: Path):
    context = detect_project_context(project_dir)

    assert context.root == project_dir.resolve()
    assert context.flavor == ProjectFlavor.REACT
    assert context.components_dir == project_dir.resolve() / DEFAULT_COMPONENTS_DIR
    assert context.utils_path == project_dir.resolve() / "src/lib/utils"
    assert not context.has_utils
    assert context.typescript


@pytest.mark.parametrize("utils_name", ["utils.ts", "utils.js"])
def test_existing_utils_module_is_detected(project_dir: Path, utils_name: str):
    (project_dir / "src/lib").mkdir(parents=True)
    (project_dir / "src/lib" / utils_name).write_text("", encoding="utf-8")

    assert detect_project_context(project_dir).has_utils


def test_explicit_options_take_precedence(project_dir: Path):
    config = ProjectConfig(project_dir)
    config.save_if_changed("target-dir", "from-config")
    config.save_if_changed("project-type", "react")

    context = detect_project_context(project_dir, flavor_override="next", components_path="ui/branding")

    assert context.flavor == ProjectFlavor.NEXT
    assert context.components_dir == project_dir.resolve() / "ui/branding"


def test_project_config_is_used_when_no_options(project_dir: Path):
    config = ProjectConfig(project_dir)
    config.save_if_changed("target-dir", "src/components/branding")
    config.save_if_changed("project-type", "next")

    context = detect_project_context(project_dir)

    assert context.flavor == ProjectFlavor.NEXT
    assert context.components_dir == project_dir.resolve() / "src/components/branding"


def test_unknown_flavor_is_rejected(project_dir: Path):
    with pytest.raises(ValueError):
        detect_project_context(project_dir, flavor_override="vue")


def test_project_config_round_trip(tmp_path: Path):
    config = ProjectConfig(tmp_path)
    assert config.get("target-dir") is None
    assert config.get("target-dir", "fallback") == "fallback"

    config.save_if_changed("target-dir", "ui")

    assert (tmp_path / ".compkit/config.yaml").exists()
    assert ProjectConfig(tmp_path).get("target-dir") == "ui"


def test_project_config_ignores_garbage(tmp_path: Path):
    (tmp_path / ".compkit").mkdir()
    (tmp_path / ".compkit/config.yaml").write_text("- just\n- a list\n", encoding="utf-8")

    assert ProjectConfig(tmp_path).load() == {}


def test_non_utf8_project_config_counts_as_empty(project_dir: Path):
    (project_dir / ".compkit").mkdir()
    (project_dir / ".compkit/config.yaml").write_bytes(b"target-dir: \xff\xfe\n")

    assert ProjectConfig(project_dir).load() == {}
    assert detect_project_context(project_dir).components_dir == project_dir.resolve() / DEFAULT_COMPONENTS_DIR
