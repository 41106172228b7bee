# tests/test_package_manager.py

"""Tests for package manager detection and batch installation."""

import json
import shlex
from pathlib import Path

import pytest

from compkit.core.exceptions import InstallCommandFailureError
from compkit.core.package_manager import (
    DependencyInstaller,
    PackageManager,
    build_install_command,
    detect_package_manager,
)


def _package_json(root: Path, data) -> None:
    (root / "package.json").write_text(json.dumps(data), encoding="utf-8")


@pytest.mark.parametrize("lockfile, expected", [
    ("bun.lock", PackageManager.BUN),
    ("bun.lockb", PackageManager.BUN),
    ("yarn.lock", PackageManager.YARN),
    ("pnpm-lock.yaml", PackageManager.PNPM),
])
def test_lockfile_detection(tmp_path: Path, lockfile: str, expected: PackageManager):
    (tmp_path / lockfile).write_text("", encoding="utf-8")
    assert detect_package_manager(tmp_path) == expected


def test_lockfiles_are_probed_in_order(tmp_path: Path):
    (tmp_path / "pnpm-lock.yaml").write_text("", encoding="utf-8")
    (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
    assert detect_package_manager(tmp_path) == PackageManager.YARN

    (tmp_path / "bun.lock").write_text("", encoding="utf-8")
    assert detect_package_manager(tmp_path) == PackageManager.BUN


def test_lockfile_beats_package_json(tmp_path: Path):
    (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
    _package_json(tmp_path, {"packageManager": "pnpm@9.0.0"})
    assert detect_package_manager(tmp_path) == PackageManager.YARN


@pytest.mark.parametrize("data, expected", [
    ({"engines": {"bun": ">=1.0"}}, PackageManager.BUN),
    ({"packageManager": "bun@1.1.0"}, PackageManager.BUN),
    ({"packageManager": "yarn@4.1.0"}, PackageManager.YARN),
    ({"packageManager": "pnpm@9.0.0"}, PackageManager.PNPM),
    ({"packageManager": "npm@10.0.0"}, PackageManager.NPM),
    ({"engines": {"bun": ">=1.0"}, "packageManager": "pnpm@9.0.0"}, PackageManager.BUN),
    ({"name": "plain"}, PackageManager.NPM),
    ([1, 2, 3], PackageManager.NPM),
])
def test_package_json_detection(tmp_path: Path, data, expected: PackageManager):
    _package_json(tmp_path, data)
    assert detect_package_manager(tmp_path) == expected


def test_defaults_to_npm(tmp_path: Path):
    assert detect_package_manager(tmp_path) == PackageManager.NPM

    (tmp_path / "package.json").write_text("{ broken", encoding="utf-8")
    assert detect_package_manager(tmp_path) == PackageManager.NPM


@pytest.mark.parametrize("manager, expected", [
    (PackageManager.NPM, ["npm", "install", "clsx", "zod"]),
    (PackageManager.YARN, ["yarn", "add", "clsx", "zod"]),
    (PackageManager.PNPM, ["pnpm", "add", "clsx", "zod"]),
    (PackageManager.BUN, ["bun", "add", "clsx", "zod"]),
])
def test_build_install_command(manager: PackageManager, expected):
    assert build_install_command(manager, ["clsx", "zod"]) == expected


def test_install_runs_one_batch_command(tmp_path: Path, console, make_runner):
    (tmp_path / "pnpm-lock.yaml").write_text("", encoding="utf-8")
    runner = make_runner()

    result = DependencyInstaller(runner, console).install(["clsx", "tailwind-merge", "clsx"], tmp_path)

    assert runner.calls == [(["pnpm", "add", "clsx", "tailwind-merge"], tmp_path)]
    assert result.success
    assert not result.skipped
    assert result.package_manager == PackageManager.PNPM
    assert result.command == "pnpm add clsx tailwind-merge"


def test_empty_package_list_is_a_noop(tmp_path: Path, make_runner):
    runner = make_runner()

    result = DependencyInstaller(runner).install([], tmp_path)

    assert runner.calls == []
    assert result.success
    assert result.skipped
    assert result.manual_command is None


def test_non_zero_exit_reports_manual_command(tmp_path: Path, console, make_runner):
    result = DependencyInstaller(make_runner(exit_code=1), console).install(["clsx"], tmp_path)

    assert not result.success
    assert isinstance(result.error, InstallCommandFailureError)
    assert result.error.command == "npm install clsx"
    assert result.manual_command == f"cd {shlex.quote(str(tmp_path))} && npm install clsx"
    assert result.manual_command in console.output


def test_missing_executable_reports_manual_command(tmp_path: Path, console, make_runner):
    runner = make_runner(error=FileNotFoundError("npm: command not found"))

    result = DependencyInstaller(runner, console).install(["clsx", "zod"], tmp_path)

    assert not result.success
    assert "command not found" in result.error.details
    assert result.manual_command.endswith("npm install clsx zod")
