# compkit/core/package_manager.py

"""
External package installation through the host's package manager.

All packages of a batch are installed with a single command run in the
target project root. Failures are never retried: the result carries the
equivalent command so the user can run it manually.
"""

from __future__ import annotations

import json
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from compkit.core.console import Console, ConsoleAware
from compkit.core.exceptions import InstallCommandFailureError

# ==============================================================
# PACKAGE MANAGERS
# ==============================================================

class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"

INSTALL_VERBS = {
    PackageManager.NPM: ["npm", "install"],
    PackageManager.YARN: ["yarn", "add"],
    PackageManager.PNPM: ["pnpm", "add"],
    PackageManager.BUN: ["bun", "add"],
}

# Probed in order; the first lockfile found wins.
LOCKFILES = [
    ("bun.lock", PackageManager.BUN),
    ("bun.lockb", PackageManager.BUN),
    ("yarn.lock", PackageManager.YARN),
    ("pnpm-lock.yaml", PackageManager.PNPM),
]

def detect_package_manager(project_root: Path) -> PackageManager:
    """Detect the package manager from lockfiles, then package.json; default npm."""
    for lockfile, manager in LOCKFILES:
        if (project_root / lockfile).exists():
            return manager

    package_json = project_root / "package.json"
    if not package_json.exists():
        return PackageManager.NPM

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return PackageManager.NPM
    if not isinstance(data, dict):
        return PackageManager.NPM

    engines = data.get("engines")
    if isinstance(engines, dict) and engines.get("bun"):
        return PackageManager.BUN

    declared = data.get("packageManager")
    if isinstance(declared, str):
        for manager in (PackageManager.BUN, PackageManager.YARN, PackageManager.PNPM, PackageManager.NPM):
            if declared.startswith(f"{manager.value}@"):
                return manager

    return PackageManager.NPM

def build_install_command(manager: PackageManager, packages: Sequence[str]) -> List[str]:
    return INSTALL_VERBS[manager] + list(packages)

# ==============================================================
# COMMAND RUNNER
# ==============================================================

CommandRunner = Callable[[List[str], Path], int]

def run_command(args: List[str], cwd: Path) -> int:
    """Run a command with inherited stdio and return its exit code."""
    executable = shutil.which(args[0]) or args[0]
    completed = subprocess.run([executable, *args[1:]], cwd=cwd, check=False)
    return completed.returncode

# ==============================================================
# INSTALL RESULT
# ==============================================================

@dataclass
class InstallResult:
    packages: List[str] = field(default_factory=list)
    project_root: Optional[Path] = None
    package_manager: Optional[PackageManager] = None
    command: Optional[str] = None
    success: bool = True
    error: Optional[InstallCommandFailureError] = None

    @property
    def skipped(self) -> bool:
        """True when there was nothing to install."""
        return not self.packages

    @property
    def manual_command(self) -> Optional[str]:
        if not self.command:
            return None
        return f"cd {shlex.quote(str(self.project_root))} && {self.command}"

# ==============================================================
# DEPENDENCY INSTALLER CLASS
# ==============================================================

class DependencyInstaller(ConsoleAware):
    """Installs external packages with one batch package-manager command."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.runner = runner or run_command

    def install(self, packages: Iterable[str], project_root: Path) -> InstallResult:
        names = list(dict.fromkeys(packages))
        if not names:
            return InstallResult(project_root=project_root)

        manager = detect_package_manager(project_root)
        args = build_install_command(manager, names)
        command = shlex.join(args)
        result = InstallResult(
            packages=names,
            project_root=project_root,
            package_manager=manager,
            command=command,
        )

        plural = "ies" if len(names) > 1 else "y"
        self.print(
            f"\n[blue]Installing {len(names)} dependenc{plural} using "
            f"{manager.value}:[/] {', '.join(names)}..."
        )
        self.log(f"[dim]Running[/] {command} [dim]in[/] {project_root}")

        try:
            exit_code = self.runner(args, project_root)
        except OSError as e:
            return self._failed(result, str(e))

        if exit_code != 0:
            return self._failed(result, f"exit code {exit_code}")

        self.print("[green]Dependencies installed successfully.[/]")
        return result

    def _failed(self, result: InstallResult, details: str) -> InstallResult:
        result.success = False
        result.error = InstallCommandFailureError(result.command or "", details)
        self.print(f"[red]Failed to install dependencies:[/] {details}")
        self.print("[yellow]Please try installing them manually in the target project directory:[/]")
        self.print(f"[cyan]{result.manual_command}[/]")
        return result
