# compkit/core/prompts.py

"""
Interactive prompts backed by rich.

Each prompt refuses to run when stdin is not a terminal and raises
NonInteractiveEnvironmentError instead, so batch runs fail fast with a hint
to rerun with --yes.
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from compkit.core.exceptions import NonInteractiveEnvironmentError
from compkit.core.models import Conflict


def _is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


class TerminalPrompts:
    """Prompt implementations used by the CLI."""

    def __init__(
        self,
        console: Optional[Console] = None,
        project_root: Optional[Path] = None,
        is_interactive: Callable[[], bool] = _is_interactive,
    ):
        self.console = console
        self.project_root = project_root
        self.is_interactive = is_interactive

    def _ensure_interactive(self) -> None:
        if not self.is_interactive():
            raise NonInteractiveEnvironmentError()

    def _display(self, path: Path) -> str:
        if self.project_root is not None:
            try:
                return path.relative_to(self.project_root).as_posix()
            except ValueError:
                pass
        return str(path)

    def confirm_overwrite(self, conflict: Conflict) -> bool:
        self._ensure_interactive()
        try:
            return Confirm.ask(
                f"File [yellow]{self._display(conflict.destination)}[/] already exists. Overwrite?",
                default=False,
                console=self.console,
            )
        except EOFError:
            raise NonInteractiveEnvironmentError()

    def confirm_utility_file(self, path: Path) -> bool:
        self._ensure_interactive()
        try:
            return Confirm.ask(
                f"Would you like to add a {path.name} file with common utilities?",
                default=True,
                console=self.console,
            )
        except EOFError:
            raise NonInteractiveEnvironmentError()

    def select_components(self, available: Sequence[str]) -> List[str]:
        """Ask for one or more component names until a non-empty answer is given."""
        self._ensure_interactive()
        if self.console is not None:
            self.console.print("[bold]Available components:[/] " + ", ".join(available))

        while True:
            try:
                answer = Prompt.ask(
                    "Which components would you like to add? (comma or space separated)",
                    console=self.console,
                )
            except EOFError:
                raise NonInteractiveEnvironmentError()
            selected = [name for name in re.split(r"[,\s]+", answer or "") if name]
            if selected:
                return list(dict.fromkeys(selected))
            if self.console is not None:
                self.console.print("[red]Please select at least one component.[/]")
