# compkit/core/scaffold.py

"""
Scaffold extras: the shared `cn()` utility module some components import.

The module is only offered when an installed component references it and the
target project does not have one yet. Its own packages are installed by a
second, follow-up installer run.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol

from jinja2 import Template

from compkit.core.console import Console, ConsoleAware
from compkit.core.constants import UTILITY_FILE_MARKERS, UTILITY_PACKAGES
from compkit.core.exceptions import CopyFailureError
from compkit.core.models import (
    FileOutcome,
    FileStatus,
    InstallDecision,
    InstallFlags,
    ProjectContext,
    ResolutionResult,
)
from compkit.core.registry import RegistryStore

TEMPLATE_UTILS = """{% if typescript -%}
import { type ClassValue, clsx } from 'clsx';
{%- else -%}
import { clsx } from 'clsx';
{%- endif %}
import { twMerge } from 'tailwind-merge';

export function cn(...inputs{% if typescript %}: ClassValue[]{% endif %}) {
  return twMerge(clsx(inputs));
}
"""

class UtilityPrompt(Protocol):
    """Asks whether the utility module should be created at `path`."""
    def __call__(self, path: Path) -> bool:
        ...

def render_utils(typescript: bool) -> str:
    return Template(TEMPLATE_UTILS).render(typescript=typescript)

# ==============================================================
# SCAFFOLD EXTRAS CLASS
# ==============================================================

class ScaffoldExtras(ConsoleAware):

    def __init__(
        self,
        registry: RegistryStore,
        prompt: UtilityPrompt,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.registry = registry
        self.prompt = prompt

    def needs_utility_file(self, resolution: ResolutionResult, context: ProjectContext) -> bool:
        if context.has_utils:
            return False
        for name in resolution.components:
            entry = self.registry.get(name)
            if entry and any(marker in f for f in entry.files for marker in UTILITY_FILE_MARKERS):
                return True
        return False

    def maybe_create_utility_file(
        self,
        resolution: ResolutionResult,
        context: ProjectContext,
        flags: InstallFlags,
    ) -> Optional[FileOutcome]:
        """
        Create the utility module when required and confirmed.

        Returns:
            None when not triggered; a skipped outcome when declined or in
            --yes mode; otherwise a written / failed outcome
        """
        if not self.needs_utility_file(resolution, context):
            return None

        extension = ".ts" if context.typescript else ".js"
        utils_file = context.utils_path.with_suffix(extension)

        self.print(f"\n[yellow]Some components may require a utils{extension} file with common utilities.[/]")

        if flags.assume_yes:
            self.print(f"[dim]Skipping utils{extension} creation (--yes flag used).[/]")
            return FileOutcome(utils_file, FileStatus.SKIPPED)

        if not self.prompt(utils_file):
            return FileOutcome(utils_file, FileStatus.SKIPPED, InstallDecision.SKIP_DECLINED)

        try:
            utils_file.parent.mkdir(parents=True, exist_ok=True)
            utils_file.write_text(render_utils(context.typescript), encoding="utf-8")
        except OSError as e:
            self.print(f"[red]Error creating[/] {utils_file.name}: {e}")
            return FileOutcome(
                utils_file,
                FileStatus.FAILED,
                InstallDecision.COPY,
                error=CopyFailureError(str(utils_file), str(e)),
            )

        self.print(f"[green]Created utils file at[/] {utils_file.relative_to(context.root).as_posix()}")
        return FileOutcome(utils_file, FileStatus.WRITTEN, InstallDecision.COPY)

    def follow_up_packages(self, resolution: ResolutionResult) -> List[str]:
        """Utility packages not already part of the main install batch."""
        return [p for p in UTILITY_PACKAGES if p not in resolution.external_packages]
