# compkit/core/materializer.py

"""
File materialization: perform the writes decided by the planner.

Every planned file gets exactly one outcome. A failure on one file never
stops the remaining ones.
"""

from __future__ import annotations

import shutil
from typing import Iterable, List

from compkit.core.console import ConsoleAware
from compkit.core.exceptions import CopyFailureError, SourceFileMissingError
from compkit.core.models import FileOutcome, FileStatus, InstallDecision, PlannedFile

# ==============================================================
# FILE MATERIALIZER CLASS
# ==============================================================

class FileMaterializer(ConsoleAware):
    """Applies an install plan to the filesystem."""

    def apply(self, plan: Iterable[PlannedFile]) -> List[FileOutcome]:
        outcomes: List[FileOutcome] = []
        for planned in plan:
            if planned.decision == InstallDecision.COPY:
                outcomes.append(self._copy(planned))
            else:
                outcomes.append(self._skip(planned))
        return outcomes

    def _copy(self, planned: PlannedFile) -> FileOutcome:
        try:
            planned.destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(planned.source, planned.destination)
        except OSError as e:
            error = CopyFailureError(str(planned.destination), str(e))
            self.print(f"  [red]Error copying[/] {planned.destination.name}: {e}")
            return FileOutcome(
                path=planned.destination,
                status=FileStatus.FAILED,
                decision=planned.decision,
                component=planned.component,
                error=error,
            )

        self.log(f"  [dim]Copied[/] {planned.source.name} → {planned.destination}")
        return FileOutcome(
            path=planned.destination,
            status=FileStatus.WRITTEN,
            decision=planned.decision,
            component=planned.component,
        )

    def _skip(self, planned: PlannedFile) -> FileOutcome:
        error = None
        if planned.decision == InstallDecision.SKIP_SOURCE_MISSING:
            error = SourceFileMissingError(planned.component, str(planned.source))
            self.print(
                f"  [yellow]Source file not found[/] for {planned.component}: "
                f"{planned.source}. Skipping."
            )
        elif planned.decision == InstallDecision.SKIP_EXISTING:
            self.print(f"  [yellow]Skipping existing file[/] {planned.destination.name} (--yes flag used).")
        else:
            self.print(f"  [dim]Skipping[/] {planned.destination.name}.")

        return FileOutcome(
            path=planned.destination,
            status=FileStatus.SKIPPED,
            decision=planned.decision,
            component=planned.component,
            error=error,
        )
