# compkit/core/planner.py

"""
Installation planning: decide, per component file, whether to copy or skip.

All component files are flattened into a single destination directory keyed
by basename.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Protocol, Set

from compkit.core.console import Console, ConsoleAware
from compkit.core.models import (
    Conflict,
    InstallDecision,
    InstallFlags,
    PlannedFile,
    ResolutionResult,
)
from compkit.core.registry import RegistryStore

# ==============================================================
# CONFLICT RESPONDER
# ==============================================================

class ConflictResponder(Protocol):
    """Answers whether an existing destination file may be overwritten."""
    def __call__(self, conflict: Conflict) -> bool:
        ...

def decline_all(conflict: Conflict) -> bool:
    return False

# ==============================================================
# INSTALLATION PLANNER CLASS
# ==============================================================

class InstallationPlanner(ConsoleAware):
    """
    Builds the per-file install plan.

    Policy, in order:
        1. source missing in the registry → skip-source-missing
        2. overwrite flag → copy
        3. destination absent → copy
        4. assume_yes flag → skip-existing-no-overwrite
        5. ask the responder → copy / skip-user-declined

    A destination already claimed by an earlier copy of the same plan counts
    as existing, so basename collisions between components go through the
    same policy.
    """

    def __init__(
        self,
        responder: ConflictResponder = decline_all,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.responder = responder

    def plan(
        self,
        result: ResolutionResult,
        registry: RegistryStore,
        dest_dir: Path,
        flags: InstallFlags,
    ) -> List[PlannedFile]:
        planned: List[PlannedFile] = []
        claimed: Set[Path] = set()

        for component_name in result.components:
            entry = registry.get(component_name)
            if entry is None:
                continue

            self.log(f"[cyan]Planning[/] {component_name}")
            for relative_path in entry.files:
                source = registry.source_path(relative_path)
                destination = dest_dir / Path(relative_path).name
                decision = self._decide(component_name, source, destination, claimed, flags)

                if decision == InstallDecision.COPY:
                    claimed.add(destination)
                planned.append(PlannedFile(component_name, source, destination, decision))
                self.log(f"  [dim]{decision.value}[/] {relative_path}")

        return planned

    def _decide(
        self,
        component_name: str,
        source: Path,
        destination: Path,
        claimed: Set[Path],
        flags: InstallFlags,
    ) -> InstallDecision:
        if not source.is_file():
            return InstallDecision.SKIP_SOURCE_MISSING

        if flags.overwrite:
            return InstallDecision.COPY

        if destination not in claimed and not destination.exists():
            return InstallDecision.COPY

        if flags.assume_yes:
            return InstallDecision.SKIP_EXISTING

        # NonInteractiveEnvironmentError from the responder propagates as is.
        if self.responder(Conflict(component_name, source, destination)):
            return InstallDecision.COPY
        return InstallDecision.SKIP_DECLINED
