# compkit/core/installer.py

"""
Component installation pipeline.

    registry → resolver → planner → materializer → dependency installer
             → scaffold extras → follow-up dependency installer

Resolution errors abort before anything is written. File and package
manager failures are collected in the InstallReport and never stop the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from compkit.core.console import Console, ConsoleAware
from compkit.core.materializer import FileMaterializer
from compkit.core.models import (
    FileOutcome,
    FileStatus,
    InstallDecision,
    InstallFlags,
    PlannedFile,
    ProjectContext,
    ResolutionResult,
)
from compkit.core.package_manager import DependencyInstaller, InstallResult
from compkit.core.planner import ConflictResponder, InstallationPlanner, decline_all
from compkit.core.registry import RegistryStore
from compkit.core.resolver import DependencyResolver
from compkit.core.scaffold import ScaffoldExtras, UtilityPrompt

# ==============================================================
# INSTALL REPORT
# ==============================================================

@dataclass
class InstallReport:
    resolution: ResolutionResult
    plan: List[PlannedFile] = field(default_factory=list)
    outcomes: List[FileOutcome] = field(default_factory=list)
    dependencies: Optional[InstallResult] = None
    utility_file: Optional[FileOutcome] = None
    utility_dependencies: Optional[InstallResult] = None

    def _with_status(self, status: FileStatus) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def written(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.WRITTEN)

    @property
    def skipped(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.SKIPPED)

    @property
    def failed(self) -> List[FileOutcome]:
        return self._with_status(FileStatus.FAILED)

    @property
    def missing_sources(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.decision == InstallDecision.SKIP_SOURCE_MISSING]

    @property
    def failed_installs(self) -> List[InstallResult]:
        return [r for r in (self.dependencies, self.utility_dependencies) if r is not None and not r.success]

    @property
    def has_failures(self) -> bool:
        utility_failed = self.utility_file is not None and self.utility_file.status == FileStatus.FAILED
        return bool(self.failed or self.missing_sources or self.failed_installs or utility_failed)

# ==============================================================
# COMPONENT INSTALLER CLASS
# ==============================================================

class ComponentInstaller(ConsoleAware):
    """Runs the whole add pipeline for a target project."""

    def __init__(
        self,
        registry: RegistryStore,
        responder: ConflictResponder = decline_all,
        utility_prompt: Optional[UtilityPrompt] = None,
        dependency_installer: Optional[DependencyInstaller] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.registry = registry
        self.resolver = DependencyResolver(console, verbose)
        self.planner = InstallationPlanner(responder, console, verbose)
        self.materializer = FileMaterializer(console, verbose)
        self.dependency_installer = dependency_installer or DependencyInstaller(console=console, verbose=verbose)
        self.scaffold = ScaffoldExtras(registry, utility_prompt or (lambda path: False), console, verbose)

    def resolve(self, requested: Sequence[str]) -> ResolutionResult:
        """Load the registry and resolve the request. Side-effect free."""
        catalog = self.registry.load()
        return self.resolver.resolve(requested, catalog)

    def install(
        self,
        requested: Sequence[str],
        context: ProjectContext,
        flags: InstallFlags,
    ) -> InstallReport:
        """
        Install the requested components into the project.

        Raises:
            RegistryUnavailableError: Registry index missing or invalid
            UnknownComponentError: Requested names missing from the registry
            NonInteractiveEnvironmentError: A prompt was needed without a terminal
        """
        resolution = self.resolve(requested)
        report = InstallReport(resolution=resolution)

        self.print(f"\n[blue]Will process and potentially add:[/] {', '.join(resolution.components)}")

        context.components_dir.mkdir(parents=True, exist_ok=True)

        report.plan = self.planner.plan(resolution, self.registry, context.components_dir, flags)
        report.outcomes = self.materializer.apply(report.plan)

        if resolution.external_packages:
            report.dependencies = self.dependency_installer.install(resolution.external_packages, context.root)
        else:
            self.print("\n[green]No external dependencies to install for selected components.[/]")

        report.utility_file = self.scaffold.maybe_create_utility_file(resolution, context, flags)
        if report.utility_file is not None and report.utility_file.status == FileStatus.WRITTEN:
            follow_up = self.scaffold.follow_up_packages(resolution)
            if follow_up:
                report.utility_dependencies = self.dependency_installer.install(follow_up, context.root)

        self.log(
            f"[dim]Files:[/] {len(report.written)} written, {len(report.skipped)} skipped, "
            f"{len(report.failed)} failed"
        )
        return report
