# compkit/commands/add.py

"""
compkit add command: copy registry components into a project.

Resolves the requested components and their registry dependencies, copies
their files into the project's component directory and installs the
external packages they need.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from compkit.core.console import ConsoleAware
from compkit.core.exceptions import (
    CompkitError,
    NonInteractiveEnvironmentError,
    RegistryUnavailableError,
    UnknownComponentError,
)
from compkit.core.global_config import get_registry_path
from compkit.core.installer import ComponentInstaller, InstallReport
from compkit.core.models import InstallFlags, ProjectContext, ProjectFlavor
from compkit.core.project import detect_project_context
from compkit.core.prompts import TerminalPrompts
from compkit.core.registry import RegistryStore

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def add_command(
    components: List[str],
    project_dir: Path,
    flags: InstallFlags,
    console: Console,
    components_path: Optional[str] = None,
    target_dir: Optional[str] = None,
    project_type: Optional[ProjectFlavor] = None,
    verbose: bool = False,
    prompts: Optional[TerminalPrompts] = None,
) -> Optional[InstallReport]:
    """
    Command wrapper for the add pipeline.

    Returns:
        The install report, or None when nothing was selected
    """
    console_awr = ConsoleAware(console=console, verbose=verbose)

    registry = RegistryStore(get_registry_path(), console=console, verbose=verbose)
    available = registry.names()

    context: ProjectContext = detect_project_context(
        project_dir,
        flavor_override=project_type,
        components_path=components_path or target_dir,
        console=console,
        verbose=verbose,
    )
    prompts = prompts or TerminalPrompts(console=console, project_root=context.root)

    selected = list(components)
    if not selected:
        if flags.assume_yes:
            console_awr.print("[yellow]No components specified and '--yes' flag used. Exiting.[/]")
            return None
        selected = prompts.select_components(available)

    console_awr.print(f"[blue]Selected components:[/] {', '.join(selected)}")
    console_awr.print(f"[dim]Target component directory:[/] {_relative(context.components_dir, context.root)}")
    console_awr.print(f"[blue]Project type:[/] {context.flavor.value}")

    installer = ComponentInstaller(
        registry,
        responder=prompts.confirm_overwrite,
        utility_prompt=prompts.confirm_utility_file,
        console=console,
        verbose=verbose,
    )
    report = installer.install(selected, context, flags)

    _print_summary(console_awr, report, context)
    return report


def _relative(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix() or "."
    except ValueError:
        return str(path)


def _print_summary(console_awr: ConsoleAware, report: InstallReport, context: ProjectContext) -> None:
    console_awr.print(
        f"\n[bold]Files:[/] {len(report.written)} written, "
        f"{len(report.skipped)} skipped, {len(report.failed)} failed"
    )

    for outcome in report.missing_sources:
        console_awr.print(f"  [yellow]⚠ missing source[/] {outcome.error}")
    for outcome in report.failed:
        console_awr.print(f"  [red]✖[/] {outcome.error}")
    for result in report.failed_installs:
        console_awr.print(f"  [red]✖[/] {result.error}")
        console_awr.print(f"    run manually: [cyan]{result.manual_command}[/]")

    if report.has_failures:
        console_awr.print("\n[bold yellow]Components added with warnings.[/]")
    else:
        console_awr.print("\n[bold green]Components added successfully! 🎉[/]")
    console_awr.print(
        "[yellow]Make sure you have the necessary base setup "
        "(like Tailwind, clsx, tailwind-merge) for your components.[/]"
    )

    label = "Next.js" if context.flavor == ProjectFlavor.NEXT else "React"
    console_awr.print(f"\n[blue]For {label} projects:[/]")
    console_awr.print(
        f"[yellow]  - Components are added to the \"{_relative(context.components_dir, context.root)}\" directory[/]"
    )
    console_awr.print(f"[yellow]  - Make sure to import them with the correct path in your {label} components[/]")

# ==============================================================
# CLI REGISTRATION
# ==============================================================

def register(app):
    """Register the add command with the main Typer app."""

    @app.command()
    def add(
        components: Optional[List[str]] = typer.Argument(
            None,
            help="Names of the components to add"
        ),
        yes: bool = typer.Option(
            False,
            "--yes",
            "-y",
            help="Skip confirmation prompts (existing files are kept)"
        ),
        overwrite: bool = typer.Option(
            False,
            "--overwrite",
            "-o",
            help="Overwrite existing files without prompting"
        ),
        path: Optional[str] = typer.Option(
            None,
            "--path",
            "-p",
            help="Custom path relative to project root for components (e.g., ./components/my-ui)"
        ),
        cwd: Optional[Path] = typer.Option(
            None,
            "--cwd",
            "-c",
            help="The working directory (default: current directory)"
        ),
        target_dir: Optional[str] = typer.Option(
            None,
            "--target-dir",
            help="Target directory for components (default: components/instant-branding)"
        ),
        project_type: Optional[ProjectFlavor] = typer.Option(
            None,
            "--project-type",
            help="Explicitly set project type (next or react)"
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """Add component(s) to your project."""

        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)

        project_dir = Path(cwd).resolve() if cwd is not None else Path.cwd()
        if not project_dir.is_dir():
            console_awr.print(f"[bold red]❌ Specified working directory does not exist:[/bold red] {project_dir}")
            raise typer.Exit(code=1)

        try:
            console_awr.print(f"[bold blue]Running 'add' command in target directory:[/] {project_dir}")
            if project_dir != Path.cwd().resolve():
                console_awr.print("[yellow]Operating on specified directory (--cwd) instead of current directory.[/]")
            add_command(
                components or [],
                project_dir,
                InstallFlags(assume_yes=yes, overwrite=overwrite),
                console,
                components_path=path,
                target_dir=target_dir,
                project_type=project_type,
                verbose=verbose,
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Add cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except NonInteractiveEnvironmentError as e:
            console_awr.print(f"\n[bold red]❌ {e}[/bold red]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except UnknownComponentError as e:
            console_awr.print(f"\n[bold red]❌ Unknown components:[/bold red] {', '.join(e.names)}")
            if e.available:
                console_awr.print(f"[yellow]Available components: {', '.join(e.available)}[/]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except RegistryUnavailableError as e:
            console_awr.print(f"\n[bold red]❌ Registry error:[/bold red] {e.reason}")
            console_awr.print(f"  Index: {e.path}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except CompkitError as e:
            console_awr.print(f"\n[bold red]❌ Add failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ An error occurred during the add operation:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
