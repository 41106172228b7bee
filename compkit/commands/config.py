# compkit/commands/config.py

"""
compkit config command: manage per-project and global settings.

Project settings live in <project>/.compkit/config.yaml, the registry
location in ~/.compkit/config.yaml.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from compkit.core.config import ProjectConfig
from compkit.core.console import ConsoleAware
from compkit.core.exceptions import CompkitError
from compkit.core.global_config import get_registry_path, set_global_registry
from compkit.core.models import ProjectFlavor

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def config_command(
    project_dir: Optional[Path],
    target_dir: Optional[str],
    project_type: Optional[ProjectFlavor],
    set_registry: Optional[Path],
    console: Console
):
    """Command wrapper for config command."""

    if project_dir is None:
        project_path = Path.cwd()
    else:
        project_path = Path(project_dir).resolve()

    console_awr = ConsoleAware(console=console, verbose=False)
    config = ProjectConfig(project_path)

    if target_dir:
        config.save_if_changed("target-dir", target_dir)
        console_awr.print(f"📁 [green]Target directory set[/green] → [cyan]{target_dir}[/cyan]")

    if project_type:
        config.save_if_changed("project-type", project_type.value)
        console_awr.print(f"🔧 [green]Project type set[/green] → [cyan]{project_type.value}[/cyan]")

    if set_registry:
        set_global_registry(str(set_registry.expanduser().resolve()))
        console_awr.print(f"⚙️ [bold green]Registry set[/bold green] → [cyan]{set_registry}[/cyan]")

    console_awr.print("📋 [bold cyan]Configuration in use:[/]")
    console_awr.print("")
    console_awr.print(f"  registry:      {get_registry_path()}")
    console_awr.print(f"  target-dir:    {config.get('target-dir') or '[dim]Not set[/]'}")
    console_awr.print(f"  project-type:  {config.get('project-type') or '[dim]Not set[/]'}")


def register(app):
    """Register the config command with the Typer app."""

    @app.command()
    def config(
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="Project directory (default: current directory)"
        ),
        target_dir: Optional[str] = typer.Option(
            None,
            "--target-dir",
            help="Default component directory for this project"
        ),
        project_type: Optional[ProjectFlavor] = typer.Option(
            None,
            "--project-type",
            help="Default project type for this project (next or react)"
        ),
        set_registry: Optional[Path] = typer.Option(
            None,
            "--set-registry",
            help="Set the global component registry directory"
        )
    ):
        """
        Manage compkit configuration settings.
        """
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=False)

        try:
            console_awr.print("")
            config_command(project_dir, target_dir, project_type, set_registry, console)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Config setting cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except CompkitError as e:
            console_awr.print(f"\n[bold red]❌ Config setting failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
