# compkit/commands/catalog.py

import typer
from rich.console import Console
from rich.table import Table

from compkit.core.console import ConsoleAware
from compkit.core.exceptions import CompkitError
from compkit.core.global_config import get_registry_path
from compkit.core.registry import RegistryStore

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def list_command(console: Console, verbose: bool):
    """Command wrapper for list command."""
    console_awr = ConsoleAware(console=console, verbose=verbose)

    registry = RegistryStore(get_registry_path(), console=console, verbose=verbose)
    entries = registry.load()

    if not entries:
        console_awr.print("  [cyan]The registry is empty.[/cyan]")
        return

    table = Table(title="Available components", title_justify="left")
    table.add_column("Name", style="bold magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Files")
    table.add_column("Dependencies")
    table.add_column("Registry dependencies")

    for entry in entries:
        table.add_row(
            entry.name,
            entry.type or "-",
            str(len(entry.files)),
            ", ".join(entry.dependencies) or "-",
            ", ".join(entry.registry_dependencies) or "-",
        )

    console.print(table)


def register(app):
    """Register the list command with the main Typer app."""

    @app.command(name="list")
    def list_components(
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """List the components available in the registry."""
        console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=verbose)
        try:
            console_awr.print("")
            list_command(console, verbose)
            console_awr.print("")

        except CompkitError as e:
            console_awr.print(f"\n[bold red]❌ List failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
