"""Resource inspection and cleanup commands."""

from typing import List

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ...core.exceptions import AmbiguousTargetError
from ...core.session import BuildSession
from ...core.utils.rich_ui import create_empty_panel

console = Console()


def list_command():
    """Show every resource found in the source tree."""
    session = BuildSession()
    console.print(generate_resource_table(session))


def generate_resource_table(session: BuildSession):
    """Generate a formatted table of discovered resources."""
    discovered = session.discover()

    if not discovered:
        return create_empty_panel(session.config.source_dir)

    table = Table(title="Resources")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source", style="magenta")
    table.add_column("Output", style="blue")

    for name, root in discovered.items():
        table.add_row(name, root, session.config.output_target(name))

    return table


def manifest_command(name: str):
    """Print the manifest a resource would get."""
    session = BuildSession()
    resource = session.resource(name)

    if resource is None:
        console.print(f"[red]Error:[/red] Resource {name} not found")
        raise typer.Exit(1)

    try:
        rendered = resource.render_resource_manifest(resource.resolve_scripts())
    except AmbiguousTargetError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        Panel(
            Syntax(rendered, "lua", theme="ansi_dark"),
            title=f"{name}/fxmanifest.lua",
            expand=False,
        )
    )


def clean_command(names: List[str]):
    """Delete the build cache folders of ``names``."""
    session = BuildSession()
    session.clean(names)
    console.print(f"🧹 Cleaned build cache of {', '.join(names)}")
