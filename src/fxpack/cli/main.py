"""Main CLI entry point for fxpack."""

from importlib import metadata
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel


def get_version() -> str:
    """Get the package version from metadata."""
    try:
        return metadata.version("fxpack")
    except metadata.PackageNotFoundError:
        return "unknown"


console = Console()

# command: fxpack
app = typer.Typer(
    name="fxpack",
    help="fxpack - build game-server resources from manifest.yaml",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# command: fxpack <command>


@app.command("build")
def build_cmd(
    names: Optional[List[str]] = typer.Argument(
        None, help="Resources to build (defaults to every discovered resource)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Wipe each output target before building"
    ),
    reload_manifest: bool = typer.Option(
        False, "--reload-manifest", help="Re-read manifest.yaml before building"
    ),
):
    """Build resources into the dist folder."""
    from .commands.build import build_command

    return build_command(names, force, reload_manifest)


@app.command("list")
def list_cmd():
    """Show every resource found in the source tree."""
    from .commands.resource import list_command

    return list_command()


@app.command("manifest")
def manifest_cmd(name: str = typer.Argument(..., help="Resource name")):
    """Print the fxmanifest.lua a resource would get, without writing it."""
    from .commands.resource import manifest_command

    return manifest_command(name)


@app.command("clean")
def clean_cmd(
    names: List[str] = typer.Argument(..., help="Resources whose build cache to delete"),
):
    """Delete build cache folders."""
    from .commands.resource import clean_command

    return clean_command(names)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    """fxpack - build game-server resources from manifest.yaml."""
    if version:
        console.print(f"fxpack v{get_version()}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            Panel(
                "[bold blue]fxpack[/bold blue]\n\n"
                "Builds resources declared by manifest.yaml files.\n\n"
                "Use [bold]fxpack --help[/bold] to see available commands.",
                title="Welcome",
                expand=False,
            )
        )


if __name__ == "__main__":
    app()
