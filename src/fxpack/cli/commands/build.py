"""fxpack build command - Build resources into the dist folder."""

import asyncio
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from ...core.models import BuildOptions, BuildResult
from ...core.session import BuildSession
from ...core.utils.rich_ui import create_build_summary, create_empty_panel

console = Console()


def build_command(
    names: Optional[List[str]] = None,
    force: bool = False,
    reload_manifest: bool = False,
):
    """
    Build resources into the dist folder.

    Copies declared files (including files imported from other resources)
    and writes fxmanifest.lua for every requested resource.

    Examples:
      fxpack build                  # Build every discovered resource
      fxpack build chat inventory   # Build two resources
      fxpack build --force          # Wipe output targets first
    """
    session = BuildSession()
    options = BuildOptions(force=force, reload_manifest=reload_manifest)

    targets = list(names) if names else list(session.discover())
    if not targets:
        console.print(create_empty_panel(session.config.source_dir))
        raise typer.Exit(1)

    _display_build_config(session, targets, options)

    try:
        results = run_builds(session, targets, options)
    except KeyboardInterrupt:
        console.print("\n[yellow]Build cancelled by user[/yellow]")
        raise typer.Exit(1)

    console.print(create_build_summary(results))

    failed = [name for name, result in results.items() if not result.success]
    if failed:
        console.print(f"[red]Build failed for:[/red] {', '.join(failed)}")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"Built [bold]{len(results)}[/bold] resource(s) into "
            f"{session.config.resources_dir}",
            title="✓ Build Complete",
            expand=False,
            border_style="green",
        )
    )


def run_builds(
    session: BuildSession, targets: List[str], options: BuildOptions
) -> Dict[str, BuildResult]:
    """Build ``targets`` one by one with a progress display."""
    results: Dict[str, BuildResult] = {}

    async def _build_all():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            for name in targets:
                task = progress.add_task(f"Building {name}...")
                results.update(await session.build([name], options))

                if results[name].success:
                    progress.update(task, description=f"[green]✓ Built {name}")
                else:
                    progress.update(task, description=f"[red]✗ {name}")
                progress.stop_task(task)

    asyncio.run(_build_all())
    return results


def _display_build_config(
    session: BuildSession, targets: List[str], options: BuildOptions
):
    """Display build configuration."""
    console.print(
        Panel(
            f"[bold]Resources:[/bold] {', '.join(targets)}\n"
            f"[bold]Source:[/bold] {session.config.source_dir}\n"
            f"[bold]Output:[/bold] {session.config.resources_dir}\n"
            f"[bold]Bundled scripts:[/bold] {session.config.bundle_scripts}\n"
            f"[bold]Force:[/bold] {options.force}",
            title="fxpack Build Configuration",
            expand=False,
        )
    )
