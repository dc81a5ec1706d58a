from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint

from ..config import load_project
from ..errors import VersionSyncError
from ..runner import run_spec
from ..utils.output import print_error, print_report, print_status


def run(root: Optional[Path] = typer.Option(None, "--root", help="Project directory (auto-detect if omitted)"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Also print passing lines")):
    """Run every check listed in [tool.version-sync]."""
    try:
        project = load_project(root or Path.cwd())
    except VersionSyncError as err:
        print_error(err)
        raise typer.Exit(2)

    if not project.checks:
        rprint(f"[yellow]No checks configured in {project.manifest}[/yellow]")
        return

    rprint(f"[green]Checking[/green] {project.name} {project.version}")
    failed = 0
    for spec in project.checks:
        print_status(spec.kind, spec.path, spec.template)
        try:
            report = run_spec(spec, project.name, project.version)
        except VersionSyncError as err:
            print_error(err)
            raise typer.Exit(2)
        print_report(report, verbose)
        if not report.ok:
            failed += 1

    if failed:
        rprint(f"[red]{failed} of {len(project.checks)} checks failed[/red]")
        raise typer.Exit(1)


def show(root: Optional[Path] = typer.Option(None, "--root", help="Project directory (auto-detect if omitted)")):
    """Show the detected package name, version and manifest."""
    try:
        project = load_project(root or Path.cwd())
    except VersionSyncError as err:
        print_error(err)
        raise typer.Exit(2)
    typer.echo(f"name:     {project.name}")
    typer.echo(f"version:  {project.version}")
    typer.echo(f"manifest: {project.manifest}")
    typer.echo(f"checks:   {len(project.checks)}")
