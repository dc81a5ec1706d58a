from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ..config import load_project
from ..errors import VersionSyncError
from ..runner import run_check
from ..utils.output import print_error, print_report, print_status

check = typer.Typer(help="Run a single check against one file")

NameOption = typer.Option(None, "--name", "-n", help="Package name (defaults to the project manifest)")
VersionOption = typer.Option(None, "--version", "-V", help="Canonical version (defaults to the project manifest)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Also print passing lines")


def _resolve(name: Optional[str], version: Optional[str]) -> tuple[str, str]:
    if name is not None and version is not None:
        return name, version
    project = load_project(Path.cwd())
    return name or project.name, version or project.version


def _run(kind: str, path: Path, name: Optional[str], version: Optional[str],
         verbose: bool, template: Optional[str] = None) -> None:
    try:
        pkg_name, pkg_version = _resolve(name, version)
        print_status(kind, path, template)
        report = run_check(kind, path, pkg_name, pkg_version, template)
    except VersionSyncError as err:
        print_error(err)
        raise typer.Exit(2)
    print_report(report, verbose)
    if not report.ok:
        raise typer.Exit(1)


@check.command("markdown-deps")
def markdown_deps(path: Path = typer.Argument(..., help="Markdown file, e.g. README.md"),
                  name: Optional[str] = NameOption,
                  version: Optional[str] = VersionOption,
                  verbose: bool = VerboseOption):
    """Check dependency versions in ```toml code blocks."""
    _run("markdown-deps", path, name, version, verbose)


@check.command("html-root-url")
def html_root_url(path: Path = typer.Argument(..., help="Crate root, e.g. src/lib.rs"),
                  name: Optional[str] = NameOption,
                  version: Optional[str] = VersionOption,
                  verbose: bool = VerboseOption):
    """Check the version in the html_root_url doc attribute."""
    _run("html-root-url", path, name, version, verbose)


@check.command("contains-regex")
def contains_regex(path: Path = typer.Argument(...),
                   template: str = typer.Argument(..., help="Regex with {name}/{version} placeholders"),
                   name: Optional[str] = NameOption,
                   version: Optional[str] = VersionOption,
                   verbose: bool = VerboseOption):
    """Check that at least one line matches TEMPLATE."""
    _run("contains-regex", path, name, version, verbose, template)


@check.command("only-contains-regex")
def only_contains_regex(path: Path = typer.Argument(...),
                        template: str = typer.Argument(..., help="Regex with {name}/{version} placeholders"),
                        name: Optional[str] = NameOption,
                        version: Optional[str] = VersionOption,
                        verbose: bool = VerboseOption):
    """Check that every version-shaped line matches TEMPLATE."""
    _run("only-contains-regex", path, name, version, verbose, template)


@check.command("contains-substring")
def contains_substring(path: Path = typer.Argument(...),
                       template: str = typer.Argument(..., help="Text with {name}/{version} placeholders"),
                       name: Optional[str] = NameOption,
                       version: Optional[str] = VersionOption,
                       verbose: bool = VerboseOption):
    """Check that the file contains TEMPLATE literally."""
    _run("contains-substring", path, name, version, verbose, template)
