from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from ..report import CheckReport

console = Console(soft_wrap=True)

STATUS = {
    "markdown-deps": "Checking code blocks in {path}...",
    "html-root-url": "Checking doc attributes in {path}...",
    "contains-regex": 'Searching for "{template}" in {path}...',
    "only-contains-regex": 'Searching for "{template}" in {path}...',
    "contains-substring": 'Searching for "{template}" in {path}...',
}


def print_status(kind: str, path: object, template: str | None = None) -> None:
    line = STATUS[kind].format(path=path, template=template)
    console.print(f"[blue]{escape(line)}[/blue]", highlight=False)


def print_report(report: CheckReport, verbose: bool = False) -> None:
    # Report text holds TOML headers like [dependencies]; no markup.
    body = report.render(verbose=verbose)
    if body:
        console.print(body, markup=False, highlight=False)
    if report.ok:
        console.print(f"[green]✓[/green] {escape(report.summary())}", highlight=False)
    else:
        console.print(f"[red]✗ {escape(report.summary())}[/red]", highlight=False)


def print_error(err: Exception) -> None:
    console.print(f"[red]Error:[/red] {escape(str(err))}", highlight=False)
