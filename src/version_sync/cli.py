from __future__ import annotations

import typer

from .commands.check_cmd import check as check_cmd
from .commands.run_cmd import run as run_cmd, show as show_cmd

app = typer.Typer(help="version-sync: keep version numbers in docs in sync with the package")
app.add_typer(check_cmd, name="check")
app.command("run")(run_cmd)
app.command("show")(show_cmd)


if __name__ == "__main__":
    app()
