"""Main CLI entry point for Helpdesk"""

import typer

from helpdesk import __version__
from helpdesk.cli.commands import chat, server, tree

app = typer.Typer(
    name="helpdesk",
    help="Branching question-and-answer helpdesks for chat channels",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(tree.app, name="tree")
app.add_typer(chat.app, name="chat")
app.add_typer(server.app, name="server")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"Helpdesk version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit", callback=_print_version, is_eager=True
    ),
) -> None:
    """Branching question-and-answer helpdesks for chat channels"""


def cli() -> None:
    """Entry point for the `helpdesk` console script"""
    app()


if __name__ == "__main__":
    cli()
