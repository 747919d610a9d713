"""Tree commands: validate files and preview rendered nodes."""

from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from helpdesk.core.errors import TreeError
from helpdesk.dialogue.render import render_node
from helpdesk.tree.loader import TreeLoader

app = typer.Typer(help="Validate and preview dialogue trees")


@app.command()
def validate(
    files: list[Path] = typer.Argument(..., help="Tree YAML files to check"),
) -> None:
    """Check that each tree has a root and no branches to unknown nodes."""
    console = Console()
    failed = False

    for path in files:
        try:
            tree = TreeLoader.load(path)
        except (FileNotFoundError, yaml.YAMLError, TreeError) as e:
            console.print(f"[red]✗ {escape(str(path))}: {escape(str(e))}[/]")
            failed = True
            continue

        roles = sum(1 for node in tree.values() if node.role_id is not None)
        console.print(
            f"[green]✓ {escape(str(path))}[/]: {len(tree)} nodes, {roles} granting a role"
        )

    if failed:
        raise typer.Exit(1)


@app.command()
def render(
    file: Path = typer.Argument(..., help="Tree YAML file"),
    node_id: str = typer.Argument("root", help="Node to render"),
) -> None:
    """Print the message a node is sent as."""
    try:
        tree = TreeLoader.load(file)
    except (FileNotFoundError, yaml.YAMLError, TreeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    node = tree.lookup(node_id)
    if node is None:
        typer.echo(f"Error: No node '{node_id}' in {file}", err=True)
        raise typer.Exit(1)

    typer.echo(render_node(node), nl=False)
