"""`helpdesk chat`: play one helpdesk channel in the terminal."""

import asyncio
from pathlib import Path

import typer

app = typer.Typer(help="Walk through a dialogue tree in the terminal")


@app.callback(invoke_without_command=True)
def run_chat(
    ctx: typer.Context,
    tree: Path = typer.Option(..., "--tree", "-t", help="Path to the dialogue tree YAML file"),
    timeout: float = typer.Option(300.0, "--timeout", help="Seconds each prompt waits for a reply"),
    user_id: int = typer.Option(1, "--user", "-u", help="User ID to chat as"),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level"),
) -> None:
    """Start an interactive helpdesk session; type quit or exit to leave."""
    if ctx.invoked_subcommand:
        return
    if timeout <= 0:
        typer.echo(f"Error: Timeout must be positive, got {timeout}", err=True)
        raise typer.Exit(1)

    # Deferred so `helpdesk --help` does not pay for rich prompt setup
    from helpdesk.cli.chat_runner import ChatConfig, run_chat_session

    config = ChatConfig(tree_path=tree, timeout_seconds=timeout, user_id=user_id, debug=debug)
    try:
        asyncio.run(run_chat_session(config))
    except KeyboardInterrupt:
        typer.echo("\nBye!")
    except Exception as e:
        typer.echo(f"Fatal error: {e}", err=True)
        raise typer.Exit(1) from e
