"""CLI command for starting the Helpdesk HTTP gateway"""

import os
from pathlib import Path

import typer
import uvicorn
import yaml

from helpdesk.config.loader import ConfigLoader
from helpdesk.core.errors import ConfigError, TreeError
from helpdesk.observability.logging import setup_logging

app = typer.Typer(
    name="server",
    help="Start the Helpdesk HTTP gateway",
    add_completion=False,
)


@app.command()
def start(
    config: Path = typer.Option(
        "helpdesk.yaml",
        "--config",
        "-c",
        help="Path to helpdesk.yaml or config directory",
    ),
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind the server to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind the server to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload (development only)"),
) -> None:
    """
    Start the Helpdesk HTTP gateway.

    Validates the configuration and every dialogue tree it references,
    then serves the FastAPI app with uvicorn.
    """
    if port < 1 or port > 65535:
        typer.echo(f"Error: Port must be between 1 and 65535, got {port}", err=True)
        raise typer.Exit(1)

    try:
        config_file = ConfigLoader.resolve(config)
        app_config = ConfigLoader.load(config_file)
        ConfigLoader.load_trees(app_config, config_file.parent)
    except (FileNotFoundError, yaml.YAMLError, ConfigError, TreeError) as e:
        typer.echo(f"Error: Invalid configuration: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"✓ Configuration loaded: {config_file} ({len(app_config.helpdesks)} helpdesk(s))")
    setup_logging(app_config.settings.log_level, app_config.settings.log_file)

    # The app loads its config from the environment
    os.environ["HELPDESK_CONFIG_PATH"] = str(config_file.absolute())

    typer.echo(f"\n🚀 Starting Helpdesk gateway on http://{host}:{port}")
    typer.echo(f"   Docs: http://{host}:{port}/docs\n")

    try:
        uvicorn.run(
            "helpdesk.server.api:app",
            host=host,
            port=port,
            reload=reload,
            log_level="info",
        )
    except KeyboardInterrupt:
        typer.echo("\n\n👋 Shutting down Helpdesk gateway...")
    except Exception as e:
        typer.echo(f"\n❌ Error starting server: {e}", err=True)
        raise typer.Exit(1) from e
