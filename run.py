#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the notes service. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action token --user-id 1
    python run.py --action info
"""

import subprocess
import sys
from datetime import timedelta
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.logging import get_logger, log_with_source, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "token", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--user-id",
    default=None,
    type=int,
    help="User id to issue a token for (for token action).",
)
@click.option(
    "--expires-minutes",
    default=None,
    type=click.IntRange(min=1),
    help="Token lifetime in minutes (for token action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    user_id: int | None,
    expires_minutes: int | None,
) -> None:
    """
    Notes Service Entry Point.

    Run the application server, view configuration, or issue a
    development access token.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config

        # Issue a token for user 1
        python run.py --action token --user-id 1

        # Show application info
        python run.py --action info
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    log_with_source(logger, "cli", "debug", "Starting application", action=action, log_level=log_level)

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "token":
        issue_token(logger, user_id, expires_minutes)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI development server."""
    from modules.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    log_with_source(
        logger, "cli", "info", "Starting server",
        host=server_host, port=server_port, reload=reload,
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "modules.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        log_with_source(logger, "cli", "info", "Server stopped")
    except subprocess.CalledProcessError as e:
        log_with_source(logger, "cli", "error", "Server failed to start", exit_code=e.returncode)
        sys.exit(e.returncode)


def show_config(logger) -> None:
    """Display loaded configuration. Secrets are never printed."""
    click.echo("Application Configuration:\n")

    try:
        from modules.backend.core.config import get_app_config

        app_config = get_app_config()
        sections = {
            "Application": app_config.application,
            "Database": app_config.database,
            "Logging": app_config.logging,
            "Security": app_config.security,
        }

        for title, section in sections.items():
            click.echo(f"{title} Settings (from YAML):")
            click.echo("-" * 40)
            _echo_mapping(section.model_dump())
            click.echo()

        log_with_source(logger, "cli", "info", "Configuration displayed successfully")

    except (FileNotFoundError, ValueError) as e:
        log_with_source(logger, "cli", "error", "Failed to load configuration", error=str(e))
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def _echo_mapping(values: dict, indent: int = 2) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def issue_token(logger, user_id: int | None, expires_minutes: int | None) -> None:
    """Print a development access token for ``user_id``."""
    if user_id is None:
        click.echo(click.style("Error: --user-id is required for the token action.", fg="red"), err=True)
        sys.exit(2)

    from modules.backend.core.security import create_user_token

    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    token = create_user_token(user_id, expires_delta=expires_delta)

    log_with_source(logger, "cli", "info", "Token issued", user_id=user_id)
    click.echo(token)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Notes Service")
    click.echo("=" * 40)

    from modules.backend.core.config import get_app_config

    app_config = get_app_config()
    click.echo(f"Name: {app_config.application.name}")
    click.echo(f"Version: {app_config.application.version}")
    click.echo(f"Description: {app_config.application.description}")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the development server")
    click.echo("  --action config   Display configuration")
    click.echo("  --action token    Issue a development token (--user-id)")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action server --reload --verbose")
    click.echo("  python run.py --action token --user-id 1")

    log_with_source(logger, "cli", "debug", "Info displayed")


if __name__ == "__main__":
    main()
