"""Command-line interface for ChaTop.

This module provides the CLI commands for running and managing
the ChaTop application.
"""

from typing import NoReturn

import click
from pydantic import ValidationError

from chatop.core.config import Settings, get_settings
from chatop.core.logging import configure_logging, get_logger


def load_settings() -> Settings:
    """Load settings or exit with a readable error."""
    try:
        return get_settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            click.echo(f"Configuration error: CHATOP_{field.upper()}: {error['msg']}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="ChaTop")
def cli() -> None:
    """ChaTop - rental listing backend.

    Configuration is read from CHATOP_* environment variables and .env.
    CHATOP_SECRET_KEY must be set before any command that starts the app.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the ChaTop server."""
    import uvicorn

    settings = load_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting ChaTop server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "chatop.infrastructure.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all database tables. Use this only in development.
    In production, use migrations instead.
    """
    import asyncio

    from chatop.infrastructure.persistence.database import DatabaseManager, init_database

    settings = load_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await init_database(db)
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display ChaTop configuration."""
    settings = load_settings()

    click.echo(f"""
ChaTop v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}
  External URL: {settings.external_url}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: 30 minutes
  Public Paths: {', '.join(settings.exempt_paths)}

Uploads:
  Directory:    {settings.upload_dir}
  URL Path:     /{settings.upload_url_path}
  Max Size:     {settings.max_picture_size} bytes

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `chatop` command is run
    or when using `python -m chatop`.
    """
    cli()
