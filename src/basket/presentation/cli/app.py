"""Basket CLI application using Typer.

Command-line utilities for running and setting up the backend: secret
generation, schema management and the API server.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from basket.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from basket_config.settings import get_settings

app = typer.Typer(
    name="basket",
    help="Basket - authenticated shopping cart backend CLI",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a JWT signing secret for the .env file."""
    console.print("\n[bold green]Basket Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


def _database_display() -> str:
    url = get_settings().database_url
    return url.split("@")[-1] if "@" in url else url


@db_app.command("init")
def db_init() -> None:
    """Create missing tables."""
    console.print(f"Database: {_database_display()}")
    asyncio.run(create_tables())
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("drop")
def db_drop(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop all tables (DELETES ALL DATA)."""
    console.print(f"Database: {_database_display()}")
    if not force:
        typer.confirm("This will DELETE ALL DATA. Continue?", abort=True)

    asyncio.run(drop_tables())
    console.print("[green]All tables dropped.[/green]")


@db_app.command("reset")
def db_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Drop and recreate all tables (DELETES ALL DATA)."""
    console.print(f"Database: {_database_display()}")
    if not force:
        typer.confirm("This will DELETE ALL DATA. Continue?", abort=True)

    asyncio.run(drop_tables())
    asyncio.run(create_tables())
    console.print("[green]Database recreated.[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "basket.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
