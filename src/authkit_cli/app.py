"""authkit CLI application using Typer.

This module provides command-line utilities for deploying authkit:
secret generation, refresh token schema creation and access token
inspection.
"""

import asyncio
from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.ext.asyncio import create_async_engine

from authkit_core.crypto import CryptoTokenGenerator
from authkit_core.token import JwtCodec, SignedTokenError, SignedTokenExpiredError
from authkit_tokens.persistence.sqlalchemy import AuthTokensBase

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./authkit.db"
JWT_SECRET_BYTES = 64

app = typer.Typer(
    name="authkit",
    help="authkit - token lifecycle and authentication toolkit CLI",
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
    help="Refresh token storage utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

tokens_app = typer.Typer(
    name="tokens",
    help="Access token utilities",
    no_args_is_help=True,
)
app.add_typer(tokens_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a JWT signing secret for authkit configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]authkit Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secret for your [bold].env[/bold] configuration file:\n"
    )

    # 64 random bytes
    jwt_secret = CryptoTokenGenerator().generate_base64url_token(JWT_SECRET_BYTES)
    console.print(f"[cyan]AUTHKIT_JWT_SECRET_KEY[/cyan]={jwt_secret}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


async def _create_schema(database_url: str) -> None:
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(AuthTokensBase.metadata.create_all)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db(
    database_url: str = typer.Option(
        DEFAULT_DATABASE_URL,
        "--database-url",
        envvar="AUTHKIT_DATABASE_URL",
        help="SQLAlchemy async database URL",
    ),
) -> None:
    """Create the refresh_tokens table if it does not exist."""
    try:
        asyncio.run(_create_schema(database_url))
    except Exception as e:
        console.print(f"[red]Schema creation failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    tables = ", ".join(sorted(AuthTokensBase.metadata.tables))
    console.print(f"[green]Created tables:[/green] {tables}")


def _format_claim(name: str, value: object) -> str:
    if name in ("iat", "exp", "nbf") and isinstance(value, (int, float)):
        moment = datetime.fromtimestamp(value, tz=timezone.utc)
        return f"{value} ({moment.isoformat()})"
    return str(value)


@tokens_app.command("inspect")
def inspect_token(
    token: str = typer.Argument(..., help="Access token (JWT) to decode"),
    secret: str = typer.Option(
        "",
        "--secret",
        envvar="AUTHKIT_JWT_SECRET_KEY",
        help="Verify the signature with this secret",
    ),
) -> None:
    """Show the claims of an access token.

    Without a secret the signature is not checked.
    """
    try:
        claims = JwtCodec.decode_unverified(token)
    except SignedTokenError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title="Access token claims")
    table.add_column("Claim", style="cyan")
    table.add_column("Value")
    for name, value in claims.items():
        table.add_row(name, _format_claim(name, value))
    console.print(table)

    if not secret:
        console.print("[dim]Signature not verified (no secret given).[/dim]")
        return

    try:
        JwtCodec(secret).verify(token)
    except SignedTokenExpiredError:
        console.print("[yellow]Signature valid, but the token has expired.[/yellow]")
        raise typer.Exit(code=1) from None
    except SignedTokenError as e:
        console.print(f"[red]Verification failed:[/red] {escape(e.message)}")
        raise typer.Exit(code=1) from e
    console.print("[green]Signature valid.[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
