"""
Recipe Master CLI.

Command-line interface for common operations.
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="recipe-master",
    help="Recipe Master Restaurant Management CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all database tables."""
    from rest_api.models import Base
    from shared.infrastructure.db import engine

    console.print(f"[blue]Creating tables on: {engine.url.render_as_string(hide_password=True)}[/blue]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Seed even in production"),
):
    """Seed database with the demo restaurant."""
    from rest_api.models import Base
    from rest_api.seed import DEMO_EMAIL, DEMO_PASSWORD, seed
    from shared.config.settings import settings
    from shared.infrastructure.db import engine, get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    Base.metadata.create_all(bind=engine)
    with get_db_context() as db:
        seed(db)

    console.print("[green]✓ Demo data ready[/green]")
    console.print(f"  Login: [cyan]{DEMO_EMAIL}[/cyan] / [cyan]{DEMO_PASSWORD}[/cyan]")


@app.command()
def db_stats():
    """Show row counts per account."""
    from sqlalchemy import func, select

    from rest_api.models import InventoryItem, Order, Recipe, Reservation, Table as FloorTable, User
    from shared.infrastructure.db import get_db_context

    counted = [
        ("Recipes", Recipe),
        ("Tables", FloorTable),
        ("Orders", Order),
        ("Reservations", Reservation),
        ("Inventory", InventoryItem),
    ]

    table = Table(title="Accounts")
    table.add_column("Email", style="cyan")
    table.add_column("Plan", style="magenta")
    for label, _ in counted:
        table.add_column(label, style="green", justify="right")

    with get_db_context() as db:
        for account in db.scalars(select(User).order_by(User.id)):
            counts = [
                db.scalar(select(func.count()).select_from(model).where(model.tenant_id == account.id))
                for _, model in counted
            ]
            table.add_row(account.email, account.subscription_plan, *(str(c) for c in counts))

    console.print(table)


# =============================================================================
# Account Commands
# =============================================================================

@app.command()
def create_account(
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    first_name: str = typer.Option(..., prompt=True),
    last_name: str = typer.Option(..., prompt=True),
    restaurant_name: str = typer.Option(..., prompt=True),
):
    """Register a restaurant account."""
    from rest_api.services.domain import AccountService
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException
    from shared.utils.schemas import RegisterRequest

    data = RegisterRequest(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        restaurant_name=restaurant_name,
    )
    with get_db_context() as db:
        try:
            result = AccountService(db).register(data.model_dump(), ip_address="cli")
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ Account {result.user.id} created for {result.user.email}[/green]")


# =============================================================================
# Configuration Commands
# =============================================================================

@app.command()
def check_config():
    """Validate security-relevant settings."""
    from shared.config.settings import settings

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Environment", settings.environment)
    table.add_row("Debug", str(settings.debug))
    table.add_row("JWT secret", "set" if settings.jwt_secret else "[red]missing[/red]")
    table.add_row("Allowed origins", settings.allowed_origins or "(localhost defaults)")
    console.print(table)

    errors = settings.validate_secrets()
    if errors:
        for error in errors:
            console.print(f"[red]✗ {error}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Configuration OK[/green]")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(None, help="Port (defaults to REST_API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    from shared.config.settings import settings

    uvicorn.run("rest_api.main:app", host=host, port=port or settings.rest_api_port, reload=reload)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Recipe Master Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("CLI", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
