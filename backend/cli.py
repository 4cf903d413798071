"""
CityFood CLI.

Command-line interface for running the API, preparing the database and
reading the dashboard from a terminal.
"""

import sys
from datetime import datetime
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from shared.config.settings import settings

app = typer.Typer(
    name="cityfood",
    help="CityFood back-office CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(settings.rest_api_port, help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    console.print(f"[blue]Starting CityFood API on {host}:{port}[/blue]")
    uvicorn.run("cityfood_api.main:app", host=host, port=port, reload=reload)


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all database tables."""
    from cityfood_api.models import Base
    from shared.infrastructure.db import engine

    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created[/green]")


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Insert demo data (categories, businesses, menus, orders)."""
    if settings.is_production and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    from cityfood_api.models import Base
    from cityfood_api.seed import seed as seed_database
    from shared.infrastructure.db import engine, get_db_context

    Base.metadata.create_all(bind=engine)
    with get_db_context() as db:
        counts = seed_database(db)

    if not counts:
        console.print("[yellow]Database already contains data, nothing inserted[/yellow]")
        return

    table = Table(title="Seed data")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="green", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)


@app.command()
def create_admin(
    email: str = typer.Argument(..., help="Login e-mail"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
    name: Optional[str] = typer.Option(None, help="Display name"),
    phone: Optional[str] = typer.Option(None, help="Phone number"),
):
    """Create an administrator account."""
    from cityfood_api.services.domain import AdminService
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException

    with get_db_context() as db:
        try:
            admin = AdminService(db).create_admin(email, password, name, phone)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ Admin created: {admin.email} ({admin.id})[/green]")


# =============================================================================
# Dashboard Commands
# =============================================================================

def _client_factory(api_url: str):
    from admin_client import AdminClient

    return AdminClient(api_url)


def _open_client(api_url: str, email: Optional[str], password: Optional[str], token: Optional[str]):
    """Build an authenticated dashboard client or exit."""
    from admin_client import AdminClientError

    client = _client_factory(api_url)
    if token:
        client.token = token
        return client
    if not (email and password):
        console.print("[red]Provide --token or --email and --password[/red]")
        client.close()
        raise typer.Exit(1)
    try:
        client.login(email, password)
    except AdminClientError as e:
        console.print(f"[red]✗ Login failed: {e.error}[/red]")
        client.close()
        raise typer.Exit(1)
    return client


API_URL_OPTION = typer.Option(settings.api_base_url, "--api-url", help="API base URL")
EMAIL_OPTION = typer.Option(None, "--email", envvar="CITYFOOD_ADMIN_EMAIL", help="Admin e-mail")
PASSWORD_OPTION = typer.Option(None, "--password", envvar="CITYFOOD_ADMIN_PASSWORD", help="Admin password")
TOKEN_OPTION = typer.Option(None, "--token", envvar="CITYFOOD_TOKEN", help="Bearer token")


@app.command()
def stats(
    period: int = typer.Option(7, "--period", help="Chart window in days (7 or 30)"),
    api_url: str = API_URL_OPTION,
    email: Optional[str] = EMAIL_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
    token: Optional[str] = TOKEN_OPTION,
):
    """Show dashboard statistics."""
    from admin_client import AdminClientError, category_shares, orders_per_day, revenue_summary
    from admin_client.charts import PERIODS

    if period not in PERIODS:
        console.print(f"[red]--period must be one of {', '.join(map(str, PERIODS))}[/red]")
        raise typer.Exit(1)

    client = _open_client(api_url, email, password, token)
    try:
        data = client.dashboard_stats()
    except AdminClientError as e:
        console.print(f"[red]✗ {e.error}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()

    totals = Table(title="Tableau de bord")
    totals.add_column("Indicateur", style="cyan")
    totals.add_column("Valeur", style="green", justify="right")
    totals.add_row("Utilisateurs", str(data["userCount"]))
    totals.add_row("Commerces", str(data["businessCount"]))
    totals.add_row("Catégories", str(data["categoryCount"]))
    totals.add_row("Commandes", str(data["orderCount"]))
    revenue = revenue_summary(data)
    totals.add_row("Chiffre d'affaires", revenue.total_label)
    totals.add_row("Panier moyen", revenue.average_label)
    console.print(totals)

    days = Table(title=f"Commandes (derniers {period} jours)")
    days.add_column("Jour", style="cyan")
    days.add_column("Commandes", style="green", justify="right")
    for point in orders_per_day(data["ordersByDay"], period):
        days.add_row(point.label, str(point.count))
    console.print(days)

    categories = Table(title="Commandes par catégorie")
    categories.add_column("Catégorie", style="cyan")
    categories.add_column("Commandes", style="green", justify="right")
    categories.add_column("Part", style="yellow", justify="right")
    for share in category_shares(data["ordersByCategory"]):
        categories.add_row(share.name, str(share.total), f"{share.share:.0%}")
    console.print(categories)

    recent = Table(title="Commandes récentes")
    recent.add_column("ID", style="dim")
    recent.add_column("Commerce", style="cyan")
    recent.add_column("Total", style="green", justify="right")
    recent.add_column("Statut", style="yellow")
    for order in data["recentOrders"]:
        business = (order.get("business") or {}).get("name", "-")
        recent.add_row(order["id"][:8], business, f"{order['total']} FCFA", order["status"])
    console.print(recent)


def _nested(key: str, field: str = "name") -> Callable[[dict[str, Any]], str]:
    return lambda record: str((record.get(key) or {}).get(field, "-"))


def _flag(key: str, yes: str, no: str) -> Callable[[dict[str, Any]], str]:
    return lambda record: yes if record.get(key) else no


def _created(record: dict[str, Any]) -> str:
    return str(record.get("createdAt", ""))[:10]


# resource -> (category filter field, [(header, value getter)])
LIST_COLUMNS: dict[str, tuple[str, list[tuple[str, Callable[[dict[str, Any]], str]]]]] = {
    "categories": ("categoryId", [
        ("Nom", lambda r: r["name"]),
        ("Slug", lambda r: r["slug"]),
        ("Créée le", _created),
    ]),
    "businesses": ("categoryId", [
        ("Nom", lambda r: r["name"]),
        ("Catégorie", _nested("category")),
        ("Statut", _flag("isOpen", "Ouvert", "Fermé")),
        ("Créé le", _created),
    ]),
    "menu-sections": ("businessId", [
        ("Nom", lambda r: r["name"]),
        ("Commerce", _nested("business")),
        ("Articles", lambda r: str(len(r.get("menuItems") or []))),
    ]),
    "menu-items": ("menuSectionId", [
        ("Nom", lambda r: r["name"]),
        ("Section", _nested("menuSection")),
        ("Prix", lambda r: f"{r['price']} FCFA"),
        ("Statut", _flag("isAvailable", "Disponible", "Indisponible")),
    ]),
    "orders": ("businessId", [
        ("ID", lambda r: r["id"][:8]),
        ("Commerce", _nested("business")),
        ("Total", lambda r: f"{r['total']} FCFA"),
        ("Statut", lambda r: r["status"]),
        ("Créée le", _created),
    ]),
    "admins": ("categoryId", [
        ("Nom", lambda r: r.get("name") or "-"),
        ("E-mail", lambda r: r["email"]),
        ("Téléphone", lambda r: r.get("phone") or "-"),
    ]),
}


@app.command("list")
def list_records(
    resource: str = typer.Argument(..., help=f"One of: {', '.join(LIST_COLUMNS)}"),
    search: str = typer.Option("", "--search", "-s", help="Search name, description, parent name"),
    category: Optional[str] = typer.Option(None, "--category", help="Parent id (category, business or section)"),
    status: Optional[str] = typer.Option(None, "--status", help="open, closed or an order status"),
    start: Optional[datetime] = typer.Option(None, "--from", formats=["%Y-%m-%d"], help="Created on or after"),
    end: Optional[datetime] = typer.Option(None, "--to", formats=["%Y-%m-%d"], help="Created on or before"),
    page: int = typer.Option(1, "--page", min=1),
    page_size: int = typer.Option(10, "--page-size", min=1),
    api_url: str = API_URL_OPTION,
    email: Optional[str] = EMAIL_OPTION,
    password: Optional[str] = PASSWORD_OPTION,
    token: Optional[str] = TOKEN_OPTION,
):
    """List a resource with local search, filters and pagination."""
    from admin_client import AdminClientError, ListFilters, ListView

    if resource not in LIST_COLUMNS:
        console.print(f"[red]Unknown resource '{resource}'. Choose from: {', '.join(LIST_COLUMNS)}[/red]")
        raise typer.Exit(1)
    category_field, columns = LIST_COLUMNS[resource]

    client = _open_client(api_url, email, password, token)
    try:
        records = client.list_resource(resource)
    except AdminClientError as e:
        console.print(f"[red]✗ {e.error}[/red]")
        raise typer.Exit(1)
    finally:
        client.close()

    view = ListView(records, page_size=page_size, category_field=category_field)
    view.set_filters(ListFilters(
        search=search,
        category_id=category,
        status=status,
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
    ))
    current = view.go_to(page)

    table = Table(title=f"{resource} ({current.total})")
    for header, _ in columns:
        table.add_column(header)
    for record in current.items:
        table.add_row(*(getter(record) for _, getter in columns))
    console.print(table)
    if current.total:
        console.print(
            f"Affichage de {current.first_index} à {current.last_index} sur {current.total}"
            f" (page {current.page}/{current.total_pages})"
        )


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(api_url: str = API_URL_OPTION):
    """Check that the API answers."""
    import time
    import httpx

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    try:
        start = time.time()
        response = httpx.get(f"{api_url.rstrip('/')}/api/health", timeout=5.0)
        elapsed = (time.time() - start) * 1000
        if response.status_code == 200:
            table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
        else:
            table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="CityFood Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
