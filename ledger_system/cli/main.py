"""Command-line interface for the fact ledger using Typer and Rich."""

import asyncio
import sys
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ledger_system.config.logging import configure_logging, get_logger
from ledger_system.config.settings import settings
from ledger_system.data_management.database import Database
from ledger_system.data_management.errors import LedgerError
from ledger_system.data_management.schemas import (
    Category,
    Confidence,
    FactDetail,
    Importance,
)
from ledger_system.ledger import FactLedger
from ledger_system.seed import SEED_USER_ID, seed_database

__version__ = "0.1.0"

T = TypeVar("T")

# Initialize CLI app
app = typer.Typer(
    help="Fact Ledger CLI - track evolving facts as revision timelines",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")


IMPORTANCE_STYLE = {
    "breaking": "bold red",
    "high": "yellow",
    "medium": "cyan",
    "low": "dim",
}

DatabaseOption = typer.Option(
    None, "--database-url", "-d", help="SQLAlchemy async URL (defaults to settings)"
)
UserOption = typer.Option(
    None, "--user", "-u", help="Act as this user id (anonymous when omitted)"
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """Fact Ledger CLI."""
    if log_level:
        configure_logging(level=log_level)


def _run(database_url: Optional[str], action: Callable[[FactLedger], Awaitable[T]]) -> T:
    """Open a ledger, run one action against it and close it again."""

    async def runner() -> T:
        async with FactLedger(Database(database_url)) as ledger:
            return await action(ledger)

    try:
        return asyncio.run(runner())
    except (LedgerError, ValueError, PermissionError) as e:
        console.print(f"[red]✗[/red] {e}")
        logger.error(f"Command failed: {e}")
        raise typer.Exit(1)


def _facts_table(title: str, facts: list[FactDetail]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", width=10)
    table.add_column("Headline", style="bold")
    table.add_column("Current value", style="green")
    table.add_column("Category", style="cyan")
    table.add_column("Importance")
    table.add_column("Confidence")
    table.add_column("Updated", style="yellow")
    table.add_column("Revs", justify="right")

    for fact in facts:
        flags = ""
        if fact.is_bookmarked:
            flags += " ★"
        if fact.is_muted:
            flags += " (muted)"
        table.add_row(
            fact.id[:8],
            fact.headline + flags,
            fact.current_value,
            fact.category.value,
            f"[{IMPORTANCE_STYLE[fact.importance.value]}]{fact.importance.value}[/]",
            fact.confidence.value,
            fact.last_updated.strftime("%Y-%m-%d %H:%M"),
            str(len(fact.timeline)),
        )
    return table


@app.command("init-db")
def init_db(database_url: Optional[str] = DatabaseOption) -> None:
    """Create the ledger tables if they do not exist."""
    logger.info("Initializing schema")
    _run(database_url, lambda ledger: ledger.init_schema())
    console.print("[green]✓[/green] Schema ready")


@app.command()
def seed(
    database_url: Optional[str] = DatabaseOption,
    user: str = typer.Option(SEED_USER_ID, "--user", "-u", help="User id recorded as the writer"),
) -> None:
    """Load the seed catalogue into an empty ledger."""

    async def action(ledger: FactLedger) -> int:
        await ledger.init_schema()
        return await seed_database(ledger, user)

    created = _run(database_url, action)
    if created:
        console.print(f"[green]✓[/green] Seeded {created} facts")
    else:
        console.print("[yellow]⚠[/yellow] Ledger already populated, nothing seeded")


@app.command()
def facts(
    category: Optional[Category] = typer.Option(None, "--category", "-c"),
    importance: Optional[Importance] = typer.Option(None, "--importance", "-i"),
    confidence: Optional[Confidence] = typer.Option(None, "--confidence"),
    limit: int = typer.Option(settings.default_page_size, "--limit", "-n"),
    offset: int = typer.Option(0, "--offset"),
    user: Optional[str] = UserOption,
    database_url: Optional[str] = DatabaseOption,
) -> None:
    """List active facts, most recently updated first."""
    query = {
        "category": category,
        "importance": importance,
        "confidence": confidence,
        "limit": limit,
        "offset": offset,
    }
    page = _run(database_url, lambda ledger: ledger.get_facts(query, caller=user))
    console.print(_facts_table("Facts", page.items))
    console.print(
        f"[dim]Showing {len(page.items)} of {page.total} (offset {offset})[/dim]"
    )


@app.command()
def show(
    fact_id: str = typer.Argument(..., help="Fact identifier"),
    user: Optional[str] = UserOption,
    database_url: Optional[str] = DatabaseOption,
) -> None:
    """Show one fact with its timeline, sources and related facts."""
    fact = _run(database_url, lambda ledger: ledger.get_fact_by_id(fact_id, caller=user))
    if fact is None:
        console.print(f"[red]✗[/red] No fact with id {fact_id}")
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold green]{fact.current_value}[/bold green]\n"
        f"{fact.category.value} · {fact.importance.value} · {fact.confidence.value}\n"
        f"[dim]tags: {', '.join(fact.tags) or '-'}[/dim]",
        title=fact.headline,
        border_style="cyan",
    ))

    timeline = Table(title="Timeline", show_header=True, header_style="bold magenta")
    timeline.add_column("When", style="yellow")
    timeline.add_column("Type", style="cyan")
    timeline.add_column("Change")
    timeline.add_column("Why it matters", style="dim")
    timeline.add_column("Source", style="green")
    for entry in fact.timeline:
        timeline.add_row(
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
            entry.revision_type.value,
            entry.delta,
            entry.why_it_matters,
            f"{entry.source.name} ({entry.source.tier.value})",
        )
    console.print(timeline)

    sources = ", ".join(f"{s.name} ({s.tier.value})" for s in fact.sources)
    console.print(f"[bold]Sources:[/bold] {sources}")
    if fact.related_facts:
        console.print(f"[bold]Related:[/bold] {', '.join(fact.related_facts)}")


@app.command()
def trending(
    limit: int = typer.Option(settings.default_trending_limit, "--limit", "-n"),
    user: Optional[str] = UserOption,
    database_url: Optional[str] = DatabaseOption,
) -> None:
    """Facts with the most revisions in the trailing window."""
    results = _run(database_url, lambda ledger: ledger.get_trending_facts(limit, caller=user))
    console.print(_facts_table(f"Trending (last {settings.trending_window_hours}h)", results))


@app.command()
def disputed(
    user: Optional[str] = UserOption,
    database_url: Optional[str] = DatabaseOption,
) -> None:
    """Facts whose sources disagree."""
    results = _run(database_url, lambda ledger: ledger.get_disputed_facts(caller=user))
    console.print(_facts_table("Disputed", results))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for"),
    user: Optional[str] = UserOption,
    database_url: Optional[str] = DatabaseOption,
) -> None:
    """Case-insensitive search over facts and their revisions."""
    results = _run(database_url, lambda ledger: ledger.search_facts(query, caller=user))
    console.print(_facts_table(f"Search: {query}", results))


@app.command()
def categories(database_url: Optional[str] = DatabaseOption) -> None:
    """Active fact counts per category."""
    stats = _run(database_url, lambda ledger: ledger.get_category_stats())

    table = Table(title="Categories", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("Facts", justify="right", style="green")
    table.add_column("Updated today", justify="right", style="yellow")
    for stat in stats:
        table.add_row(stat.category.value, str(stat.count), str(stat.updates_today))
    console.print(table)


@app.command()
def status() -> None:
    """
    Display configuration of the ledger.

    Shows the interpreter, database, logging and query settings.
    """
    logger.info("Displaying system status")

    table = Table(title="Fact Ledger Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", python_version)
    table.add_row("Database", settings.database_url)
    table.add_row("Logging", f"Level: {settings.log_level}, Format: {settings.log_format}")
    table.add_row(
        "Trending",
        f"Window: {settings.trending_window_hours}h, "
        f"default {settings.default_trending_limit}, max {settings.max_trending_limit}",
    )
    table.add_row(
        "Paging",
        f"Default {settings.default_page_size}, max {settings.max_page_size}",
    )

    console.print(table)


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Fact Ledger[/bold]")
    console.print(f"Version: {__version__}")


if __name__ == "__main__":
    app()
