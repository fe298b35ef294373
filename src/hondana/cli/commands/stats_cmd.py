# ABOUTME: The `hondana stats` command summarizing the collection.
# ABOUTME: Shows totals, per-platform counts, recent additions, and top-rated books.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from hondana.books.platforms import platform_name
from hondana.cli.display import books_table
from hondana.cli.options import db_option, open_repository, user_option


@click.command("stats")
@db_option
@user_option
@click.option("-n", "--top", type=click.IntRange(min=0), default=5, help="Books per list.")
def stats(db_path: Path | None, user_id: str | None, top: int) -> None:
    """Summarize your collection."""
    console = Console()

    with open_repository(db_path, user_id) as repo:
        totals = repo.get_user_stats()
        platforms = repo.get_platform_stats()
        recent = repo.get_recent_books(top) if top else []
        best = repo.get_high_rated_books(top) if top else []

    summary = Table(show_header=False, box=None, pad_edge=False)
    summary.add_column("Field", style="bold", width=18)
    summary.add_column("Value", justify="right")
    summary.add_row("Total", str(totals.total_books))
    summary.add_row("Physical", str(totals.physical_books))
    summary.add_row("Digital", str(totals.digital_books))
    summary.add_row("Read", str(totals.read_books))
    summary.add_row("Rated", str(totals.rated_books))
    summary.add_row("Average rating", f"{totals.average_rating:.1f}")
    summary.add_row("Added this month", str(totals.books_added_this_month))
    console.print(summary)

    if platforms:
        table = Table(title="Platforms")
        table.add_column("Platform", style="cyan")
        table.add_column("Books", justify="right")
        for entry in platforms:
            table.add_row(platform_name(entry.platform), str(entry.book_count))
        console.print(table)

    if recent:
        console.print("\n[bold]Recently added[/bold]")
        console.print(books_table(recent))
    if best:
        console.print("\n[bold]Highest rated[/bold]")
        console.print(books_table(best))
