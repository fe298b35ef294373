# ABOUTME: The `hondana info` command for displaying one book in detail.
# ABOUTME: Shows catalog and personal fields for a book by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from hondana.cli.display import format_label
from hondana.cli.options import db_option, open_repository, user_option


@click.command("info")
@click.argument("book_id", type=int)
@db_option
@user_option
def info(book_id: int, db_path: Path | None, user_id: str | None) -> None:
    """Show detailed information for a book by ID."""
    console = Console()

    with open_repository(db_path, user_id) as repo:
        book = repo.get_book(book_id)

    if book is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(book.id))
    table.add_row("Title", book.title)
    table.add_row("Author", book.author or "unknown")
    table.add_row("Format", format_label(book))
    if book.publisher:
        table.add_row("Publisher", book.publisher)
    if book.published_date:
        table.add_row("Published", book.published_date)
    if book.isbn13:
        table.add_row("ISBN-13", book.isbn13)
    if book.isbn10:
        table.add_row("ISBN-10", book.isbn10)
    if book.external_catalog_id:
        table.add_row("Volume ID", book.external_catalog_id)
    if book.page_count:
        table.add_row("Pages", str(book.page_count))
    if book.categories:
        table.add_row("Categories", ", ".join(book.categories))
    if book.purchase_date:
        table.add_row("Purchased", book.purchase_date)
    if book.purchase_price is not None:
        table.add_row("Price", f"{book.purchase_price:g}")
    table.add_row("Read", f"yes ({book.read_date})" if book.is_read else "no")
    if book.rating:
        table.add_row("Rating", "★" * book.rating)
    if book.notes:
        table.add_row("Notes", book.notes)
    if book.description:
        table.add_row("Description", book.description)
    if book.created_at:
        table.add_row("Added", book.created_at.isoformat(timespec="seconds"))
    if book.updated_at:
        table.add_row("Modified", book.updated_at.isoformat(timespec="seconds"))

    console.print(table)
