# ABOUTME: The `hondana ls` command for listing books in your collection.
# ABOUTME: Displays a Rich table filtered by format, platform, read state, or text.

from pathlib import Path

import click
from rich.console import Console

from hondana.books.types import BookFormat
from hondana.cli.display import books_table
from hondana.cli.options import db_option, open_repository, user_option
from hondana.db.repository import BookSearchOptions

_READ_STATES = {"read": True, "unread": False, "all": None}


@click.command("ls")
@db_option
@user_option
@click.option("-q", "--query", default=None, help="Title substring or exact author name.")
@click.option(
    "-f", "--format", "book_format", type=click.Choice([f.value for f in BookFormat]), default=None
)
@click.option("-p", "--platform", default=None, help="Filter digital books by platform id.")
@click.option("--status", type=click.Choice(list(_READ_STATES)), default="all")
@click.option("--category", default=None)
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(["created_at", "updated_at", "title", "published_date", "rating"]),
    default="created_at",
)
@click.option("--asc", is_flag=True, default=False, help="Sort ascending.")
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None)
def ls(
    db_path: Path | None,
    user_id: str | None,
    query: str | None,
    book_format: str | None,
    platform: str | None,
    status: str,
    category: str | None,
    sort_by: str,
    asc: bool,
    limit: int | None,
) -> None:
    """List the books in your collection."""
    console = Console()
    options = BookSearchOptions(
        query=query,
        format=BookFormat(book_format) if book_format else None,
        platform=platform.lower() if platform else None,
        is_read=_READ_STATES[status],
        category=category,
        sort_by=sort_by,
        sort_order="asc" if asc else "desc",
        limit=limit,
    )

    with open_repository(db_path, user_id) as repo:
        books = repo.search_books(options)

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    console.print(books_table(books))
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
