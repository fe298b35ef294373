# ABOUTME: Commands that change a stored book: edit, read, rate, and note.
# ABOUTME: Each updates one of the current user's books by ID.

from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console

from hondana.books.types import BookFormat
from hondana.cli.options import db_option, open_repository, user_option
from hondana.db.repository import BookNotFoundError


def _fail(console: Console, exc: Exception) -> NoReturn:
    console.print(f"[red]{exc}[/red]")
    raise SystemExit(1) from exc


@click.command("edit")
@click.argument("book_id", type=int)
@db_option
@user_option
@click.option("-t", "--title", default=None)
@click.option("-a", "--author", "authors", multiple=True, help="Replaces all authors.")
@click.option("--isbn10", default=None)
@click.option("--isbn13", default=None)
@click.option("--publisher", default=None)
@click.option(
    "-f", "--format", "book_format", type=click.Choice([f.value for f in BookFormat]), default=None
)
@click.option("-p", "--platform", default=None)
@click.option("--price", "purchase_price", type=float, default=None)
@click.option("--purchased", "purchase_date", default=None)
def edit(
    book_id: int,
    db_path: Path | None,
    user_id: str | None,
    title: str | None,
    authors: tuple[str, ...],
    isbn10: str | None,
    isbn13: str | None,
    publisher: str | None,
    book_format: str | None,
    platform: str | None,
    purchase_price: float | None,
    purchase_date: str | None,
) -> None:
    """Change the details of a book."""
    console = Console()

    fields: dict[str, Any] = {
        "title": title,
        "isbn10": isbn10,
        "isbn13": isbn13,
        "publisher": publisher,
        "format": book_format,
        "platform": platform.lower() if platform else None,
        "purchase_price": purchase_price,
        "purchase_date": purchase_date,
    }
    fields = {k: v for k, v in fields.items() if v is not None}
    if authors:
        fields["authors"] = list(authors)

    if not fields:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    with open_repository(db_path, user_id) as repo:
        try:
            book = repo.update_book(book_id, **fields)
        except ValueError as exc:
            _fail(console, exc)

    console.print(f"Updated [bold]{book.title}[/bold].")


@click.command("read")
@click.argument("book_id", type=int)
@db_option
@user_option
@click.option("--unread", is_flag=True, default=False, help="Mark as not read.")
@click.option("--date", "read_date", default=None, help="Date finished (default: today).")
def read(
    book_id: int,
    db_path: Path | None,
    user_id: str | None,
    unread: bool,
    read_date: str | None,
) -> None:
    """Mark a book as read (or unread)."""
    console = Console()
    with open_repository(db_path, user_id) as repo:
        try:
            book = repo.mark_as_read(book_id, not unread, read_date)
        except BookNotFoundError as exc:
            _fail(console, exc)

    state = f"read on {book.read_date}" if book.is_read else "unread"
    console.print(f"Marked [bold]{book.title}[/bold] as {state}.")


@click.command("rate")
@click.argument("book_id", type=int)
@click.argument("rating", type=int)
@db_option
@user_option
def rate(book_id: int, rating: int, db_path: Path | None, user_id: str | None) -> None:
    """Rate a book from 1 to 5."""
    console = Console()
    with open_repository(db_path, user_id) as repo:
        try:
            book = repo.update_rating(book_id, rating)
        except ValueError as exc:
            _fail(console, exc)

    console.print(f"Rated [bold]{book.title}[/bold] {'★' * rating}.")


@click.command("note")
@click.argument("book_id", type=int)
@click.argument("text")
@db_option
@user_option
def note(book_id: int, text: str, db_path: Path | None, user_id: str | None) -> None:
    """Set the notes on a book."""
    console = Console()
    with open_repository(db_path, user_id) as repo:
        try:
            book = repo.update_notes(book_id, text)
        except BookNotFoundError as exc:
            _fail(console, exc)

    console.print(f"Saved notes for [bold]{book.title}[/bold].")
