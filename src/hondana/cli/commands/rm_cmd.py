# ABOUTME: The `hondana rm` command for removing books from the collection.
# ABOUTME: Deletes one or more of the current user's books by ID.

from pathlib import Path

import click
from rich.console import Console

from hondana.cli.options import db_option, open_repository, user_option
from hondana.db.repository import BookNotFoundError


@click.command("rm")
@click.argument("book_ids", type=int, nargs=-1, required=True)
@db_option
@user_option
@click.option("-y", "--yes", is_flag=True, default=False, help="Don't ask for confirmation.")
def rm(book_ids: tuple[int, ...], db_path: Path | None, user_id: str | None, yes: bool) -> None:
    """Remove books from your collection."""
    console = Console()

    with open_repository(db_path, user_id) as repo:
        if len(book_ids) == 1:
            book = repo.get_book(book_ids[0])
            if book is None:
                console.print(f"[red]Book {book_ids[0]} not found.[/red]")
                raise SystemExit(1)
            if not yes:
                click.confirm(f"Remove '{book.title}'?", abort=True)
            try:
                repo.delete_book(book.id)
            except BookNotFoundError as exc:
                console.print(f"[red]{exc}[/red]")
                raise SystemExit(1) from exc
            console.print(f"Removed [bold]{book.title}[/bold].")
            return

        if not yes:
            click.confirm(f"Remove {len(book_ids)} books?", abort=True)
        removed = repo.delete_books(list(book_ids))

    console.print(f"Removed {removed} of {len(book_ids)} book(s).")
