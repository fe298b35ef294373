# ABOUTME: The `hondana add` and `hondana check` commands.
# ABOUTME: Builds a candidate from the catalog or manual input and checks it for duplicates.

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from hondana.books.platforms import DIGITAL_PLATFORMS
from hondana.books.types import BookFormat, CandidateBook
from hondana.cli.display import format_label, print_duplicates
from hondana.cli.options import db_option, open_catalog, open_repository, user_option
from hondana.config import get_settings
from hondana.core.adder import add_with_duplicate_check, find_duplicates
from hondana.googlebooks.http import CatalogFetchError
from hondana.matching.duplicates import InvalidArgumentError, MatchOptions
from hondana.matching.normalize import normalize_isbn


def _candidate_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options describing the book: a catalog volume id or manual fields."""
    decorators = [
        click.option("--volume", "volume_id", default=None, help="Google Books volume id."),
        click.option("-t", "--title", default=None, help="Title (manual entry)."),
        click.option(
            "-a", "--author", "authors", multiple=True, help="Author; repeat for several."
        ),
        click.option("--isbn", default=None, help="ISBN-10 or ISBN-13."),
        click.option("--publisher", default=None),
        click.option("--published-date", default=None),
        click.option("--min-score", type=click.IntRange(0, 100), default=None),
        db_option,
        user_option,
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _split_isbn(isbn: str | None) -> tuple[str | None, str | None]:
    """Route a manually typed ISBN to the isbn10 or isbn13 slot by its length."""
    if not isbn:
        return None, None
    digits = normalize_isbn(isbn)
    if len(digits) == 10:
        return isbn, None
    if len(digits) == 13:
        return None, isbn
    raise click.BadParameter(f"{isbn!r} is neither an ISBN-10 nor an ISBN-13", param_hint="--isbn")


def _build_candidate(
    console: Console,
    volume_id: str | None,
    title: str | None,
    authors: tuple[str, ...],
    isbn: str | None,
    publisher: str | None,
    published_date: str | None,
) -> CandidateBook:
    if volume_id:
        try:
            with open_catalog() as client:
                candidate = client.get_volume(volume_id)
        except CatalogFetchError as exc:
            console.print(f"[red]Catalog lookup failed:[/red] {exc}")
            raise SystemExit(1) from exc
        if candidate is None:
            console.print(f"[red]Volume {volume_id} not found.[/red]")
            raise SystemExit(1)
        return candidate

    if not title or not title.strip():
        raise click.UsageError("Give either --volume or --title.")

    isbn10, isbn13 = _split_isbn(isbn)
    return CandidateBook(
        title=title.strip(),
        authors=[a.strip() for a in authors if a.strip()] or ["不明な著者"],
        isbn10=isbn10,
        isbn13=isbn13,
        publisher=publisher,
        published_date=published_date,
    )


def _match_options(min_score: int | None) -> MatchOptions:
    settings = get_settings()
    return MatchOptions(
        min_match_score=min_score if min_score is not None else settings.min_match_score,
        max_results=settings.max_duplicate_results,
    )


@click.command("add")
@_candidate_options
@click.option(
    "-f",
    "--format",
    "book_format",
    type=click.Choice([f.value for f in BookFormat]),
    default=None,
    help="physical or digital (default: your preference).",
)
@click.option(
    "-p",
    "--platform",
    type=click.Choice([p.id for p in DIGITAL_PLATFORMS], case_sensitive=False),
    default=None,
    help="Store platform for digital books.",
)
@click.option("--price", type=float, default=None, help="Purchase price.")
@click.option("--purchased", "purchase_date", default=None, help="Purchase date.")
@click.option("--notes", default=None)
@click.option("--force", is_flag=True, default=False, help="Add even if duplicates are found.")
@click.option(
    "--no-check",
    "skip_check",
    is_flag=True,
    default=False,
    help="Skip the duplicate check.",
)
def add(
    volume_id: str | None,
    title: str | None,
    authors: tuple[str, ...],
    isbn: str | None,
    publisher: str | None,
    published_date: str | None,
    min_score: int | None,
    db_path: Path | None,
    user_id: str | None,
    book_format: str | None,
    platform: str | None,
    price: float | None,
    purchase_date: str | None,
    notes: str | None,
    force: bool,
    skip_check: bool,
) -> None:
    """Add a book to your collection, warning about possible duplicates."""
    console = Console()
    candidate = _build_candidate(
        console, volume_id, title, authors, isbn, publisher, published_date
    )

    with open_repository(db_path, user_id) as repo:
        prefs = repo.get_preferences()
        fmt = BookFormat(book_format) if book_format else prefs.default_format
        if fmt is BookFormat.DIGITAL and platform is None:
            platform = prefs.default_platform

        try:
            outcome = add_with_duplicate_check(
                repo,
                candidate,
                fmt,
                platform.lower() if platform else None,
                force=force,
                check=prefs.auto_suggest_duplicates and not skip_check,
                options=_match_options(min_score),
                purchase_date=purchase_date,
                purchase_price=price,
                notes=notes,
            )
        except InvalidArgumentError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    if outcome.warning:
        console.print(f"[yellow]{outcome.warning}[/yellow]")

    if outcome.duplicates:
        print_duplicates(console, outcome.duplicates)

    if outcome.book is None:
        console.print("[yellow]Not added.[/yellow] Use --force to add it anyway.")
        raise SystemExit(1)

    console.print(
        f"[green]本が正常に追加されました！[/green] "
        f"[bold]{outcome.book.title}[/bold] ({format_label(outcome.book)}) "
        f"id={outcome.book.id}"
    )


@click.command("check")
@_candidate_options
def check(
    volume_id: str | None,
    title: str | None,
    authors: tuple[str, ...],
    isbn: str | None,
    publisher: str | None,
    published_date: str | None,
    min_score: int | None,
    db_path: Path | None,
    user_id: str | None,
) -> None:
    """Check whether you already own a book, without adding it."""
    console = Console()
    candidate = _build_candidate(
        console, volume_id, title, authors, isbn, publisher, published_date
    )

    with open_repository(db_path, user_id) as repo:
        try:
            duplicates, warning = find_duplicates(repo, candidate, _match_options(min_score))
        except InvalidArgumentError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    if warning:
        console.print(f"[yellow]{warning}[/yellow]")
    if not duplicates:
        console.print("[green]No duplicates found.[/green]")
        return
    print_duplicates(console, duplicates)
