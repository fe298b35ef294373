# ABOUTME: Rich rendering helpers shared by Hondana CLI commands.
# ABOUTME: Tables for collection listings, catalog results, and duplicate warnings.

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from hondana.books.platforms import platform_name
from hondana.books.types import CandidateBook, StoredBook
from hondana.matching.duplicates import MatchResult


def format_label(book: StoredBook) -> str:
    """Human-readable ownership format, with the platform for digital books."""
    if book.is_digital:
        name = platform_name(book.platform)
        return f"電子書籍 ({name})" if name else "電子書籍"
    return "物理本"


def books_table(books: Sequence[StoredBook]) -> Table:
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Format")
    table.add_column("Read", width=4)
    table.add_column("Rating", width=6)

    for book in books:
        table.add_row(
            str(book.id),
            book.title,
            book.author or "[dim]unknown[/dim]",
            format_label(book),
            "✓" if book.is_read else "",
            "★" * book.rating if book.rating else "",
        )
    return table


def catalog_table(books: Sequence[CandidateBook]) -> Table:
    table = Table()
    table.add_column("#", style="bold", width=3)
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Publisher")
    table.add_column("ISBN")
    table.add_column("Volume ID", style="dim")

    for i, book in enumerate(books, start=1):
        table.add_row(
            str(i),
            book.title,
            book.author,
            book.publisher or "—",
            book.isbn or "—",
            book.external_catalog_id or "—",
        )
    return table


def print_duplicates(console: Console, duplicates: Sequence[MatchResult]) -> None:
    """Show possible duplicates with their score and the reasons they matched."""
    console.print(f"[yellow]類似する本が{len(duplicates)}件見つかりました[/yellow]")

    table = Table()
    table.add_column("Score", justify="right")
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Format")
    table.add_column("Reasons")

    for match in duplicates:
        table.add_row(
            f"{match.score}%",
            str(match.book.id),
            match.book.title,
            match.book.author or "不明",
            format_label(match.book),
            ", ".join(r.detail for r in match.reasons),
        )
    console.print(table)
