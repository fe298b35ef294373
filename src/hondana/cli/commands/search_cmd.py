# ABOUTME: The `hondana search` command for looking up books in Google Books.
# ABOUTME: Prints matching volumes so one can be added by its volume id.

import click
from rich.console import Console

from hondana.cli.display import catalog_table
from hondana.cli.options import open_catalog
from hondana.config import get_settings
from hondana.googlebooks.http import CatalogFetchError
from hondana.googlebooks.query import generate_search_suggestions, sanitize_search_query


@click.command("search")
@click.argument("query")
@click.option("--isbn", "by_isbn", is_flag=True, default=False, help="Treat QUERY as an ISBN.")
@click.option("-n", "--max-results", type=click.IntRange(1, 40), default=None)
@click.option("--newest", is_flag=True, default=False, help="Order by publication date.")
def search(query: str, by_isbn: bool, max_results: int | None, newest: bool) -> None:
    """Search the Google Books catalog by title, author, or ISBN."""
    console = Console()
    limit = max_results or get_settings().google_books_max_results

    cleaned = query if by_isbn else sanitize_search_query(query)
    if not cleaned:
        console.print("[red]Search query is empty.[/red]")
        raise SystemExit(1)

    try:
        with open_catalog() as client:
            if by_isbn:
                books = client.search_by_isbn(cleaned)
            else:
                order_by = "newest" if newest else "relevance"
                books = client.search(cleaned, max_results=limit, order_by=order_by).books
    except CatalogFetchError as exc:
        console.print(f"[red]検索中にエラーが発生しました:[/red] {exc}")
        raise SystemExit(1) from exc

    if not books:
        console.print("[yellow]検索結果が見つかりませんでした。[/yellow]")
        suggestions = generate_search_suggestions(query)[1:]
        if suggestions:
            console.print("[dim]Try:[/dim] " + "  ".join(suggestions))
        return

    console.print(catalog_table(books))
    console.print(f"\n[dim]{len(books)} result(s). Add one with: hondana add --volume ID[/dim]")
