# ABOUTME: The `hondana prefs` command for viewing and changing user preferences.
# ABOUTME: Preferences supply defaults for `hondana add`.

from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from hondana.books.platforms import DIGITAL_PLATFORMS, platform_name
from hondana.books.types import BookFormat
from hondana.cli.options import db_option, open_repository, user_option


@click.command("prefs")
@db_option
@user_option
@click.option(
    "--format", "book_format", type=click.Choice([f.value for f in BookFormat]), default=None
)
@click.option(
    "--platform",
    type=click.Choice([p.id for p in DIGITAL_PLATFORMS], case_sensitive=False),
    default=None,
)
@click.option(
    "--duplicates",
    type=click.Choice(["on", "off"]),
    default=None,
    help="Check for duplicates when adding.",
)
def prefs(
    db_path: Path | None,
    user_id: str | None,
    book_format: str | None,
    platform: str | None,
    duplicates: str | None,
) -> None:
    """Show or change your defaults for adding books."""
    console = Console()

    with open_repository(db_path, user_id) as repo:
        current = repo.get_preferences()
        changes = {}
        if book_format:
            changes["default_format"] = BookFormat(book_format)
        if platform:
            changes["default_platform"] = platform.lower()
        if duplicates:
            changes["auto_suggest_duplicates"] = duplicates == "on"
        if changes:
            current = replace(current, **changes)
            repo.save_preferences(current)

    console.print(f"Default format:   {current.default_format.value}")
    console.print(f"Default platform: {platform_name(current.default_platform) or '—'}")
    console.print(f"Duplicate check:  {'on' if current.auto_suggest_duplicates else 'off'}")
