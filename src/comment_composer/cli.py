"""
CLI Entrypoint for the Final Comment Composer

Composes final comment drafts from an exported comment library and helps
prepare comment banks.

Usage:
    comment-composer compose LIBRARY --grade 85 [--pronoun ID] [--comment ID ...]
    comment-composer ratings LIBRARY [--rating N]
    comment-composer bands LIBRARY [--grade 85]
    comment-composer import-comments PASTE_FILE [--library LIBRARY]
    comment-composer check-placeholders TEXT
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from comment_composer.bulk_import import deduplicate_comments, parse_comments
from comment_composer.composition import build_candidate
from comment_composer.config import load_config
from comment_composer.errors import CommentComposerError
from comment_composer.grade_matching import match_band, sort_outcome_comments_by_range
from comment_composer.loader import CommentLibrary, load_comment_library
from comment_composer.messages import pluralize
from comment_composer.models import StudentData
from comment_composer.placeholders import validate_placeholders
from comment_composer.ratings import (
    filter_by_rating,
    normalize_rating,
    rating_emoji,
    rating_label,
)
from comment_composer.session import NO_OUTCOME_MATCH_MESSAGE

app = typer.Typer(
    name="comment-composer",
    help="Compose final student comments from outcome and personalized comments",
    add_completion=False,
)

console = Console()


def _load_library(path: Path) -> CommentLibrary:
    try:
        return load_comment_library(path)
    except CommentComposerError as e:
        console.print(f"[red]Failed to load comment library:[/] {e}")
        raise typer.Exit(code=1) from e


@app.command()
def compose(
    library_path: Path = typer.Argument(
        ...,
        help="YAML/JSON file with outcome comments, personalized comments and pronouns",
        exists=True,
    ),
    grade: Optional[float] = typer.Option(
        None,
        "--grade",
        "-g",
        help="Student grade used to pick the outcome comment",
    ),
    pronoun_id: Optional[str] = typer.Option(
        None,
        "--pronoun",
        "-p",
        help="Pronoun id used for <pronoun> placeholders",
    ),
    comment_ids: Optional[List[str]] = typer.Option(
        None,
        "--comment",
        "-m",
        help="Personalized comment id to include. Can be repeated.",
    ),
    first_name: Optional[str] = typer.Option(None, "--first-name", help="Student first name"),
    last_name: Optional[str] = typer.Option(None, "--last-name", help="Student last name"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to settings.yaml configuration file",
        exists=True,
    ),
    extended: bool = typer.Option(
        False,
        "--extended",
        help="Use the extended character limit",
    ),
) -> None:
    """
    Compose a candidate final comment.

    The matched outcome comment comes first, followed by the selected
    personalized comments, with placeholders replaced and the result cut to
    the configured character limit.
    """
    settings = load_config(config)
    if extended:
        settings.limits.extended_mode = True

    library = _load_library(library_path)

    pronoun = library.find_pronoun(pronoun_id)
    if pronoun_id is not None and pronoun is None:
        console.print(f"[yellow]Unknown pronoun id:[/] {pronoun_id}")

    selected = library.find_personalized(list(comment_ids or []))
    missing = set(comment_ids or []) - {str(c.id) for c in selected}
    for comment_id in sorted(missing):
        console.print(f"[yellow]Unknown personalized comment id:[/] {comment_id}")

    outcome = match_band(grade, library.outcome_comments)
    console.print(f"[bold]Outcome:[/] {outcome.text if outcome else NO_OUTCOME_MATCH_MESSAGE}")

    student = StudentData(first_name=first_name, last_name=last_name, grade=grade)
    limit = settings.limits.composition_limit
    candidate = build_candidate(outcome, selected, limit, pronoun=pronoun, student=student)

    if not candidate:
        console.print("[yellow]Nothing to compose: no outcome match and no personalized comment selected[/]")
        raise typer.Exit(code=1)

    console.print(f"[dim]{len(candidate)}/{limit} characters[/]")
    console.print()
    console.print(candidate, markup=False, highlight=False)

    for warning in validate_placeholders(candidate):
        console.print(f"[yellow]{warning}[/]")


@app.command()
def ratings(
    library_path: Path = typer.Argument(..., help="Comment library file", exists=True),
    rating: int = typer.Option(
        0,
        "--rating",
        "-r",
        help="Only show comments with this rating (1-5); 0 shows all",
        min=0,
        max=5,
    ),
) -> None:
    """List personalized comments, highest rated first."""
    library = _load_library(library_path)
    comments = filter_by_rating(library.personalized_comments, rating)

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Rating", justify="center")
    table.add_column("Comment")

    for comment in comments:
        value = normalize_rating(comment.rating)
        table.add_row(
            str(comment.id),
            f"{rating_emoji(value)} {rating_label(value)}",
            comment.text,
        )

    console.print(table)
    console.print(f"{len(comments)} {pluralize(len(comments), 'comment')}")


@app.command()
def bands(
    library_path: Path = typer.Argument(..., help="Comment library file", exists=True),
    grade: Optional[float] = typer.Option(
        None,
        "--grade",
        "-g",
        help="Highlight the band matching this grade",
    ),
) -> None:
    """Show outcome comment bands, highest first."""
    library = _load_library(library_path)
    matched = match_band(grade, library.outcome_comments)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Range", justify="right")
    table.add_column("Comment")
    table.add_column("", width=7)

    for band in sort_outcome_comments_by_range(library.outcome_comments):
        marker = "[green]match[/]" if matched is not None and band.id == matched.id else ""
        table.add_row(f"{band.lower_range:g}-{band.upper_range:g}", band.text, marker)

    console.print(table)

    if grade is not None and matched is None:
        console.print(f"[yellow]{NO_OUTCOME_MATCH_MESSAGE}[/]")


@app.command("import-comments")
def import_comments(
    paste_file: Path = typer.Argument(
        ...,
        help="Text file with one comment per line, optionally ending in ', N'",
        exists=True,
    ),
    library_path: Optional[Path] = typer.Option(
        None,
        "--library",
        "-l",
        help="Comment library to check for existing duplicates",
        exists=True,
    ),
) -> None:
    """Parse and deduplicate a bulk comment paste without saving it."""
    parsed = parse_comments(paste_file.read_text(encoding="utf-8"))
    existing = _load_library(library_path).personalized_comments if library_path else None
    result = deduplicate_comments(parsed, existing)

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("Rating", justify="center")
    table.add_column("Comment")

    for idx, comment in enumerate(result.unique, 1):
        table.add_row(str(idx), f"{rating_emoji(comment.rating)} {comment.rating}", comment.text)

    console.print(table)
    console.print(
        f"[green]{len(result.unique)} {pluralize(len(result.unique), 'comment')} ready to import[/]"
    )
    if result.duplicate_count:
        console.print(
            f"[yellow]{result.duplicate_count} "
            f"{pluralize(result.duplicate_count, 'duplicate')} skipped[/]"
        )


@app.command("check-placeholders")
def check_placeholders(
    text: str = typer.Argument(..., help="Comment text to check"),
) -> None:
    """Report malformed placeholders in a comment."""
    warnings = validate_placeholders(text)
    if not warnings:
        console.print("[green]Placeholders look good.[/]")
        return

    for warning in warnings:
        console.print(f"[yellow]{warning}[/]")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
