"""Typer CLI definition for embedmatch."""

import logging
from pathlib import Path
from typing import NoReturn

import typer

from .api import get_default_matcher
from .config import generate_config, get_config_path
from .errors import EmbedMatchError

app = typer.Typer(help="Fuzzy-match strings by embedding similarity")


def collect_candidates(candidates: list[str] | None, file: Path | None) -> list[str]:
    """Merge candidates given as arguments with those read from a file.

    Args:
        candidates: Candidates from the command line
        file: Optional file with one candidate per line (blank lines skipped)

    Returns:
        Arguments first, then file lines, in order

    Raises:
        ValueError: If no candidates are provided at all
    """
    collected = list(candidates or [])
    if file is not None:
        collected.extend(
            line for line in file.read_text().splitlines() if line.strip()
        )

    if not collected:
        raise ValueError("No candidates provided")

    return collected


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.command()
def best(
    query: str = typer.Argument(..., help="String to match"),
    candidates: list[str] | None = typer.Argument(None, help="Candidate strings"),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read candidates from file, one per line"
    ),
    debug: bool = typer.Option(False, "--debug", help="Show cache and provider activity"),
) -> None:
    """Print the candidate most similar to QUERY."""
    _configure_logging(debug)
    try:
        pool = collect_candidates(candidates, file)
        match = get_default_matcher().best_match(query, pool)
    except (EmbedMatchError, ValueError, KeyError, OSError) as e:
        _fail(str(e))

    typer.echo(f"{match.score:.4f}\t{match.candidate_content}")


@app.command("all")
def all_(
    query: str = typer.Argument(..., help="String to match"),
    candidates: list[str] | None = typer.Argument(None, help="Candidate strings"),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read candidates from file, one per line"
    ),
    sort: bool = typer.Option(False, "--sort", help="Sort by descending score"),
    debug: bool = typer.Option(False, "--debug", help="Show cache and provider activity"),
) -> None:
    """Print the score of every candidate against QUERY."""
    _configure_logging(debug)
    try:
        pool = collect_candidates(candidates, file)
        matcher = get_default_matcher()
        if sort:
            matches = matcher.ranked_matches(query, pool)
        else:
            matches = matcher.all_matches(query, pool)
    except (EmbedMatchError, ValueError, KeyError, OSError) as e:
        _fail(str(e))

    for match in matches:
        typer.echo(f"{match.score:.4f}\t{match.candidate_content}")


@app.command("init-config")
def init_config(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write the default configuration file."""
    path = get_config_path()
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")

    typer.echo(f"Wrote {generate_config(path)}")
