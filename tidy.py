"""tidy CLI: tf-idf reports over a text collection.

Five commands: validate, count, score, top, export.
Uses typer for argument parsing and rich for formatted terminal output.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from tidyscore.corpus import load_collection
from tidyscore.errors import TidyScoreError
from tidyscore.tfidf import (
    document_term_matrix,
    ranked,
    save_matrix,
    score_corpus,
    top_terms,
    word_counts,
)
from tidyscore.validator import validate_config

app = typer.Typer(help="tidy: term frequency and tf-idf over tidy text.")
console = Console()

DEFAULT_TOP_N = 15
DEFAULT_LIMIT = 25


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(collection_path: str) -> tuple[dict, dict]:
    passed, errors = validate_config(collection_path)
    if not passed:
        console.print(
            Panel("[bold red]✗ Invalid collection[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {err}")
        raise typer.Exit(code=1)
    try:
        return load_collection(collection_path)
    except TidyScoreError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def _score(corpus: dict) -> dict:
    try:
        return score_corpus(corpus)
    except TidyScoreError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(collection_path: str = typer.Argument(..., help="Path to collection JSON")):
    """Check a collection config for syntactic and semantic errors."""
    passed, errors = validate_config(collection_path)

    if passed:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {err}")
        raise typer.Exit(code=1)


# ── count ───────────────────────────────────────────────────────────


@app.command()
def count(
    collection_path: str = typer.Argument(..., help="Path to collection JSON"),
    min_count: int = typer.Option(
        None, "--min-count", min=1, help="Only words used at least this often"
    ),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", min=1, help="Rows to show"),
):
    """Show the most common words across the collection."""
    config, corpus = _load(collection_path)
    if min_count is None:
        min_count = config.get("report", {}).get("min_count", 1)

    rows = word_counts(corpus, min_count=min_count)

    table = Table(title=f"Most Common Words ({config['name']})")
    table.add_column("#", style="dim", width=4)
    table.add_column("Word", style="cyan")
    table.add_column("n", justify="right", style="green")
    for i, (term, n) in enumerate(rows[:limit], 1):
        table.add_row(str(i), term, str(n))
    console.print(table)

    total = sum(len(tokens) for tokens in corpus.values())
    console.print(
        f"\n{len(rows)} distinct words (min count {min_count}) | "
        f"{total} tokens in {len(corpus)} documents"
    )


# ── score ───────────────────────────────────────────────────────────


@app.command()
def score(
    collection_path: str = typer.Argument(..., help="Path to collection JSON"),
    doc: str = typer.Option(None, "--doc", help="Only rows for this document"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", min=1, help="Rows to show"),
):
    """Show the tf-idf table, highest scores first."""
    config, corpus = _load(collection_path)
    if doc is not None and doc not in corpus:
        console.print(f"[red]Error: unknown document '{doc}'[/red]")
        raise typer.Exit(code=1)

    scores = _score(corpus)
    rows = [s for s in scores.values() if doc is None or s.doc_id == doc]
    rows = ranked(rows)

    table = Table(title=f"TF-IDF ({config['name']})")
    table.add_column("Document", style="cyan")
    table.add_column("Word")
    table.add_column("n", justify="right")
    table.add_column("Total", justify="right", style="dim")
    table.add_column("tf", justify="right")
    table.add_column("idf", justify="right")
    table.add_column("tf-idf", justify="right", style="green")
    for s in rows[:limit]:
        table.add_row(
            s.doc_id,
            s.term,
            str(s.n),
            str(s.total),
            f"{s.tf:.6f}",
            f"{s.idf:.4f}",
            f"{s.tf_idf:.6f}",
        )
    console.print(table)

    zero = sum(1 for s in rows if s.idf == 0)
    console.print(f"\n{len(rows)} rows | {zero} with idf = 0 (word in every document)")


# ── top ─────────────────────────────────────────────────────────────


@app.command()
def top(
    collection_path: str = typer.Argument(..., help="Path to collection JSON"),
    n: int = typer.Option(None, "--n", min=1, help="Terms per document"),
):
    """Show the highest tf-idf words for each document."""
    config, corpus = _load(collection_path)
    if n is None:
        n = config.get("report", {}).get("top_n", DEFAULT_TOP_N)

    scores = _score(corpus)
    for doc_id, rows in top_terms(scores, n).items():
        table = Table(title=doc_id)
        table.add_column("#", style="dim", width=4)
        table.add_column("Word", style="cyan", min_width=20)
        table.add_column("tf-idf", justify="right", style="green")
        for i, s in enumerate(rows, 1):
            table.add_row(str(i), s.term, f"{s.tf_idf:.6f}")
        console.print(table)


# ── export ──────────────────────────────────────────────────────────


@app.command()
def export(
    collection_path: str = typer.Argument(..., help="Path to collection JSON"),
    out: str = typer.Option(..., "--out", help="Path for the JSON score table"),
    matrix: str | None = typer.Option(
        None, "--matrix", help="Also write a document-term .npz matrix"
    ),
):
    """Write the full score table (and optionally a tf-idf matrix) to disk."""
    config, corpus = _load(collection_path)
    with console.status("[bold blue]Scoring collection..."):
        scores = _score(corpus)

    payload = {
        "name": config["name"],
        "documents": len(corpus),
        "scores": [s.to_dict() for s in scores.values()],
    }
    Path(out).write_text(json.dumps(payload, indent=2))

    summary = Table(title="Export Summary")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="green", justify="right")
    summary.add_row("Documents", str(len(corpus)))
    summary.add_row("Score rows", str(len(scores)))
    summary.add_row("Scores", out)

    if matrix:
        mat, doc_ids, vocab = document_term_matrix(scores)
        save_matrix(mat, doc_ids, vocab, matrix)
        summary.add_row("Matrix", f"{matrix} ({len(doc_ids)} x {len(vocab)})")

    console.print(summary)


if __name__ == "__main__":
    app()
