"""
formcraft CLI - question engine checks from the terminal.

Usage:
    formcraft validate form.json            # Check every question config
    formcraft validate form.json --publish  # Also require at least one question
    formcraft score form.json answers.json  # Gate and grade a submission
    formcraft blanks "The {{capital}} of France is {{Paris}}."
    formcraft new cloze                     # Print a freshly built question
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from formcraft.builder import new_question
from formcraft.cloze_text import parse_blanks
from formcraft.config import get_settings
from formcraft.engine import check_publishable, evaluate_submission, validate_form
from formcraft.errors import UnknownQuestionTypeError
from formcraft.models import Form

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="formcraft",
    help="formcraft - validate, inspect and grade multi-type forms",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]File not found: {path}[/]")
        raise typer.Exit(2)
    except json.JSONDecodeError as e:
        console.print(f"[red]{path} is not valid JSON: {e}[/]")
        raise typer.Exit(2)


def _load_form(path: Path) -> Form:
    try:
        return Form.model_validate(_load_json(path))
    except ValidationError as e:
        console.print(f"[red]{path} is not a form document:[/]\n{escape(str(e))}")
        raise typer.Exit(2)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def validate(
    form_path: Annotated[Path, typer.Argument(help="Form document (JSON)")],
    publish: Annotated[
        bool, typer.Option("--publish", "-p", help="Apply the publish checks")
    ] = False,
) -> None:
    """
    Validate every question configuration in a form.

    Exit codes:
        0 - All questions valid
        1 - Invalid questions found
        2 - File could not be read
    """
    document = _load_json(form_path)
    if not isinstance(document, dict):
        console.print(f"[red]{form_path} must contain a JSON object[/]")
        raise typer.Exit(2)

    errors = check_publishable(document) if publish else validate_form(document)

    if not errors:
        count = len(document.get("questions") or [])
        console.print(f"[green]✓ {count} question(s) valid[/]")
        return

    table = Table(title=f"Invalid questions in {form_path.name}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("Code", style="red")
    table.add_column("Message")
    for error in errors:
        table.add_row(
            str(error.question_index or "-"),
            error.question_type,
            error.code.value,
            escape(error.message),
        )
    console.print(table)
    raise typer.Exit(1)


@app.command()
def score(
    form_path: Annotated[Path, typer.Argument(help="Form document (JSON)")],
    answers_path: Annotated[
        Path, typer.Argument(help="Submitted answers: a list, or an object with 'answers'")
    ],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the graded response as JSON")
    ] = None,
) -> None:
    """Gate a submission and grade its answers."""
    form = _load_form(form_path)
    payload = _load_json(answers_path)

    total_time = None
    if isinstance(payload, dict):
        total_time = payload.get("totalTimeSpent")
        payload = payload.get("answers", [])
    if not isinstance(payload, list):
        console.print("[red]Answers must be a list[/]")
        raise typer.Exit(2)

    try:
        outcome = evaluate_submission(form, payload, total_time_spent=total_time)
    except ValidationError as e:
        console.print(f"[red]Answers are malformed:[/]\n{escape(str(e))}")
        raise typer.Exit(2)

    if not outcome.accepted:
        console.print("\n[red bold]SUBMISSION REJECTED[/]")
        for error in outcome.errors:
            console.print(f"  [red]✗[/] {error.code.value}: {escape(error.message)}")
        raise typer.Exit(1)

    response = outcome.response
    table = Table(title=escape(form.title or "Response"))
    table.add_column("Question", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Score", justify="right", style="green")
    for answer in response.answers:
        question = form.get_question(answer.question_id)
        points = "-" if answer.score is None else f"{answer.score:g}/{answer.max_score:g}"
        table.add_row(escape(question.title or question.id), answer.question_type or "", points)
    console.print(table)

    if response.total_score is not None:
        console.print(
            f"[bold]Total:[/] {response.total_score:g}/{response.max_total_score:g}"
            f" ({response.score_percentage}%)"
        )
    console.print(f"[dim]Completion: {response.completion_percentage}%[/]")

    if output:
        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "response": response.to_document(),
        }
        output.write_text(json.dumps(report, indent=2))
        console.print(f"[dim]Response written to {output}[/]")


@app.command()
def blanks(
    text: Annotated[str, typer.Argument(help="Cloze text with {{blank}} placeholders")],
) -> None:
    """List the blanks found in cloze text."""
    parsed = parse_blanks(text)
    if not parsed:
        console.print("[yellow]No blanks found[/]")
        return

    table = Table(title="Blanks")
    table.add_column("Key", style="cyan")
    table.add_column("Placeholder", style="green")
    table.add_column("Span", style="dim")
    for blank in parsed:
        table.add_row(blank.key, escape(blank.placeholder), f"{blank.start}-{blank.end}")
    console.print(table)


@app.command()
def new(
    question_type: Annotated[str, typer.Argument(help="mcq, mca, categorize, cloze, comprehension or image")],
    order: Annotated[int, typer.Option("--order", help="Position in the form")] = 0,
) -> None:
    """Print a new question with the type's default config."""
    try:
        question = new_question(question_type, order=order)
    except UnknownQuestionTypeError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    # Plain print keeps the JSON free of rich markup handling
    print(json.dumps(question.to_document(), indent=2))


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """CLI entry point."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=get_settings().log_level.upper(),
        format="<level>{level: <8}</level> | {message}",
    )
    app()


if __name__ == "__main__":
    run()
