"""
Typer CLI for the quiz engine.

Commands:
    quizengine shuffle QUESTION_JSON --attempt ID   - Show the layout a student sees
    quizengine permutation SEED N                   - Print a raw seeded permutation
    quizengine grade QUIZ_JSON ATTEMPT_JSON         - Grade an attempt

Usage:
    quizengine --help
    quizengine shuffle question.json --attempt att-42
    quizengine grade quiz.json attempt.json --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import get_settings

from .exceptions import QuizEngineError
from .grading.base import ResultStatus
from .grading.engine import GradingEngine
from .models import Question
from .randomization import MatchingDisplay, display_mapping, generate

app = typer.Typer(
    help="quizengine: per-attempt question shuffling and answer grading",
    no_args_is_help=True,
)

console = Console()

STATUS_STYLES = {
    ResultStatus.GRADED: "white",
    ResultStatus.UNANSWERED: "yellow",
    ResultStatus.UNGRADED: "cyan",
    ResultStatus.ERROR: "red",
}


def _load_json(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]Error: File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {path} is not valid JSON: {e}[/red]")
        raise typer.Exit(1)


@app.command("shuffle")
def shuffle_question(
    question_file: Path = typer.Argument(..., help="Question record (JSON)"),
    attempt: str = typer.Option(..., "--attempt", "-a", help="Attempt identifier"),
):
    """
    Show the display order a student sees for one question.

    Examples:
        quizengine shuffle question.json --attempt att-42
    """
    try:
        question = Question.from_record(_load_json(question_file))
        layout = display_mapping(question, attempt)
    except QuizEngineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if layout is None:
        console.print(f"[dim]{question.type.value} questions are shown in stored order[/dim]")
        for i, option in enumerate(question.items):
            console.print(f"  [{i}] {option}")
        return

    table = Table(box=box.MINIMAL, show_header=True)
    table.add_column("Display", style="cyan", justify="right")
    if isinstance(layout, MatchingDisplay):
        table.add_column("Left")
        table.add_column("(orig)", style="dim", justify="right")
        table.add_column("Right")
        table.add_column("(orig)", style="dim", justify="right")
        for left, right in zip(layout.left_items, layout.right_items):
            table.add_row(
                str(left.display_index),
                left.content,
                str(left.original_index),
                right.content,
                str(right.original_index),
            )
    else:
        table.add_column("Item")
        table.add_column("Original", style="dim", justify="right")
        table.add_column("Correct position", justify="right")
        for item in layout.display_items:
            table.add_row(str(item.display_index), item.content, str(item.original_index), str(item.correct_position))

    console.print(Panel(
        table,
        title=f"[bold cyan]{question.type.value.upper()} {question.id}[/bold cyan]",
        subtitle=f"attempt {attempt}",
        border_style="cyan",
        box=box.HEAVY,
    ))


@app.command("permutation")
def show_permutation(
    seed: str = typer.Argument(..., help="Seed string"),
    n: int = typer.Argument(..., help="Number of elements"),
):
    """Print the seeded permutation of 0..N-1."""
    try:
        console.print(" ".join(str(i) for i in generate(seed, n)))
    except QuizEngineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("grade")
def grade(
    quiz_file: Path = typer.Argument(..., help="Quiz JSON: a list of questions or {\"questions\": [...], \"passing_score\": N}"),
    attempt_file: Path = typer.Argument(..., help="Attempt JSON: {\"attempt_id\": ..., \"answers\": {...}}"),
    as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON"),
):
    """
    Grade a submitted attempt.

    Examples:
        quizengine grade quiz.json attempt.json
        quizengine grade quiz.json attempt.json --json
    """
    quiz = _load_json(quiz_file)
    questions = quiz.get("questions", []) if isinstance(quiz, dict) else quiz
    passing_score = quiz.get("passing_score") if isinstance(quiz, dict) else None
    if passing_score is not None and (isinstance(passing_score, bool) or not isinstance(passing_score, (int, float))):
        console.print(f"[red]Error: passing_score must be a number, got {passing_score!r}[/red]")
        raise typer.Exit(1)

    try:
        graded = GradingEngine().grade_attempt(questions, _load_json(attempt_file), passing_score)
    except QuizEngineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(graded.to_dict(), indent=2, default=str))
        return

    table = Table(box=box.MINIMAL_HEAVY_HEAD, show_header=True)
    table.add_column("Question")
    table.add_column("Type", style="dim")
    table.add_column("Status")
    table.add_column("Points", justify="right")
    table.add_column("Feedback", overflow="fold")

    for result in graded.results:
        style = STATUS_STYLES[result.status]
        mark = "[green]✓[/green]" if result.is_correct else "[red]✗[/red]"
        if result.status is ResultStatus.UNGRADED:
            mark = "[cyan]?[/cyan]"
        table.add_row(
            f"{mark} {result.question_id}",
            result.question_type.value if result.question_type else "-",
            f"[{style}]{result.status.value}[/{style}]",
            f"{result.points_awarded}/{result.points_possible}",
            result.error or result.feedback,
        )
    console.print(table)

    report = graded.report
    summary = (
        f"Score: [bold]{report.points_earned}/{report.points_possible}[/bold] "
        f"({report.percentage}%)  Correct: {report.correct_count}/{report.total_questions}"
    )
    if report.has_ungraded:
        summary += f"\n[cyan]{report.ungraded_count} question(s) awaiting manual grading[/cyan]"
    if report.passing_score:
        verdict = "[green]PASSED[/green]" if report.passed else "[red]FAILED[/red]"
        summary += f"\n{verdict} (pass mark {report.passing_score}%)"
    if report.fully_ungraded:
        summary += "\n[yellow]No automatically gradable questions[/yellow]"
    console.print(Panel(summary, title=f"[bold]Attempt {graded.attempt_id}[/bold]", box=box.HEAVY))


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=settings.log_format,
    )

    app()


if __name__ == "__main__":
    main()
