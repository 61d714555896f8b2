"""CLI for planguard.

Developer CLI to check a generated training plan against a user's hard
constraints offline, using the same validation path the plan service runs.
"""

import json
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from planguard.config.settings import settings
from planguard.core.logger import setup_logger
from planguard.plans.constants import MAX_WEEKLY_INCREASE_PCT, RUNNING_ONLY_FORBIDDEN_TYPES
from planguard.plans.errors import InvalidConstraintsError, PlanStructureError
from planguard.plans.parsing import extract_plan_json, parse_constraints
from planguard.plans.types import PlanValidationResult
from planguard.plans.validators import validate_plan

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="planguard",
    help="planguard - validate AI-generated training plans against hard rules",
    add_completion=False,
)

EXIT_INVALID_PLAN = 1
EXIT_BAD_INPUT = 2


def _setup_logging(debug: bool = False) -> None:
    """Set up logging from settings.

    Args:
        debug: Force DEBUG level regardless of LOG_LEVEL
    """
    log_level = "DEBUG" if debug else settings.log_level
    setup_logger(level=log_level, log_file=settings.log_file, serialize=settings.log_json)


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[bold red]✗ Cannot read {escape(str(file_path))}:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_BAD_INPUT) from e


def _load_json(file_path: Path) -> Any:
    """Load a JSON document, exiting with a readable error on failure."""
    content = _read_text(file_path)
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]✗ {escape(str(file_path))} is not valid JSON:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_BAD_INPUT) from e


def _load_plan(file_path: Path, raw: bool) -> Any:
    """Load a plan file.

    With raw=True the file holds unprocessed model output and the plan object
    is extracted from it first. An unextractable reply is returned as None so
    validation reports it as a structural violation.
    """
    if not raw:
        return _load_json(file_path)
    try:
        return extract_plan_json(_read_text(file_path))
    except PlanStructureError as e:
        logger.warning(f"Could not extract plan from {file_path}: {e}")
        return None


def _format_result(result: PlanValidationResult, pretty: bool = True) -> str:
    """Format a validation result as JSON."""
    if pretty:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    return json.dumps(result.to_dict(), ensure_ascii=False)


def _print_result(result: PlanValidationResult) -> None:
    if result.is_valid:
        console.print(
            Panel(
                Text("Plan passes all hard rules", style="bold green"),
                border_style="green",
            )
        )
        return

    console.print(
        Panel(
            Text(f"Plan violates hard rules ({len(result.violations)} violations)", style="bold red"),
            border_style="red",
        )
    )
    for violation in result.violations:
        console.print(f"  ✗ {violation}", markup=False)


@app.command()
def validate(
    plan_file: Path = typer.Argument(..., help="Plan JSON file (or raw model output with --raw)"),
    constraints_file: Path = typer.Argument(..., help="User constraints JSON file"),
    raw: bool = typer.Option(False, "--raw", help="Plan file is raw model output; extract the JSON object first"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Validate a training plan against user constraints.

    Exits 0 when the plan is valid, 1 when it has violations and 2 when the
    input files cannot be used.
    """
    _setup_logging(debug)

    plan = _load_plan(plan_file, raw)
    try:
        constraints = parse_constraints(_load_json(constraints_file))
    except InvalidConstraintsError as e:
        console.print(f"[bold red]✗ Invalid constraints:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_BAD_INPUT) from e

    result = validate_plan(plan, constraints)

    if as_json:
        typer.echo(_format_result(result))
    else:
        _print_result(result)

    if not result.is_valid:
        raise typer.Exit(EXIT_INVALID_PLAN)


@app.command()
def rules() -> None:
    """List the hard rules every plan is checked against."""
    table = Table(title="Hard rules", show_lines=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Rule", style="bold")
    table.add_column("Applies to")

    table.add_row(
        "1",
        "Training type compliance",
        f"trainingType=running_only forbids {', '.join(RUNNING_ONLY_FORBIDDEN_TYPES)}",
    )
    table.add_row("2", "Session count", "non-rest sessions per week == sessionsPerWeek")
    table.add_row("3", "Blocked days", "no training session on a blockedDays day")
    table.add_row("4", "Full week", "monday..sunday each present (rest counts)")
    table.add_row("5", "Allowed days", "training only on availableDays minus blockedDays")
    table.add_row(
        "6",
        "Volume progression",
        f"running_km increase between consecutive weeks <= {MAX_WEEKLY_INCREASE_PCT}% (drops are deloads)",
    )

    console.print(table)


if __name__ == "__main__":
    app()
