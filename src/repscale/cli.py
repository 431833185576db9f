"""CLI interface using Typer."""

from __future__ import annotations

import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from repscale.agent.response import CommandResponse
from repscale.app_logging import configure_logging
from repscale.config.settings import Settings, default_config_path, reload_settings
from repscale.data.history_loader import History, load_history
from repscale.export.formatters import (
    SnapshotTableFormatter,
    format_summary,
    projection_table,
    projections_to_dict,
    snapshot_to_dict,
    weight_change_table,
    weight_changes_to_list,
)
from repscale.tracking.engine import update_metrics
from repscale.tracking.goal_periods import clean_periods, time_distribution
from repscale.tracking.maintenance import estimate_maintenance
from repscale.tracking.models import GoalSettings
from repscale.tracking.projections import generate_projections
from repscale.tracking.weight_change import newest_first, summarize_weight_changes

app = typer.Typer(
    help="Weight goal projection and maintenance estimation",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")

HISTORY_ARG = typer.Argument(..., help="History file (.yaml, .yml or .json)")
TODAY_OPT = typer.Option(None, "--today", help="Evaluate as of this date (YYYY-MM-DD)")
JSON_OPT = typer.Option(
    False, "--json", help="Output as JSON (default when display.output_format is json)"
)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: CommandResponse) -> None:
    """Write a JSON response envelope to stdout."""
    response.write(sys.stdout)


def fail(
    command: str, message: str, json_output: bool, hint: Optional[str] = None
) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json(CommandResponse.failure(command, message, [hint] if hint else None))
    else:
        console.print(f"[red]{message}[/red]")
        if hint:
            console.print(hint)
    raise typer.Exit(1)


def resolve_today(today: Optional[str]) -> datetime:
    """Reference time: the end of --today, or the current time."""
    if today is None:
        return datetime.now()
    return datetime.combine(date.fromisoformat(today), time.max)


def get_app_settings(ctx: typer.Context) -> Settings:
    if ctx.obj is None:
        ctx.obj = reload_settings()
    return ctx.obj


def use_json(ctx: typer.Context, json_output: bool) -> bool:
    """--json, or display.output_format: json in the config."""
    return json_output or get_app_settings(ctx).display.output_format == "json"


def load_inputs(
    ctx: typer.Context,
    command: str,
    history_path: Path,
    today: Optional[str],
    json_output: bool,
) -> tuple[History, GoalSettings, datetime]:
    """Load the history file and merge its goal with the configured one."""
    settings = get_app_settings(ctx)
    json_output = use_json(ctx, json_output)
    try:
        now = resolve_today(today)
        history = load_history(history_path)
        goal = settings.goal.to_goal_settings(**history.goal_overrides)
    except (FileNotFoundError, ValueError) as e:
        fail(command, str(e), json_output)
    return history, goal, now


# ============================================================================
# Callbacks
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: ~/.repscale/config.yaml)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Load configuration and set up logging."""
    try:
        settings = reload_settings(config_path)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)
    ctx.obj = settings
    configure_logging(log_level or settings.logging.level)


# ============================================================================
# Engine Commands
# ============================================================================


@app.command()
def dashboard(
    ctx: typer.Context,
    history_path: Path = HISTORY_ARG,
    today: Optional[str] = TODAY_OPT,
    every: int = typer.Option(7, "--every", "-e", min=1, help="Projection row interval (days)"),
    json_output: bool = JSON_OPT,
) -> None:
    """Show goal progress, weight changes and projections."""
    history, goal, now = load_inputs(ctx, "dashboard", history_path, today, json_output)
    json_output = use_json(ctx, json_output)
    unit = get_app_settings(ctx).display.unit_system

    snapshot = update_metrics(history.logs, history.weights, goal, now)

    if json_output:
        output_json(
            CommandResponse(
                command="dashboard",
                data=snapshot_to_dict(snapshot, goal, unit),
                warnings=[snapshot.progress_warning_message]
                if snapshot.progress_warning_message
                else [],
                human_summary=format_summary(snapshot, goal),
            )
        )
        return

    SnapshotTableFormatter(console).format(snapshot, goal, unit, every)


@app.command()
def maintenance(
    ctx: typer.Context,
    history_path: Path = HISTORY_ARG,
    today: Optional[str] = TODAY_OPT,
    json_output: bool = JSON_OPT,
) -> None:
    """Estimate maintenance calories from the last 30 days."""
    history, goal, now = load_inputs(ctx, "maintenance", history_path, today, json_output)
    json_output = use_json(ctx, json_output)

    estimate = estimate_maintenance(history.weights, history.logs, now)
    if estimate is None:
        fail(
            "maintenance",
            "Not enough data to estimate maintenance",
            json_output,
            hint="Log weight on at least two different days and some calories in between.",
        )

    difference = estimate - goal.maintenance_calories
    if json_output:
        output_json(
            CommandResponse(
                command="maintenance",
                data={
                    "estimated_maintenance": estimate,
                    "declared_maintenance": goal.maintenance_calories,
                    "difference": difference,
                },
                human_summary=f"Estimated maintenance: {estimate} kcal/day",
            )
        )
    else:
        console.print(f"[green]Estimated maintenance:[/green] {estimate} kcal/day")
        console.print(
            f"[blue]Declared maintenance:[/blue] {goal.maintenance_calories} kcal/day "
            f"({difference:+d})"
        )


@app.command()
def projections(
    ctx: typer.Context,
    history_path: Path = HISTORY_ARG,
    today: Optional[str] = TODAY_OPT,
    every: int = typer.Option(7, "--every", "-e", min=1, help="Row interval (days)"),
    json_output: bool = JSON_OPT,
) -> None:
    """Project weight 60 days ahead under each estimation method."""
    history, goal, now = load_inputs(ctx, "projections", history_path, today, json_output)
    json_output = use_json(ctx, json_output)
    unit = get_app_settings(ctx).display.unit_system

    if not history.weights:
        fail("projections", "No weight entries found", json_output)

    start_weight = newest_first(history.weights)[0].weight
    points = generate_projections(start_weight, history.weights, history.logs, goal, now)

    if json_output:
        series = projections_to_dict(points, unit)
        output_json(
            CommandResponse(
                command="projections",
                data={"series": series},
                human_summary=f"{len(series)} projection series",
            )
        )
        return

    if not points:
        console.print("[yellow]No method has enough data for a projection[/yellow]")
        return
    console.print(projection_table(points, unit, every))


@app.command()
def changes(
    ctx: typer.Context,
    history_path: Path = HISTORY_ARG,
    today: Optional[str] = TODAY_OPT,
    json_output: bool = JSON_OPT,
) -> None:
    """Show weight change over 7, 30, 90 days and all time."""
    history, _, now = load_inputs(ctx, "changes", history_path, today, json_output)
    json_output = use_json(ctx, json_output)
    unit = get_app_settings(ctx).display.unit_system

    metrics = summarize_weight_changes(history.weights, now)

    if json_output:
        output_json(
            CommandResponse(
                command="changes",
                data={"metrics": weight_changes_to_list(metrics, unit)},
                human_summary=f"{len(metrics)} periods",
            )
        )
        return

    if not metrics:
        console.print("No weight entries found")
        return
    console.print(weight_change_table(metrics, unit))


@app.command()
def periods(
    ctx: typer.Context,
    history_path: Path = HISTORY_ARG,
    today: Optional[str] = TODAY_OPT,
    json_output: bool = JSON_OPT,
) -> None:
    """Show goal period history and days spent per goal type."""
    history, _, now = load_inputs(ctx, "periods", history_path, today, json_output)
    json_output = use_json(ctx, json_output)

    first_weight_date = history.first_weight_date
    cleaned = clean_periods(history.goal_periods, first_weight_date)
    distribution = time_distribution(history.goal_periods, now.date(), first_weight_date)
    total = sum(distribution.values())

    if json_output:
        output_json(
            CommandResponse(
                command="periods",
                data={
                    "periods": [
                        {
                            "start_date": p.start_date.isoformat(),
                            "end_date": p.end_date.isoformat() if p.end_date else None,
                            "goal_type": p.goal_type.value,
                            "days": p.duration_days(now.date()),
                        }
                        for p in cleaned
                    ],
                    "distribution": {g.value: days for g, days in distribution.items()},
                    "total_days": total,
                },
                human_summary=f"{total} tracked days across {len(cleaned)} periods",
            )
        )
        return

    if not cleaned:
        console.print("No goal periods found")
        return

    table = Table(title="Goal Periods")
    table.add_column("Start", style="cyan")
    table.add_column("End")
    table.add_column("Goal")
    table.add_column("Days", justify="right")
    for period in cleaned:
        table.add_row(
            period.start_date.isoformat(),
            period.end_date.isoformat() if period.end_date else "[green]active[/green]",
            period.goal_type.label,
            str(period.duration_days(now.date())),
        )
    console.print(table)

    for goal_type, days in distribution.items():
        console.print(f"{goal_type.label}: {days} days ({days / total:.0%})")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the active configuration as YAML-style key/value pairs."""
    settings = get_app_settings(ctx)
    for section, values in settings.to_dict().items():
        console.print(f"[bold]{section}[/bold]")
        for key, value in values.items():
            console.print(f"  {key}: {value}")


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a config file with default settings."""
    target = path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]Config already exists:[/yellow] {target}")
        console.print("Use --force to overwrite.")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Wrote default config to[/green] {target}")


if __name__ == "__main__":
    app()
