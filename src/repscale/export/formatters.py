"""Output formatters for metric snapshots."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from repscale.tracking.goals import is_goal_reached
from repscale.tracking.models import (
    GoalSettings,
    GoalType,
    MetricsSnapshot,
    ProjectionPoint,
    WeightChangeMetric,
)
from repscale.units import UnitSystem, to_display_weight, weight_label


def _round_weight(kg: Optional[float], unit: UnitSystem) -> Optional[float]:
    if kg is None:
        return None
    return round(to_display_weight(kg, unit), 2)


def weight_changes_to_list(
    metrics: list[WeightChangeMetric] | tuple[WeightChangeMetric, ...],
    unit: UnitSystem,
) -> list[dict[str, Any]]:
    return [
        {"period": m.period_label, "delta": _round_weight(m.delta, unit)} for m in metrics
    ]


def projections_to_dict(
    points: list[ProjectionPoint] | tuple[ProjectionPoint, ...],
    unit: UnitSystem,
) -> dict[str, list[dict[str, Any]]]:
    """Group projection points by method label."""
    series: dict[str, list[dict[str, Any]]] = {}
    for point in points:
        series.setdefault(point.method_label, []).append(
            {
                "date": point.date.isoformat(),
                "weight": _round_weight(point.projected_weight, unit),
            }
        )
    return series


def snapshot_to_dict(
    snapshot: MetricsSnapshot,
    settings: GoalSettings,
    unit: UnitSystem = UnitSystem.METRIC,
) -> dict[str, Any]:
    """Convert a snapshot to JSON-ready data in the display unit."""
    goal_reached = None
    if snapshot.current_weight is not None:
        goal_reached = is_goal_reached(snapshot.current_weight, settings)

    return {
        "unit": weight_label(unit),
        "goal_type": settings.goal_type.value,
        "estimation_method": snapshot.effective_method.name.lower(),
        "current_weight": _round_weight(snapshot.current_weight, unit),
        "target_weight": _round_weight(settings.target_weight, unit),
        "goal_reached": goal_reached,
        "estimated_maintenance": snapshot.estimated_maintenance,
        "days_remaining": snapshot.days_remaining,
        "logic_description": snapshot.logic_description,
        "progress_warning_message": snapshot.progress_warning_message,
        "weight_changes": weight_changes_to_list(snapshot.weight_change_metrics, unit),
        "projections": projections_to_dict(snapshot.projection_points, unit),
    }


def format_summary(snapshot: MetricsSnapshot, settings: GoalSettings) -> str:
    """One-line summary used as the JSON human_summary."""
    if snapshot.current_weight is None:
        return "No weight entries yet"
    if is_goal_reached(snapshot.current_weight, settings):
        return "Target reached"
    if snapshot.days_remaining is not None:
        return f"~{snapshot.days_remaining} days to goal ({snapshot.logic_description})"
    return f"Estimate unavailable: {snapshot.progress_warning_message}"


def weight_change_table(
    metrics: list[WeightChangeMetric] | tuple[WeightChangeMetric, ...],
    unit: UnitSystem,
) -> Table:
    label = weight_label(unit)
    table = Table(title="Weight Change")
    table.add_column("Period", style="cyan")
    table.add_column(f"Change ({label})", justify="right")

    for metric in metrics:
        if metric.delta is None:
            table.add_row(metric.period_label, "-")
            continue
        delta = to_display_weight(metric.delta, unit)
        color = "green" if delta < 0 else "red" if delta > 0 else "white"
        table.add_row(metric.period_label, f"[{color}]{delta:+.1f}[/{color}]")

    return table


def projection_table(
    points: list[ProjectionPoint] | tuple[ProjectionPoint, ...],
    unit: UnitSystem,
    every: int = 7,
) -> Table:
    """Table with one column per method, sampled every ``every`` days."""
    label = weight_label(unit)
    by_date: dict[date, dict[str, float]] = {}
    methods: list[str] = []
    for point in points:
        if point.method_label not in methods:
            methods.append(point.method_label)
        by_date.setdefault(point.date, {})[point.method_label] = point.projected_weight

    table = Table(title=f"Projected Weight ({label})")
    table.add_column("Date", style="cyan")
    for method in methods:
        table.add_column(method, justify="right")

    days = sorted(by_date)
    for i, day in enumerate(days):
        if i % every != 0 and i != len(days) - 1:
            continue
        row = [day.isoformat()]
        for method in methods:
            weight = by_date[day].get(method)
            row.append(f"{to_display_weight(weight, unit):.1f}" if weight is not None else "-")
        table.add_row(*row)

    return table


class SnapshotTableFormatter:
    """Format snapshots as Rich panels and tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(
        self,
        snapshot: MetricsSnapshot,
        settings: GoalSettings,
        unit: UnitSystem = UnitSystem.METRIC,
        every: int = 7,
    ) -> None:
        """Print the goal panel, weight changes and projections."""
        label = weight_label(unit)

        if snapshot.current_weight is None:
            self.console.print("[yellow]No weight entries yet[/yellow]")
            return

        current = to_display_weight(snapshot.current_weight, unit)
        target = to_display_weight(settings.target_weight, unit)
        lines = [
            f"Current weight: [bold]{current:.1f} {label}[/bold]",
            f"Goal ({settings.goal_type.label}): {target:.1f} {label}",
        ]

        if is_goal_reached(snapshot.current_weight, settings):
            if settings.goal_type is GoalType.MAINTAINING:
                tolerance = to_display_weight(settings.maintenance_tolerance, unit)
                lines.append(f"[green]Target reached[/green] (within {tolerance:.1f} {label})")
            else:
                lines.append("[green]Target reached[/green]")
        elif snapshot.days_remaining is not None:
            lines.append(f"Estimated time: [bold]{snapshot.days_remaining}[/bold] days")
            lines.append(f"[dim]{snapshot.logic_description}[/dim]")
        else:
            lines.append("[yellow]Estimate unavailable[/yellow]")
            lines.append(snapshot.progress_warning_message)

        if snapshot.estimated_maintenance is not None:
            lines.append(
                f"Estimated maintenance: {snapshot.estimated_maintenance} kcal/day "
                f"(declared: {settings.maintenance_calories})"
            )

        self.console.print(Panel("\n".join(lines), title="Goal Progress"))

        if snapshot.weight_change_metrics:
            self.console.print(weight_change_table(snapshot.weight_change_metrics, unit))

        if snapshot.projection_points:
            self.console.print(projection_table(snapshot.projection_points, unit, every))
