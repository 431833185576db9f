"""Tests for output formatting and the JSON envelope."""

from __future__ import annotations

import io
import json
from datetime import datetime

import pytest
from rich.console import Console

from repscale.agent.response import SCHEMA_VERSION, CommandResponse
from repscale.export.formatters import (
    SnapshotTableFormatter,
    format_summary,
    projection_table,
    projections_to_dict,
    snapshot_to_dict,
)
from repscale.tracking.engine import update_metrics
from repscale.tracking.models import GoalType
from repscale.units import UnitSystem
from tests.conftest import NOW, make_settings


@pytest.fixture
def snapshot(cutting_weights, week_of_logs):
    return update_metrics(week_of_logs, cutting_weights, make_settings(target_weight=74.9), NOW)


class TestSnapshotToDict:
    def test_keys_and_values(self, snapshot) -> None:
        data = snapshot_to_dict(snapshot, make_settings(target_weight=74.9))
        assert data["unit"] == "kg"
        assert data["goal_type"] == "cutting"
        assert data["current_weight"] == 78.0
        assert data["target_weight"] == 74.9
        assert data["days_remaining"] == 15
        assert data["goal_reached"] is False
        assert json.dumps(data)

    def test_imperial(self, snapshot) -> None:
        data = snapshot_to_dict(snapshot, make_settings(), UnitSystem.IMPERIAL)
        assert data["unit"] == "lbs"
        assert data["current_weight"] == pytest.approx(171.96)

    def test_projections_grouped(self, snapshot) -> None:
        series = projections_to_dict(snapshot.projection_points, UnitSystem.METRIC)
        assert list(series) == snapshot.series_labels
        assert all(len(points) == 61 for points in series.values())


class TestFormatSummary:
    def test_days(self, snapshot) -> None:
        assert format_summary(snapshot, make_settings()).startswith("~15 days")

    def test_reached(self, snapshot) -> None:
        settings = make_settings(goal_type=GoalType.CUTTING, target_weight=79.0)
        assert format_summary(snapshot, settings) == "Target reached"

    def test_no_weights(self, week_of_logs) -> None:
        empty = update_metrics(week_of_logs, [], make_settings(), NOW)
        assert format_summary(empty, make_settings()) == "No weight entries yet"


class TestTables:
    def test_projection_table_samples_rows(self, snapshot) -> None:
        table = projection_table(snapshot.projection_points, UnitSystem.METRIC, every=7)
        # Days 0, 7, ... 56 plus the final day 60
        assert table.row_count == 10
        assert len(table.columns) == 1 + len(snapshot.series_labels)

    def test_formatter_prints_panel(self, snapshot) -> None:
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)
        SnapshotTableFormatter(console).format(snapshot, make_settings(target_weight=74.9))
        output = buffer.getvalue()
        assert "Goal Progress" in output
        assert "Estimated time" in output


class TestCommandResponse:
    def test_envelope(self) -> None:
        response = CommandResponse(command="dashboard", data={"days_remaining": 15})
        data = response.to_dict(generated_at=datetime(2026, 10, 19, 12, 0))
        assert data == {
            "success": True,
            "command": "dashboard",
            "data": {"days_remaining": 15},
            "errors": [],
            "warnings": [],
            "suggestions": [],
            "human_summary": "",
            "timestamp": "2026-10-19T12:00:00",
            "schema_version": SCHEMA_VERSION,
        }

    def test_failure(self) -> None:
        response = CommandResponse.failure("maintenance", "boom", ["try again"])
        assert response.success is False
        assert response.errors == ["boom"]
        assert response.suggestions == ["try again"]

    def test_write(self) -> None:
        stream = io.StringIO()
        CommandResponse(command="changes").write(stream)
        assert stream.getvalue().endswith("\n")
        assert json.loads(stream.getvalue())["command"] == "changes"
