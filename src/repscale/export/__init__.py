"""Output formatting for terminal and JSON."""

from __future__ import annotations

from repscale.export.formatters import (
    SnapshotTableFormatter,
    format_summary,
    projection_table,
    snapshot_to_dict,
    weight_change_table,
)

__all__ = [
    "SnapshotTableFormatter",
    "format_summary",
    "projection_table",
    "snapshot_to_dict",
    "weight_change_table",
]
