"""JSON response envelope shared by every CLI command."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, TextIO

SCHEMA_VERSION = "1.0"


@dataclass
class CommandResponse:
    """Result of one CLI command in a stable, machine-readable shape.

    Every command emits the same top-level keys so scripts can check
    ``success`` before looking at ``data``.
    """

    command: str
    success: bool = True
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""

    @classmethod
    def failure(
        cls,
        command: str,
        error: str,
        suggestions: Optional[list[str]] = None,
    ) -> CommandResponse:
        return cls(
            command=command,
            success=False,
            errors=[error],
            suggestions=suggestions or [],
        )

    def to_dict(self, generated_at: Optional[datetime] = None) -> dict[str, Any]:
        generated_at = generated_at or datetime.now()
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": generated_at.isoformat(),
            "schema_version": SCHEMA_VERSION,
        }

    def write(self, stream: TextIO) -> None:
        """Write the envelope as indented JSON followed by a newline."""
        stream.write(json.dumps(self.to_dict(), indent=2))
        stream.write("\n")
