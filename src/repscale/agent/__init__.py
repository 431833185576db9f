"""Machine-readable output for scripts and agents."""

from __future__ import annotations

from repscale.agent.response import CommandResponse

__all__ = ["CommandResponse"]
