"""History file loading."""

from __future__ import annotations

from repscale.data.history_loader import History, load_history, parse_history

__all__ = ["History", "load_history", "parse_history"]
