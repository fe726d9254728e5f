"""Per-request diagnostic context.

The driver resets the session before each top-level evaluation; undefined
symbols are then reported at most once per name until the next reset.
"""

from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class EvaluationSession:
    """Collects advisory diagnostics emitted while reading and evaluating."""

    __slots__ = ("diagnostics", "_reported")

    def __init__(self):
        self.diagnostics: list[str] = []
        self._reported: set[str] = set()

    def reset(self) -> None:
        """Start a new top-level request: forget which names were reported."""
        self._reported.clear()

    def report(self, message: str, log: Optional[logging.Logger] = None) -> None:
        """Record `message`; it is logged at INFO on `log` (default: this module's logger)."""
        (log or logger).info(message)
        self.diagnostics.append(message)

    def undefined_symbol(self, name: str) -> None:
        # A name can be looked up many times within one request
        if name in self._reported:
            return
        self._reported.add(name)
        self.report(f"Undefined symbol '{name}'")

    def drain(self) -> list[str]:
        """Return the pending diagnostics and clear them."""
        messages, self.diagnostics = self.diagnostics, []
        return messages
