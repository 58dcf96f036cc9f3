"""Pause points: decisions the player must make before a turn can continue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .enums import DecisionKind


@dataclass(frozen=True, slots=True)
class PendingDecision:
    """A choice the core is waiting on.

    ``options`` lists every valid answer.  Job selections expect exactly one
    of them; target selections expect ``count`` distinct options.
    ``subject_id`` names the unit a job selection is for.
    """

    id: int
    kind: DecisionKind
    prompt: str
    options: tuple[Any, ...]
    count: int = 1
    subject_id: int | None = None

    def accepts(self, choice: Any) -> bool:
        """Return ``True`` when ``choice`` is a valid answer to this decision."""

        if self.kind is DecisionKind.JOB_SELECTION:
            return choice in self.options
        try:
            picked = tuple(choice)
        except TypeError:
            return False
        if len(picked) != self.count or len(set(picked)) != len(picked):
            return False
        return all(item in self.options for item in picked)
