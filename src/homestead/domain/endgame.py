"""End-of-match evaluation."""

from __future__ import annotations

from .enums import EndState
from .models import MatchState


def evaluate_end_state(state: MatchState) -> EndState:
    """Return the end state the roster implies, or ``EndState.NONE``.

    Validations, raids and the final battle decide every other outcome as
    they resolve, so the only standing condition is an empty roster.
    """

    if state.is_over:
        return state.end_state
    if not state.units:
        return EndState.DEFEAT_ALL_DEAD
    return EndState.NONE
