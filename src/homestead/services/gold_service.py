"""Gold Service for Homestead.

This module owns every change to the treasury of a match: credits with the
turn's multiplier and bonus, unclamped debits, spending checks and the
turn-scoped modifiers effects adjust.
"""

import logging
import math

from homestead.domain.models import MatchState
from homestead.domain.notifications import GoldChanged, NotificationBus

logger = logging.getLogger(__name__)


class GoldService:
    """Service for treasury operations."""

    def __init__(self, state: MatchState, bus: NotificationBus):
        self.state = state
        self.bus = bus

    def add_gold(self, amount: int, *, apply_modifiers: bool = False) -> int:
        """Credit gold, optionally applying the turn's multiplier and bonus.

        The multiplier is floored before the bonus is added.  The bonus only
        applies when positive.

        Args:
            amount: Base amount to credit
            apply_modifiers: Whether the turn's multiplier and bonus apply

        Returns:
            The amount actually credited
        """
        final = amount
        if apply_modifiers:
            if self.state.gold_multiplier != 1.0:
                final = math.floor(final * self.state.gold_multiplier)
            if self.state.gold_bonus > 0:
                final += self.state.gold_bonus
        self._change(final)
        return final

    def subtract_gold(self, amount: int) -> int:
        """Debit gold without any floor; returns the new balance."""
        self._change(-amount)
        return self.state.gold

    def has_enough(self, amount: int) -> bool:
        return self.state.gold >= amount

    def try_spend(self, amount: int) -> bool:
        """Debit ``amount`` if the treasury covers it.

        Args:
            amount: Gold to spend

        Returns:
            True when the gold was spent
        """
        if not self.has_enough(amount):
            logger.debug("cannot spend %s gold with %s available", amount, self.state.gold)
            return False
        self._change(-amount)
        return True

    def set_multiplier(self, multiplier: float) -> None:
        self.state.gold_multiplier = multiplier

    def multiply_multiplier(self, factor: float) -> None:
        self.state.gold_multiplier *= factor

    def add_bonus(self, bonus: int) -> None:
        self.state.gold_bonus += bonus

    def percentage_of(self, base_amount: int, percent: int) -> int:
        """Return ``percent`` percent of ``base_amount`` rounded down."""
        return base_amount * percent // 100

    def _change(self, delta: int) -> None:
        if delta == 0:
            return
        old = self.state.gold
        self.state.gold = old + delta
        logger.debug("gold %s -> %s (%+d)", old, self.state.gold, delta)
        self.bus.publish(GoldChanged(old=old, new=self.state.gold))
