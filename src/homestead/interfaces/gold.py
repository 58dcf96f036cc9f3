"""Gold Service Protocol Interface."""

from typing import Protocol


class IGoldService(Protocol):
    """Protocol for the treasury of a match."""

    def add_gold(self, amount: int, *, apply_modifiers: bool = False) -> int:
        """Credit gold to the treasury.

        Args:
            amount: Gold to credit before modifiers
            apply_modifiers: Apply the turn's gold multiplier and bonus

        Returns:
            The amount actually credited
        """
        ...

    def subtract_gold(self, amount: int) -> int:
        """Debit gold without clamping; the treasury may go negative.

        Returns:
            The new treasury balance
        """
        ...

    def try_spend(self, amount: int) -> bool:
        """Debit ``amount`` only if the treasury covers it."""
        ...

    def has_enough(self, amount: int) -> bool:
        ...
