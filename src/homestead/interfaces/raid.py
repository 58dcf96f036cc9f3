"""Raid Service Protocol Interface."""

from typing import Protocol

from homestead.domain.notifications import RaidResolved


class IRaidService(Protocol):
    """Protocol for raid and final battle resolution."""

    def process_raid(self, turn: int) -> RaidResolved:
        """Resolve the raid scheduled on ``turn``.

        A lost raid costs gold or a child but never ends the match.
        """
        ...

    def process_final_battle(self) -> bool:
        """Return ``True`` when the homestead wins the final battle."""
        ...
