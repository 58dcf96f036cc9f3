"""Breeding Service Protocol Interface."""

from typing import Protocol


class IBreedingService(Protocol):
    """Protocol for fertility, pregnancy and births."""

    def process_breeding(self) -> None:
        """Advance pregnancies and roll fertility for every eligible household."""
        ...
