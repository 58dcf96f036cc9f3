"""Random Event Service Protocol Interface."""

from typing import Protocol

from homestead.domain.events import RandomEvent


class IRandomEventService(Protocol):
    """Protocol for the random event collaborator.

    The default implementation is
    :class:`~homestead.services.event_service.RandomEventService`.
    Implementations mutate the match through the services they were built
    with.
    """

    def process_random_event(self, turn: int) -> RandomEvent | None:
        """Roll for and apply an event; returns the event that fired, if any."""
        ...
