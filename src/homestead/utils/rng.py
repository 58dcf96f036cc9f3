"""Deterministic random sources for Homestead matches.

Every random decision in a match (deck shuffles, mortality draws, raid
outcomes, job offers, fertility rolls) flows through one injected source so a
match is fully reproducible from its seed.

Two implementations are provided:

* :class:`MatchRandom` wraps :class:`random.Random` seeded from a string.
  Seeds are hashed with SHA-256 so the same seed produces the same match on
  every platform and Python version.
* :class:`ScriptedRandom` replays a queue of predetermined values.  It is used
  to pin exact draws in tests and replays.

Examples:
    >>> rng = MatchRandom("homestead")
    >>> 0 <= rng.randrange(100) < 100
    True

    >>> scripted = ScriptedRandom([79, 80])
    >>> scripted.randrange(100), scripted.randrange(100)
    (79, 80)
"""

from __future__ import annotations

import hashlib
import random
from collections import deque
from collections.abc import Iterable, MutableSequence, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Protocol shared by every random source a match accepts."""

    def randrange(self, stop: int) -> int:
        """Return a uniform integer in ``[0, stop)``."""
        ...

    def roll_percent(self, chance: int) -> bool:
        """Return ``True`` with ``chance`` percent probability."""
        ...

    def choice(self, options: Sequence[T]) -> T:
        """Return one element of ``options``."""
        ...

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle ``items`` in place."""
        ...


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


class MatchRandom:
    """Seeded pseudo-random source backing a single match.

    Args:
        seed: Any string or integer.  Integers are converted to their decimal
            string so ``MatchRandom(7)`` and ``MatchRandom("7")`` agree.
    """

    def __init__(self, seed: str | int) -> None:
        self.seed = str(seed)
        self._rng = random.Random(_seed_to_int(self.seed))

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise ValueError(f"stop must be positive, got {stop}")
        return self._rng.randrange(stop)

    def roll_percent(self, chance: int) -> bool:
        return self.randrange(100) < chance

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("options list cannot be empty")
        return options[self.randrange(len(options))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle driven by :meth:`randrange`."""

        for index in range(len(items) - 1, 0, -1):
            swap = self.randrange(index + 1)
            items[index], items[swap] = items[swap], items[index]


class ScriptedRandom:
    """Random source that returns queued values in order.

    Args:
        rolls: Values returned by successive :meth:`randrange` calls.
        default: Value returned once the queue is empty.  When ``None`` an
            exhausted queue raises :class:`LookupError`.

    Shuffles leave the sequence untouched so card order stays predictable.
    """

    def __init__(self, rolls: Iterable[int] = (), *, default: int | None = None) -> None:
        self._rolls: deque[int] = deque(rolls)
        self.default = default
        self.calls: list[tuple[int, int]] = []

    def push(self, *values: int) -> None:
        self._rolls.extend(values)

    @property
    def remaining(self) -> int:
        return len(self._rolls)

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise ValueError(f"stop must be positive, got {stop}")
        if self._rolls:
            value = self._rolls.popleft()
        elif self.default is not None:
            value = self.default
        else:
            raise LookupError("scripted random source is exhausted")
        if not 0 <= value < stop:
            raise ValueError(f"scripted value {value} outside [0, {stop})")
        self.calls.append((stop, value))
        return value

    def roll_percent(self, chance: int) -> bool:
        return self.randrange(100) < chance

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("options list cannot be empty")
        return options[self.randrange(len(options))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        return None
