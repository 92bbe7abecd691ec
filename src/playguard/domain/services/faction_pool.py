from __future__ import annotations

import math
from datetime import tzinfo
from itertools import cycle
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from playguard.domain.services.local_time import Instant, local_hour

T = TypeVar("T")

Rng = Callable[[], float]

SLEEP_WINDOW_START_HOUR = 22
SLEEP_WINDOW_END_HOUR = 6
SLEEP_FACTION_CHANCE = 0.5


def build_faction_pool(base_factions: Iterable[T], sleep_faction: T) -> List[T]:
    """Base factions followed by the sleep faction, with no roll involved."""

    pool = list(base_factions)
    pool.append(sleep_faction)
    return pool


def is_sleep_window(
    date: Instant,
    *,
    start_hour: int = SLEEP_WINDOW_START_HOUR,
    end_hour: int = SLEEP_WINDOW_END_HOUR,
    tz: Optional[tzinfo] = None,
) -> bool:
    hour = local_hour(date, tz)
    if start_hour == end_hour:
        return False
    if start_hour < end_hour:
        return start_hour <= hour < end_hour
    # window wraps midnight
    return hour >= start_hour or hour < end_hour


def build_random_faction_pool(
    *,
    base_factions: Iterable[T],
    sleep_faction: T,
    date: Instant,
    rng: Rng,
    sleep_chance: float = SLEEP_FACTION_CHANCE,
    start_hour: int = SLEEP_WINDOW_START_HOUR,
    end_hour: int = SLEEP_WINDOW_END_HOUR,
    tz: Optional[tzinfo] = None,
) -> List[T]:
    """Pool for a single draw.

    Inside the sleep window one roll decides between the sleep faction alone
    and the base factions alone. Outside the window ``rng`` is never called.
    """

    base = list(base_factions)
    if not is_sleep_window(date, start_hour=start_hour, end_hour=end_hour, tz=tz):
        return base
    if rng() < sleep_chance:
        return [sleep_faction]
    return base


def _clamp_index(roll: float, size: int) -> int:
    if math.isnan(roll) or roll < 0:
        return 0
    if roll >= 1:
        return size - 1
    return min(int(math.floor(roll * size)), size - 1)


def pick_random_faction(pool: Sequence[T], rng: Rng) -> Optional[T]:
    if not pool:
        return None
    return pool[_clamp_index(float(rng()), len(pool))]


def create_sequence_rng(values: Iterable[float]) -> Rng:
    """Replay ``values`` in order, starting over once they run out."""

    replay = [float(value) for value in values]
    if not replay:
        raise ValueError("create_sequence_rng requires at least one value")
    source = cycle(replay)

    def _next() -> float:
        return next(source)

    return _next
