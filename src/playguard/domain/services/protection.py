from __future__ import annotations

from datetime import tzinfo
from typing import Optional

from playguard.domain.services.local_time import Instant, as_epoch_ms, local_day, local_hour

NOON_HOUR = 12
ABSTINENCE_WINDOW_MS = 3 * 60 * 60 * 1000


def compute_effective_last_game_at(
    last_game_at: Optional[Instant],
    now: Instant,
    *,
    tz: Optional[tzinfo] = None,
    noon_hour: int = NOON_HOUR,
    abstinence_ms: int = ABSTINENCE_WINDOW_MS,
) -> Optional[Instant]:
    """Last-played timestamp used for abstinence accounting.

    From ``noon_hour`` onwards a player with no session today is treated as
    having stopped exactly ``abstinence_ms`` ago, returned as epoch
    milliseconds. Before noon, and for sessions recorded today,
    ``last_game_at`` is returned as given.
    """

    if local_hour(now, tz) < noon_hour:
        return last_game_at
    if last_game_at is None or local_day(last_game_at, tz) != local_day(now, tz):
        return as_epoch_ms(now) - int(abstinence_ms)
    return last_game_at


def should_defer_protection_check(last_shown: Optional[str], today: str) -> bool:
    return last_shown is None or last_shown != today


def abstinence_remaining_ms(
    effective_last_game_at: Optional[Instant],
    now: Instant,
    *,
    abstinence_ms: int = ABSTINENCE_WINDOW_MS,
) -> int:
    if effective_last_game_at is None:
        return 0
    elapsed = max(0, as_epoch_ms(now) - as_epoch_ms(effective_last_game_at))
    return max(0, int(abstinence_ms) - elapsed)
