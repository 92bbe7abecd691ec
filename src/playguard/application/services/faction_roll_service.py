from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Callable, List, Optional, Sequence

from playguard.application.dtos import RollView
from playguard.application.services.event_bus import EventBus
from playguard.domain.clock import Clock
from playguard.domain.events import FactionRolled
from playguard.domain.models.faction import FACTIONS, SLEEP_FACTION
from playguard.domain.services.faction_pool import (
    SLEEP_FACTION_CHANCE,
    SLEEP_WINDOW_END_HOUR,
    SLEEP_WINDOW_START_HOUR,
    build_random_faction_pool,
    is_sleep_window,
    pick_random_faction,
)

logger = logging.getLogger(__name__)


class FactionRollService:
    def __init__(
        self,
        rng: Callable[[], float],
        clock: Clock,
        event_bus: EventBus | None = None,
        *,
        base_factions: Sequence[object] = FACTIONS,
        sleep_faction: object = SLEEP_FACTION,
        sleep_chance: float = SLEEP_FACTION_CHANCE,
        start_hour: int = SLEEP_WINDOW_START_HOUR,
        end_hour: int = SLEEP_WINDOW_END_HOUR,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.rng = rng
        self.clock = clock
        self.event_bus = event_bus
        self.base_factions = tuple(base_factions)
        self.sleep_faction = sleep_faction
        self.sleep_chance = float(sleep_chance)
        self.start_hour = int(start_hour)
        self.end_hour = int(end_hour)
        self.tz = tz

    def _resolve_instant(self, at: Optional[int]) -> int:
        return int(self.clock.now_ms() if at is None else at)

    def in_sleep_window(self, at: Optional[int] = None) -> bool:
        return is_sleep_window(
            self._resolve_instant(at),
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            tz=self.tz,
        )

    def candidate_pool(self, at: Optional[int] = None) -> List[object]:
        return build_random_faction_pool(
            base_factions=self.base_factions,
            sleep_faction=self.sleep_faction,
            date=self._resolve_instant(at),
            rng=self.rng,
            sleep_chance=self.sleep_chance,
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            tz=self.tz,
        )

    def roll(self, at: Optional[int] = None) -> RollView:
        instant = self._resolve_instant(at)
        sleep_window = self.in_sleep_window(instant)
        pool = self.candidate_pool(instant)
        faction = pick_random_faction(pool, self.rng)
        sleep_forced = sleep_window and pool == [self.sleep_faction] and list(self.base_factions) != pool

        logger.debug(
            "Faction rolled",
            extra={
                "faction": str(faction),
                "pool_size": len(pool),
                "sleep_window": sleep_window,
                "sleep_forced": sleep_forced,
            },
        )
        if self.event_bus is not None:
            self.event_bus.publish(
                FactionRolled(
                    faction=faction,
                    pool_size=len(pool),
                    sleep_window=sleep_window,
                    sleep_forced=sleep_forced,
                    rolled_at=instant,
                )
            )
        return RollView(
            faction=faction,
            pool=list(pool),
            sleep_window=sleep_window,
            sleep_forced=sleep_forced,
            rolled_at=instant,
        )
