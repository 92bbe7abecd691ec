from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Optional

from playguard.application.dtos import ProtectionView
from playguard.application.services.event_bus import EventBus
from playguard.domain.clock import Clock
from playguard.domain.events import GameRecorded, ProtectionCheckDeferred, WelcomeShown
from playguard.domain.models.session import PlayerSession
from playguard.domain.repositories import PlayerSessionRepository
from playguard.domain.services.local_time import day_string
from playguard.domain.services.protection import (
    ABSTINENCE_WINDOW_MS,
    NOON_HOUR,
    abstinence_remaining_ms,
    compute_effective_last_game_at,
    should_defer_protection_check,
)

logger = logging.getLogger(__name__)


class ProtectionService:
    def __init__(
        self,
        session_repo: PlayerSessionRepository,
        clock: Clock,
        event_bus: EventBus | None = None,
        *,
        tz: Optional[tzinfo] = None,
        noon_hour: int = NOON_HOUR,
        abstinence_ms: int = ABSTINENCE_WINDOW_MS,
    ) -> None:
        self.session_repo = session_repo
        self.clock = clock
        self.event_bus = event_bus
        self.tz = tz
        self.noon_hour = int(noon_hour)
        self.abstinence_ms = int(abstinence_ms)

    def _publish(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def today(self) -> str:
        return day_string(self.clock.now_ms(), self.tz)

    def status(self, player_id: str) -> ProtectionView:
        now = int(self.clock.now_ms())
        session = self.session_repo.get_or_new(player_id)
        today = day_string(now, self.tz)

        deferred = should_defer_protection_check(session.welcome_shown_on, today)
        effective = compute_effective_last_game_at(
            session.last_game_at,
            now,
            tz=self.tz,
            noon_hour=self.noon_hour,
            abstinence_ms=self.abstinence_ms,
        )
        remaining = abstinence_remaining_ms(effective, now, abstinence_ms=self.abstinence_ms)

        if deferred:
            logger.debug("Protection check deferred until welcome is shown", extra={"player_id": session.player_id})
            self._publish(
                ProtectionCheckDeferred(
                    player_id=session.player_id,
                    today=today,
                    last_shown_on=session.welcome_shown_on,
                )
            )

        return ProtectionView(
            player_id=session.player_id,
            today=today,
            deferred=deferred,
            last_game_at=session.last_game_at,
            effective_last_game_at=effective,
            abstinence_remaining_ms=remaining,
        )

    def record_game(self, player_id: str, at: Optional[int] = None) -> PlayerSession:
        played_at = int(self.clock.now_ms() if at is None else at)
        session = self.session_repo.get_or_new(player_id)
        session.last_game_at = played_at
        self.session_repo.save(session)
        self._publish(GameRecorded(player_id=session.player_id, played_at=played_at))
        return session

    def acknowledge_welcome(self, player_id: str) -> PlayerSession:
        session = self.session_repo.get_or_new(player_id)
        session.welcome_shown_on = self.today()
        self.session_repo.save(session)
        self._publish(WelcomeShown(player_id=session.player_id, shown_on=session.welcome_shown_on))
        return session
