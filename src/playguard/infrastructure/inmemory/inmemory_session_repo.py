from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Optional

from playguard.domain.models.session import PlayerSession
from playguard.domain.repositories import PlayerSessionRepository


class InMemoryPlayerSessionRepository(PlayerSessionRepository):
    def __init__(self, sessions: Iterable[PlayerSession] | None = None) -> None:
        self._sessions: Dict[str, PlayerSession] = {}
        for session in sessions or ():
            self.save(session)

    def get(self, player_id: str) -> Optional[PlayerSession]:
        stored = self._sessions.get(str(player_id))
        return replace(stored) if stored is not None else None

    def save(self, session: PlayerSession) -> None:
        self._sessions[str(session.player_id)] = replace(session)
