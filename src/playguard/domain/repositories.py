from abc import ABC, abstractmethod
from typing import Optional

from playguard.domain.models.session import PlayerSession


class PlayerSessionRepository(ABC):
    @abstractmethod
    def get(self, player_id: str) -> Optional[PlayerSession]:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: PlayerSession) -> None:
        raise NotImplementedError

    def get_or_new(self, player_id: str) -> PlayerSession:
        """Return the stored session or a fresh, unsaved one."""
        return self.get(player_id) or PlayerSession(player_id=str(player_id))
