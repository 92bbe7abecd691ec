from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class PlayerSession:
    player_id: str
    last_game_at: Optional[int] = None
    welcome_shown_on: Optional[str] = None

    def has_played(self) -> bool:
        return self.last_game_at is not None
