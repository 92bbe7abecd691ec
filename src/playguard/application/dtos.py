from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RollView:
    faction: Optional[object]
    pool: List[object] = field(default_factory=list)
    sleep_window: bool = False
    sleep_forced: bool = False
    rolled_at: int = 0


@dataclass(frozen=True)
class ProtectionView:
    player_id: str
    today: str
    deferred: bool
    last_game_at: Optional[int]
    effective_last_game_at: Optional[int]
    abstinence_remaining_ms: int

    @property
    def abstinence_satisfied(self) -> bool:
        return self.abstinence_remaining_ms <= 0
