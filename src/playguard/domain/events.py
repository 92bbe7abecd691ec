from dataclasses import dataclass
from typing import Optional, Tuple, Type, Union


@dataclass
class FactionRolled:
    faction: Optional[object]
    pool_size: int
    sleep_window: bool
    sleep_forced: bool
    rolled_at: int


@dataclass
class GameRecorded:
    player_id: str
    played_at: int


@dataclass
class WelcomeShown:
    player_id: str
    shown_on: str


@dataclass
class ProtectionCheckDeferred:
    player_id: str
    today: str
    last_shown_on: Optional[str]


DomainEvent = Union[FactionRolled, GameRecorded, WelcomeShown, ProtectionCheckDeferred]

DOMAIN_EVENT_TYPES: Tuple[Type[object], ...] = (
    FactionRolled,
    GameRecorded,
    WelcomeShown,
    ProtectionCheckDeferred,
)
