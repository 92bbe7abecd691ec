from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Faction(str, Enum):
    WARDENS = "wardens"
    WILD = "wild"
    CROWN = "crown"
    ARCANE = "arcane"
    THIEVES = "thieves"
    SLEEP = "sleep"

    @property
    def label(self) -> str:
        return FACTION_LABELS.get(self, self.value.replace("_", " ").title())


FACTION_LABELS: Dict[Faction, str] = {
    Faction.WARDENS: "Emerald Wardens",
    Faction.WILD: "Wild Tribes",
    Faction.CROWN: "The Crown",
    Faction.ARCANE: "Arcane Syndicate",
    Faction.THIEVES: "Thieves Guild",
    Faction.SLEEP: "The Dreamers",
}

FACTIONS: Tuple[Faction, ...] = (
    Faction.WARDENS,
    Faction.WILD,
    Faction.CROWN,
    Faction.ARCANE,
    Faction.THIEVES,
)

SLEEP_FACTION: Faction = Faction.SLEEP


def faction_label(value: object) -> str:
    """Display name for a pool entry; non-enum values fall back to ``str``."""

    if isinstance(value, Faction):
        return value.label
    return str(value)
