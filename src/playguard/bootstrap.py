import logging
import os
import random
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from playguard.application.services.event_bus import EventBus
from playguard.application.services.faction_roll_service import FactionRollService
from playguard.application.services.protection_service import ProtectionService
from playguard.application.services.seed_policy import derive_rng
from playguard.domain.clock import Clock
from playguard.domain.events import DomainEvent
from playguard.domain.repositories import PlayerSessionRepository
from playguard.domain.services.faction_pool import (
    SLEEP_FACTION_CHANCE,
    SLEEP_WINDOW_END_HOUR,
    SLEEP_WINDOW_START_HOUR,
)
from playguard.domain.services.protection import ABSTINENCE_WINDOW_MS, NOON_HOUR
from playguard.infrastructure.clock import SystemClock
from playguard.infrastructure.inmemory.inmemory_session_repo import InMemoryPlayerSessionRepository

_HOUR_MS = 60 * 60 * 1000

logger = logging.getLogger(__name__)


@dataclass
class Services:
    rolls: FactionRollService
    protection: ProtectionService
    event_bus: EventBus


def _log_domain_event(event: DomainEvent) -> None:
    logger.debug("Domain event published", extra={"event_type": type(event).__name__})


def _env_hour(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if not 0 <= value <= 23:
        raise ValueError(f"{name} must be an hour between 0 and 23, got {value}")
    return value


def _env_chance(name: str, default: float) -> float:
    value = float(os.getenv(name, str(default)))
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return value


def _load_timezone() -> Optional[tzinfo]:
    name = os.getenv("PLAYGUARD_TIMEZONE", "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown PLAYGUARD_TIMEZONE: {name}") from exc


def _build_rng() -> Callable[[], float]:
    seed = os.getenv("PLAYGUARD_ROLL_SEED", "").strip()
    if seed:
        return derive_rng("faction.roll", {"seed": seed}).random
    return random.Random().random


def _build_session_repo() -> PlayerSessionRepository:
    if not os.getenv("PLAYGUARD_DATABASE_URL"):
        return InMemoryPlayerSessionRepository()

    from playguard.infrastructure.db.sql.connection import engine
    from playguard.infrastructure.db.sql.repos import SqlPlayerSessionRepository
    from playguard.infrastructure.db.sql.schema import ensure_schema

    ensure_schema(engine)
    return SqlPlayerSessionRepository()


def create_services(
    *,
    clock: Clock | None = None,
    rng: Callable[[], float] | None = None,
    session_repo: PlayerSessionRepository | None = None,
) -> Services:
    tz = _load_timezone()
    abstinence_hours = float(os.getenv("PLAYGUARD_ABSTINENCE_HOURS", str(ABSTINENCE_WINDOW_MS / _HOUR_MS)))
    if abstinence_hours < 0:
        raise ValueError(f"PLAYGUARD_ABSTINENCE_HOURS must not be negative, got {abstinence_hours}")

    clock = clock or SystemClock()
    event_bus = EventBus()
    event_bus.subscribe_all(_log_domain_event, priority=1000)
    rolls = FactionRollService(
        rng or _build_rng(),
        clock,
        event_bus,
        sleep_chance=_env_chance("PLAYGUARD_SLEEP_CHANCE", SLEEP_FACTION_CHANCE),
        start_hour=_env_hour("PLAYGUARD_SLEEP_START_HOUR", SLEEP_WINDOW_START_HOUR),
        end_hour=_env_hour("PLAYGUARD_SLEEP_END_HOUR", SLEEP_WINDOW_END_HOUR),
        tz=tz,
    )
    protection = ProtectionService(
        session_repo or _build_session_repo(),
        clock,
        event_bus,
        tz=tz,
        noon_hour=_env_hour("PLAYGUARD_NOON_HOUR", NOON_HOUR),
        abstinence_ms=int(abstinence_hours * _HOUR_MS),
    )
    return Services(rolls=rolls, protection=protection, event_bus=event_bus)
