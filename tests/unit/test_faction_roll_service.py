import sys
from datetime import datetime, timezone
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from playguard.application.services.event_bus import EventBus
from playguard.application.services.faction_roll_service import FactionRollService
from playguard.domain.events import FactionRolled
from playguard.domain.models.faction import FACTIONS, SLEEP_FACTION
from playguard.domain.services.faction_pool import create_sequence_rng
from playguard.domain.services.local_time import to_epoch_ms
from playguard.infrastructure.clock import FixedClock

NIGHT = to_epoch_ms(datetime(2023, 1, 1, 23, 0, tzinfo=timezone.utc))
NOON = to_epoch_ms(datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc))


def _service(values, now=NIGHT, **kwargs):
    bus = EventBus()
    events: list[FactionRolled] = []
    bus.subscribe(FactionRolled, events.append)
    service = FactionRollService(create_sequence_rng(values), FixedClock(now), bus, tz=timezone.utc, **kwargs)
    return service, events


class FactionRollServiceTests(unittest.TestCase):
    def test_winning_night_roll_forces_sleep_faction(self) -> None:
        service, events = _service([0.2, 0.9])

        view = service.roll()

        self.assertEqual(SLEEP_FACTION, view.faction)
        self.assertEqual([SLEEP_FACTION], view.pool)
        self.assertTrue(view.sleep_window)
        self.assertTrue(view.sleep_forced)
        self.assertEqual(NIGHT, view.rolled_at)
        self.assertEqual(1, len(events))
        self.assertTrue(events[0].sleep_forced)
        self.assertEqual(1, events[0].pool_size)

    def test_losing_night_roll_picks_from_base_factions(self) -> None:
        service, events = _service([0.9, 0.0])

        view = service.roll()

        self.assertEqual(FACTIONS[0], view.faction)
        self.assertEqual(list(FACTIONS), view.pool)
        self.assertTrue(view.sleep_window)
        self.assertFalse(view.sleep_forced)
        self.assertEqual(len(FACTIONS), events[0].pool_size)

    def test_daytime_roll_uses_a_single_draw_for_the_pick(self) -> None:
        service, _ = _service([0.99, 0.0], now=NOON)

        view = service.roll()

        self.assertFalse(view.sleep_window)
        self.assertEqual(FACTIONS[-1], view.faction)

    def test_explicit_instant_overrides_clock(self) -> None:
        service, _ = _service([0.1, 0.1], now=NOON)

        view = service.roll(at=NIGHT)

        self.assertEqual(SLEEP_FACTION, view.faction)
        self.assertEqual(NIGHT, view.rolled_at)

    def test_candidate_pool_and_window_check(self) -> None:
        service, _ = _service([0.1])
        self.assertTrue(service.in_sleep_window())
        self.assertEqual([SLEEP_FACTION], service.candidate_pool())
        self.assertFalse(service.in_sleep_window(NOON))
        self.assertEqual(list(FACTIONS), service.candidate_pool(NOON))

    def test_empty_base_outside_window_yields_no_faction(self) -> None:
        service, events = _service([0.4], now=NOON, base_factions=())

        view = service.roll()

        self.assertIsNone(view.faction)
        self.assertEqual([], view.pool)
        self.assertIsNone(events[0].faction)

    def test_sleep_chance_zero_never_forces_sleep(self) -> None:
        service, _ = _service([0.0, 0.0], sleep_chance=0.0)
        view = service.roll()
        self.assertNotEqual(SLEEP_FACTION, view.faction)
        self.assertFalse(view.sleep_forced)

    def test_works_without_event_bus(self) -> None:
        service = FactionRollService(lambda: 0.3, FixedClock(NIGHT), tz=timezone.utc)
        self.assertEqual(SLEEP_FACTION, service.roll().faction)


if __name__ == "__main__":
    unittest.main()
