import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from playguard.domain.services.local_time import (
    day_string,
    format_day,
    local_day,
    local_hour,
    to_epoch_ms,
    to_local_datetime,
)


class LocalTimeTests(unittest.TestCase):
    def test_day_string_matches_calendar_day_format(self) -> None:
        self.assertEqual("Wed Jan 03 2024", format_day(date(2024, 1, 3)))
        self.assertEqual("Sun Dec 31 2023", format_day(date(2023, 12, 31)))

    def test_day_string_from_epoch_ms_in_zone(self) -> None:
        instant = to_epoch_ms(datetime(2024, 1, 2, 23, 30, tzinfo=timezone.utc))
        self.assertEqual("Tue Jan 02 2024", day_string(instant, timezone.utc))
        self.assertEqual("Wed Jan 03 2024", day_string(instant, timezone(timedelta(hours=2))))

    def test_naive_datetime_is_read_as_is(self) -> None:
        value = datetime(2024, 1, 2, 7, 45)
        self.assertIs(value, to_local_datetime(value))
        self.assertEqual(7, local_hour(value))

    def test_epoch_round_trip_keeps_wall_clock(self) -> None:
        instant = to_epoch_ms(datetime(2024, 1, 2, 13, 0))
        local = to_local_datetime(instant)
        self.assertEqual((2024, 1, 2, 13, 0), (local.year, local.month, local.day, local.hour, local.minute))
        self.assertEqual(date(2024, 1, 2), local_day(instant))

    def test_to_epoch_ms_for_aware_datetime(self) -> None:
        self.assertEqual(0, to_epoch_ms(datetime(1970, 1, 1, tzinfo=timezone.utc)))
        self.assertEqual(1_500, to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1, 500_000, tzinfo=timezone.utc)))

    def test_aware_datetime_without_zone_lands_in_process_zone(self) -> None:
        value = datetime(2024, 1, 2, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
        self.assertEqual(value.astimezone(), to_local_datetime(value))
        self.assertEqual(to_local_datetime(to_epoch_ms(value)).hour, local_hour(value))


if __name__ == "__main__":
    unittest.main()
