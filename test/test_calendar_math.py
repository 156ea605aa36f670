import unittest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from passage.calendar_math import (
    Weekday,
    add_duration,
    day_of_week,
    days_between,
    is_leap_year,
    is_weekday,
    is_weekend,
    next_occurrence,
    parse_duration,
    previous_occurrence,
    subtract_duration,
)
from passage.errors import (
    InvalidDurationError,
    InvalidWeekdayError,
    InvalidYearError,
    TimeOutOfRangeError,
)
from passage.instant import ParseRequest, format_date_time, parse_time, to_utc


def _t(value: str, zone: str = "") -> datetime:
    return parse_time(ParseRequest(value, time_zone=zone))


class TestLeapYear(unittest.TestCase):
    def test_known_years(self):
        self.assertTrue(is_leap_year(2024))
        self.assertFalse(is_leap_year(1900))
        self.assertTrue(is_leap_year(2000))
        self.assertFalse(is_leap_year(2023))

    def test_non_positive_year(self):
        for year in (0, -4):
            with self.assertRaises(InvalidYearError):
                is_leap_year(year)


class TestWeekday(unittest.TestCase):
    def test_parse_is_case_insensitive_and_trimmed(self):
        self.assertIs(Weekday.parse("monday"), Weekday.MONDAY)
        self.assertIs(Weekday.parse("  SUNDAY "), Weekday.SUNDAY)
        self.assertIs(Weekday.parse("Friday"), Weekday.FRIDAY)

    def test_parse_invalid(self):
        with self.assertRaises(InvalidWeekdayError) as cm:
            Weekday.parse("Funday")
        self.assertEqual(str(cm.exception), "Invalid day of week format: Funday")

    def test_label(self):
        self.assertEqual(Weekday.WEDNESDAY.label, "Wednesday")

    def test_day_of_week_uses_local_calendar(self):
        """UTC では日曜でも東京では月曜"""
        t = _t("2023-10-01 20:00:00").astimezone(ZoneInfo("Asia/Tokyo"))
        self.assertEqual(day_of_week(_t("2023-10-01 20:00:00")), Weekday.SUNDAY)
        self.assertEqual(day_of_week(t), Weekday.MONDAY)

    def test_weekend_and_weekday(self):
        sunday = _t("2023-10-01")
        monday = _t("2023-10-02")
        saturday = _t("2023-10-07")
        self.assertTrue(is_weekend(sunday))
        self.assertTrue(is_weekend(saturday))
        self.assertFalse(is_weekend(monday))
        self.assertTrue(is_weekday(monday))
        self.assertFalse(is_weekday(sunday))
        self.assertFalse(is_weekday(saturday))


class TestOccurrence(unittest.TestCase):
    def test_next_occurrence(self):
        got = next_occurrence(_t("2023-10-01 08:15:00"), Weekday.MONDAY)
        self.assertEqual(format_date_time(got), "2023-10-02 08:15:00 +0000")

    def test_next_occurrence_same_weekday_is_a_week_later(self):
        got = next_occurrence(_t("2023-10-01"), Weekday.SUNDAY)
        self.assertEqual(format_date_time(got), "2023-10-08 00:00:00 +0000")

    def test_previous_occurrence(self):
        got = previous_occurrence(_t("2023-10-01"), Weekday.MONDAY)
        self.assertEqual(format_date_time(got), "2023-09-25 00:00:00 +0000")

    def test_occurrence_past_calendar_end(self):
        with self.assertRaises(TimeOutOfRangeError):
            next_occurrence(_t("9999-12-31"), Weekday.MONDAY)
        with self.assertRaises(TimeOutOfRangeError):
            previous_occurrence(_t("0001-01-01"), Weekday.SUNDAY)

    def test_previous_occurrence_same_weekday_is_a_week_earlier(self):
        got = previous_occurrence(_t("2023-10-01"), Weekday.SUNDAY)
        self.assertEqual(format_date_time(got), "2023-09-24 00:00:00 +0000")

    def test_next_occurrence_keeps_wall_clock_across_dst(self):
        """夏時間の切り替えをまたいでも時刻（ローカル）は変わらない"""
        got = next_occurrence(_t("2023-11-04 12:00:00", "America/New_York"), Weekday.MONDAY)
        self.assertEqual(format_date_time(got), "2023-11-06 12:00:00 -0500")


class TestDuration(unittest.TestCase):
    def test_parse_valid(self):
        cases = {
            "1h30m": timedelta(hours=1, minutes=30),
            "-1h": timedelta(hours=-1),
            "+5m": timedelta(minutes=5),
            "1.5h": timedelta(minutes=90),
            "300ms": timedelta(milliseconds=300),
            "2h45m30.5s": timedelta(hours=2, minutes=45, seconds=30.5),
            "1m1s": timedelta(seconds=61),
            "10us": timedelta(microseconds=10),
            "1500ns": timedelta(microseconds=1),
            "0": timedelta(0),
        }
        for raw, want in cases.items():
            with self.subTest(raw=raw):
                self.assertEqual(parse_duration(raw), want)

    def test_parse_invalid(self):
        for raw in ("", "abc", "1", "1d", "h", ".h", "-", "1h 30m", "1.2.3h"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidDurationError) as cm:
                    parse_duration(raw)
                self.assertEqual(cm.exception.raw, raw)

    def test_int64_nanosecond_bounds(self):
        self.assertEqual(
            parse_duration("2562047h47m16.854775807s"),
            timedelta(hours=2562047, minutes=47, seconds=16, microseconds=854775),
        )
        self.assertEqual(
            parse_duration("-2562047h47m16.854775808s"),
            -timedelta(hours=2562047, minutes=47, seconds=16, microseconds=854775),
        )
        for raw in ("2562047h47m16.854775808s", "3000000h", "100000000h", "-3000000h"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidDurationError):
                    parse_duration(raw)

    def test_add_out_of_range(self):
        with self.assertRaises(TimeOutOfRangeError):
            add_duration(_t("9999-12-31 23:00:00"), timedelta(hours=2))
        with self.assertRaises(TimeOutOfRangeError):
            subtract_duration(_t("0001-01-01"), timedelta(seconds=1))

    def test_round_trip_from_dst_gap_input(self):
        t = _t("2024-03-10 02:30:00", "America/New_York")
        d = timedelta(hours=1)
        back = add_duration(subtract_duration(t, d), d)
        self.assertEqual(back, t)
        self.assertEqual(format_date_time(back), format_date_time(t))

    def test_add_and_subtract(self):
        t = _t("2023-10-01 12:00:00")
        self.assertEqual(
            format_date_time(add_duration(t, parse_duration("1h30m"))),
            "2023-10-01 13:30:00 +0000",
        )
        self.assertEqual(
            format_date_time(subtract_duration(t, parse_duration("1h30m"))),
            "2023-10-01 10:30:00 +0000",
        )

    def test_add_is_absolute_time_and_keeps_zone(self):
        t = _t("2023-11-05 00:30:00", "America/New_York")
        got = add_duration(t, timedelta(hours=2))
        self.assertEqual(format_date_time(got), "2023-11-05 01:30:00 -0500")
        self.assertEqual(to_utc(got) - to_utc(t), timedelta(hours=2))

    def test_round_trip(self):
        for zone in ("", "Europe/London", "Australia/Lord_Howe"):
            t = _t("2024-03-31 12:45:00", zone)
            for d in (timedelta(hours=1), timedelta(days=-3, seconds=17), timedelta(0)):
                with self.subTest(zone=zone, d=d):
                    self.assertEqual(add_duration(subtract_duration(t, d), d), t)


class TestDaysBetween(unittest.TestCase):
    def test_basic(self):
        self.assertEqual(days_between(_t("2023-10-01"), _t("2023-10-02")), 1)
        self.assertEqual(days_between(_t("2023-10-02"), _t("2023-10-01")), -1)
        self.assertEqual(days_between(_t("2023-10-01"), _t("2023-10-01")), 0)

    def test_partial_days_are_truncated_toward_zero(self):
        self.assertEqual(days_between(_t("2023-10-01 00:00:00"), _t("2023-10-01 23:59:00")), 0)
        self.assertEqual(days_between(_t("2023-10-02 12:00:00"), _t("2023-10-01 00:00:00")), -1)

    def test_normalizes_offsets(self):
        a = _t("2023-10-02 08:00:00", "Asia/Tokyo")  # 2023-10-01 23:00 UTC
        b = datetime(2023, 10, 2, 23, 0, tzinfo=timezone.utc)
        self.assertEqual(days_between(a, b), 1)


if __name__ == "__main__":
    unittest.main()
