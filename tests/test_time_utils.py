from datetime import date, datetime, timezone, timedelta

from core.time_utils import day_of, previous_day, is_today, is_yesterday, today


def test_day_of_truncates_utc_timestamp():
    assert day_of(datetime(2025, 3, 1, 23, 59, tzinfo=timezone.utc)) == date(2025, 3, 1)


def test_day_of_reads_naive_datetime_as_utc():
    assert day_of(datetime(2025, 3, 1, 0, 30)) == date(2025, 3, 1)


def test_day_of_converts_other_zones_to_utc_day():
    # 01:00 in UTC+05:30 is still the previous day in UTC
    ist = timezone(timedelta(hours=5, minutes=30))
    assert day_of(datetime(2025, 3, 2, 1, 0, tzinfo=ist)) == date(2025, 3, 1)


def test_day_of_parses_iso_strings():
    assert day_of("2025-03-01") == date(2025, 3, 1)
    assert day_of("2025-03-01T18:00:00Z") == date(2025, 3, 1)


def test_day_of_passes_dates_and_none_through():
    assert day_of(date(2025, 3, 1)) == date(2025, 3, 1)
    assert day_of(None) is None


def test_previous_day_crosses_month_and_leap_year():
    assert previous_day(date(2024, 3, 1)) == date(2024, 2, 29)
    assert previous_day(date(2025, 1, 1)) == date(2024, 12, 31)


def test_is_today_and_is_yesterday():
    now = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
    assert today(now) == date(2025, 3, 10)
    assert is_today(date(2025, 3, 10), now)
    assert not is_today(date(2025, 3, 9), now)
    assert is_yesterday(date(2025, 3, 9), now)
    assert not is_yesterday(date(2025, 3, 8), now)
    assert not is_yesterday(None, now)
