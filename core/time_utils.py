from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from core.config import settings

UTC = ZoneInfo("UTC")
DAY_ZONE = ZoneInfo(settings.DAY_TIMEZONE)

DayLike = Union[date, datetime, str]

def get_current_time() -> datetime:
    """Returns the current time in the calendar-day zone."""
    return datetime.now(DAY_ZONE)

def to_day_zone(dt: datetime) -> datetime:
    """Converts a datetime object to the calendar-day zone."""
    if dt.tzinfo is None:
        # Assume naive datetimes from DB are UTC
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(DAY_ZONE)

def day_of(value: Optional[DayLike]) -> Optional[date]:
    """
    Truncates a timestamp to its calendar day.

    Accepts datetimes (naive ones are read as UTC), plain dates and ISO
    strings ("2025-01-10" or a full timestamp). None stays None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if len(value) == 10:
            value = date.fromisoformat(value)
        else:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        return to_day_zone(value).date()
    return value

def today(reference_now: Optional[datetime] = None) -> date:
    return day_of(reference_now or get_current_time())

def previous_day(day: date) -> date:
    return day - timedelta(days=1)

def is_today(day: Optional[DayLike], reference_now: Optional[datetime] = None) -> bool:
    return day is not None and day_of(day) == today(reference_now)

def is_yesterday(day: Optional[DayLike], reference_now: Optional[datetime] = None) -> bool:
    return day is not None and day_of(day) == previous_day(today(reference_now))
