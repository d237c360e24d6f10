from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from ..config import settings


def app_zone(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Zone used for calendar-day comparisons. Falls back to UTC for unknown names.
    """
    name = tz_name or settings.APP_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone '{}', falling back to UTC", name)
        return ZoneInfo("UTC")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def local_today(tz_name: Optional[str] = None) -> date:
    return now_utc().astimezone(app_zone(tz_name)).date()


def to_local_date(value: Optional[datetime], tz_name: Optional[str] = None) -> Optional[date]:
    """
    Calendar day of a timestamp in the app zone.
    Naive timestamps (as SQLite hands them back) are taken as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(app_zone(tz_name)).date()


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def long_date(day: date) -> str:
    """e.g. 'Sunday, October 18th, 2026'"""
    return f"{day.strftime('%A')}, {day.strftime('%B')} {_ordinal(day.day)}, {day.year}"
