"""Clock helpers shared by the session schedule, quotes and AI requests."""

from __future__ import annotations

from datetime import date, datetime, timezone

MINUTES_PER_DAY = 24 * 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def local_now() -> datetime:
    return datetime.now().astimezone()


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def minutes_since_utc_midnight(value: datetime) -> int:
    moment = as_utc(value)
    return moment.hour * 60 + moment.minute


def calendar_date(value: datetime | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def iso_day(value: datetime | date) -> str:
    return calendar_date(value).isoformat()


def day_of_year(value: datetime | date) -> int:
    """1-based ordinal day of the year (Jan 1 is 1)."""
    return calendar_date(value).timetuple().tm_yday
