from __future__ import annotations

from datetime import datetime

from market_watch.domain.models import Session
from market_watch.utils.dates import MINUTES_PER_DAY, minutes_since_utc_midnight, utc_now

# Ordered by boundary; display labels are UTC+8 wall-clock times.
SESSIONS: tuple[Session, ...] = (
    Session(name="European pre-market", time_str="15:30 (UTC+8)", minutes_since_utc_midnight=450),
    Session(name="US pre-market", time_str="21:00 (UTC+8)", minutes_since_utc_midnight=780),
    Session(name="Asian pre-market", time_str="07:30 (UTC+8)", minutes_since_utc_midnight=1410),
)


def session_for_minute(minute_of_day: int) -> Session:
    if not 0 <= minute_of_day < MINUTES_PER_DAY:
        raise ValueError(f"minute_of_day must be in [0, {MINUTES_PER_DAY}), got {minute_of_day}")
    for session in SESSIONS:
        if minute_of_day < session.minutes_since_utc_midnight:
            return session
    # Past the last boundary: the next update is tomorrow's first session.
    return SESSIONS[0]


def next_session(now: datetime | None = None) -> Session:
    return session_for_minute(minutes_since_utc_midnight(now or utc_now()))
