from datetime import datetime, timedelta, timezone as dt_tz


def to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_tz.utc)
    return dt.astimezone(dt_tz.utc)


def to_utc_iso(dt):
    if dt is None:
        return None
    return to_utc(dt).isoformat().replace("+00:00", "Z")


def start_of_day(now: datetime) -> datetime:
    return to_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    # Weeks start on Sunday; weekday() is 0 for Monday
    day = start_of_day(now)
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)
