from datetime import datetime, timezone, timedelta

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Naive local wall-clock time. Appointment date/time strings are local."""
    return datetime.now()


def now_iso() -> str:
    """ISO-8601 UTC timestamp used for created_at/updated_at."""
    return now_utc().isoformat()


def today_str(offset_days: int = 0) -> str:
    return (now_local().date() + timedelta(days=offset_days)).strftime(DATE_FORMAT)


def iso_day(timestamp: str | None) -> str | None:
    """Truncate an ISO-8601 timestamp to its YYYY-MM-DD part."""
    if not timestamp:
        return None
    return timestamp.split("T")[0]


def parse_appointment_datetime(date_str: str, time_str: str) -> datetime:
    """Combine 'YYYY-MM-DD' and 'HH:MM' into a naive local datetime.

    Raises ValueError on malformed input.
    """
    return datetime.strptime(f"{date_str} {time_str}", f"{DATE_FORMAT} {TIME_FORMAT}")
