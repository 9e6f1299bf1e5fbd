"""
Calendar helpers. Days and week keys are plain ``datetime.date`` values so
that grouping never depends on a time-of-day or timezone offset.
"""
from datetime import date, datetime, timedelta


def local_today() -> date:
    return date.today()


def week_start(day: date) -> date:
    """Sunday that opens the Sunday-Saturday week containing ``day``."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def most_recent_sunday(today: date) -> date:
    """Anchor day for goal recalculation: ``today`` itself when it is a Sunday."""
    return week_start(today)


def parse_log_date(value):
    """
    Parse an ISO ``YYYY-MM-DD`` date or a full ISO timestamp (its date is used).
    Returns (date, None) or (None, error message).
    """
    if value is None or value == "":
        return local_today(), None
    if isinstance(value, date):
        return value, None
    if not isinstance(value, str):
        return None, "Invalid date format, expected YYYY-MM-DD"
    try:
        return date.fromisoformat(value), None
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date(), None
    except ValueError:
        return None, "Invalid date format, expected YYYY-MM-DD"
