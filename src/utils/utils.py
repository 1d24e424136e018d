from datetime import date, datetime
from zoneinfo import ZoneInfo


def parse_timestamp(date_str: str) -> datetime:
    # fromisoformat() only understands the trailing 'Z' from 3.11 on
    if date_str.endswith("Z"):
        date_str = date_str[:-1] + "+00:00"
    return datetime.fromisoformat(date_str)


def to_local_datetime(date_str: str, timezone: str) -> datetime:
    """
    Parse an ISO timestamp and express it as a naive wall-clock time in `timezone`.

    Naive input is assumed to already be in `timezone`.
    """
    value = parse_timestamp(date_str)
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def parse_day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def clean_message(message, max_length: int = 200):
    """Collapse whitespace and truncate long commit messages"""
    if not message:
        return "N/A"
    message = " ".join(message.split())
    if len(message) > max_length:
        return message[:max_length - 3] + "..."
    return message
