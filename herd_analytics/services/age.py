from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

DAYS_PER_YEAR = 365.25
SECONDS_PER_YEAR = DAYS_PER_YEAR * 24 * 3600

def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

def parse_date(value) -> Optional[datetime]:
    """Coerce a date, datetime or ISO-8601 text into a naive datetime.

    Returns None for anything empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text:
        return None
    try:
        return _naive_utc(date_parser.isoparse(text))
    except (ValueError, OverflowError):
        return None

def age_in_years(birth_date, as_of=None) -> float:
    born = parse_date(birth_date)
    if born is None:
        return 0.0
    now = parse_date(as_of) or datetime.now()
    return max(0.0, (now - born).total_seconds() / SECONDS_PER_YEAR)
