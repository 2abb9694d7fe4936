"""Date helpers shared by the services and analysis functions.

Logs are timestamped in epoch milliseconds; goals and check-ins use ISO
dates (YYYY-MM-DD). Day arithmetic is done on UTC calendar dates.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

MS_PER_DAY = 24 * 60 * 60 * 1000


def today() -> date:
    return datetime.now(timezone.utc).date()



def parse_date(value: Any) -> Optional[date]:
    """Parse a date from a date, datetime or YYYY-MM-DD string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def epoch_ms_to_date(ms: int) -> date:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).date()


def date_to_epoch_ms(value: date) -> int:
    dt = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def now_epoch_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).days
