"""UTC clock helpers.

Timestamps are stored and compared in UTC. Some drivers (SQLite) hand back
naive datetimes; ``as_utc`` restores the zone on the way out.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime.

    Naive values are taken to be UTC already; aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
