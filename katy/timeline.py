from datetime import datetime, timedelta, timezone
from typing import Any

# Kubernetes serializes an unset metav1.Time as null; treat it as year one UTC.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def parse_time(ts: Any) -> datetime:
    """
    Parse an RFC3339 timestamp as served by the API server.

    Missing values parse to ZERO_TIME. Naive datetimes are assumed to be UTC.
    """
    if ts is None or ts == "":
        return ZERO_TIME

    if isinstance(ts, datetime):
        dt = ts
    else:
        dt = datetime.fromisoformat(str(ts).replace("Z", "+00:00"))

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def is_zero(dt: datetime) -> bool:
    return dt == ZERO_TIME


def format_time(dt: datetime) -> str:
    """
    Render a timestamp the way Go's time.Time.String() does,
    e.g. "2024-03-01 10:15:00 +0000 UTC".
    """
    text = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    if dt.microsecond:
        text += f".{dt.microsecond:06d}".rstrip("0")

    delta = dt.utcoffset() or timedelta(0)
    minutes = int(delta.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    offset = f"{sign}{hours:02d}{mins:02d}"

    zone = "UTC" if minutes == 0 else offset
    return f"{text} {offset} {zone}"


ZERO_TIME_STRING = format_time(ZERO_TIME)
