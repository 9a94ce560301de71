import datetime
import math
from typing import Iterator

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0
MS_PER_DAY = 24 * 60 * 60 * 1000

_UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_MICROSECOND = datetime.timedelta(microseconds=1)


def to_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def to_julian_date(dt: datetime.datetime) -> float:
    """Julian Date (UT) of a datetime; naive values are taken as UTC."""
    dt = to_utc(dt)
    year = dt.year
    month = dt.month
    seconds = dt.second + dt.microsecond / 1e6
    day = dt.day + (dt.hour + (dt.minute + seconds / 60.0) / 60.0) / 24.0
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    jd = math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + b - 1524.5
    return jd


def centuries_since_j2000(jd: float) -> float:
    return (jd - J2000_JD) / DAYS_PER_CENTURY


def unix_microseconds(dt: datetime.datetime) -> int:
    return (to_utc(dt) - _UNIX_EPOCH) // _ONE_MICROSECOND


def unix_milliseconds(dt: datetime.datetime) -> float:
    return unix_microseconds(dt) / 1000.0


def milliseconds_between(start: datetime.datetime, end: datetime.datetime) -> float:
    return (to_utc(end) - to_utc(start)) / datetime.timedelta(milliseconds=1)


def iter_instants(
    start: datetime.datetime,
    step: datetime.timedelta,
    count: int,
) -> Iterator[datetime.datetime]:
    """Yield `count` instants from `start`, advancing by `step` each tick."""
    if count < 0:
        raise ValueError("count must be non-negative")
    if not step:
        raise ValueError("step must be non-zero")
    current = to_utc(start)
    for _ in range(count):
        yield current
        current = current + step
