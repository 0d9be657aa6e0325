################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Integer arithmetic over the proleptic Gregorian calendar.

Days are counted from 1970-01-01. Every function works for any integer input, so
instants far outside the range of ``datetime.datetime`` still decompose.
"""

import typing as t

MICROS_PER_MILLISECOND = 1_000
MICROS_PER_SECOND = 1_000_000
MICROS_PER_MINUTE = 60 * MICROS_PER_SECOND
MICROS_PER_HOUR = 60 * MICROS_PER_MINUTE
MICROS_PER_DAY = 24 * MICROS_PER_HOUR

_DAYS_IN_MONTH = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# A 400-year era always has the same number of days.
_DAYS_PER_ERA = 146_097
# Days from 0000-03-01 to 1970-01-01.
_EPOCH_SHIFT = 719_468


class Fields(t.NamedTuple):
    """Calendar and clock readings of a single instant."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    microsecond: int
    """Microseconds within the second, 0..999999."""
    weekday: int
    """ISO weekday, 1 = Monday .. 7 = Sunday."""


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month]


def days_from_civil(year: int, month: int, day: int) -> int:
    """Number of days between 1970-01-01 and the given date."""
    # Years start in March so the leap day is the last day of the year.
    y = year - 1 if month <= 2 else year
    era = y // 400
    year_of_era = y - era * 400
    shifted_month = month - 3 if month > 2 else month + 9
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT


def civil_from_days(days: int) -> t.Tuple[int, int, int]:
    """Inverse of ``days_from_civil()``. Returns ``(year, month, day)``."""
    z = days + _EPOCH_SHIFT
    era = z // _DAYS_PER_ERA
    day_of_era = z - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era
        - day_of_era // 1460
        + day_of_era // 36524
        - day_of_era // (_DAYS_PER_ERA - 1)
    ) // 365
    day_of_year = day_of_era - (
        365 * year_of_era + year_of_era // 4 - year_of_era // 100
    )
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
    year = year_of_era + era * 400
    if month <= 2:
        year += 1
    return year, month, day


def weekday_from_days(days: int) -> int:
    # 1970-01-01 was a Thursday.
    return (days + 3) % 7 + 1


def decompose(micros: int) -> Fields:
    """Splits microseconds since the epoch into calendar and clock fields."""
    days, micros_of_day = divmod(micros, MICROS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, rem = divmod(micros_of_day, MICROS_PER_HOUR)
    minute, rem = divmod(rem, MICROS_PER_MINUTE)
    second, microsecond = divmod(rem, MICROS_PER_SECOND)
    return Fields(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        microsecond=microsecond,
        weekday=weekday_from_days(days),
    )


def compose(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    microsecond: int = 0,
) -> int:
    """Microseconds since the epoch for the given fields read as UTC."""
    return (
        days_from_civil(year, month, day) * MICROS_PER_DAY
        + hour * MICROS_PER_HOUR
        + minute * MICROS_PER_MINUTE
        + second * MICROS_PER_SECOND
        + microsecond
    )
