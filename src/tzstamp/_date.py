################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Calendar dates without a time of day or an offset. Maps to SQL ``DATE``."""

import datetime as _dt
from dataclasses import dataclass

from pydantic_core import core_schema

from . import _calendar, _log, _pydantic
from .exceptions import InvalidArgumentError

logger = _log.make_logger(__name__)

MIN_YEAR = 0
MAX_YEAR = 9999


def _check_int(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}")


def _validate(year: int, month: int, day: int):
    _check_int("Year", year)
    _check_int("Month", month)
    _check_int("Day", day)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidArgumentError(f"Year must be 0-9999, got {year}")
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Month must be 1-12, got {month}")
    if not 1 <= day <= _calendar.days_in_month(year, month):
        raise InvalidArgumentError(f"Day {day} does not exist in {year}-{month}")


def _parse_segment(segment: str, text: str) -> int:
    if not (segment.isascii() and segment.isdigit()):
        logger.debug("Rejected date text %s", _log.loggable(text))
        raise InvalidArgumentError(f"Invalid date format: {text!r}")
    try:
        return int(segment)
    except ValueError as e:
        logger.debug("Rejected date text %s", _log.loggable(text))
        raise InvalidArgumentError(f"Invalid date format: {_log.loggable(text)}") from e


@dataclass(frozen=True, order=True)
class Date:
    """A square on the proleptic Gregorian calendar.

    A date is not an instant, so it carries no offset. To get "today" in a given
    zone, use ``Timestamp.now(zone).to_date()``.

    Example:
        >>> Date(2025, 12, 25).add_days(7)
        Date(year=2026, month=1, day=1)
        >>> str(Date(2024, 2, 29))
        '2024-02-29'
    """

    year: int
    month: int
    day: int

    def __post_init__(self):
        _validate(self.year, self.month, self.day)

    @classmethod
    def _unchecked(cls, year: int, month: int, day: int) -> "Date":
        # Used for values derived from a calendar decomposition.
        date = cls.__new__(cls)
        object.__setattr__(date, "year", year)
        object.__setattr__(date, "month", month)
        object.__setattr__(date, "day", day)
        return date

    @classmethod
    def today(cls) -> "Date":
        """Today's date according to the host's local wall clock."""
        now = _dt.datetime.now()
        return cls(now.year, now.month, now.day)

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parses ``yyyy-MM-dd``.

        Raises:
            InvalidArgumentError: if the text doesn't have exactly three numeric
                segments or names a date that doesn't exist.
        """
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Expected str, got {type(text).__name__}")
        parts = text.split("-")
        if len(parts) != 3:
            logger.debug("Rejected date text %s", _log.loggable(text))
            raise InvalidArgumentError(f"Invalid date format: {text!r}")
        year, month, day = (_parse_segment(part, text) for part in parts)
        return cls(year, month, day)

    @classmethod
    def from_json(cls, value: str) -> "Date":
        return cls.parse(value)

    @classmethod
    def from_datetime(cls, value: _dt.date) -> "Date":
        """Takes the calendar fields of a ``datetime.date`` or ``datetime.datetime``
        as they read, without any zone conversion.
        """
        return cls(value.year, value.month, value.day)

    # ----------------------------- static helpers ----------------------------

    @staticmethod
    def is_leap_year(year: int) -> bool:
        return _calendar.is_leap_year(year)

    @staticmethod
    def days_in_month(year: int, month: int) -> int:
        return _calendar.days_in_month(year, month)

    # -------------------------------- queries --------------------------------

    @property
    def weekday(self) -> int:
        """ISO day of the week: 1 = Monday .. 7 = Sunday."""
        return _calendar.weekday_from_days(
            _calendar.days_from_civil(self.year, self.month, self.day)
        )

    def add_days(self, days: int) -> "Date":
        """Returns the date ``days`` later (earlier when negative)."""
        epoch_days = _calendar.days_from_civil(self.year, self.month, self.day)
        return Date._unchecked(*_calendar.civil_from_days(epoch_days + days))

    def is_same_day(self, other: "Date") -> bool:
        return self == other

    def compare_to(self, other: "Date") -> int:
        mine = (self.year, self.month, self.day)
        theirs = (other.year, other.month, other.day)
        return (mine > theirs) - (mine < theirs)

    # ----------------------------- serialization -----------------------------

    def to_json(self) -> str:
        return str(self)

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return _pydantic.wire_schema(
            cls,
            from_wire=cls.parse,
            to_wire=str,
            wire_type=core_schema.str_schema(),
        )
