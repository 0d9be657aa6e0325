################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Instants with a presentation time zone, and the RFC 3339 wire format.

A ``Timestamp`` is a count of microseconds since 1970-01-01T00:00:00 UTC plus a
``TimeZone`` used only to render local fields. Two timestamps that name the same
instant are equal no matter which zone they are viewed in.
"""

import operator
import re
import time
from datetime import datetime, timedelta, timezone

from pydantic_core import core_schema

from . import _calendar, _log, _pydantic
from ._calendar import MICROS_PER_MILLISECOND, MICROS_PER_MINUTE
from ._date import Date
from ._time import Time
from ._timezone import TimeZone
from .exceptions import InvalidArgumentError

logger = _log.make_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)

# Longest accepted input after trimming. Anything longer can't be a timestamp, so
# it's rejected before the regex runs.
_MAX_TEXT_LENGTH = 64
# ASCII whitespace only. The \x1c-\x1f separators are not stripped.
_WHITESPACE = " \t\n\r\f\v"

# No nested or overlapping repetition, so matching is linear in input length.
_match_timestamp = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?"
    r"(Z|[+-]\d{2}(?::?\d{2})?)?)?",
    re.ASCII,
).fullmatch

_FORMAT_TOKENS = ("yyyy", "MM", "dd", "HH", "mm", "ss", "SSS")


def _format_year(year: int) -> str:
    if year < 0:
        return f"-{-year:04d}"
    return f"{year:04d}"


def _check_field(name: str, value: int, upper: int):
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be an int, got {value!r}")
    if not 0 <= value <= upper:
        raise InvalidArgumentError(f"{name} must be 0-{upper}, got {value}")


def _reject(text) -> InvalidArgumentError:
    logger.debug("Rejected timestamp text %s", _log.loggable(text))
    return InvalidArgumentError(f"Invalid ISO 8601 timestamp: {_log.loggable(text)}")


class Timestamp:
    """A point on the UTC timeline, viewed through a ``TimeZone``.

    The instant is stored as microseconds since the epoch, matching PostgreSQL
    ``timestamptz`` and MySQL ``DATETIME(6)``. Nanoseconds coming from Go, Java or
    Rust are truncated when parsed.

    Local fields (``year`` .. ``weekday``) are computed from the instant shifted by
    the zone's offset, and cached on first access.

    Example:
        >>> ts = Timestamp.of(2025, 1, 1, hour=12, zone=TimeZone.KST)
        >>> ts.hour
        12
        >>> ts.to_datetime().hour
        3
        >>> str(ts)
        '2025-01-01T12:00:00.000+09:00'
    """

    __slots__ = ("_micros", "_zone", "_fields")

    def __init__(self, microseconds_since_epoch: int, zone: TimeZone = TimeZone.UTC):
        """Prefer the ``of()``/``parse()``/``from_*()`` factories.

        Args:
            microseconds_since_epoch: the instant. Not range-checked.
            zone: presentation zone. Doesn't affect equality or ordering.
        """
        object.__setattr__(self, "_micros", operator.index(microseconds_since_epoch))
        object.__setattr__(self, "_zone", zone)
        object.__setattr__(self, "_fields", None)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (Timestamp, (self._micros, self._zone))

    # ------------------------------- factories -------------------------------

    @classmethod
    def now(cls, zone: TimeZone = TimeZone.UTC) -> "Timestamp":
        """The current instant. ``zone`` only sets how it is presented."""
        return cls(time.time_ns() // 1_000, zone)

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        microsecond: int = 0,
        zone: TimeZone = TimeZone.UTC,
    ) -> "Timestamp":
        """Builds a timestamp from clock readings local to ``zone``.

        ``Timestamp.of(2025, 1, 1, zone=TimeZone.KST)`` is midnight in Seoul, which
        is 2024-12-31T15:00 UTC.

        Raises:
            InvalidArgumentError: if the date doesn't exist or a clock field is out
                of range.
        """
        Date(year, month, day)
        _check_field("Hour", hour, 23)
        _check_field("Minute", minute, 59)
        _check_field("Second", second, 59)
        _check_field("Millisecond", millisecond, 999)
        _check_field("Microsecond", microsecond, 999)

        local = _calendar.compose(
            year,
            month,
            day,
            hour,
            minute,
            second,
            millisecond * MICROS_PER_MILLISECOND + microsecond,
        )
        return cls(local - zone.total_minutes * MICROS_PER_MINUTE, zone)

    @classmethod
    def parse(cls, text: str) -> "Timestamp":
        """Parses an RFC 3339 timestamp.

        Accepted on top of the canonical ``isoformat()`` output:

        - ``T`` or a single space between date and time,
        - 0 to 9 fractional digits (anything past 6 is truncated, not rounded),
        - offsets ``Z``, ``±HH:MM``, ``±HHMM`` and ``±HH``,
        - surrounding whitespace,
        - missing seconds, or a date with no time at all.

        Text without an offset is read as UTC and tagged ``TimeZone.UTC``. It is
        never interpreted in the host's local zone.

        Raises:
            InvalidArgumentError: for any other input, including out-of-range
                fields such as month 13 or hour 24.
        """
        if not isinstance(text, str):
            raise _reject(text)
        trimmed = text.strip(_WHITESPACE)
        if len(trimmed) > _MAX_TEXT_LENGTH:
            raise _reject(text)
        match = _match_timestamp(trimmed)
        if match is None:
            raise _reject(text)

        year, month, day, hour, minute, second, fraction, offset = match.groups()
        try:
            zone = TimeZone.from_offset(offset) if offset else TimeZone.UTC
            date = Date(int(year), int(month), int(day))
            hour_value, minute_value = int(hour or 0), int(minute or 0)
            second_value = int(second or 0)
            _check_field("Hour", hour_value, 23)
            _check_field("Minute", minute_value, 59)
            _check_field("Second", second_value, 59)
        except InvalidArgumentError as e:
            logger.debug("Rejected timestamp text %s: %s", _log.loggable(text), e)
            raise

        local = _calendar.compose(
            date.year,
            date.month,
            date.day,
            hour_value,
            minute_value,
            second_value,
            int((fraction or "")[:6].ljust(6, "0")),
        )
        return cls(local - zone.total_minutes * MICROS_PER_MINUTE, zone)

    @classmethod
    def from_json(cls, text: str) -> "Timestamp":
        return cls.parse(text)

    @classmethod
    def from_epoch_milliseconds(
        cls, milliseconds_since_epoch: int, zone: TimeZone = TimeZone.UTC
    ) -> "Timestamp":
        """No range validation; any integer is accepted."""
        return cls(
            operator.index(milliseconds_since_epoch) * MICROS_PER_MILLISECOND, zone
        )

    @classmethod
    def from_epoch_microseconds(
        cls, microseconds_since_epoch: int, zone: TimeZone = TimeZone.UTC
    ) -> "Timestamp":
        """No range validation; any integer is accepted."""
        return cls(microseconds_since_epoch, zone)

    @classmethod
    def from_datetime(
        cls, value: datetime, zone: TimeZone = TimeZone.UTC
    ) -> "Timestamp":
        """Converts a ``datetime.datetime``.

        The value is first converted to UTC (naive values are read in the host's
        local zone, like ``datetime.astimezone()`` does). Its own ``tzinfo`` is then
        dropped and ``zone`` is attached for presentation.
        """
        if not isinstance(value, datetime):
            raise InvalidArgumentError(
                f"Expected datetime.datetime, got {type(value).__name__}"
            )
        utc = value.astimezone(timezone.utc)
        return cls((utc - _EPOCH) // _ONE_MICROSECOND, zone)

    # ----------------------------- local fields ------------------------------

    @property
    def _local(self) -> _calendar.Fields:
        fields = self._fields
        if fields is None:
            # Idempotent, so a concurrent recompute yields the same tuple.
            fields = _calendar.decompose(
                self._micros + self._zone.total_minutes * MICROS_PER_MINUTE
            )
            object.__setattr__(self, "_fields", fields)
        return fields

    @property
    def zone(self) -> TimeZone:
        return self._zone

    @property
    def year(self) -> int:
        return self._local.year

    @property
    def month(self) -> int:
        return self._local.month

    @property
    def day(self) -> int:
        return self._local.day

    @property
    def hour(self) -> int:
        return self._local.hour

    @property
    def minute(self) -> int:
        return self._local.minute

    @property
    def second(self) -> int:
        return self._local.second

    @property
    def millisecond(self) -> int:
        """0-999."""
        return self._local.microsecond // MICROS_PER_MILLISECOND

    @property
    def microsecond(self) -> int:
        """Microseconds within the millisecond, 0-999."""
        return self._local.microsecond % MICROS_PER_MILLISECOND

    @property
    def weekday(self) -> int:
        """ISO day of the week in ``zone``: 1 = Monday .. 7 = Sunday."""
        return self._local.weekday

    # ------------------------------ UTC access -------------------------------

    @property
    def microseconds_since_epoch(self) -> int:
        return self._micros

    @property
    def milliseconds_since_epoch(self) -> int:
        """Rounded toward negative infinity."""
        return self._micros // MICROS_PER_MILLISECOND

    # ------------------------------ conversion -------------------------------

    def in_zone(self, zone: TimeZone) -> "Timestamp":
        """The same instant viewed in ``zone``."""
        return Timestamp(self._micros, zone)

    def to_datetime(self) -> datetime:
        """The instant as an aware ``datetime.datetime`` in UTC.

        Raises:
            InvalidArgumentError: if the instant is outside the range
                ``datetime.datetime`` can represent.
        """
        try:
            return _EPOCH + timedelta(microseconds=self._micros)
        except OverflowError as e:
            raise InvalidArgumentError(
                f"Instant {self._micros}us is out of datetime range"
            ) from e

    def to_date(self) -> Date:
        local = self._local
        return Date(local.year, local.month, local.day)

    def to_time(self) -> Time:
        local = self._local
        return Time(local.hour, local.minute)

    # ----------------------------- serialization -----------------------------

    def isoformat(self) -> str:
        """Canonical RFC 3339 form, ``YYYY-MM-DDTHH:mm:ss.SSS±HH:MM``.

        Always three fractional digits and a numeric offset; UTC renders as
        ``+00:00``, never ``Z``.
        """
        local = self._local
        return (
            f"{_format_year(local.year)}-{local.month:02d}-{local.day:02d}"
            f"T{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
            f".{self.millisecond:03d}{self._zone.iso_offset}"
        )

    def to_json(self) -> str:
        return self.isoformat()

    def format(self, pattern: str) -> str:
        """Replaces ``yyyy``, ``MM``, ``dd``, ``HH``, ``mm``, ``ss`` and ``SSS`` with
        local fields. Every other character is copied as-is.
        """
        local = self._local
        values = (
            _format_year(local.year),
            f"{local.month:02d}",
            f"{local.day:02d}",
            f"{local.hour:02d}",
            f"{local.minute:02d}",
            f"{local.second:02d}",
            f"{self.millisecond:03d}",
        )
        result = pattern
        for token, value in zip(_FORMAT_TOKENS, values):
            result = result.replace(token, value)
        return result

    def __str__(self):
        return self.isoformat()

    def __repr__(self):
        return f"Timestamp({self.isoformat()!r}, zone={self._zone!r})"

    # ------------------------------ arithmetic -------------------------------

    def __add__(self, other):
        if isinstance(other, timedelta):
            return Timestamp(self._micros + other // _ONE_MICROSECOND, self._zone)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, timedelta):
            return Timestamp(self._micros - other // _ONE_MICROSECOND, self._zone)
        if isinstance(other, Timestamp):
            return self.difference(other)
        return NotImplemented

    def difference(self, other: "Timestamp") -> timedelta:
        """Signed duration from ``other`` to ``self``. Zones play no part."""
        return timedelta(microseconds=self._micros - other._micros)

    # ------------------------------ comparison -------------------------------

    def compare_to(self, other: "Timestamp") -> int:
        return (self._micros > other._micros) - (self._micros < other._micros)

    def is_before(self, other: "Timestamp") -> bool:
        return self._micros < other._micros

    def is_after(self, other: "Timestamp") -> bool:
        return self._micros > other._micros

    def is_at_same_moment(self, other: "Timestamp") -> bool:
        return self._micros == other._micros

    def __eq__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._micros == other._micros

    def __hash__(self):
        return hash(self._micros)

    def __lt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._micros < other._micros

    def __le__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._micros <= other._micros

    def __gt__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._micros > other._micros

    def __ge__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._micros >= other._micros

    # ------------------------------- pydantic --------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return _pydantic.wire_schema(
            cls,
            from_wire=cls.parse,
            to_wire=lambda timestamp: timestamp.isoformat(),
            wire_type=core_schema.str_schema(),
        )
