################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Time of day (hour and minute). Maps to SQL ``TIME``.

There's deliberately no offset: a clock reading plus an offset but without a date
has ambiguous meaning (PostgreSQL discourages ``TIMETZ`` for the same reason).
"""

import datetime as _dt
import re
import typing as t
from dataclasses import dataclass

from pydantic_core import core_schema

from . import _log, _pydantic
from .exceptions import InvalidArgumentError

logger = _log.make_logger(__name__)

_match_compact = re.compile(r"\s*([+-]?)0*(\d{1,9})\s*", re.ASCII).fullmatch


@dataclass(frozen=True, order=True)
class Time:
    """
    Example:
        >>> str(Time(14, 30))
        '14:30'
        >>> Time(14, 30).to_json()
        1430
    """

    hour: int
    minute: int

    def __post_init__(self):
        for name, value in (("Hour", self.hour), ("Minute", self.minute)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidArgumentError(f"{name} must be an int, got {value!r}")
        if not 0 <= self.hour <= 23:
            raise InvalidArgumentError(f"Hour must be 0-23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise InvalidArgumentError(f"Minute must be 0-59, got {self.minute}")

    @classmethod
    def from_json(cls, value: t.Union[int, str]) -> "Time":
        """Decodes the compact ``hour * 100 + minute`` form.

        Accepts an ``int`` or a numeric ``str``; ``1430`` and ``"1430"`` both give
        14:30. Strings may carry any number of leading zeros followed by at most
        nine significant digits.

        Raises:
            InvalidArgumentError: for any other type (``float``, ``bool``, ``None``,
                sequences, mappings), negative numbers, or decoded fields out of
                range (``2400``, ``1260``).
        """
        if isinstance(value, str):
            match = _match_compact(value)
            if match is None:
                logger.debug("Rejected time value %s", _log.loggable(value))
                raise InvalidArgumentError(f"Invalid time value: {value!r}")
            compact = int(match.group(1) + match.group(2))
        elif isinstance(value, int) and not isinstance(value, bool):
            compact = value
        else:
            raise InvalidArgumentError(
                f"Expected int or str, got {type(value).__name__}"
            )

        if compact < 0:
            raise InvalidArgumentError(f"Time value must be non-negative: {value!r}")
        hour, minute = divmod(compact, 100)
        return cls(hour, minute)

    @classmethod
    def from_datetime(cls, value: t.Union[_dt.time, _dt.datetime]) -> "Time":
        """Takes the hour and minute of a ``datetime.time`` or ``datetime.datetime``
        as they read. Seconds are dropped.
        """
        return cls(value.hour, value.minute)

    def to_json(self) -> int:
        return self.hour * 100 + self.minute

    def compare_to(self, other: "Time") -> int:
        mine = (self.hour, self.minute)
        theirs = (other.hour, other.minute)
        return (mine > theirs) - (mine < theirs)

    def __str__(self):
        return f"{self.hour:02d}:{self.minute:02d}"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return _pydantic.wire_schema(
            cls,
            from_wire=cls.from_json,
            to_wire=lambda time: time.to_json(),
            wire_type=core_schema.any_schema(),
        )
