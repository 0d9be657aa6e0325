################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""Fixed UTC offsets.

A ``TimeZone`` is a name plus a number of minutes. Offsets are baked in when a zone
is constructed or parsed and are never re-resolved against a zone database, so a
stored ``+09:00`` stays ``+09:00`` even if a country later changes its rules.
"""

import re
import typing as t
from datetime import timedelta

from pydantic_core import core_schema

from . import _log, _pydantic
from .exceptions import InvalidArgumentError

logger = _log.make_logger(__name__)

MIN_OFFSET_MINUTES = -720
MAX_OFFSET_MINUTES = 840

_match_offset = re.compile(r"([+-])(\d{2})(?::?(\d{2}))?", re.ASCII).fullmatch


def _format_offset(total_minutes: int) -> str:
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _check_range(total_minutes: int, source) -> None:
    if not MIN_OFFSET_MINUTES <= total_minutes <= MAX_OFFSET_MINUTES:
        raise InvalidArgumentError(
            f"Offset out of range (-12:00 to +14:00): {source}"
        )


class TimeZone:
    """A fixed offset from UTC with a short display name.

    Equality and hashing only look at the offset. ``TimeZone.KST == TimeZone.JST``
    holds, while ``TimeZone.CST`` (US Central, -06:00) and ``TimeZone.CST_CHINA``
    (+08:00) share a name but differ.

    Example:
        >>> TimeZone.KST.iso_offset
        '+09:00'
        >>> TimeZone("NPT", 5, 45).total_minutes
        345
    """

    __slots__ = ("_name", "_total_minutes")

    UTC: t.ClassVar["TimeZone"]
    GMT: t.ClassVar["TimeZone"]
    KST: t.ClassVar["TimeZone"]
    JST: t.ClassVar["TimeZone"]
    CST_CHINA: t.ClassVar["TimeZone"]
    SGT: t.ClassVar["TimeZone"]
    AWST: t.ClassVar["TimeZone"]
    ICT: t.ClassVar["TimeZone"]
    IST: t.ClassVar["TimeZone"]
    AEST: t.ClassVar["TimeZone"]
    NZT: t.ClassVar["TimeZone"]
    CET: t.ClassVar["TimeZone"]
    EET: t.ClassVar["TimeZone"]
    EST: t.ClassVar["TimeZone"]
    CST: t.ClassVar["TimeZone"]
    MST: t.ClassVar["TimeZone"]
    PST: t.ClassVar["TimeZone"]
    AKST: t.ClassVar["TimeZone"]
    HST: t.ClassVar["TimeZone"]
    SST: t.ClassVar["TimeZone"]
    AST: t.ClassVar["TimeZone"]
    ART: t.ClassVar["TimeZone"]
    BRT: t.ClassVar["TimeZone"]
    BST: t.ClassVar["TimeZone"]
    CEST: t.ClassVar["TimeZone"]
    EEST: t.ClassVar["TimeZone"]
    EDT: t.ClassVar["TimeZone"]
    CDT: t.ClassVar["TimeZone"]
    MDT: t.ClassVar["TimeZone"]
    PDT: t.ClassVar["TimeZone"]
    AKDT: t.ClassVar["TimeZone"]
    NZDT: t.ClassVar["TimeZone"]
    AEDT: t.ClassVar["TimeZone"]

    VALUES: t.ClassVar[t.Tuple["TimeZone", ...]]
    """Every predefined zone, in lookup order. ``CST`` resolves to US Central."""

    def __init__(self, name: str, hours: int, minutes: int = 0):
        """
        Args:
            name: short identifier, e.g. ``"KST"``.
            hours: signed whole hours from UTC.
            minutes: minutes on top of ``hours``, always given as a positive number.
                The sign follows ``hours``: ``TimeZone("X", -3, 30)`` is ``-03:30``.

        Raises:
            InvalidArgumentError: if ``minutes`` is not 0..59 or the total offset is
                outside ``-12:00..+14:00``.
        """
        if not 0 <= minutes <= 59:
            raise InvalidArgumentError(f"Offset minutes must be 0-59, got {minutes}")
        total = hours * 60 + (-minutes if hours < 0 else minutes)
        _check_range(total, f"{hours}h{minutes}m")
        self._init(name, total)

    def _init(self, name: str, total_minutes: int):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_total_minutes", total_minutes)

    @classmethod
    def _from_total_minutes(cls, name: str, total_minutes: int) -> "TimeZone":
        zone = cls.__new__(cls)
        zone._init(name, total_minutes)
        return zone

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------- factories -------------------------------

    @classmethod
    def from_name(cls, name: str) -> "TimeZone":
        """Looks up a predefined zone by its exact, case-sensitive name.

        Raises:
            InvalidArgumentError: if no predefined zone carries ``name``.
        """
        for zone in cls.VALUES:
            if zone.name == name:
                return zone
        raise InvalidArgumentError(f"Unknown time zone: {name}")

    @classmethod
    def from_offset(cls, offset: str) -> "TimeZone":
        """Parses ``"Z"``, ``"+HH:MM"``, ``"+HHMM"`` or ``"+HH"`` (and ``-`` forms).

        Returns the first predefined zone with the same offset when there is one,
        so ``TimeZone.from_offset("+09:00") == TimeZone.KST``. Other offsets get an
        anonymous zone labelled ``"OFFSET ±HH:MM"``.

        Raises:
            InvalidArgumentError: on malformed text, minutes above 59, or an
                offset outside ``-12:00..+14:00``.
        """
        if offset == "Z":
            return cls.UTC

        match = _match_offset(offset) if isinstance(offset, str) else None
        if match is None:
            raise InvalidArgumentError(f"Invalid offset format: {offset!r}")

        sign = 1 if match.group(1) == "+" else -1
        hours = int(match.group(2))
        minutes = int(match.group(3) or "0")
        if minutes > 59:
            raise InvalidArgumentError(f"Invalid offset minutes: {offset}")

        target = sign * (hours * 60 + minutes)
        _check_range(target, offset)

        for zone in cls.VALUES:
            if zone.total_minutes == target:
                return zone

        anonymous = cls._from_total_minutes(f"OFFSET {_format_offset(target)}", target)
        logger.debug("Synthesized anonymous zone %s", anonymous.name)
        return anonymous

    # ------------------------------- properties ------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def total_minutes(self) -> int:
        """Signed offset from UTC in minutes."""
        return self._total_minutes

    @property
    def hours(self) -> int:
        """Whole hours of the offset, truncated toward zero."""
        return int(self._total_minutes / 60)

    @property
    def minutes(self) -> int:
        """Minutes beyond ``hours``. Always non-negative."""
        return abs(self._total_minutes) % 60

    @property
    def offset(self) -> timedelta:
        return timedelta(minutes=self._total_minutes)

    @property
    def iso_offset(self) -> str:
        """The offset as ``±HH:MM``. UTC renders as ``+00:00``."""
        return _format_offset(self._total_minutes)

    # --------------------------------- object --------------------------------

    def __eq__(self, other):
        if not isinstance(other, TimeZone):
            return NotImplemented
        return self._total_minutes == other._total_minutes

    def __hash__(self):
        return hash(self._total_minutes)

    def __str__(self):
        return self._name

    def __repr__(self):
        return f"TimeZone({self._name!r}, {self.iso_offset})"

    def __reduce__(self):
        return (TimeZone._from_total_minutes, (self._name, self._total_minutes))

    # ------------------------------- pydantic --------------------------------

    @classmethod
    def _from_wire(cls, value: str) -> "TimeZone":
        if value[:1] in ("Z", "+", "-"):
            return cls.from_offset(value)
        return cls.from_name(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return _pydantic.wire_schema(
            cls,
            from_wire=cls._from_wire,
            to_wire=lambda zone: zone.iso_offset,
            wire_type=core_schema.str_schema(),
        )


# Standard
TimeZone.UTC = TimeZone("UTC", 0)
TimeZone.GMT = TimeZone("GMT", 0)

# Asia / Oceania
TimeZone.KST = TimeZone("KST", 9)
TimeZone.JST = TimeZone("JST", 9)
TimeZone.CST_CHINA = TimeZone("CST", 8)
TimeZone.SGT = TimeZone("SGT", 8)
TimeZone.AWST = TimeZone("AWST", 8)
TimeZone.ICT = TimeZone("ICT", 7)
TimeZone.IST = TimeZone("IST", 5, 30)
TimeZone.AEST = TimeZone("AEST", 10)
TimeZone.NZT = TimeZone("NZT", 12)

# Europe
TimeZone.CET = TimeZone("CET", 1)
TimeZone.EET = TimeZone("EET", 2)

# Americas
TimeZone.EST = TimeZone("EST", -5)
TimeZone.CST = TimeZone("CST", -6)
TimeZone.MST = TimeZone("MST", -7)
TimeZone.PST = TimeZone("PST", -8)
TimeZone.AKST = TimeZone("AKST", -9)
TimeZone.HST = TimeZone("HST", -10)
TimeZone.SST = TimeZone("SST", -11)
TimeZone.AST = TimeZone("AST", -4)
TimeZone.ART = TimeZone("ART", -3)
TimeZone.BRT = TimeZone("BRT", -3)

# Daylight saving
TimeZone.BST = TimeZone("BST", 1)
TimeZone.CEST = TimeZone("CEST", 2)
TimeZone.EEST = TimeZone("EEST", 3)
TimeZone.EDT = TimeZone("EDT", -4)
TimeZone.CDT = TimeZone("CDT", -5)
TimeZone.MDT = TimeZone("MDT", -6)
TimeZone.PDT = TimeZone("PDT", -7)
TimeZone.AKDT = TimeZone("AKDT", -8)
TimeZone.NZDT = TimeZone("NZDT", 13)
TimeZone.AEDT = TimeZone("AEDT", 11)

# Names are not unique, so this stays a list searched in order. US Central "CST"
# comes before China "CST".
TimeZone.VALUES = (
    TimeZone.UTC,
    TimeZone.GMT,
    # Asia / Oceania
    TimeZone.KST,
    TimeZone.JST,
    TimeZone.SGT,
    TimeZone.AWST,
    TimeZone.ICT,
    TimeZone.IST,
    TimeZone.AEST,
    TimeZone.NZT,
    # Europe
    TimeZone.CET,
    TimeZone.EET,
    # Americas
    TimeZone.EST,
    TimeZone.CST,
    TimeZone.MST,
    TimeZone.PST,
    TimeZone.AKST,
    TimeZone.HST,
    TimeZone.SST,
    TimeZone.AST,
    TimeZone.ART,
    TimeZone.BRT,
    # China
    TimeZone.CST_CHINA,
    # Daylight saving
    TimeZone.BST,
    TimeZone.CEST,
    TimeZone.EEST,
    TimeZone.EDT,
    TimeZone.CDT,
    TimeZone.MDT,
    TimeZone.PDT,
    TimeZone.AKDT,
    TimeZone.NZDT,
    TimeZone.AEDT,
)
