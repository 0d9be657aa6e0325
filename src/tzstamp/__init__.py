################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""
Timezone-aware timestamps, dates and times for exchanging values across services
and databases as RFC 3339 text or epoch integers.
"""

from ._date import Date
from ._time import Time
from ._timestamp import Timestamp
from ._timezone import TimeZone
from .exceptions import InvalidArgumentError

__all__ = [
    "Date",
    "InvalidArgumentError",
    "Time",
    "TimeZone",
    "Timestamp",
]
