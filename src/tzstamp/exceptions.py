################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################

"""Custom exceptions for tzstamp."""

import typing as t


class InvalidArgumentError(ValueError):
    """Raised when a value cannot be constructed from the given input.

    Covers out-of-calendar dates, out-of-range hours and minutes, offsets outside
    ``-12:00..+14:00``, unparseable timestamp/date/offset text, and wrong-typed
    ``Time`` JSON input. No partial object is ever returned alongside this error.
    """

    def __init__(self, message: t.Optional[str] = None):
        super().__init__(message)
        self.message = message
