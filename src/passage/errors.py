"""passage.errors

Error kinds raised by the time core and the tool modules.

The rendered text (``str(err)``) is part of the observable contract: the tool
dispatcher hands it back to the caller verbatim as an error result.
"""

from __future__ import annotations

from typing import Optional


class TimeToolError(Exception):
    """Base class for every value-level failure of a time tool."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NilOptionsError(TimeToolError):
    def __init__(self) -> None:
        super().__init__("input time options cannot be nil")


class EmptyInputError(TimeToolError):
    def __init__(self) -> None:
        super().__init__("input time cannot be empty")


class InvalidFormatError(TimeToolError):
    def __init__(self, input: str) -> None:
        self.input = input
        super().__init__(
            f'failed to parse time: "{input}". '
            "Format must be YYYY-MM-DD HH:MM:SS for date/time or YYYY-MM-DD for date only"
        )


class ZoneLoadError(TimeToolError):
    def __init__(self, zone: str, cause: Optional[BaseException] = None) -> None:
        self.zone = zone
        self.cause = cause
        if cause is None:
            reason = "unknown time zone"
        elif isinstance(cause, KeyError) and cause.args:
            # KeyError.__str__ は repr になり引用符が付くため args を使う
            reason = str(cause.args[0])
        else:
            reason = str(cause)
        super().__init__(f'failed to load time zone "{zone}": {reason}')


class InvalidYearError(TimeToolError):
    def __init__(self, year: object = None) -> None:
        self.year = year
        super().__init__("Invalid year provided")


class InvalidDurationError(TimeToolError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid duration format: {raw}")


class InvalidWeekdayError(TimeToolError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid day of week format: {raw}")


class FutureTimeError(TimeToolError):
    def __init__(self) -> None:
        super().__init__("The specified time is in the future")


class PastTimeError(TimeToolError):
    def __init__(self) -> None:
        super().__init__("The specified time is in the past")


class MissingFieldError(TimeToolError):
    """A required tool parameter was absent or empty."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"missing required field: {field}")


class WrappedInputError(TimeToolError):
    """Prefixes an inner error with which input it came from."""

    def __init__(self, label: str, cause: TimeToolError) -> None:
        self.label = label
        self.cause = cause
        super().__init__(f"{label}: {cause}")


class UnsupportedCountryError(TimeToolError):
    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__(f"Country code '{country}' not supported.")


class TimeOutOfRangeError(TimeToolError):
    """The result of a date/time step falls outside years 1-9999."""

    def __init__(self) -> None:
        super().__init__("resulting time is out of range")
