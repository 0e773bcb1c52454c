class BillingError(Exception):
    """
    Base class for every failure that invalidates a bill.

    `source`, `row` and `column` locate the bad input; callers higher up the
    stack fill in whatever the raising code did not know (usually the file).
    """

    def __init__(self, message: str, source: str = "", row=None, column=None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.row = row
        self.column = column

    def __str__(self) -> str:
        location = []
        if self.source:
            location.append(self.source)
        if self.row is not None:
            location.append(f"row {self.row}")
        if self.column is not None:
            location.append(f"column {self.column}")
        if not location:
            return self.message
        return f"{self.message} ({', '.join(location)})"


class FormatError(BillingError):
    """A time-of-day string is not in HH:MM:SS form."""


class ParseError(BillingError):
    """A field that should hold a number (or a time) could not be parsed."""


class ConfigError(BillingError):
    """config.ini is unreadable or holds an invalid value."""


class NoMatchingTariff(BillingError):
    def __init__(self, day: int, minute: int, source: str = "", row=None, column=None):
        super().__init__(
            f"no tariff for day of week {int(day)} and minute of day {minute}", source, row, column
        )
        self.day = day
        self.minute = minute


class DateParseError(BillingError):
    def __init__(self, date: str, source: str = "", row=None):
        super().__init__(f"cannot parse date {date!r}, expected YYYYMMDD", source, row)
        self.date = date


class ColumnMismatch(BillingError):
    def __init__(self, expected: int, actual: int, line_no: int, source: str = ""):
        super().__init__(
            f"{actual} data items on line {line_no} not equal to {expected} on the first line of data",
            source,
        )
        self.expected = expected
        self.actual = actual
        self.line_no = line_no


class EmptyRow(BillingError):
    """The first data row carries no interval readings."""
