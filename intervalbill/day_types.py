import logging
import re
from datetime import date, datetime
from typing import FrozenSet, Iterable, Optional

import holidays

from .data_loader import read_text_table
from .errors import BillingError, DateParseError
from .models import DayIndex

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y%m%d"
_YYYYMMDD = re.compile(r"^\d{8}$")


def parse_date(date_str: str) -> date:
    """Parses a canonical YYYYMMDD date string."""
    value = date_str.strip()
    if not _YYYYMMDD.match(value):
        raise DateParseError(date_str)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise DateParseError(date_str) from e


class HolidaySet:
    """
    Membership-only set of public holidays.

    Holds explicit YYYYMMDD strings and, optionally, a country calendar from the
    `holidays` package. Both are consulted on every membership test.
    """

    def __init__(self, dates: Iterable[str] = (), calendar: Optional[holidays.HolidayBase] = None):
        self._dates: FrozenSet[str] = frozenset(d.strip() for d in dates if d.strip())
        self._calendar = calendar

    @classmethod
    def for_country(cls, country: str, subdiv: Optional[str] = None, dates: Iterable[str] = ()) -> "HolidaySet":
        try:
            calendar = holidays.country_holidays(country, subdiv=subdiv)
        except NotImplementedError as e:
            raise BillingError(f"no holiday calendar for {country!r} (subdivision {subdiv!r})") from e
        return cls(dates, calendar=calendar)

    @property
    def dates(self) -> FrozenSet[str]:
        return self._dates

    def __contains__(self, date_str: object) -> bool:
        if not isinstance(date_str, str):
            return False
        value = date_str.strip()
        if value in self._dates:
            return True
        if self._calendar is None:
            return False
        try:
            day = parse_date(value)
        except DateParseError:
            return False
        return day in self._calendar

    def __len__(self) -> int:
        return len(self._dates)

    def __bool__(self) -> bool:
        return bool(self._dates) or self._calendar is not None


def load_public_holidays(path: str) -> HolidaySet:
    """Loads a single-column CSV of YYYYMMDD holiday dates (header row skipped)."""
    logger.info("load_public_holidays: loading CSV file %s", path)
    df = read_text_table(path, allow_empty=True)
    if len(df.columns) == 0:
        return HolidaySet()
    values = [v.strip() for v in df.iloc[:, 0].tolist()]
    logger.debug("load_public_holidays: records: %s", values)
    return HolidaySet(values)


def classify_day(date_str: str, holiday_set: HolidaySet) -> DayIndex:
    """
    Maps a YYYYMMDD date to the day index used by the tariff tables.

    Public holidays are priced as Sundays, so any date in the holiday set maps to
    DayIndex.SUNDAY_OR_HOLIDAY whatever its real weekday.
    """
    value = date_str.strip()
    if value in holiday_set:
        return DayIndex.SUNDAY_OR_HOLIDAY
    return DayIndex(parse_date(value).weekday())
