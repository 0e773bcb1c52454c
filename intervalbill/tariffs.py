import logging
import re
from typing import Iterable, List, Tuple

from .data_loader import parse_decimal, parse_integer, read_text_table
from .errors import FormatError, NoMatchingTariff, ParseError
from .models import TariffRule

logger = logging.getLogger(__name__)

TARIFF_COLUMNS = ["day_start", "day_end", "time_start", "time_end", "rate", "name"]

_HHMMSS = re.compile(r"^\s*(\d+):(\d+):(\d+)\s*$")


def minutes_since_midnight(hhmmss: str) -> int:
    """Converts a wall-clock "HH:MM:SS" string to minutes since midnight. Seconds are ignored."""
    match = _HHMMSS.match(hhmmss)
    if not match:
        raise FormatError(f"expected HH:MM:SS, got {hhmmss!r}")
    hours, minutes, _seconds = (int(g) for g in match.groups())
    return 60 * hours + minutes


class TariffTable:
    """
    Ordered list of time-of-use rules.

    Lookup scans the rules in declaration order and the first match wins, so a
    table can place overrides ahead of the defaults they shadow.
    """

    def __init__(self, rules: Iterable[TariffRule]):
        self._rules: Tuple[TariffRule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[TariffRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, day: int, minute: int) -> TariffRule:
        """Returns the first rule covering the day index and minute of day."""
        for rule in self._rules:
            if rule.matches(day, minute):
                return rule
        raise NoMatchingTariff(day, minute)

    def lookup(self, day: int, minute: int) -> float:
        """Returns the $/kWh rate for the given day index and minute of day."""
        return self.match(day, minute).rate


def _parse_time(value: str, source: str, row: int, column: str) -> int:
    try:
        return minutes_since_midnight(value)
    except FormatError as e:
        raise ParseError(str(e), source, row, column) from e


def parse_tariff_rows(rows: Iterable[List[str]], source: str = "") -> TariffTable:
    """Builds a TariffTable from rows of cell text in fixed column order."""
    rules = []
    for row_no, cells in enumerate(rows):
        cells = [c if isinstance(c, str) else "" for c in cells]
        if len(cells) < len(TARIFF_COLUMNS):
            raise ParseError(
                f"expected {len(TARIFF_COLUMNS)} columns, got {len(cells)}", source, row_no
            )
        logger.debug("load_tariff: record %d: %s", row_no, cells)
        rules.append(
            TariffRule(
                day_start=parse_integer(cells[0], source, row_no, TARIFF_COLUMNS[0]),
                day_end=parse_integer(cells[1], source, row_no, TARIFF_COLUMNS[1]),
                time_start=_parse_time(cells[2], source, row_no, TARIFF_COLUMNS[2]),
                time_end=_parse_time(cells[3], source, row_no, TARIFF_COLUMNS[3]),
                rate=parse_decimal(cells[4], source, row_no, TARIFF_COLUMNS[4]),
                name=cells[5].strip(),
            )
        )
    return TariffTable(rules)


def load_tariff(path: str) -> TariffTable:
    """Loads a tariff table from CSV; the header row is skipped."""
    logger.info("load_tariff: loading CSV file %s", path)
    df = read_text_table(path)
    if len(df.columns) < len(TARIFF_COLUMNS):
        raise ParseError(
            f"expected {len(TARIFF_COLUMNS)} columns, got {len(df.columns)}", str(path)
        )
    table = parse_tariff_rows(df.itertuples(index=False, name=None), source=str(path))
    logger.info("load_tariff: %d rules from %s", len(table), path)
    return table


def load_supply_charge(path: str) -> float:
    """Returns the daily supply charge ($/day) from the first data row."""
    logger.info("load_supply_charge: loading CSV file %s", path)
    df = read_text_table(path)
    if df.empty or len(df.columns) == 0:
        raise ParseError("missing data line 1", str(path))
    value = df.iloc[0, 0]
    logger.debug("load_supply_charge: record: %s", value)
    return parse_decimal(value, str(path), 0, df.columns[0])
