import logging
from pathlib import Path
from typing import Iterable, List, Protocol, Tuple, Union

from .data_loader import parse_decimal, read_energy_rows
from .day_types import HolidaySet, classify_day
from .errors import BillingError, ColumnMismatch, DateParseError, EmptyRow, NoMatchingTariff
from .models import EnergyRow, PricingResult

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


class TariffLookup(Protocol):
    """Anything that can price one interval: a TariffTable, or a test double."""

    def lookup(self, day: int, minute: int) -> float:
        ...


def interval_minutes(column_count: int) -> int:
    """
    Width of one reading in minutes for a row of `column_count` columns (date included).

    Uses integer division: 289 columns give 5-minute intervals, but a count that
    does not divide the day evenly loses the remainder at the end of the day.
    """
    return MINUTES_PER_DAY // (column_count - 1)


def price_energy(
    rows: Iterable[EnergyRow],
    holidays: HolidaySet,
    tariff: TariffLookup,
) -> PricingResult:
    """
    Applies the tariff to every interval reading of an energy table.

    The first row fixes the column count; any later row of a different width
    aborts the pass. Each row is priced into its own subtotal, which is then
    added to the running total. Nothing is returned unless every cell priced.
    """
    row_count = 0
    column_count = 0
    interval = 0
    total_cost = 0.0
    daily_costs: List[Tuple[str, float]] = []

    for row in rows:
        if row_count == 0:
            if not row.readings:
                raise EmptyRow("zero data items on first line of data", row=row.line_no)
            column_count = row.column_count
            interval = interval_minutes(column_count)
        elif row.column_count != column_count:
            raise ColumnMismatch(column_count, row.column_count, row.line_no)

        try:
            day = classify_day(row.date, holidays)
        except DateParseError as e:
            e.row = row.line_no
            raise
        logger.debug(
            "price_energy: line %d, date %s, day %d, %d columns, interval %d",
            row.line_no,
            row.date,
            day,
            column_count,
            interval,
        )

        row_cost = 0.0
        for i, text in enumerate(row.readings):
            minute = i * interval
            energy = parse_decimal(text, row=row.line_no, column=i + 1)
            try:
                rate = tariff.lookup(day, minute)
            except NoMatchingTariff as e:
                e.row, e.column = row.line_no, i + 1
                raise
            row_cost += rate * energy

        total_cost += row_cost
        daily_costs.append((row.date, row_cost))
        row_count += 1

    logger.info("price_energy: %d rows, %d columns, cost %s", row_count, column_count, total_cost)
    return PricingResult(
        row_count=row_count,
        column_count=column_count,
        total_cost=total_cost,
        daily_costs=tuple(daily_costs),
    )


def price_energy_file(file_path: Union[str, Path], holidays: HolidaySet, tariff: TariffLookup) -> PricingResult:
    """Streams an energy CSV from disk through price_energy."""
    try:
        return price_energy(read_energy_rows(file_path), holidays, tariff)
    except BillingError as e:
        if not e.source:
            e.source = str(file_path)
        raise
