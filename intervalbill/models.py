from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple


class DayIndex(IntEnum):
    """Day-of-week slot used by tariff tables (Monday is 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    # Shared by true Sundays and public holidays
    SUNDAY_OR_HOLIDAY = 6


@dataclass(frozen=True)
class TariffRule:
    day_start: int
    day_end: int  # exclusive
    time_start: int  # minutes since midnight
    time_end: int  # exclusive
    rate: float  # $/kWh
    name: str

    def matches(self, day: int, minute: int) -> bool:
        return self.day_start <= day < self.day_end and self.time_start <= minute < self.time_end


@dataclass(frozen=True)
class EnergyRow:
    line_no: int  # 0-indexed data row, header excluded
    date: str
    readings: Tuple[str, ...]

    @property
    def column_count(self) -> int:
        """Width of the row as read from the file, date column included."""
        return len(self.readings) + 1


@dataclass(frozen=True)
class PricingResult:
    row_count: int
    column_count: int
    total_cost: float
    daily_costs: Tuple[Tuple[str, float], ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class BillTotal:
    consumption_cost: float
    feedin_cost: float
    supply_cost: float
    total: float
