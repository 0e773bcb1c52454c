import logging
from typing import List, Optional

import pandas as pd

from .models import BillTotal, PricingResult

logger = logging.getLogger(__name__)


def compute_bill(
    consumption_cost: float,
    feedin_cost: float,
    row_count: int,
    daily_supply_rate: float,
) -> BillTotal:
    """
    Combines priced energy with the daily supply charge.

    One supply charge is billed per consumption-table row (one row per day).
    Feed-in is a credit when its tariff is negative; pass 0.0 when absent.
    """
    supply_cost = row_count * daily_supply_rate
    return BillTotal(
        consumption_cost=consumption_cost,
        feedin_cost=feedin_cost,
        supply_cost=supply_cost,
        total=consumption_cost + feedin_cost + supply_cost,
    )


def format_bill(bill: BillTotal) -> List[str]:
    return [
        f"Consumption ${bill.consumption_cost}, Feedin ${bill.feedin_cost}, Supply ${bill.supply_cost}",
        f"Total ${bill.total}",
    ]


def daily_breakdown(
    consumption: PricingResult,
    feedin: Optional[PricingResult],
    daily_supply_rate: float,
) -> pd.DataFrame:
    """Per-day costs keyed by the consumption table's dates."""
    feedin_by_date = {}
    if feedin is not None:
        for date_str, cost in feedin.daily_costs:
            feedin_by_date[date_str] = feedin_by_date.get(date_str, 0.0) + cost

    df = pd.DataFrame(list(consumption.daily_costs), columns=["date", "consumption"])
    df["feedin"] = [feedin_by_date.get(d, 0.0) for d in df["date"]]
    df["supply"] = daily_supply_rate
    df["total"] = df["consumption"] + df["feedin"] + df["supply"]
    return df


def export_daily_costs(
    consumption: PricingResult,
    feedin: Optional[PricingResult],
    daily_supply_rate: float,
    file_path: str,
) -> pd.DataFrame:
    """Writes the per-day breakdown to CSV and returns it."""
    df = daily_breakdown(consumption, feedin, daily_supply_rate)
    df.to_csv(file_path, index=False)
    logger.info("export_daily_costs: wrote %d days to %s", len(df), file_path)
    return df
