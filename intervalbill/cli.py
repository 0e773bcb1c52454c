import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .billing import compute_bill, export_daily_costs, format_bill
from .config import load_config
from .day_types import HolidaySet, load_public_holidays
from .errors import BillingError
from .pricing import price_energy_file
from .tariffs import load_supply_charge, load_tariff

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intervalbill",
        description="Electricity bill calculator for interval meter data and time-of-use tariffs.",
    )
    parser.add_argument("-t", "--consumption-tariff", required=True, help="Consumption tariff CSV file.")
    parser.add_argument("-c", "--consumption", required=True, help="Consumption data CSV file.")
    parser.add_argument("-d", "--daily", required=True, help="Daily supply charge CSV file.")
    parser.add_argument("-u", "--feedin-tariff", help="Feed-in tariff CSV file.")
    parser.add_argument("-f", "--feedin", help="Feed-in data CSV file.")
    parser.add_argument("-p", "--public-holidays", help="Public holidays CSV file (YYYYMMDD dates).")
    parser.add_argument(
        "--holiday-country",
        help="Also treat this country's public holidays as holidays (ISO code, e.g. AU).",
    )
    parser.add_argument("--holiday-subdiv", help="Subdivision for --holiday-country (e.g. NSW).")
    parser.add_argument("--export-daily", help="Path to a CSV file with the per-day cost breakdown.")
    parser.add_argument("--config", type=Path, help="Path to an alternative config.ini.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for debug).",
    )
    return parser


def _log_level(verbose: int, config_level: str = "WARNING") -> int:
    """-v flags win over the configured level, which config.py has already validated."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.getLevelName(config_level)


def _setup_logging(verbose: int):
    logging.basicConfig(
        level=_log_level(verbose),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_holidays(args, app_cfg) -> HolidaySet:
    holidays_path = args.public_holidays or app_cfg.holidays_file
    dates = load_public_holidays(str(holidays_path)).dates if holidays_path else frozenset()

    country = args.holiday_country or app_cfg.holiday_country
    if country:
        subdiv = args.holiday_subdiv or app_cfg.holiday_subdiv
        logger.info("Using %s public holidays (subdivision: %s)", country, subdiv or "none")
        return HolidaySet.for_country(country, subdiv=subdiv, dates=dates)
    return HolidaySet(dates)


def run(args, app_cfg) -> List[str]:
    """Prices consumption (and feed-in, when both of its files are given) and returns the bill lines."""
    daily_supply = load_supply_charge(args.daily)
    holidays = _load_holidays(args, app_cfg)

    consumption_tariff = load_tariff(args.consumption_tariff)
    consumption = price_energy_file(args.consumption, holidays, consumption_tariff)

    feedin = None
    if args.feedin_tariff and args.feedin:
        feedin_tariff = load_tariff(args.feedin_tariff)
        feedin = price_energy_file(args.feedin, holidays, feedin_tariff)
    elif args.feedin_tariff or args.feedin:
        logger.warning("Feed-in needs both --feedin-tariff and --feedin; feed-in is not priced.")

    bill = compute_bill(
        consumption.total_cost,
        feedin.total_cost if feedin is not None else 0.0,
        consumption.row_count,
        daily_supply,
    )

    if args.export_daily:
        export_daily_costs(consumption, feedin, daily_supply, args.export_daily)

    return format_bill(bill)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the intervalbill command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    try:
        app_cfg = load_config(args.config)
        logging.getLogger().setLevel(_log_level(args.verbose, app_cfg.log_level))
        lines = run(args, app_cfg)
    except (BillingError, OSError) as e:
        logger.debug("Billing failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
