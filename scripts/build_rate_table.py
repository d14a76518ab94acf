"""Regenerate currency_api/data/exchange_rates.json from the Treasury CSV.

Usage:
    python scripts/build_rate_table.py [--csv data/RprtRateXchgCln_with_ISO.csv]
        [--output currency_api/data/exchange_rates.json] [--date 2025-12-31]
"""

import argparse
import logging
import sys
from pathlib import Path

from currency_api.core.config import DEFAULT_RATES_FILE, get_settings
from currency_api.core.errors import RateTableError
from currency_api.core.logging import init_logging
from currency_api.services.rates.csv_source import convert_csv_to_table

ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CSV = ROOT / "data" / "RprtRateXchgCln_with_ISO.csv"


def parse_args(argv=None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--csv", type=Path, default=DEFAULT_CSV)
    parser.add_argument("--output", type=Path, default=DEFAULT_RATES_FILE)
    parser.add_argument("--date", default=settings.snapshot_date, help="record date to keep")
    parser.add_argument("--anchor", default=settings.anchor_currency)
    return parser.parse_args(argv)


def run(argv=None) -> int:
    args = parse_args(argv)
    init_logging(json_output=False)
    logger = logging.getLogger("currency_api.scripts.build_rate_table")
    try:
        table = convert_csv_to_table(args.csv, args.output, args.date, args.anchor)
    except RateTableError:
        logger.exception("rate table build failed")
        return 1
    for entry in table["currencies"][:5]:
        logger.info("sample %s: %s", entry["currency_name"], entry["rate"])
    return 0


if __name__ == "__main__":
    sys.exit(run())
