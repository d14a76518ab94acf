from __future__ import annotations

import csv
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from currency_api.core.errors import RateTableError
from currency_api.services.clock import iso_timestamp
from currency_api.services.validation import parse_leading_float
from .catalog import RateCatalog, RateEntry

"""Build step: Treasury reporting-rates CSV -> JSON rate table.

Only rows whose record date equals the pinned snapshot date are kept. The
first row seen for a currency wins and the anchor currency is always present
at rate 1.0. The JSON written here is what load_rate_catalog reads at startup.
"""

logger = logging.getLogger("currency_api.rates.build")

RECORD_DATE = "Record Date"
CURRENCY_NAME = "Country - Currency Description"
EXCHANGE_RATE = "Exchange Rate"
EFFECTIVE_DATE = "Effective Date"
REQUIRED_COLUMNS = (RECORD_DATE, CURRENCY_NAME, EXCHANGE_RATE, EFFECTIVE_DATE)


@dataclass
class CsvReadResult:
    records: List[RateEntry] = field(default_factory=list)
    rows_read: int = 0
    skipped: int = 0


def read_treasury_csv(path: Path, snapshot_date: str) -> CsvReadResult:
    result = CsvReadResult()
    try:
        handle = open(path, newline="", encoding="utf-8-sig")
    except OSError as e:
        raise RateTableError(f"cannot open rate CSV {path}: {e}") from e

    with handle:
        reader = csv.DictReader(handle, skipinitialspace=True)
        header = [h.strip() for h in (reader.fieldnames or [])]
        missing = [c for c in REQUIRED_COLUMNS if c not in header]
        if missing:
            raise RateTableError(f"CSV header is missing required columns: {', '.join(missing)}")
        reader.fieldnames = header

        for row in reader:
            if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                continue
            result.rows_read += 1
            record_date = (row.get(RECORD_DATE) or "").strip()
            name = (row.get(CURRENCY_NAME) or "").strip()
            if record_date != snapshot_date or not name:
                result.skipped += 1
                continue

            raw_rate = (row.get(EXCHANGE_RATE) or "").strip()
            rate = parse_leading_float(raw_rate)
            if not math.isfinite(rate) or rate <= 0:
                logger.warning("skipping %s: invalid exchange rate %r", name, raw_rate)
                result.skipped += 1
                continue

            result.records.append(
                RateEntry(name, rate, (row.get(EFFECTIVE_DATE) or "").strip())
            )
    return result


def build_rate_table(
    records: List[RateEntry], anchor: str, record_date: str, source: str
) -> Dict[str, Any]:
    catalog = RateCatalog.from_records(records, anchor=anchor, anchor_effective_date=record_date)
    # Preserve source order; the anchor is appended when the CSV lacks it.
    currencies = [catalog.entries[name].to_dict() for name in catalog]
    return {
        "generated_at": iso_timestamp(),
        "source": source,
        "record_date": record_date,
        "count": len(currencies),
        "currencies": currencies,
    }


def write_rate_table(table: Dict[str, Any], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(table, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("wrote %d currencies to %s", table["count"], path)


def convert_csv_to_table(
    csv_path: Path, output_path: Path, snapshot_date: str, anchor: str
) -> Dict[str, Any]:
    read = read_treasury_csv(csv_path, snapshot_date)
    logger.info(
        "read %d rows from %s (%d kept, %d skipped)",
        read.rows_read,
        csv_path,
        len(read.records),
        read.skipped,
    )
    table = build_rate_table(read.records, anchor, snapshot_date, Path(csv_path).name)
    write_rate_table(table, output_path)
    return table
