from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from currency_api.core.errors import RateTableError

"""Static rate catalog.

Rates are expressed as units of a currency per 1 unit of the anchor currency
(e.g. Canada-Dollar 1.369 means 1 anchor = 1.369 CAD). The catalog is built
once at startup from the generated JSON table and shared read-only by every
request.
"""

logger = logging.getLogger("currency_api.rates.catalog")

ANCHOR_RATE = 1.0


@dataclass(frozen=True)
class RateEntry:
    currency_name: str
    rate: float
    effective_date: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "currency_name": self.currency_name,
            "rate": self.rate,
            "effective_date": self.effective_date,
        }


class RateCatalog:
    """Read-only lookup of currency name -> RateEntry."""

    def __init__(self, entries: Mapping[str, RateEntry], anchor: str):
        if anchor not in entries:
            raise ValueError(f"anchor currency '{anchor}' missing from catalog")
        self._entries = MappingProxyType(dict(entries))
        self._anchor = anchor

    @classmethod
    def from_records(
        cls,
        records: Iterable[RateEntry],
        anchor: str,
        anchor_effective_date: str = "",
    ) -> "RateCatalog":
        entries: Dict[str, RateEntry] = {}
        for record in records:
            if record.currency_name in entries:
                logger.debug("dropping duplicate rate for %s", record.currency_name)
                continue
            entries[record.currency_name] = record

        existing = entries.get(anchor)
        if existing is None:
            entries[anchor] = RateEntry(anchor, ANCHOR_RATE, anchor_effective_date)
        elif existing.rate != ANCHOR_RATE:
            logger.warning(
                "ignoring source rate %s for anchor %s; using %s",
                existing.rate,
                anchor,
                ANCHOR_RATE,
            )
            entries[anchor] = RateEntry(anchor, ANCHOR_RATE, existing.effective_date)
        return cls(entries, anchor)

    @property
    def anchor(self) -> str:
        return self._anchor

    @property
    def entries(self) -> Mapping[str, RateEntry]:
        return self._entries

    def has(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> Optional[RateEntry]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def _entry_from_json(raw: Mapping[str, object]) -> RateEntry:
    try:
        name = str(raw["currency_name"])
        rate = float(raw["rate"])  # type: ignore[arg-type]
    except (KeyError, TypeError, ValueError) as e:
        raise RateTableError(f"malformed rate record {raw!r}: {e}") from e
    if not name or not rate > 0:
        raise RateTableError(f"invalid rate record {raw!r}")
    return RateEntry(name, rate, str(raw.get("effective_date", "")))


def load_rate_catalog(path: Path, anchor: str) -> RateCatalog:
    """Load the generated JSON rate table at ``path`` into a RateCatalog."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise RateTableError(f"rate table not found: {path}") from e
    except (OSError, ValueError) as e:
        raise RateTableError(f"failed to read rate table {path}: {e}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("currencies"), list):
        raise RateTableError(f"rate table {path} has no 'currencies' list")

    records = [_entry_from_json(raw) for raw in payload["currencies"]]
    catalog = RateCatalog.from_records(
        records, anchor=anchor, anchor_effective_date=str(payload.get("record_date", ""))
    )
    logger.info("loaded %d currencies from %s", len(catalog), path)
    return catalog
