"""
Sponsor Repository - HK IPO Prospectus Scorer
hk_ipo_scorer/repositories/sponsor_repository.py

Data access layer for sponsor reference data:
  - SponsorReferenceTable: read-only name/alias -> SponsorRecord mapping,
    merged from the static fallback table and the crawler snapshot
    (snapshot wins on a name collision)
  - StockCodeSponsorMap: 5-digit stock code -> declared sponsor names,
    the best-effort backstop when a prospectus names no known sponsor

Missing or corrupt files never stop a scoring run: the tolerant loaders log
the problem and return empty data, and the sponsor rule then degrades to
"unidentified".
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from hk_ipo_scorer.config import Settings, get_settings
from hk_ipo_scorer.core.exceptions import ReferenceDataError
from hk_ipo_scorer.data.fallback_sponsors import fallback_records
from hk_ipo_scorer.models.sponsor import IPOSponsorMappingFile, SponsorRecord, SponsorSnapshot
from hk_ipo_scorer.pipelines.normalizer import format_stock_code, normalize_text

logger = logging.getLogger(__name__)


class SponsorReferenceTable(Mapping[str, SponsorRecord]):
    """Immutable name -> SponsorRecord lookup. Keys include every alias."""

    def __init__(self, records: Optional[Mapping[str, SponsorRecord]] = None):
        self._records = MappingProxyType(dict(records or {}))
        self._normalized: Dict[str, str] = {}
        for key in self._records:
            self._normalized.setdefault(normalize_text(key), key)

    @classmethod
    def from_records(cls, records: Iterable[SponsorRecord]) -> "SponsorReferenceTable":
        return cls({record.name: record for record in records})

    @classmethod
    def merged(
        cls,
        baseline: Mapping[str, SponsorRecord],
        dynamic: Mapping[str, SponsorRecord],
    ) -> "SponsorReferenceTable":
        """Baseline overridden by dynamic data on key collision."""
        combined = dict(baseline)
        combined.update(dynamic)
        return cls(combined)

    def __getitem__(self, name: str) -> SponsorRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, name: str) -> Optional[SponsorRecord]:
        """Exact key, then the key with the same normalized form."""
        record = self._records.get(name)
        if record is not None:
            return record
        key = self._normalized.get(normalize_text(name))
        return self._records[key] if key is not None else None

    def resolve(self, name: str) -> Optional[SponsorRecord]:
        """
        Resolve a sponsor name from an external source.

        Exact (or normalized) key first, then the first key, in table order,
        that contains the name or is contained by it.
        """
        record = self.lookup(name)
        if record is not None:
            return record

        target = normalize_text(name)
        if not target:
            return None
        for normalized_key, key in self._normalized.items():
            if not normalized_key:
                continue
            if target in normalized_key or normalized_key in target:
                return self._records[key]
        return None

    def unique_records(self) -> List[SponsorRecord]:
        """One record per (return, count) pair, in table order."""
        seen = set()
        unique = []
        for record in self._records.values():
            if record.stats_key in seen:
                continue
            seen.add(record.stats_key)
            unique.append(record)
        return unique

    def top_sponsors(self, limit: int = 20, min_count: int = 5) -> List[SponsorRecord]:
        """Most experienced sponsors, aliases collapsed."""
        eligible = [r for r in self.unique_records() if r.deal_count >= min_count]
        eligible.sort(key=lambda r: r.deal_count, reverse=True)
        return eligible[:limit]


class StockCodeSponsorMap(Mapping[str, Tuple[str, ...]]):
    """Immutable 5-digit stock code -> sponsor names."""

    def __init__(self, mapping: Optional[Mapping[str, Iterable[str]]] = None):
        self._mapping = MappingProxyType({
            format_stock_code(code): tuple(names)
            for code, names in (mapping or {}).items()
        })

    def __getitem__(self, code: str) -> Tuple[str, ...]:
        return self._mapping[format_stock_code(code)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def sponsors_for(self, code: str) -> Tuple[str, ...]:
        """Declared sponsors for the stock code, or () when unknown."""
        if not code:
            return ()
        return self._mapping.get(format_stock_code(code), ())


# ---------------------------------------------------------------------------
# File readers
# ---------------------------------------------------------------------------

def read_sponsor_snapshot(path: Path) -> SponsorSnapshot:
    """Parse sponsors.json. Raises ReferenceDataError on any failure."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ReferenceDataError(str(path), f"cannot read file: {e}")
    try:
        return SponsorSnapshot.model_validate_json(raw)
    except ValidationError as e:
        raise ReferenceDataError(str(path), f"{e.error_count()} validation error(s)")


def read_stock_code_mapping(path: Path) -> IPOSponsorMappingFile:
    """Parse ipo-sponsors.json. Raises ReferenceDataError on any failure."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ReferenceDataError(str(path), f"cannot read file: {e}")
    try:
        return IPOSponsorMappingFile.model_validate_json(raw)
    except ValidationError as e:
        raise ReferenceDataError(str(path), f"{e.error_count()} validation error(s)")


class SponsorRepository:
    """Loads sponsor reference data from the configured data directory."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def load_snapshot_records(self) -> Dict[str, SponsorRecord]:
        """Crawler snapshot as name -> record; {} when missing or invalid."""
        path = self.settings.sponsors_path
        if not path.exists():
            logger.info(f"Sponsor snapshot not found at {path}; using fallback table only")
            return {}
        try:
            snapshot = read_sponsor_snapshot(path)
        except ReferenceDataError as e:
            logger.error(f"Failed to load sponsor snapshot: {e}")
            return {}

        records = {entry.name: entry.to_record() for entry in snapshot.sponsors}
        logger.info(f"Loaded {len(records)} sponsors from {path} (updated {snapshot.updated_at})")
        return records

    def load_reference_table(self) -> SponsorReferenceTable:
        """Fallback baseline merged with the crawler snapshot."""
        table = SponsorReferenceTable.merged(fallback_records(), self.load_snapshot_records())
        logger.info(f"Sponsor reference table ready: {len(table)} names")
        return table

    def load_stock_code_map(self) -> StockCodeSponsorMap:
        """Stock-code mapping; empty when missing or invalid."""
        path = self.settings.ipo_sponsors_path
        if not path.exists():
            logger.info(f"Stock-code sponsor mapping not found at {path}")
            return StockCodeSponsorMap()
        try:
            mapping_file = read_stock_code_mapping(path)
        except ReferenceDataError as e:
            logger.error(f"Failed to load stock-code sponsor mapping: {e}")
            return StockCodeSponsorMap()

        mapping = StockCodeSponsorMap({
            code: entry.sponsors
            for code, entry in mapping_file.mapping.items()
            if entry.sponsors
        })
        logger.info(f"Loaded {len(mapping)} stock-code -> sponsor mappings from {path}")
        return mapping
