"""
merger – Deduplicate encounter records into the catalog.

Two records are "the same encounter" when they share species, form,
location, encounter type, gender ratio and structural flags.  Levels and
version availability are left out of that key because they are what a
merge widens.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from encounter_catalog.config import VERSION_PAIRS
from encounter_catalog.encounters import Catalog, EncounterRecord
from encounter_catalog.versions import combine_versions

logger = logging.getLogger(__name__)


def merge_key(record: EncounterRecord) -> tuple:
    return (
        record.species,
        record.form,
        record.location_id,
        record.encounter_type,
        record.gender,
    ) + record.flags.structural


class EncounterMerger:
    """Owns the catalog; every record goes through ``add``."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        version_pairs: Iterable[Tuple[str, str]] = VERSION_PAIRS,
    ) -> None:
        self.catalog: Catalog = catalog if catalog is not None else {}
        self.version_pairs = tuple(version_pairs)
        self.appended = 0
        self.merged = 0
        self._index: Dict[tuple, EncounterRecord] = {}
        for records in self.catalog.values():
            for record in records:
                self._index.setdefault(merge_key(record), record)

    def __len__(self) -> int:
        return sum(len(records) for records in self.catalog.values())

    def find(self, record: EncounterRecord) -> Optional[EncounterRecord]:
        return self._index.get(merge_key(record))

    def add(self, record: EncounterRecord) -> bool:
        """Merge into a matching record (True) or append as new (False)."""
        existing = self.find(record)
        if existing is not None:
            existing.min_level = min(existing.min_level, record.min_level)
            existing.max_level = max(existing.max_level, record.max_level)
            existing.version = combine_versions(
                existing.version, record.version, self.version_pairs)
            self.merged += 1
            logger.debug(
                "Updated existing encounter: %s (Dex: %s) at %s (ID: %d), "
                "Levels %d-%d, Type: %s, Version: %s, Gender: %s",
                existing.species_name, existing.dex_key, existing.location_name,
                existing.location_id, existing.min_level, existing.max_level,
                existing.encounter_type, existing.version, existing.gender.value,
            )
            return True

        self.catalog.setdefault(record.dex_key, []).append(record)
        self._index[merge_key(record)] = record
        self.appended += 1
        logger.debug(
            "Processed new encounter: %s (Dex: %s) at %s (ID: %d), "
            "Levels %d-%d, Type: %s, Version: %s, Gender: %s",
            record.species_name, record.dex_key, record.location_name,
            record.location_id, record.min_level, record.max_level,
            record.encounter_type, record.version, record.gender.value,
        )
        return False

    def add_all(self, records: Iterable[EncounterRecord]) -> int:
        """Add several records; returns how many were merged."""
        return sum(1 for record in records if self.add(record))

    def merge_catalog(self, other: Catalog) -> None:
        """Fold a separately built catalog into this one, record by record."""
        for records in other.values():
            for record in records:
                self.add(replace(record))


def catalog_size(catalog: Catalog) -> int:
    return sum(len(records) for records in catalog.values())


def flatten(catalog: Catalog) -> List[EncounterRecord]:
    return [record for records in catalog.values() for record in records]
