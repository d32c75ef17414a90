"""
catalog_builder – Build one title's encounter catalog.

For every raw collection of a title, in order, and every entry in it:
  1. Check the species/form is present in the title (skip otherwise).
  2. Emit the entry itself as a record.
  3. Emit one record per evolved form reachable from it.
  4. Route every record through the merger.

The species directory, evolution graph and raw collections are passed
in; the builder holds no global state and can be run per title or with
test doubles.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from encounter_catalog.config import UNKNOWN_LOCATION_FORMAT, VERSION_PAIRS
from encounter_catalog.encounters import (
    Catalog,
    EncounterRecord,
    EncounterSource,
    RawEncounter,
)
from encounter_catalog.evolution_graph import EvolutionGraph
from encounter_catalog.gender import resolve_gender_ratio
from encounter_catalog.merger import EncounterMerger
from encounter_catalog.propagation import EvolutionPropagator, PropagationStrategy
from encounter_catalog.species_directory import SpeciesDirectory, SpeciesFormKey
from encounter_catalog.titles import Title

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Counters for one build."""
    sources: int = 0
    entries: int = 0
    skipped: int = 0
    records: int = 0
    appended: int = 0
    merged: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class CatalogBuilder:
    """Feeds raw entries through propagation and merging into one catalog."""

    def __init__(
        self,
        title: Title,
        directory: SpeciesDirectory,
        graph: EvolutionGraph,
        sources: Sequence[EncounterSource],
        location_names: Optional[Mapping[int, str]] = None,
        strategy: PropagationStrategy = PropagationStrategy.MINIMAX,
    ) -> None:
        self.title = title
        self.directory = directory
        self.graph = graph
        self.sources = list(sources)
        self.location_names: Mapping[int, str] = location_names or {}
        self.propagator = EvolutionPropagator(graph, directory, strategy)
        self.report = BuildReport()
        self.merger = self._new_merger()

    def _new_merger(self) -> EncounterMerger:
        return EncounterMerger(version_pairs=self.title.version_pairs or VERSION_PAIRS)

    @property
    def catalog(self) -> Catalog:
        return self.merger.catalog

    # ── Build ───────────────────────────────────────────────────────────

    def build(self) -> Catalog:
        """Run every registered source and return the finished catalog."""
        self.report = BuildReport()
        self.merger = self._new_merger()
        logger.info("Building encounter catalog for %s from %d sources.",
                    self.title.name, len(self.sources))

        for source in self.sources:
            self.add_source(source)

        self.report.appended = self.merger.appended
        self.report.merged = self.merger.merged
        logger.info(
            "Catalog for %s: %d species/forms, %d records "
            "(%d entries, %d skipped, %d merged).",
            self.title.name, len(self.catalog), len(self.merger),
            self.report.entries, self.report.skipped, self.report.merged,
        )
        return self.catalog

    def add_source(self, source: EncounterSource) -> None:
        self.report.sources += 1
        if not source.entries:
            logger.info("Source %s has no entries.", source.name)
            return
        logger.debug("Processing %d entries from %s.", len(source), source.name)
        for entry in source.entries:
            self.add_entry(entry, source)

    def add_entry(self, entry: RawEncounter, source: Optional[EncounterSource] = None) -> int:
        """Emit one raw entry and its evolutions; returns the records routed."""
        self.report.entries += 1
        records = self.records_for(entry, source)
        if not records:
            self.report.skipped += 1
            return 0
        self.merger.add_all(records)
        self.report.records += len(records)
        return len(records)

    # ── Record creation ─────────────────────────────────────────────────

    def records_for(self, entry: RawEncounter,
                    source: Optional[EncounterSource] = None) -> List[EncounterRecord]:
        """Anchor record plus one record per reachable evolved form."""
        if not self.directory.is_present_in_game(entry.species, entry.form):
            logger.warning("Species %d form %d not present in %s. Skipping.",
                           entry.species, entry.form, self.title.name)
            return []

        species_name = self.directory.display_name(entry.species)
        if not species_name:
            logger.warning("Empty species name for index %d. Skipping.", entry.species)
            return []

        anchor = EncounterRecord(
            species_name=species_name,
            species=entry.species,
            form=entry.form,
            location_name=self.location_name_for(entry, source),
            location_id=entry.location_id,
            min_level=entry.level_min,
            max_level=entry.level_max,
            encounter_type=entry.encounter_type,
            method=entry.method,
            shiny_locked=entry.shiny_locked,
            is_gift=entry.is_gift,
            fixed_ball=entry.fixed_ball,
            version=entry.version,
            gender=self._gender(entry.key),
            flags=entry.flags,
        )
        records = [anchor]

        for derived in self.propagator.propagate(entry.key, entry.level_min):
            name = self.directory.display_name(derived.key.species)
            if not name:
                logger.warning("Empty species name for index %d. Skipping.",
                               derived.key.species)
                continue
            records.append(anchor.evolved(derived.key, name, derived.level,
                                          self._gender(derived.key)))
        return records

    def location_name_for(self, entry: RawEncounter,
                          source: Optional[EncounterSource] = None) -> str:
        if entry.location_name:
            return entry.location_name
        name = self.location_names.get(entry.location_id)
        if name:
            return name
        if source is not None and source.default_location_name:
            return source.default_location_name
        return UNKNOWN_LOCATION_FORMAT.format(location_id=entry.location_id)

    def _gender(self, key: SpeciesFormKey):
        return resolve_gender_ratio(self.directory.gender_ratio_of(key.species, key.form))


def build_catalog(
    title: Title,
    directory: SpeciesDirectory,
    graph: EvolutionGraph,
    sources: Iterable[EncounterSource],
    location_names: Optional[Mapping[int, str]] = None,
    strategy: PropagationStrategy = PropagationStrategy.MINIMAX,
) -> Catalog:
    return CatalogBuilder(title, directory, graph, list(sources),
                          location_names, strategy).build()
