"""
title_data – Load a title's tables from a directory of JSON files.

Layout of a title directory::

    personal.json      list of personal-table rows (required)
    evolutions.json    list of evolution edges (required)
    locations.json     {"<location id>": "<name>"} (optional)
    <source>.json      one list of raw entries per registered collection

Raw collections marked optional in the title registry may be absent; a
missing optional file is logged and contributes nothing.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from encounter_catalog.config import EVOLUTIONS_FILE, LOCATIONS_FILE, PERSONAL_FILE
from encounter_catalog.encounters import EncounterSource, RawEncounter
from encounter_catalog.errors import TitleDataError
from encounter_catalog.evolution_graph import EvolutionEdge, EvolutionGraph
from encounter_catalog.species_directory import SpeciesDirectory
from encounter_catalog.titles import SourceSpec, Title
from encounter_catalog.versions import version_from_hosts

logger = logging.getLogger(__name__)


@dataclass
class TitleData:
    """Everything the catalog builder needs for one title."""
    title: Title
    directory: SpeciesDirectory
    graph: EvolutionGraph
    sources: List[EncounterSource] = field(default_factory=list)
    location_names: Dict[int, str] = field(default_factory=dict)


# ── JSON helpers ─────────────────────────────────────────────────────────────

def load_json(path: Path, optional: bool = False) -> Optional[Any]:
    """Read a JSON file; None for a missing optional file."""
    if not path.exists():
        if optional:
            logger.warning("Optional data file %s not found; treating as empty.", path)
            return None
        raise TitleDataError(f"Required data file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise TitleDataError(f"Malformed JSON in {path}: {exc}") from exc


def _require_list(data: Any, path: Path) -> list:
    if not isinstance(data, list):
        raise TitleDataError(f"Expected a list of rows in {path}")
    return data


# ── Row conversion ───────────────────────────────────────────────────────────

def entry_from_row(row: Dict[str, Any], spec: SourceSpec, title: Title) -> RawEncounter:
    """Apply a collection's defaults to one raw row."""
    data = dict(row)
    if spec.location_id is not None:
        data.setdefault("location_id", spec.location_id)
    if "version" not in data:
        hosts = data.get("hosts")
        if hosts is not None and len(title.variants) == 2:
            data["version"] = version_from_hosts(bool(hosts[0]), bool(hosts[1]),
                                                 title.variants)
        else:
            data["version"] = spec.version
    # Rows without a star count keep the method's own label.
    if "label" not in data and spec.label:
        if "{stars}" not in spec.label:
            data["label"] = spec.label
        elif data.get("stars"):
            data["label"] = spec.label.format(stars=int(data["stars"]))
    if spec.always_gift or (spec.gift_when_fixed_ball and data.get("fixed_ball")):
        data["is_gift"] = True
    return RawEncounter.from_dict(data, spec.method)


def load_source(title_dir: Path, spec: SourceSpec, title: Title) -> EncounterSource:
    path = title_dir / spec.filename
    rows = load_json(path, optional=spec.optional)
    if rows is None:
        return EncounterSource(spec.name, [], spec.default_location_name, optional=True)

    entries = []
    for index, row in enumerate(_require_list(rows, path)):
        try:
            entries.append(entry_from_row(row, spec, title))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise TitleDataError(f"Bad entry #{index} in {path}: {exc}") from exc
    logger.debug("Loaded %d entries for %s from %s", len(entries), spec.name, path)
    return EncounterSource(spec.name, entries, spec.default_location_name, spec.optional)


# ── Title ────────────────────────────────────────────────────────────────────

def load_directory(title_dir: Path) -> SpeciesDirectory:
    path = title_dir / PERSONAL_FILE
    try:
        return SpeciesDirectory.from_dicts(_require_list(load_json(path), path))
    except (KeyError, TypeError, ValueError) as exc:
        raise TitleDataError(f"Bad personal table {path}: {exc}") from exc


def load_graph(title_dir: Path) -> EvolutionGraph:
    path = title_dir / EVOLUTIONS_FILE
    try:
        rows = _require_list(load_json(path), path)
        return EvolutionGraph.from_edges(EvolutionEdge.from_dict(row) for row in rows)
    except (KeyError, TypeError, ValueError) as exc:
        raise TitleDataError(f"Bad evolution table {path}: {exc}") from exc


def load_location_names(title_dir: Path) -> Dict[int, str]:
    path = title_dir / LOCATIONS_FILE
    data = load_json(path, optional=True)
    if not data:
        return {}
    if not isinstance(data, dict):
        raise TitleDataError(f"Expected an id-to-name mapping in {path}")
    try:
        return {int(k): str(v) for k, v in data.items() if v}
    except ValueError as exc:
        raise TitleDataError(f"Bad location id in {path}: {exc}") from exc


def load_title_data(title: Title, title_dir: Path) -> TitleData:
    """Materialize a title's directory, graph and raw collections in memory."""
    title_dir = Path(title_dir)
    if not title_dir.is_dir():
        raise TitleDataError(f"Title data directory not found: {title_dir}")

    logger.info("Loading %s data from %s", title.name, title_dir)
    directory = load_directory(title_dir)
    graph = load_graph(title_dir)
    data = TitleData(
        title=title,
        directory=directory,
        graph=graph,
        sources=[load_source(title_dir, spec, title) for spec in title.sources],
        location_names=load_location_names(title_dir),
    )
    logger.info("Loaded %d species/forms, %d evolutions, %d raw entries.",
                len(directory), len(graph), sum(len(s) for s in data.sources))
    return data
