"""
Shared fixtures for the test suite.

The "Fawnling" line used throughout:
    Fawnling (900) --16--> Stagmaw (901) --32--> Elkorn (902)
"""
import json
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from encounter_catalog.encounters import EncounterMethod, EncounterSource, RawEncounter
from encounter_catalog.evolution_graph import EvolutionEdge, EvolutionGraph
from encounter_catalog.species_directory import PersonalInfo, SpeciesDirectory, SpeciesFormKey
from encounter_catalog.titles import Title

FAWNLING = SpeciesFormKey(900, 0)
STAGMAW = SpeciesFormKey(901, 0)
ELKORN = SpeciesFormKey(902, 0)

PERSONAL_ROWS = [
    {"species": 900, "name": "Fawnling", "gender": 127},
    {"species": 901, "name": "Stagmaw", "gender": 127},
    {"species": 902, "name": "Elkorn", "gender": 127},
    {"species": 903, "name": "Voltcell", "gender": 255},
    {"species": 904, "name": "Hiddenmon", "present_in_game": False},
    {"species": 905, "name": "", "gender": 0},
]

EVOLUTION_ROWS = [
    {"species": 900, "target_species": 901, "level": 16},
    {"species": 901, "target_species": 902, "level": 32},
]


def raw(species=900, form=0, location_id=12, level_min=5, level_max=7, **kwargs):
    """Shorthand for a wild raw entry at location 12."""
    return RawEncounter(species=species, form=form, location_id=location_id,
                        level_min=level_min, level_max=level_max, **kwargs)


@pytest.fixture
def fawnling_directory():
    return SpeciesDirectory(PersonalInfo.from_dict(row) for row in PERSONAL_ROWS)


@pytest.fixture
def fawnling_graph():
    return EvolutionGraph.from_edges(EvolutionEdge.from_dict(row) for row in EVOLUTION_ROWS)


@pytest.fixture
def ab_title():
    """A two-variant title whose variants are labelled "A" and "B"."""
    return Title(key="test", name="Test Title", variants=("A", "B"))


@pytest.fixture
def wild_source():
    return EncounterSource("Wild", [raw(version="A")])


@pytest.fixture
def title_dir(tmp_path):
    """A minimal Scarlet/Violet-style data directory on disk."""
    d = tmp_path / "sv"
    d.mkdir()
    (d / "personal.json").write_text(json.dumps(PERSONAL_ROWS), encoding="utf-8")
    (d / "evolutions.json").write_text(json.dumps(EVOLUTION_ROWS), encoding="utf-8")
    (d / "locations.json").write_text(json.dumps({"12": "South Province"}), encoding="utf-8")
    (d / "slots_sv.json").write_text(json.dumps([
        {"species": 900, "location_id": 12, "level_min": 5, "level_max": 7},
    ]), encoding="utf-8")
    for name in ("static_sv.json", "static_vl.json", "fixed.json", "tera_paldea.json"):
        (d / name).write_text("[]", encoding="utf-8")
    (d / "static_sl.json").write_text(json.dumps([
        {"species": 903, "location_id": 40, "level": 30, "shiny_locked": True,
         "fixed_ball": "Poke Ball"},
    ]), encoding="utf-8")
    return d
