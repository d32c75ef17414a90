"""Unit tests for encounter_catalog.export – JSON/CSV writers."""
import csv
import json

import pytest
from encounter_catalog.encounters import EncounterFlags, EncounterMethod, EncounterRecord
from encounter_catalog.export import (
    CSV_FIELDS, EXPORTERS, catalog_to_dict, export_csv, export_json,
)
from encounter_catalog.gender import GenderRatio


def _record(**kwargs):
    base = dict(
        species_name="Fawnling", species=900, form=0,
        location_name="South Province", location_id=12,
        min_level=5, max_level=7, encounter_type="Wild",
        method=EncounterMethod.WILD, version="Scarlet", gender=GenderRatio.MIXED,
    )
    base.update(kwargs)
    return EncounterRecord(**base)


@pytest.fixture
def catalog():
    return {
        "900": [_record()],
        "900-1": [_record(form=1, encounter_type="3★ Tera Raid Paldea",
                          method=EncounterMethod.TERA_RAID, fixed_ball="Poke Ball",
                          flags=EncounterFlags(size_type="XS", size_value=0))],
    }


class TestCatalogToDict:
    def test_keys_and_values(self, catalog):
        data = catalog_to_dict(catalog)
        assert list(data) == ["900", "900-1"]
        row = data["900"][0]
        assert row["method"] == "wild"
        assert row["gender"] == "Male, Female"
        assert row["is_alpha"] is False
        assert "flags" not in row


class TestJsonExport:
    def test_round_trip(self, tmp_path, catalog):
        path = export_json(catalog, tmp_path / "out.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["900-1"][0]["encounter_type"] == "3★ Tera Raid Paldea"
        assert data["900-1"][0]["size_type"] == "XS"
        assert data["900"][0]["min_level"] == 5

    def test_non_ascii_written_raw(self, tmp_path, catalog):
        path = export_json(catalog, tmp_path / "out.json")
        assert "★" in path.read_text(encoding="utf-8")

    def test_creates_parent_dirs(self, tmp_path, catalog):
        path = export_json(catalog, tmp_path / "nested" / "dir" / "out.json")
        assert path.exists()

    def test_empty_catalog(self, tmp_path):
        path = export_json({}, tmp_path / "out.json")
        assert json.loads(path.read_text(encoding="utf-8")) == {}


class TestCsvExport:
    def test_rows(self, tmp_path, catalog):
        path = export_csv(catalog, tmp_path / "out.csv")
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            rows = list(reader)
            assert reader.fieldnames == CSV_FIELDS
        assert [r["dex_key"] for r in rows] == ["900", "900-1"]
        assert rows[0]["fixed_ball"] == ""
        assert rows[0]["size_type"] == ""
        assert rows[1]["fixed_ball"] == "Poke Ball"
        assert rows[1]["location_name"] == "South Province"


class TestAtomicWrite:
    def test_failed_replace_keeps_previous_file(self, tmp_path, monkeypatch, catalog):
        target = tmp_path / "out.json"
        export_json({}, target)
        original = target.read_text(encoding="utf-8")

        def _boom(src, dst):
            raise OSError("simulated failure")

        monkeypatch.setattr("encounter_catalog.export.os.replace", _boom)

        with pytest.raises(OSError):
            export_json(catalog, target)

        assert target.read_text(encoding="utf-8") == original
        leftovers = [p for p in tmp_path.iterdir() if p.name != "out.json"]
        assert leftovers == []


class TestExporters:
    def test_registry(self):
        assert EXPORTERS == {"json": export_json, "csv": export_csv}
