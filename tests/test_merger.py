"""Unit tests for encounter_catalog.merger – dedup and field widening."""
from dataclasses import replace

import pytest
from encounter_catalog.config import BOTH
from encounter_catalog.encounters import EncounterFlags, EncounterMethod, EncounterRecord
from encounter_catalog.gender import GenderRatio
from encounter_catalog.merger import EncounterMerger, catalog_size, flatten, merge_key

AB = (("A", "B"),)


def _record(**kwargs):
    base = dict(
        species_name="Fawnling", species=900, form=0,
        location_name="South Province", location_id=12,
        min_level=5, max_level=7, encounter_type="Wild",
        method=EncounterMethod.WILD, version="A", gender=GenderRatio.MIXED,
    )
    base.update(kwargs)
    return EncounterRecord(**base)


@pytest.fixture
def merger():
    return EncounterMerger(version_pairs=AB)


class TestAppend:
    def test_first_record_appended(self, merger):
        assert merger.add(_record()) is False
        assert list(merger.catalog) == ["900"]
        assert len(merger) == 1
        assert merger.appended == 1

    def test_form_key(self, merger):
        merger.add(_record(form=1))
        assert list(merger.catalog) == ["900-1"]

    def test_different_location_appends(self, merger):
        merger.add(_record())
        assert merger.add(_record(location_id=13)) is False
        assert len(merger.catalog["900"]) == 2

    def test_different_type_appends(self, merger):
        merger.add(_record())
        merger.add(_record(encounter_type="Static", method=EncounterMethod.STATIC))
        assert len(merger) == 2

    def test_structural_flag_appends(self, merger):
        merger.add(_record())
        merger.add(_record(flags=EncounterFlags(is_alpha=True)))
        assert len(merger) == 2

    def test_non_structural_flag_merges(self, merger):
        merger.add(_record())
        assert merger.add(_record(flags=EncounterFlags(size_type="VALUE", size_value=3))) is True
        assert merger.catalog["900"][0].flags.size_type is None

    def test_insertion_order_preserved(self, merger):
        for loc in (30, 10, 20):
            merger.add(_record(location_id=loc))
        assert [r.location_id for r in merger.catalog["900"]] == [30, 10, 20]


class TestMerge:
    def test_levels_widen(self, merger):
        merger.add(_record(min_level=5, max_level=7))
        assert merger.add(_record(min_level=3, max_level=10)) is True
        rec = merger.catalog["900"][0]
        assert (rec.min_level, rec.max_level) == (3, 10)
        assert merger.merged == 1

    def test_versions_combine(self, merger):
        merger.add(_record(version="A"))
        merger.add(_record(version="B"))
        assert merger.catalog["900"][0].version == BOTH

    def test_first_writer_wins_other_fields(self, merger):
        merger.add(_record(shiny_locked=False, location_name="First"))
        merger.add(_record(shiny_locked=True, location_name="Second"))
        rec = merger.catalog["900"][0]
        assert rec.shiny_locked is False
        assert rec.location_name == "First"

    def test_idempotent(self, merger):
        merger.add(_record())
        merger.add(_record())
        rec = merger.catalog["900"][0]
        assert len(merger) == 1
        assert (rec.min_level, rec.max_level, rec.version) == (5, 7, "A")

    def test_merge_key_excludes_levels_and_version(self):
        assert merge_key(_record()) == merge_key(_record(min_level=1, max_level=2, version="B"))


class TestMergeCatalog:
    def test_shards_fold_commutatively(self):
        a = EncounterMerger(version_pairs=AB)
        a.add(_record(version="A", min_level=5, max_level=7))
        b = EncounterMerger(version_pairs=AB)
        b.add(_record(version="B", min_level=2, max_level=4))
        b.add(_record(location_id=99, version="B"))

        ab = EncounterMerger(version_pairs=AB)
        ab.merge_catalog(a.catalog)
        ab.merge_catalog(b.catalog)
        ba = EncounterMerger(version_pairs=AB)
        ba.merge_catalog(b.catalog)
        ba.merge_catalog(a.catalog)

        def summary(m):
            return sorted((r.location_id, r.min_level, r.max_level, r.version)
                          for r in flatten(m.catalog))

        assert summary(ab) == summary(ba) == [(12, 2, 7, BOTH), (99, 5, 7, "B")]

    def test_source_catalog_not_mutated(self):
        a = EncounterMerger(version_pairs=AB)
        a.add(_record(version="A"))
        target = EncounterMerger(catalog={"900": [_record(version="B")]}, version_pairs=AB)
        target.merge_catalog(a.catalog)
        assert a.catalog["900"][0].version == "A"
        assert target.catalog["900"][0].version == BOTH
        assert catalog_size(target.catalog) == 1

    def test_existing_catalog_indexed(self):
        existing = {"900": [_record()]}
        m = EncounterMerger(catalog=existing, version_pairs=AB)
        assert m.add(replace(_record(), max_level=9)) is True
        assert existing["900"][0].max_level == 9
