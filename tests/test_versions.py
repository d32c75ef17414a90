"""Unit tests for encounter_catalog.versions – version availability widening."""
from encounter_catalog.config import BOTH, UNKNOWN_VERSION
from encounter_catalog.versions import combine_versions, is_pair, version_from_hosts

AB = (("A", "B"),)


class TestCombineVersions:
    def test_pair_widens_to_both(self):
        assert combine_versions("A", "B", AB) == BOTH
        assert combine_versions("B", "A", AB) == BOTH

    def test_both_absorbs_anything(self):
        assert combine_versions(BOTH, "A", AB) == BOTH
        assert combine_versions("A", BOTH, AB) == BOTH
        assert combine_versions(BOTH, BOTH, AB) == BOTH

    def test_same_label_is_idempotent(self):
        assert combine_versions("A", "A", AB) == "A"

    def test_unrelated_labels_keep_first(self):
        assert combine_versions("A", "Sword", AB) == "A"

    def test_default_pairs(self):
        assert combine_versions("Scarlet", "Violet") == BOTH
        assert combine_versions("Sword", "Shield") == BOTH
        assert combine_versions("Brilliant Diamond", "Shining Pearl") == BOTH
        assert combine_versions("Let's Go Eevee", "Let's Go Pikachu") == BOTH

    def test_cross_title_labels_do_not_widen(self):
        assert combine_versions("Scarlet", "Shield") == "Scarlet"


class TestIsPair:
    def test_same_label_is_not_pair(self):
        assert is_pair("A", "A", AB) is False

    def test_pair(self):
        assert is_pair("A", "B", AB) is True


class TestVersionFromHosts:
    def test_both_hosts(self):
        assert version_from_hosts(True, True, ("Scarlet", "Violet")) == BOTH

    def test_single_host(self):
        assert version_from_hosts(True, False, ("Scarlet", "Violet")) == "Scarlet"
        assert version_from_hosts(False, True, ("Scarlet", "Violet")) == "Violet"

    def test_no_host(self):
        assert version_from_hosts(False, False, ("Scarlet", "Violet")) == UNKNOWN_VERSION
