"""
species_directory – In-memory species/form table for one title.

Answers the questions the catalog builder asks about a creature:
does the species/form exist, is it obtainable in this title, what is its
gender ratio, and what is it called.  One instance is built per title
and passed into the builder; nothing here is module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional


# ── Keys ────────────────────────────────────────────────────────────────────

class SpeciesFormKey(NamedTuple):
    """Identity of one creature variant."""
    species: int
    form: int = 0

    @property
    def dex_key(self) -> str:
        return dex_key(self.species, self.form)

    def __str__(self) -> str:
        return self.dex_key


def dex_key(species: int, form: int = 0) -> str:
    """Catalog key: ``"25"`` for base forms, ``"25-1"`` for alternate forms."""
    if form > 0:
        return f"{species}-{form}"
    return str(species)


# ── Personal info ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PersonalInfo:
    """One row of a title's personal table."""
    species: int
    form: int = 0
    name: str = ""
    gender: int = 127                 # 0=all male, 254=all female, 255=genderless
    genderless: bool = False
    only_male: bool = False
    only_female: bool = False
    present_in_game: bool = True
    form_count: int = 1

    @property
    def key(self) -> SpeciesFormKey:
        return SpeciesFormKey(self.species, self.form)

    @classmethod
    def from_dict(cls, data: dict) -> "PersonalInfo":
        return cls(
            species=int(data["species"]),
            form=int(data.get("form", 0)),
            name=data.get("name", "") or "",
            gender=int(data.get("gender", 127)),
            genderless=bool(data.get("genderless", False)),
            only_male=bool(data.get("only_male", False)),
            only_female=bool(data.get("only_female", False)),
            present_in_game=bool(data.get("present_in_game", True)),
            form_count=int(data.get("form_count", 1)),
        )


# ── Directory ───────────────────────────────────────────────────────────────

class SpeciesDirectory:
    """Read-only lookup over a title's personal table."""

    def __init__(self, entries: Iterable[PersonalInfo] = ()) -> None:
        self._entries: Dict[SpeciesFormKey, PersonalInfo] = {}
        self._names: Dict[int, str] = {}
        for info in entries:
            self._entries[info.key] = info
            if info.name and info.species not in self._names:
                self._names[info.species] = info.name

    @classmethod
    def from_dicts(cls, rows: Iterable[dict]) -> "SpeciesDirectory":
        return cls(PersonalInfo.from_dict(row) for row in rows)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PersonalInfo]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, species: int, form: int = 0) -> Optional[PersonalInfo]:
        return self._entries.get(SpeciesFormKey(species, form))

    def exists(self, species: int, form: int = 0) -> bool:
        return SpeciesFormKey(species, form) in self._entries

    def is_present_in_game(self, species: int, form: int = 0) -> bool:
        info = self.get(species, form)
        return info is not None and info.present_in_game

    def gender_ratio_of(self, species: int, form: int = 0) -> Optional[PersonalInfo]:
        """Return the row the gender resolver reads, or None when absent."""
        return self.get(species, form)

    def display_name(self, species: int) -> str:
        """Species name, or an empty string when the table has none."""
        return self._names.get(species, "")

    def forms_of(self, species: int) -> List[PersonalInfo]:
        return sorted(
            (info for info in self._entries.values() if info.species == species),
            key=lambda info: info.form,
        )
