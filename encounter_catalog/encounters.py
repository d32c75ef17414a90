"""
encounters – Raw encounter entries and the catalog's encounter records.

A ``RawEncounter`` is one title-specific definition (wild slot, static
placement, raid, outbreak, ...) tagged by its ``EncounterMethod``.  Every
method shares the same common attributes; title-specific extras ride
along in ``EncounterFlags``.  An ``EncounterRecord`` is one row of the
output catalog.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from encounter_catalog.config import BOTH, MAX_LEVEL, MIN_LEVEL
from encounter_catalog.gender import GenderRatio
from encounter_catalog.species_directory import SpeciesFormKey, dex_key


# ── Encounter methods ───────────────────────────────────────────────────────

class EncounterMethod(str, Enum):
    WILD = "wild"
    STATIC = "static"
    FIXED = "fixed"
    GIFT = "gift"
    TRADE = "trade"
    MIGHT_RAID = "might_raid"
    TERA_RAID = "tera_raid"
    DISTRIBUTION_RAID = "distribution_raid"
    OUTBREAK = "outbreak"
    MAX_LAIR = "max_lair"

    @property
    def label(self) -> str:
        return METHOD_LABELS[self]


METHOD_LABELS: Dict[EncounterMethod, str] = {
    EncounterMethod.WILD: "Wild",
    EncounterMethod.STATIC: "Static",
    EncounterMethod.FIXED: "Fixed",
    EncounterMethod.GIFT: "Gift",
    EncounterMethod.TRADE: "Trade",
    EncounterMethod.MIGHT_RAID: "7-Star Raid",
    EncounterMethod.TERA_RAID: "Tera Raid",
    EncounterMethod.DISTRIBUTION_RAID: "Distribution Raid",
    EncounterMethod.OUTBREAK: "Outbreak",
    EncounterMethod.MAX_LAIR: "Max Lair",
}


# ── Title-specific flags ────────────────────────────────────────────────────

@dataclass(frozen=True)
class EncounterFlags:
    """Extras only some titles have.  The first three are part of the merge key."""
    is_alpha: bool = False
    is_underground: bool = False
    can_gigantamax: bool = False
    size_type: Optional[str] = None
    size_value: int = 0
    flawless_iv_count: int = 0
    fateful: bool = False

    @property
    def structural(self) -> tuple:
        return (self.is_alpha, self.is_underground, self.can_gigantamax)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EncounterFlags":
        if not data:
            return cls()
        return cls(
            is_alpha=bool(data.get("is_alpha", False)),
            is_underground=bool(data.get("is_underground", False)),
            can_gigantamax=bool(data.get("can_gigantamax", False)),
            size_type=data.get("size_type"),
            size_value=int(data.get("size_value", 0)),
            flawless_iv_count=int(data.get("flawless_iv_count", 0)),
            fateful=bool(data.get("fateful", False)),
        )


# ── Raw entries ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RawEncounter:
    """One raw encounter definition, read-only to the builder."""
    species: int
    form: int
    location_id: int
    level_min: int
    level_max: int
    method: EncounterMethod = EncounterMethod.WILD
    label: str = ""
    version: str = BOTH
    shiny_locked: bool = False
    is_gift: bool = False
    fixed_ball: Optional[str] = None
    location_name: Optional[str] = None
    flags: EncounterFlags = field(default_factory=EncounterFlags)

    def __post_init__(self) -> None:
        if not MIN_LEVEL <= self.level_min <= self.level_max <= MAX_LEVEL:
            raise ValueError(
                f"Bad level range {self.level_min}-{self.level_max} for "
                f"species {self.species} form {self.form}"
            )

    @property
    def key(self) -> SpeciesFormKey:
        return SpeciesFormKey(self.species, self.form)

    @property
    def encounter_type(self) -> str:
        return self.label or self.method.label

    @classmethod
    def from_dict(cls, data: dict, method: Optional[EncounterMethod] = None) -> "RawEncounter":
        """Build from a loader row; ``level`` is shorthand for a fixed level."""
        level = data.get("level")
        level_min = int(data.get("level_min", level if level is not None else MIN_LEVEL))
        level_max = int(data.get("level_max", level if level is not None else level_min))
        return cls(
            species=int(data["species"]),
            form=int(data.get("form", 0)),
            location_id=int(data.get("location_id", 0)),
            level_min=level_min,
            level_max=level_max,
            method=EncounterMethod(data["method"]) if "method" in data
            else (method or EncounterMethod.WILD),
            label=data.get("label", "") or "",
            version=data.get("version", BOTH) or BOTH,
            shiny_locked=bool(data.get("shiny_locked", False)),
            is_gift=bool(data.get("is_gift", False)),
            fixed_ball=data.get("fixed_ball"),
            location_name=data.get("location_name"),
            flags=EncounterFlags.from_dict(data.get("flags")),
        )


@dataclass
class EncounterSource:
    """A named, ordered collection of raw entries for one title."""
    name: str
    entries: Sequence[RawEncounter] = ()
    default_location_name: Optional[str] = None
    optional: bool = False

    def __len__(self) -> int:
        return len(self.entries)


# ── Catalog records ─────────────────────────────────────────────────────────

@dataclass
class EncounterRecord:
    """A single (creature, place, method) entry of the output catalog."""
    species_name: str
    species: int
    form: int
    location_name: str
    location_id: int
    min_level: int
    max_level: int
    encounter_type: str
    method: EncounterMethod
    shiny_locked: bool = False
    is_gift: bool = False
    fixed_ball: Optional[str] = None
    version: str = BOTH
    gender: GenderRatio = GenderRatio.UNKNOWN
    flags: EncounterFlags = field(default_factory=EncounterFlags)

    @property
    def key(self) -> SpeciesFormKey:
        return SpeciesFormKey(self.species, self.form)

    @property
    def dex_key(self) -> str:
        return dex_key(self.species, self.form)

    def evolved(self, key: SpeciesFormKey, species_name: str, level: int,
                gender: GenderRatio) -> "EncounterRecord":
        """Copy for an evolved form: same place and method, fixed level."""
        return replace(
            self,
            species_name=species_name,
            species=key.species,
            form=key.form,
            min_level=level,
            max_level=level,
            gender=gender,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        flags = data.pop("flags")
        data["method"] = self.method.value
        data["gender"] = self.gender.value
        data.update(flags)
        return data


Catalog = Dict[str, List[EncounterRecord]]

RECORD_FIELDS = list(EncounterRecord.__dataclass_fields__)[:-1] + list(
    EncounterFlags.__dataclass_fields__
)
