"""
titles – Registry of supported titles and their raw source collections.

A title is a paired release (two variant labels, or none for a single
release) plus the ordered list of raw collections its catalog is built
from.  Collection order matters: it decides which raw entry is seen
first when two of them merge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from encounter_catalog.config import BOTH, TRADE_LOCATION_ID, TRADE_LOCATION_NAME
from encounter_catalog.encounters import EncounterMethod
from encounter_catalog.errors import UnknownTitleError

# Shared locations of raid-style encounters
TERA_CAVERN_LOCATION = 30000
MAX_LAIR_LOCATION = 244


@dataclass(frozen=True)
class SourceSpec:
    """How to read one raw collection of a title."""
    name: str
    filename: str
    method: EncounterMethod
    version: str = BOTH
    label: str = ""                       # may use {stars}
    default_location_name: Optional[str] = None
    location_id: Optional[int] = None     # every entry shares this location
    gift_when_fixed_ball: bool = False
    always_gift: bool = False
    optional: bool = False


@dataclass(frozen=True)
class Title:
    key: str
    name: str
    variants: Tuple[str, ...] = ()
    sources: Tuple[SourceSpec, ...] = field(default_factory=tuple)

    @property
    def version_pairs(self) -> Tuple[Tuple[str, str], ...]:
        if len(self.variants) == 2:
            return (self.variants,)
        return ()


W = EncounterMethod

# ── Let's Go Pikachu / Eevee ────────────────────────────────────────────────

LGPE = Title(
    key="lgpe",
    name="Let's Go Pikachu/Eevee",
    variants=("Let's Go Pikachu", "Let's Go Eevee"),
    sources=(
        SourceSpec("Wild (Pikachu)", "slots_gp.json", W.WILD, "Let's Go Pikachu"),
        SourceSpec("Wild (Eevee)", "slots_ge.json", W.WILD, "Let's Go Eevee"),
        SourceSpec("Static", "static_gg.json", W.STATIC, BOTH),
        SourceSpec("Static (Pikachu)", "static_gp.json", W.STATIC, "Let's Go Pikachu"),
        SourceSpec("Static (Eevee)", "static_ge.json", W.STATIC, "Let's Go Eevee"),
    ),
)

# ── Sword / Shield ──────────────────────────────────────────────────────────

SWSH = Title(
    key="swsh",
    name="Sword/Shield",
    variants=("Sword", "Shield"),
    sources=(
        SourceSpec("Wild Symbol (Sword)", "slots_sw_symbol.json", W.WILD, "Sword",
                   label="Wild Symbol"),
        SourceSpec("Wild Hidden (Sword)", "slots_sw_hidden.json", W.WILD, "Sword",
                   label="Wild Hidden"),
        SourceSpec("Wild Symbol (Shield)", "slots_sh_symbol.json", W.WILD, "Shield",
                   label="Wild Symbol"),
        SourceSpec("Wild Hidden (Shield)", "slots_sh_hidden.json", W.WILD, "Shield",
                   label="Wild Hidden"),
        SourceSpec("Static", "static_swsh.json", W.STATIC, BOTH),
        SourceSpec("Static (Sword)", "static_sw.json", W.STATIC, "Sword"),
        SourceSpec("Static (Shield)", "static_sh.json", W.STATIC, "Shield"),
        SourceSpec("Max Lair", "max_lair.json", W.MAX_LAIR, BOTH,
                   location_id=MAX_LAIR_LOCATION, optional=True),
    ),
)

# ── Brilliant Diamond / Shining Pearl ───────────────────────────────────────

BDSP = Title(
    key="bdsp",
    name="Brilliant Diamond/Shining Pearl",
    variants=("Brilliant Diamond", "Shining Pearl"),
    sources=(
        SourceSpec("Wild (Brilliant Diamond)", "slots_bd.json", W.WILD, "Brilliant Diamond"),
        SourceSpec("Wild (Shining Pearl)", "slots_sp.json", W.WILD, "Shining Pearl"),
        SourceSpec("Static", "static_bdsp.json", W.STATIC, BOTH,
                   gift_when_fixed_ball=True),
        SourceSpec("Static (Brilliant Diamond)", "static_bd.json", W.STATIC,
                   "Brilliant Diamond", gift_when_fixed_ball=True),
        SourceSpec("Static (Shining Pearl)", "static_sp.json", W.STATIC,
                   "Shining Pearl", gift_when_fixed_ball=True),
    ),
)

# ── Legends: Arceus ─────────────────────────────────────────────────────────

LA = Title(
    key="la",
    name="Legends: Arceus",
    sources=(
        SourceSpec("Wild", "slots_la.json", W.WILD),
        SourceSpec("Static", "static_la.json", W.STATIC),
    ),
)

# ── Scarlet / Violet ────────────────────────────────────────────────────────

SV = Title(
    key="sv",
    name="Scarlet/Violet",
    variants=("Scarlet", "Violet"),
    sources=(
        SourceSpec("Wild", "slots_sv.json", W.WILD, BOTH),
        SourceSpec("7-Star Raid", "might.json", W.MIGHT_RAID, BOTH,
                   default_location_name="A Crystal Cavern",
                   location_id=TERA_CAVERN_LOCATION, optional=True),
        SourceSpec("Static", "static_sv.json", W.STATIC, BOTH),
        SourceSpec("Static (Scarlet)", "static_sl.json", W.STATIC, "Scarlet"),
        SourceSpec("Static (Violet)", "static_vl.json", W.STATIC, "Violet"),
        SourceSpec("Fixed", "fixed.json", W.FIXED, BOTH),
        SourceSpec("Tera Raid (Paldea)", "tera_paldea.json", W.TERA_RAID, BOTH,
                   label="{stars}★ Tera Raid Paldea",
                   default_location_name="Tera Raid Den",
                   location_id=TERA_CAVERN_LOCATION),
        SourceSpec("Tera Raid (Kitakami)", "tera_kitakami.json", W.TERA_RAID, BOTH,
                   label="{stars}★ Tera Raid Kitakami",
                   default_location_name="Tera Raid Den",
                   location_id=TERA_CAVERN_LOCATION, optional=True),
        SourceSpec("Tera Raid (Blueberry)", "tera_blueberry.json", W.TERA_RAID, BOTH,
                   label="{stars}★ Tera Raid Blueberry",
                   default_location_name="Tera Raid Den",
                   location_id=TERA_CAVERN_LOCATION, optional=True),
        SourceSpec("Distribution Raid", "dist.json", W.DISTRIBUTION_RAID, BOTH,
                   label="Distribution Raid {stars}★",
                   default_location_name="Distribution Raid Den",
                   location_id=TERA_CAVERN_LOCATION, optional=True),
        SourceSpec("Outbreak", "outbreak.json", W.OUTBREAK, BOTH, optional=True),
        SourceSpec("In-Game Trade", "trade.json", W.TRADE, BOTH,
                   default_location_name=TRADE_LOCATION_NAME,
                   location_id=TRADE_LOCATION_ID, always_gift=True, optional=True),
    ),
)


TITLES: Dict[str, Title] = {t.key: t for t in (LGPE, SWSH, BDSP, LA, SV)}


def get_title(key: str) -> Title:
    try:
        return TITLES[key.lower()]
    except KeyError:
        raise UnknownTitleError(
            f"Unknown title {key!r}; expected one of {', '.join(TITLES)}"
        ) from None
