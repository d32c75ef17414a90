"""
gender – Map a personal-table row to a gender-ratio category.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from encounter_catalog.species_directory import PersonalInfo

# Raw ratio bytes with a fixed meaning
RATIO_MALE_ONLY = 0
RATIO_FEMALE_ONLY = 254
RATIO_GENDERLESS = 255


class GenderRatio(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    GENDERLESS = "Genderless"
    MIXED = "Male, Female"
    UNKNOWN = "Unknown"


def resolve_gender_ratio(info: Optional[PersonalInfo]) -> GenderRatio:
    """Explicit flags win over the ratio byte; a missing row is Unknown."""
    if info is None:
        return GenderRatio.UNKNOWN

    if info.genderless:
        return GenderRatio.GENDERLESS
    if info.only_female:
        return GenderRatio.FEMALE
    if info.only_male:
        return GenderRatio.MALE

    return ratio_from_byte(info.gender)


def ratio_from_byte(ratio: int) -> GenderRatio:
    if ratio == RATIO_MALE_ONLY:
        return GenderRatio.MALE
    if ratio == RATIO_FEMALE_ONLY:
        return GenderRatio.FEMALE
    if ratio == RATIO_GENDERLESS:
        return GenderRatio.GENDERLESS
    return GenderRatio.MIXED
