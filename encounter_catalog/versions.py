"""
versions – Combine "which game variant" labels.

Each paired title ships as two variants (Sword/Shield, Scarlet/Violet, ...).
An encounter seen in both variants is labelled "Both".
"""

from __future__ import annotations

from typing import Iterable, Tuple

from encounter_catalog.config import BOTH, UNKNOWN_VERSION, VERSION_PAIRS


def is_pair(first: str, second: str,
            pairs: Iterable[Tuple[str, str]] = VERSION_PAIRS) -> bool:
    """True when the two labels are the two distinct variants of one title."""
    if first == second:
        return False
    return any({first, second} == set(pair) for pair in pairs)


def combine_versions(first: str, second: str,
                     pairs: Iterable[Tuple[str, str]] = VERSION_PAIRS) -> str:
    """Widen ``first`` by ``second``; anything that does not widen keeps ``first``."""
    if first == BOTH or second == BOTH:
        return BOTH
    if is_pair(first, second, pairs):
        return BOTH
    return first


def version_from_hosts(in_first: bool, in_second: bool, pair: Tuple[str, str]) -> str:
    """Label for an encounter given whether each variant can host it."""
    if in_first and in_second:
        return BOTH
    if in_first:
        return pair[0]
    if in_second:
        return pair[1]
    return UNKNOWN_VERSION
