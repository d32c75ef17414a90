"""
errors – Exception types raised by the catalog builder.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error the catalog builder raises on purpose."""


class TitleDataError(CatalogError):
    """Required title data is missing or malformed."""


class UnknownTitleError(CatalogError):
    """No title is registered under the requested key."""


class ConflictingEvolutionPathError(CatalogError):
    """Two evolution paths to one form imply different minimum levels."""

    def __init__(self, node, first_level: int, second_level: int) -> None:
        self.node = node
        self.first_level = first_level
        self.second_level = second_level
        super().__init__(
            f"Form {node} reached at level {first_level} and again at "
            f"level {second_level}"
        )
