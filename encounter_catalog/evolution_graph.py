"""
evolution_graph – Per-title directed graph of level-gated evolutions.

Nodes are (species, form) keys; an edge says the source form may evolve
into the target form once it reaches the edge's threshold level.  The
graph may branch (one form, several evolutions) and chain (multi-stage
lines).  Nothing here assumes it is acyclic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from encounter_catalog.config import MIN_LEVEL
from encounter_catalog.species_directory import SpeciesFormKey


# ── Edges ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EvolutionEdge:
    """A single evolution path from one form to another."""
    source: SpeciesFormKey
    target: SpeciesFormKey
    level: int = 0
    level_up: int = 0

    @property
    def threshold(self) -> int:
        """Minimum level at which the source can have become the target."""
        return max(self.level, self.level_up, MIN_LEVEL)

    @classmethod
    def from_dict(cls, data: dict) -> "EvolutionEdge":
        return cls(
            source=SpeciesFormKey(int(data["species"]), int(data.get("form", 0))),
            target=SpeciesFormKey(int(data["target_species"]),
                                  int(data.get("target_form", 0))),
            level=int(data.get("level", 0)),
            level_up=int(data.get("level_up", 0)),
        )


# ── Graph ───────────────────────────────────────────────────────────────────

class EvolutionGraph:
    """Forward and backward adjacency over evolution edges."""

    def __init__(self) -> None:
        self._forward: Dict[SpeciesFormKey, List[EvolutionEdge]] = {}
        self._backward: Dict[SpeciesFormKey, List[EvolutionEdge]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[EvolutionEdge]) -> "EvolutionGraph":
        graph = cls()
        for edge in edges:
            graph.add_edge(edge)
        return graph

    def add_edge(self, edge: EvolutionEdge) -> None:
        """Add an edge; a repeated source→target keeps the larger threshold."""
        existing = self.edge(edge.source, edge.target)
        if existing is not None:
            if edge.threshold <= existing.threshold:
                return
            self._forward[edge.source].remove(existing)
            self._backward[edge.target].remove(existing)
        self._forward.setdefault(edge.source, []).append(edge)
        self._backward.setdefault(edge.target, []).append(edge)

    def __len__(self) -> int:
        return sum(len(edges) for edges in self._forward.values())

    def __contains__(self, key: object) -> bool:
        return key in self._forward or key in self._backward

    def children(self, key: SpeciesFormKey) -> Tuple[Tuple[SpeciesFormKey, int], ...]:
        """Direct (target, threshold) pairs; empty when the form does not evolve."""
        return tuple((e.target, e.threshold) for e in self._forward.get(key, ()))

    def direct_children(self, species: int, form: int = 0) -> List[Tuple[int, int, int]]:
        """Same as ``children`` as flat (species, form, threshold) triples."""
        return [(t.species, t.form, lvl)
                for t, lvl in self.children(SpeciesFormKey(species, form))]

    def parents(self, key: SpeciesFormKey) -> Tuple[SpeciesFormKey, ...]:
        return tuple(e.source for e in self._backward.get(key, ()))

    def edge(self, source: SpeciesFormKey, target: SpeciesFormKey) -> Optional[EvolutionEdge]:
        for e in self._forward.get(source, ()):
            if e.target == target:
                return e
        return None

    def evolution_line(self, key: SpeciesFormKey) -> List[SpeciesFormKey]:
        """Return the whole line containing ``key``, starting from its root."""
        # Walk back to base
        root = key
        seen = {root}
        while True:
            parents = self.parents(root)
            if not parents or parents[0] in seen:
                break
            root = parents[0]
            seen.add(root)
        # Walk forward collecting all forms
        line: List[SpeciesFormKey] = []
        stack = [root]
        visited = set()
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            line.append(node)
            stack.extend(reversed([t for t, _ in self.children(node)]))
        return line
