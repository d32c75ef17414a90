"""
propagation – Derive encounters for every form an encountered creature
can evolve into.

If a creature is found at level L, each of its evolutions can be
"found" there too, at the lowest level it could have evolved by:
``max(L, threshold)`` accumulated along the evolution path.

Two strategies:
  - MINIMAX: a form reachable by several paths gets the cheapest one,
    i.e. the minimum over paths of the maximum threshold on the path.
    Improvements are pushed forward until nothing changes.
  - STRICT: the first path that reaches a form wins, and any later path
    implying a lower level raises ``ConflictingEvolutionPathError``.
    Later paths at the same or a higher level, loops included, are ignored.

Both walk the graph with an explicit stack and a visited map, so cycles
terminate and depth does not grow the interpreter stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple

from encounter_catalog.errors import ConflictingEvolutionPathError
from encounter_catalog.evolution_graph import EvolutionGraph
from encounter_catalog.species_directory import SpeciesDirectory, SpeciesFormKey

logger = logging.getLogger(__name__)


class PropagationStrategy(str, Enum):
    MINIMAX = "minimax"
    STRICT = "strict"


@dataclass(frozen=True)
class DerivedForm:
    """An evolved form reachable from the anchor, with its minimum level."""
    key: SpeciesFormKey
    level: int
    parent: SpeciesFormKey


class EvolutionPropagator:
    """
    Walks an ``EvolutionGraph`` forward from an anchor form.

    When a directory is given, forms it does not list as present in the
    title are neither emitted nor walked through.
    """

    def __init__(
        self,
        graph: EvolutionGraph,
        directory: Optional[SpeciesDirectory] = None,
        strategy: PropagationStrategy = PropagationStrategy.MINIMAX,
    ) -> None:
        self.graph = graph
        self.directory = directory
        self.strategy = PropagationStrategy(strategy)

    def _present(self, key: SpeciesFormKey) -> bool:
        if self.directory is None:
            return True
        return self.directory.is_present_in_game(key.species, key.form)

    def propagate(self, anchor: SpeciesFormKey, base_level: int) -> List[DerivedForm]:
        """Return every form reachable from ``anchor``, in first-discovery order."""
        anchor = SpeciesFormKey(*anchor)
        levels: Dict[SpeciesFormKey, int] = {anchor: base_level}
        parents: Dict[SpeciesFormKey, SpeciesFormKey] = {}
        order: List[SpeciesFormKey] = []
        rejected: Set[SpeciesFormKey] = set()

        stack: List[Tuple[SpeciesFormKey, Iterator[Tuple[SpeciesFormKey, int]]]] = [
            (anchor, iter(self.graph.children(anchor)))
        ]
        while stack:
            node, children = stack[-1]
            step = next(children, None)
            if step is None:
                stack.pop()
                continue

            child, threshold = step
            if child == anchor or child in rejected:
                continue
            level = max(levels[node], threshold)

            if child not in levels:
                if not self._present(child):
                    logger.debug("Form %s not present in game, not propagating.", child)
                    rejected.add(child)
                    continue
                levels[child] = level
                parents[child] = node
                order.append(child)
                stack.append((child, iter(self.graph.children(child))))
                continue

            known = levels[child]
            # Levels never drop along a path, so loops only ever land here.
            if level >= known:
                continue
            if self.strategy is PropagationStrategy.STRICT:
                raise ConflictingEvolutionPathError(child, known, level)
            logger.debug("Cheaper path to %s via %s: level %d -> %d",
                         child, node, known, level)
            levels[child] = level
            parents[child] = node
            stack.append((child, iter(self.graph.children(child))))

        return [DerivedForm(key, levels[key], parents[key]) for key in order]

    def required_level(self, source: SpeciesFormKey, target: SpeciesFormKey) -> int:
        """Threshold of the direct edge source→target; KeyError if there is none."""
        edge = self.graph.edge(source, target)
        if edge is None:
            raise KeyError(f"No evolution from {source} to {target}")
        return edge.threshold
