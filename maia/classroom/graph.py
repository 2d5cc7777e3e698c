"""
LearnGraph - Index of learn lines with prerequisite checking.

Provides:
- build_learn_graph: deterministic index of lines keyed by id
- is_unlocked: prerequisite check against a completed set
- LearnLineCatalog: mutable line set that swaps in a rebuilt graph on change
"""

import logging
import threading
from typing import Callable, Iterable, Iterator, Optional

import networkx as nx

from maia.schemas import LearnLine, LearnLineId

logger = logging.getLogger(__name__)


def is_unlocked(line: LearnLine, completed: Iterable[LearnLineId]) -> bool:
    """True iff every prerequisite of the line is in the completed set."""
    completed = set(completed)
    return all(prereq in completed for prereq in line.prerequisites)


class LearnGraph:
    """
    Read-only snapshot of the learn lines.

    Built by build_learn_graph; never mutated afterwards. Prerequisite edges
    point from the prerequisite to the dependent line.
    """

    def __init__(self, learn_lines: dict[LearnLineId, LearnLine], all_tags: list[str], digraph: nx.DiGraph):
        self.learn_lines = learn_lines
        self.all_tags = all_tags
        self._digraph = digraph
        self._position = {lid: idx for idx, lid in enumerate(learn_lines)}

    def __len__(self) -> int:
        return len(self.learn_lines)

    def __iter__(self) -> Iterator[LearnLine]:
        return iter(self.learn_lines.values())

    def __contains__(self, line_id: LearnLineId) -> bool:
        return line_id in self.learn_lines

    @property
    def ids(self) -> list[LearnLineId]:
        return list(self.learn_lines)

    def get(self, line_id: LearnLineId) -> Optional[LearnLine]:
        return self.learn_lines.get(line_id)

    def is_unlocked(self, line_id: LearnLineId, completed: Iterable[LearnLineId]) -> bool:
        line = self.get(line_id)
        return line is not None and is_unlocked(line, completed)

    def missing_prerequisites(self, line: LearnLine, completed: Iterable[LearnLineId]) -> list[LearnLineId]:
        """Unmet prerequisite ids, in declaration order."""
        completed = set(completed)
        return [prereq for prereq in line.prerequisites if prereq not in completed]

    def dangling_prerequisites(self, line: LearnLine) -> list[LearnLineId]:
        """Prerequisite ids that reference no line in this graph."""
        return [prereq for prereq in line.prerequisites if prereq not in self.learn_lines]

    def topological_order(self) -> list[LearnLineId]:
        """
        Line ids ordered prerequisites-first.

        Ties keep insertion order. Falls back to insertion order when the
        prerequisite graph has a cycle.
        """
        try:
            return list(nx.lexicographical_topological_sort(self._digraph, key=self._position.get))
        except nx.NetworkXUnfeasible:
            logger.warning("Learn graph has prerequisite cycles; using insertion order")
            return self.ids


def build_learn_graph(lines: Iterable[LearnLine]) -> LearnGraph:
    """
    Build a LearnGraph from an ordered sequence of learn lines.

    Later lines with a duplicate id replace earlier ones (last write wins).
    Tags are collected across all lines in first-seen order.
    """
    learn_lines: dict[LearnLineId, LearnLine] = {}
    all_tags: list[str] = []
    seen_tags: set[str] = set()

    for line in lines:
        if line.id in learn_lines:
            logger.debug(f"Duplicate learn line id {line.id}; later definition wins")
        learn_lines[line.id] = line
        for tag in line.tags:
            if tag not in seen_tags:
                seen_tags.add(tag)
                all_tags.append(tag)

    G = nx.DiGraph()
    G.add_nodes_from(learn_lines)
    for line in learn_lines.values():
        for prereq in line.prerequisites:
            if prereq in learn_lines:
                G.add_edge(prereq, line.id)
            else:
                # Never satisfiable: the line stays locked
                logger.warning(f"Learn line {line.id} has unknown prerequisite {prereq}")

    try:
        cycle = nx.find_cycle(G)
        logger.warning(f"Prerequisite cycle in learn graph: {cycle}")
    except nx.NetworkXNoCycle:
        pass

    return LearnGraph(learn_lines, all_tags, G)


class LearnLineCatalog:
    """
    The mutable set of learn lines behind a LearnGraph.

    Every add/update/delete rebuilds the graph and swaps it in whole, so a
    reader holding `catalog.graph` always sees a complete snapshot.
    Subscribers receive the new graph after each swap.
    """

    def __init__(self, lines: Iterable[LearnLine] = ()):
        self._lock = threading.Lock()
        self._lines: list[LearnLine] = list(lines)
        self._graph = build_learn_graph(self._lines)
        self._subscribers: list[Callable[[LearnGraph], None]] = []

    @property
    def graph(self) -> LearnGraph:
        return self._graph

    @property
    def lines(self) -> list[LearnLine]:
        return list(self._lines)

    def get(self, line_id: LearnLineId) -> Optional[LearnLine]:
        return self._graph.get(line_id)

    def subscribe(self, callback: Callable[[LearnGraph], None]) -> Callable[[], None]:
        """Register a rebuild listener. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        return lambda: self._subscribers.remove(callback)

    def _rebuild(self, change: Callable[[list[LearnLine]], Optional[list[LearnLine]]]):
        with self._lock:
            lines = change(self._lines)
            if lines is None:
                return
            graph = build_learn_graph(lines)
            self._lines = lines
            self._graph = graph
        for callback in list(self._subscribers):
            callback(graph)

    def add(self, line: LearnLine):
        self._rebuild(lambda lines: lines + [line])

    def update(self, line: LearnLine):
        """Replace the line with the same id. Unknown ids are ignored."""
        def change(lines):
            if not any(existing.id == line.id for existing in lines):
                logger.warning(f"Cannot update unknown learn line {line.id}")
                return None
            return [line if existing.id == line.id else existing for existing in lines]

        self._rebuild(change)

    def delete(self, line_id: LearnLineId):
        self._rebuild(lambda lines: [line for line in lines if line.id != line_id])
