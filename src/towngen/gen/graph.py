from __future__ import annotations

import itertools
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from towngen.content.settings import GeneratorSettings
from towngen.gen.model import JourneyInfo, Town

if TYPE_CHECKING:
    from towngen.content.dot import RawEdge


class DisjointSet:
    """Union-find over ``0..size-1`` with path compression and union by rank."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must be >= 0")
        self._parent = list(range(size))
        self._rank = [0] * size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding ``a`` and ``b``; False when they were already joined."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


@dataclass(frozen=True)
class Edge:
    source: int
    target: int
    journey: JourneyInfo


@dataclass
class TownGraph:
    """Undirected weighted graph; vertices are indices into ``towns``."""

    towns: list[Town] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def add_edge(self, source: int, target: int, journey: JourneyInfo) -> None:
        for index in (source, target):
            if not 0 <= index < len(self.towns):
                raise ValueError(f"edge endpoint {index} is not a vertex")
        self.edges.append(Edge(source=source, target=target, journey=journey))

    @property
    def vertex_count(self) -> int:
        return len(self.towns)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def neighbors(self, index: int) -> list[int]:
        result: list[int] = []
        for edge in self.edges:
            if edge.source == index:
                result.append(edge.target)
            elif edge.target == index:
                result.append(edge.source)
        return result

    def component_count(self) -> int:
        components = DisjointSet(len(self.towns))
        merged = sum(1 for edge in self.edges if components.union(edge.source, edge.target))
        return len(self.towns) - merged

    def is_connected(self) -> bool:
        return self.component_count() <= 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "towns": [{"town_id": town.town_id, "name": town.name} for town in self.towns],
            "edges": [
                {
                    "source": self.towns[edge.source].name,
                    "target": self.towns[edge.target].name,
                    **edge.journey.to_dict(),
                }
                for edge in self.edges
            ],
        }


def build_connectivity_graph(
    towns: list[Town],
    settings: GeneratorSettings,
    rng: random.Random,
) -> TownGraph:
    """Connect ``towns`` with a minimum spanning backbone, then extra routes.

    One distance is drawn per unordered pair in enumeration order. Pairs are
    scanned by ascending distance (stable, so ties keep enumeration order) and
    every pair joining two components becomes an edge. The rejected pairs are
    then added in the same order until ``num_of_connections`` edges exist.
    """
    graph = TownGraph(towns=list(towns))
    candidates = [
        (source, target, rng.randrange(settings.min_distance, settings.max_distance))
        for source, target in itertools.combinations(range(len(towns)), 2)
    ]
    candidates.sort(key=lambda pair: pair[2])

    components = DisjointSet(len(towns))
    rejected: list[tuple[int, int, int]] = []
    for source, target, distance in candidates:
        if components.union(source, target):
            graph.add_edge(source, target, JourneyInfo.for_distance(distance, settings.cost))
        else:
            rejected.append((source, target, distance))

    for source, target, distance in rejected:
        if graph.edge_count >= settings.num_of_connections:
            break
        graph.add_edge(source, target, JourneyInfo.for_distance(distance, settings.cost))

    return graph


def graph_from_raw(towns: list[Town], raw_edges: Iterable[RawEdge]) -> TownGraph:
    """Rebuild a graph over populated ``towns`` mirroring imported edges by town name."""
    graph = TownGraph(towns=list(towns))
    index_by_name: dict[str, int] = {}
    for index, town in enumerate(graph.towns):
        index_by_name.setdefault(town.name, index)

    for raw_edge in raw_edges:
        source = index_by_name.get(raw_edge.source)
        target = index_by_name.get(raw_edge.target)
        if source is None or target is None:
            continue
        graph.add_edge(source, target, raw_edge.journey)
    return graph
