from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from towngen.gen.graph import TownGraph
from towngen.gen.model import JourneyInfo

DOT_HEADER = "graph Towns {"
DOT_FOOTER = "}"
DOT_INDENT = "    "
LABEL_MARKER = "[label="
LABEL_VALUE_PREFIX = 'label="'
EDGE_OPERATOR = "--"
DISTANCE_PER_LEN_UNIT = 10
# ASCII digits only; int() alone also takes "1_000" and non-ASCII digits.
COUNT_TOKEN_PATTERN = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class RawEdge:
    source: str
    target: str
    journey: JourneyInfo


@dataclass
class RawGraph:
    """Town names and edges read from graph text, before population."""

    towns: list[str] = field(default_factory=list)
    edges: list[RawEdge] = field(default_factory=list)
    skipped_lines: int = 0

    def add_town(self, name: str) -> None:
        if name not in self.towns:
            self.towns.append(name)


def format_edge_line(source_name: str, target_name: str, journey: JourneyInfo) -> str:
    for name in (source_name, target_name):
        if '"' in name or EDGE_OPERATOR in name:
            raise ValueError(f"town name {name!r} cannot be written as a graph vertex (contains '\"' or '--')")
    return (
        f'{DOT_INDENT}"{source_name}" {EDGE_OPERATOR} "{target_name}" '
        f'[label="{journey.distance} m / {journey.cost} gold", '
        f"len={journey.distance // DISTANCE_PER_LEN_UNIT}];"
    )


def export_graph_dot(graph: TownGraph) -> str:
    """Render the graph as an undirected edge list.

    Names are written unescaped, so a name containing ``"`` or ``--`` raises
    ``ValueError`` instead of producing text that would not read back.
    """
    lines = [DOT_HEADER]
    for edge in graph.edges:
        lines.append(format_edge_line(graph.towns[edge.source].name, graph.towns[edge.target].name, edge.journey))
    lines.append(DOT_FOOTER)
    return "\n".join(lines) + "\n"


def _parse_count(text: str) -> int | None:
    tokens = text.split()
    if not tokens or COUNT_TOKEN_PATTERN.fullmatch(tokens[0]) is None:
        return None
    return int(tokens[0])


def parse_label(label: str) -> JourneyInfo | None:
    """``"30 m / 150 gold"`` -> ``JourneyInfo(30, 150)``; anything else -> None."""
    halves = label.split("/")
    if len(halves) != 2:
        return None
    distance = _parse_count(halves[0])
    cost = _parse_count(halves[1])
    if distance is None or cost is None:
        return None
    return JourneyInfo(distance=distance, cost=cost)


def parse_edge_line(line: str) -> RawEdge | None:
    stripped = line.strip()
    if not stripped.startswith('"') or EDGE_OPERATOR not in stripped or LABEL_MARKER not in stripped:
        return None

    left, right = stripped.split(EDGE_OPERATOR, 1)
    source = left.strip().strip('"').strip()

    right = right.strip()
    target_end = right.find("[")
    if target_end < 0:
        return None
    target = right[:target_end].strip().strip('"').strip()

    label_start = right.find(LABEL_VALUE_PREFIX)
    if label_start < 0:
        return None
    label_start += len(LABEL_VALUE_PREFIX)
    label_end = right.find('"', label_start)
    if label_end < 0:
        return None

    journey = parse_label(right[label_start:label_end].strip())
    if journey is None:
        return None
    return RawEdge(source=source, target=target, journey=journey)


def parse_dot(text: str) -> RawGraph:
    """Parse graph text; lines that are not complete edge lines are skipped.

    Towns are registered in order of first mention, source before target.
    """
    raw = RawGraph()
    for line in text.splitlines():
        edge = parse_edge_line(line)
        if edge is None:
            if _looks_like_content(line):
                raw.skipped_lines += 1
            continue
        raw.add_town(edge.source)
        raw.add_town(edge.target)
        raw.edges.append(edge)
    return raw


def _looks_like_content(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and stripped not in (DOT_HEADER, DOT_FOOTER)


def load_dot_file(path: str | Path) -> RawGraph:
    return parse_dot(Path(path).read_text(encoding="utf-8"))
