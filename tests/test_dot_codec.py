from pathlib import Path

import pytest

from towngen.content.dot import (
    RawEdge,
    export_graph_dot,
    load_dot_file,
    parse_dot,
    parse_edge_line,
    parse_label,
)
from towngen.content.settings import GeneratorSettings
from towngen.content.wordlists import load_word_lists
from towngen.gen.graph import TownGraph
from towngen.gen.model import JourneyInfo, Town
from towngen.gen.worldgen import generate_world, import_world

WORD_LISTS = load_word_lists("content/input")
SETTINGS = GeneratorSettings(min_buildings=1, max_buildings=4, input_dir="content/input")


def _two_town_graph() -> TownGraph:
    graph = TownGraph(towns=[Town(town_id=7, name="Alderwood"), Town(town_id=9, name="Brightfen")])
    graph.add_edge(0, 1, JourneyInfo(distance=30, cost=150))
    return graph


def test_export_writes_header_edge_lines_and_footer() -> None:
    text = export_graph_dot(_two_town_graph())

    assert text == (
        "graph Towns {\n"
        '    "Alderwood" -- "Brightfen" [label="30 m / 150 gold", len=3];\n'
        "}\n"
    )


def test_export_len_uses_integer_division() -> None:
    graph = TownGraph(towns=[Town(town_id=1, name="A"), Town(town_id=2, name="B")])
    graph.add_edge(1, 0, JourneyInfo(distance=99, cost=495))

    assert '    "B" -- "A" [label="99 m / 495 gold", len=9];' in export_graph_dot(graph).splitlines()


def test_export_of_edgeless_graph_is_header_and_footer() -> None:
    graph = TownGraph(towns=[Town(town_id=1, name="Lonely")])

    assert export_graph_dot(graph) == "graph Towns {\n}\n"


@pytest.mark.parametrize("bad_name", ['The "Gate"', "Fen--Ford"])
def test_export_rejects_names_that_cannot_be_read_back(bad_name: str) -> None:
    graph = TownGraph(towns=[Town(town_id=1, name=bad_name), Town(town_id=2, name="B")])
    graph.add_edge(0, 1, JourneyInfo(distance=10, cost=50))

    with pytest.raises(ValueError, match="cannot be written"):
        export_graph_dot(graph)


def test_parse_edge_line_extracts_names_and_journey() -> None:
    edge = parse_edge_line('    "North Alderwood" -- "Old Brightfen" [label="30 m / 150 gold", len=3];  ')

    assert edge == RawEdge(source="North Alderwood", target="Old Brightfen", journey=JourneyInfo(30, 150))


@pytest.mark.parametrize(
    "line",
    [
        "",
        "graph Towns {",
        "}",
        'Alderwood -- "Brightfen" [label="30 m / 150 gold", len=3];',
        '"Alderwood" "Brightfen" [label="30 m / 150 gold", len=3];',
        '"Alderwood" -- "Brightfen" [len=3];',
        '"Alderwood" -- "Brightfen" [label="thirty m / 150 gold", len=3];',
        '"Alderwood" -- "Brightfen" [label="30 m 150 gold", len=3];',
        '"Alderwood" -- "Brightfen" [label="30 m / 150 / 2 gold", len=3];',
        '"Alderwood" -- "Brightfen" [label="30 m / 150 gold, len=3];',
        '"Alderwood" -- "Brightfen" [label="-30 m / 150 gold", len=3];',
        '"Alderwood" -- "Brightfen" [label=" / 150 gold", len=3];',
        '"Alderwood" -- "Brightfen" [label="1_0 m / 5_0 gold", len=1];',
        '"Alderwood" -- "Brightfen" [label="３０ m / 150 gold", len=3];',
    ],
)
def test_malformed_lines_are_rejected(line: str) -> None:
    assert parse_edge_line(line) is None


def test_parse_label_reads_first_token_of_each_half() -> None:
    assert parse_label("30 m / 150 gold") == JourneyInfo(distance=30, cost=150)
    assert parse_label("  5   /   25  ") == JourneyInfo(distance=5, cost=25)
    assert parse_label("5 m") is None


def test_parse_label_accepts_only_ascii_digit_counts() -> None:
    assert parse_label("+30 m / +150 gold") == JourneyInfo(distance=30, cost=150)
    assert parse_label("1_000 m / 5_000 gold") is None
    assert parse_label("３０ m / 150 gold") is None


def test_parse_dot_skips_underscored_label_without_registering_towns() -> None:
    raw = parse_dot('graph Towns {\n    "A" -- "B" [label="1_0 m / 5_0 gold", len=1];\n}\n')

    assert raw.towns == []
    assert raw.edges == []
    assert raw.skipped_lines == 1


def test_parse_dot_registers_towns_on_first_mention_and_skips_bad_lines() -> None:
    raw = load_dot_file("content/examples/mixed_lines.dot")

    assert raw.towns == ["Alderwood", "Brightfen", "Stoneford", "Ravenholm"]
    assert [(edge.source, edge.target) for edge in raw.edges] == [
        ("Alderwood", "Brightfen"),
        ("Stoneford", "Ravenholm"),
        ("Ravenholm", "Brightfen"),
    ]
    assert raw.edges[1].journey == JourneyInfo(distance=55, cost=275)
    assert raw.skipped_lines == 4


def test_parse_dot_reuses_vertices_for_repeated_names() -> None:
    raw = parse_dot(
        'graph Towns {\n'
        '    "A" -- "B" [label="10 m / 50 gold", len=1];\n'
        '    "B" -- "A" [label="20 m / 100 gold", len=2];\n'
        '    "A" -- "C" [label="30 m / 150 gold", len=3];\n'
        '}\n'
    )

    assert raw.towns == ["A", "B", "C"]
    assert len(raw.edges) == 3
    assert raw.skipped_lines == 0


def test_load_dot_file_propagates_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        load_dot_file(tmp_path / "missing.dot")


def test_round_trip_preserves_town_names_and_weights() -> None:
    text = export_graph_dot(_two_town_graph())

    graph, world = import_world(text, "Generate", SETTINGS, word_lists=WORD_LISTS)

    assert [town.name for town in graph.towns] == ["Alderwood", "Brightfen"]
    assert graph.edge_count == 1
    edge = graph.edges[0]
    assert (graph.towns[edge.source].name, graph.towns[edge.target].name) == ("Alderwood", "Brightfen")
    assert edge.journey == JourneyInfo(distance=30, cost=150)
    assert all(town.coords == (0, 0) for town in graph.towns)
    assert sorted(town.name for town in world.towns.values()) == ["Alderwood", "Brightfen"]


def test_import_repopulates_every_town() -> None:
    raw_text = Path("content/examples/mixed_lines.dot").read_text(encoding="utf-8")

    graph, world = import_world(raw_text, "Generate", SETTINGS, word_lists=WORD_LISTS)

    assert graph.vertex_count == 4
    assert graph.edge_count == 3
    for town in graph.towns:
        assert SETTINGS.min_buildings <= len(town.buildings) < SETTINGS.max_buildings
    assert len(world.buildings) == sum(len(town.buildings) for town in graph.towns)


def test_import_is_deterministic_for_seed_phrase() -> None:
    raw_text = Path("content/examples/mixed_lines.dot").read_text(encoding="utf-8")

    _, world_a = import_world(raw_text, "Generate", SETTINGS, word_lists=WORD_LISTS)
    _, world_b = import_world(raw_text, "Generate", SETTINGS, word_lists=WORD_LISTS)

    assert world_a.to_dict() == world_b.to_dict()


def test_generated_graph_survives_export_and_import() -> None:
    settings = GeneratorSettings(num_of_towns=5, num_of_connections=7, input_dir="content/input")
    graph, _ = generate_world("round trip", settings, word_lists=WORD_LISTS)
    text = export_graph_dot(graph)

    imported, _ = import_world(text, "round trip", settings, word_lists=WORD_LISTS)

    assert export_graph_dot(imported) == text
