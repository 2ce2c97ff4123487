from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from towngen.content.io import save_graph_dot, save_towns_json, save_world_json
from towngen.content.settings import DEFAULT_SETTINGS_PATH, GeneratorSettings, load_settings_json
from towngen.content.wordlists import WordLists, load_word_lists
from towngen.gen.graph import TownGraph
from towngen.gen.hash import graph_hash, world_hash
from towngen.gen.index import WorldIndex
from towngen.gen.rng import seed_from_phrase
from towngen.gen.worldgen import generate_world

LOG_PREFIX = "[towngen.generate]"
GRAPH_FILENAME = "world.dot"
TOWNS_FILENAME = "towns.json"
WORLD_FILENAME = "world.json"


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="towngen-generate",
        description=(
            "Generate a seeded set of towns with buildings, rooms, inhabitants and containers, "
            "connect them with a travel graph, and write world.dot, towns.json and world.json."
        ),
    )
    parser.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_PATH,
        help=f"Settings JSON path; missing file means defaults (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument("--seed", help="Seed phrase overriding the settings file")
    parser.add_argument("--towns", type=_non_negative_int, help="Number of towns overriding the settings file")
    parser.add_argument(
        "--connections",
        type=_non_negative_int,
        help="Total edge budget overriding the settings file",
    )
    parser.add_argument("--input-dir", help="Word-list directory overriding the settings file")
    parser.add_argument("--output-dir", help="Output directory overriding the settings file")
    parser.add_argument(
        "--print-summary",
        action="store_true",
        help="Print town/edge/entity counts of the generated world",
    )
    return parser


def report_missing_word_lists(prefix: str, word_lists: WordLists) -> None:
    missing = word_lists.missing()
    if missing:
        print(f"{prefix} warning: empty or missing word lists ({', '.join(missing)}); using 'NO DATA'")


def print_world_summary(prefix: str, graph: TownGraph, world: WorldIndex) -> None:
    print(
        f"{prefix} summary "
        f"towns={graph.vertex_count} "
        f"edges={graph.edge_count} "
        f"components={graph.component_count()} "
        f"buildings={len(world.buildings)} "
        f"rooms={len(world.rooms)} "
        f"npcs={len(world.npcs)} "
        f"containers={len(world.containers)}"
    )


def write_outputs(
    output_dir: str | Path,
    graph: TownGraph,
    world: WorldIndex,
    *,
    filename_prefix: str = "",
) -> list[Path]:
    base = Path(output_dir)
    graph_path = base / f"{filename_prefix}{GRAPH_FILENAME}"
    towns_path = base / f"{filename_prefix}{TOWNS_FILENAME}"
    world_path = base / f"{filename_prefix}{WORLD_FILENAME}"
    save_graph_dot(graph_path, graph)
    save_towns_json(towns_path, graph)
    save_world_json(world_path, world)
    return [graph_path, towns_path, world_path]


def load_cli_settings(args: argparse.Namespace) -> GeneratorSettings:
    settings = load_settings_json(args.settings)
    return settings.with_overrides(
        seed=args.seed,
        num_of_towns=getattr(args, "towns", None),
        num_of_connections=getattr(args, "connections", None),
        input_dir=args.input_dir,
        output_dir=args.output_dir,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = load_cli_settings(args)
        print(
            f"{LOG_PREFIX} start "
            f"seed_phrase={settings.seed!r} "
            f"master_seed={seed_from_phrase(settings.seed)} "
            f"towns={settings.num_of_towns} "
            f"connections={settings.num_of_connections}"
        )
        word_lists = load_word_lists(settings.input_dir)
        report_missing_word_lists(LOG_PREFIX, word_lists)

        graph, world = generate_world(settings.seed, settings, word_lists=word_lists)
        written = write_outputs(settings.output_dir, graph, world)
        for path in written:
            print(f"{LOG_PREFIX} saved path={path}")

        if args.print_summary:
            print_world_summary(LOG_PREFIX, graph, world)

        print(
            "ok "
            f"output_dir={settings.output_dir} "
            f"world_hash={world_hash(world)} "
            f"graph_hash={graph_hash(graph)}"
        )
    except Exception as exc:
        print(f"error: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
