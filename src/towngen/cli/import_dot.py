from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from towngen.cli.generate import (
    load_cli_settings,
    print_world_summary,
    report_missing_word_lists,
    write_outputs,
)
from towngen.content.dot import load_dot_file
from towngen.content.settings import DEFAULT_SETTINGS_PATH
from towngen.content.wordlists import load_word_lists
from towngen.gen.hash import graph_hash, world_hash
from towngen.gen.worldgen import populate_raw_graph

LOG_PREFIX = "[towngen.import]"
IMPORTED_FILENAME_PREFIX = "imported_"
DOT_SUFFIX = ".dot"


def _dot_filename(value: str) -> str:
    if not value.endswith(DOT_SUFFIX):
        raise argparse.ArgumentTypeError("file name must end with .dot")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="towngen-import",
        description=(
            "Import a town graph from a .dot edge list, populate every town with seeded content, "
            "and write imported_world.dot, imported_towns.json and imported_world.json."
        ),
    )
    parser.add_argument(
        "dot_file",
        type=_dot_filename,
        help="Graph file to import; a path that does not exist is looked up in the input directory",
    )
    parser.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_PATH,
        help=f"Settings JSON path; missing file means defaults (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument("--seed", help="Seed phrase overriding the settings file")
    parser.add_argument("--input-dir", help="Word-list and .dot directory overriding the settings file")
    parser.add_argument("--output-dir", help="Output directory overriding the settings file")
    parser.add_argument(
        "--print-summary",
        action="store_true",
        help="Print town/edge/entity counts of the imported world",
    )
    return parser


def resolve_dot_path(dot_file: str, input_dir: str) -> Path:
    candidate = Path(dot_file)
    if candidate.exists():
        return candidate
    return Path(input_dir) / dot_file


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = load_cli_settings(args)
        dot_path = resolve_dot_path(args.dot_file, settings.input_dir)
        raw = load_dot_file(dot_path)
        print(
            f"{LOG_PREFIX} loaded "
            f"path={dot_path} "
            f"towns={len(raw.towns)} "
            f"edges={len(raw.edges)} "
            f"skipped_lines={raw.skipped_lines}"
        )
        word_lists = load_word_lists(settings.input_dir)
        report_missing_word_lists(LOG_PREFIX, word_lists)

        graph, world = populate_raw_graph(raw, settings.seed, settings, word_lists=word_lists)
        written = write_outputs(settings.output_dir, graph, world, filename_prefix=IMPORTED_FILENAME_PREFIX)
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
