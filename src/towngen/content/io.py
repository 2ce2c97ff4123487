from __future__ import annotations

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from towngen.content.dot import export_graph_dot
from towngen.content.schema import validate_towns_payload, validate_world_payload
from towngen.gen.graph import TownGraph
from towngen.gen.hash import world_hash
from towngen.gen.index import WorldIndex
from towngen.gen.model import Town

SCHEMA_VERSION = 1
CANONICAL_JSON_INDENT = 2
CANONICAL_JSON_SEPARATORS = (",", ": ")


def _build_world_payload(world: WorldIndex) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "world_hash": world_hash(world),
        **world.to_dict(),
    }


def _build_towns_payload(graph: TownGraph) -> dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "towns": [town.to_dict() for town in graph.towns],
    }


def _canonical_json(payload: dict[str, Any]) -> str:
    return json.dumps(
        payload,
        indent=CANONICAL_JSON_INDENT,
        separators=CANONICAL_JSON_SEPARATORS,
        sort_keys=True,
    )


def _write_atomic_text(path: str | Path, text: str) -> None:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)

    temp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=destination.parent,
            delete=False,
            suffix=".tmp",
        ) as temp_file:
            temp_file.write(text)
            temp_file.flush()
            os.fsync(temp_file.fileno())
            temp_path = Path(temp_file.name)
        os.replace(temp_path, destination)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


def save_world_json(path: str | Path, world: WorldIndex) -> None:
    payload = _build_world_payload(world)
    validate_world_payload(payload)
    _write_atomic_text(path, _canonical_json(payload))


def load_world_json(path: str | Path) -> WorldIndex:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    validate_world_payload(payload)
    world = WorldIndex.from_dict(payload)
    expected_hash = payload["world_hash"]
    actual_hash = world_hash(world)
    if expected_hash != actual_hash:
        raise ValueError(
            f"world_hash mismatch while loading world (stored={expected_hash}, recomputed={actual_hash})"
        )
    return world


def save_towns_json(path: str | Path, graph: TownGraph) -> None:
    payload = _build_towns_payload(graph)
    validate_towns_payload(payload)
    _write_atomic_text(path, _canonical_json(payload))


def load_towns_json(path: str | Path) -> list[Town]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    validate_towns_payload(payload)
    return [Town.from_dict(row) for row in payload["towns"]]


def save_graph_dot(path: str | Path, graph: TownGraph) -> None:
    _write_atomic_text(path, export_graph_dot(graph))
