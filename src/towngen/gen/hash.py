from __future__ import annotations

import hashlib
import json
from typing import Any

from towngen.gen.graph import TownGraph
from towngen.gen.index import WorldIndex


def _canonical_digest(payload: Any) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def world_hash(world: WorldIndex) -> str:
    return _canonical_digest(world.to_dict())


def graph_hash(graph: TownGraph) -> str:
    return _canonical_digest(graph.to_dict())
