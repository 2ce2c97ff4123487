from __future__ import annotations

import random

from towngen.content.settings import GeneratorSettings

MAX_ID_DRAW_ATTEMPTS = 10_000
ID_CAPACITY_FACTOR = 2
# Residence buildings always hold two inhabitants regardless of min/max_npcs.
FIXED_RESIDENCE_NPCS = 2


class IdSpaceExhaustedError(ValueError):
    """Raised when the configured id range cannot supply another unique id."""


class IdAllocator:
    """Draws unique integer ids from ``[min_id, max_id)`` with its own seeded stream."""

    def __init__(self, seed: int, min_id: int, max_id: int) -> None:
        if max_id <= min_id:
            raise ValueError("max_id must be > min_id")
        self.min_id = min_id
        self.max_id = max_id
        self._rng = random.Random(seed)
        self._issued: set[int] = set()

    @property
    def capacity(self) -> int:
        return self.max_id - self.min_id

    @property
    def issued_count(self) -> int:
        return len(self._issued)

    def is_issued(self, value: int) -> bool:
        return value in self._issued

    def next_id(self) -> int:
        if len(self._issued) >= self.capacity:
            raise IdSpaceExhaustedError(
                f"id range [{self.min_id}, {self.max_id}) is exhausted after {len(self._issued)} ids"
            )
        for _ in range(MAX_ID_DRAW_ATTEMPTS):
            candidate = self._rng.randrange(self.min_id, self.max_id)
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
        raise IdSpaceExhaustedError(
            f"no unused id found in [{self.min_id}, {self.max_id}) after {MAX_ID_DRAW_ATTEMPTS} draws "
            f"({len(self._issued)} ids issued)"
        )


def _largest_draw(low: int, high: int) -> int:
    return high - 1 if high > low else 0


def estimate_id_demand(settings: GeneratorSettings, town_count: int) -> int:
    """Worst-case number of ids a run over ``town_count`` towns can request."""
    buildings = _largest_draw(settings.min_buildings, settings.max_buildings)
    npcs = max(FIXED_RESIDENCE_NPCS, _largest_draw(settings.min_npcs, settings.max_npcs))
    rooms = _largest_draw(settings.min_rooms, settings.max_rooms)
    containers = _largest_draw(settings.min_containers, settings.max_containers)
    per_building = 1 + npcs + rooms * (1 + containers)
    return town_count * (1 + buildings * per_building)


def check_id_capacity(settings: GeneratorSettings, town_count: int) -> None:
    demand = estimate_id_demand(settings, town_count)
    available = settings.max_id - settings.min_id
    if available < ID_CAPACITY_FACTOR * demand:
        raise IdSpaceExhaustedError(
            f"id range [{settings.min_id}, {settings.max_id}) holds {available} ids; "
            f"need at least {ID_CAPACITY_FACTOR * demand} for {town_count} towns "
            f"(worst-case demand {demand})"
        )
