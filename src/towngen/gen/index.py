from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from towngen.gen.model import Building, Container, Npc, Room, Town

INDEX_KINDS = ("towns", "buildings", "rooms", "npcs", "containers")


@dataclass
class WorldIndex:
    """Id-keyed lookup tables over a town tree.

    The index shares records with the tree it was built from; it is an export
    projection and never the owner.
    """

    towns: dict[int, Town] = field(default_factory=dict)
    buildings: dict[int, Building] = field(default_factory=dict)
    rooms: dict[int, Room] = field(default_factory=dict)
    npcs: dict[int, Npc] = field(default_factory=dict)
    containers: dict[int, Container] = field(default_factory=dict)

    def entity_count(self) -> int:
        return sum(len(getattr(self, kind)) for kind in INDEX_KINDS)

    def all_ids(self) -> list[int]:
        return [entity_id for kind in INDEX_KINDS for entity_id in getattr(self, kind)]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for kind in INDEX_KINDS:
            table = getattr(self, kind)
            payload[kind] = {str(entity_id): table[entity_id].to_dict() for entity_id in sorted(table)}
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorldIndex":
        return cls(
            towns={int(key): Town.from_dict(row) for key, row in data.get("towns", {}).items()},
            buildings={int(key): Building.from_dict(row) for key, row in data.get("buildings", {}).items()},
            rooms={int(key): Room.from_dict(row) for key, row in data.get("rooms", {}).items()},
            npcs={int(key): Npc.from_dict(row) for key, row in data.get("npcs", {}).items()},
            containers={int(key): Container.from_dict(row) for key, row in data.get("containers", {}).items()},
        )


def build_world_index(towns: Iterable[Town]) -> WorldIndex:
    index = WorldIndex()
    for town in towns:
        index.towns[town.town_id] = town
        for building in town.buildings:
            index.buildings[building.building_id] = building
            for room in building.rooms:
                index.rooms[room.room_id] = room
                for npc in room.npcs:
                    index.npcs[npc.npc_id] = npc
                for container in room.containers:
                    index.containers[container.container_id] = container
    return index
