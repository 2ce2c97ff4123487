from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BuildingType(Enum):
    RESIDENCE = "Residence"
    SHOP = "Shop"
    TAVERN = "Tavern"
    TEMPLE = "Temple"


class NpcSex(Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNISEX = "Unisex"


class NpcRace(Enum):
    HUMAN = "Human"
    ELF = "Elf"


class ContainerType(Enum):
    BARREL = "Barrel"
    CRATE = "Crate"
    CHEST = "Chest"


BUILDING_TYPES: tuple[BuildingType, ...] = tuple(BuildingType)
NPC_SEXES: tuple[NpcSex, ...] = tuple(NpcSex)
NPC_RACES: tuple[NpcRace, ...] = tuple(NpcRace)
CONTAINER_TYPES: tuple[ContainerType, ...] = tuple(ContainerType)


def _require_id(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    if value < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return value


def _coords_from_payload(value: Any, *, field_name: str) -> tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{field_name} must be a pair of integers")
    return (int(value[0]), int(value[1]))


@dataclass(frozen=True)
class JourneyInfo:
    """Edge weight of a town connection."""

    distance: int
    cost: int

    def __post_init__(self) -> None:
        _require_id(self.distance, field_name="journey.distance")
        _require_id(self.cost, field_name="journey.cost")

    @classmethod
    def for_distance(cls, distance: int, cost_multiplier: int) -> "JourneyInfo":
        return cls(distance=distance, cost=distance * cost_multiplier)

    def to_dict(self) -> dict[str, int]:
        return {"distance": self.distance, "cost": self.cost}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JourneyInfo":
        return cls(distance=int(data["distance"]), cost=int(data["cost"]))


@dataclass
class Container:
    container_id: int
    container_type: ContainerType
    town_id: int
    building_id: int
    room_id: int

    def __post_init__(self) -> None:
        _require_id(self.container_id, field_name="container_id")
        if not isinstance(self.container_type, ContainerType):
            raise ValueError(f"invalid container_type: {self.container_type}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_id": self.container_id,
            "container_type": self.container_type.value,
            "town_id": self.town_id,
            "building_id": self.building_id,
            "room_id": self.room_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Container":
        return cls(
            container_id=int(data["container_id"]),
            container_type=ContainerType(data["container_type"]),
            town_id=int(data["town_id"]),
            building_id=int(data["building_id"]),
            room_id=int(data["room_id"]),
        )


@dataclass
class Npc:
    npc_id: int
    name: str
    sex: NpcSex
    race: NpcRace
    town_id: int
    building_id: int
    room_id: int | None = None

    def __post_init__(self) -> None:
        _require_id(self.npc_id, field_name="npc_id")
        if not isinstance(self.sex, NpcSex):
            raise ValueError(f"invalid npc sex: {self.sex}")
        if not isinstance(self.race, NpcRace):
            raise ValueError(f"invalid npc race: {self.race}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "npc_id": self.npc_id,
            "name": self.name,
            "sex": self.sex.value,
            "race": self.race.value,
            "town_id": self.town_id,
            "building_id": self.building_id,
            "room_id": self.room_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Npc":
        return cls(
            npc_id=int(data["npc_id"]),
            name=str(data["name"]),
            sex=NpcSex(data["sex"]),
            race=NpcRace(data["race"]),
            town_id=int(data["town_id"]),
            building_id=int(data["building_id"]),
            room_id=(int(data["room_id"]) if data.get("room_id") is not None else None),
        )


@dataclass
class Room:
    room_id: int
    town_id: int
    building_id: int
    npcs: list[Npc] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_id(self.room_id, field_name="room_id")

    def place_npc(self, npc: Npc) -> None:
        npc.room_id = self.room_id
        self.npcs.append(npc)

    def to_dict(self) -> dict[str, Any]:
        return {
            "room_id": self.room_id,
            "town_id": self.town_id,
            "building_id": self.building_id,
            "npcs": [npc.to_dict() for npc in self.npcs],
            "containers": [container.to_dict() for container in self.containers],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Room":
        return cls(
            room_id=int(data["room_id"]),
            town_id=int(data["town_id"]),
            building_id=int(data["building_id"]),
            npcs=[Npc.from_dict(row) for row in data.get("npcs", [])],
            containers=[Container.from_dict(row) for row in data.get("containers", [])],
        )


@dataclass
class Building:
    building_id: int
    name: str
    building_type: BuildingType
    town_id: int
    coords: tuple[int, int]
    rooms: list[Room] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_id(self.building_id, field_name="building_id")
        if not isinstance(self.building_type, BuildingType):
            raise ValueError(f"invalid building_type: {self.building_type}")

    def npc_count(self) -> int:
        return sum(len(room.npcs) for room in self.rooms)

    def to_dict(self) -> dict[str, Any]:
        return {
            "building_id": self.building_id,
            "name": self.name,
            "building_type": self.building_type.value,
            "town_id": self.town_id,
            "coords": list(self.coords),
            "rooms": [room.to_dict() for room in self.rooms],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Building":
        return cls(
            building_id=int(data["building_id"]),
            name=str(data["name"]),
            building_type=BuildingType(data["building_type"]),
            town_id=int(data["town_id"]),
            coords=_coords_from_payload(data["coords"], field_name="building.coords"),
            rooms=[Room.from_dict(row) for row in data.get("rooms", [])],
        )


@dataclass
class Town:
    town_id: int
    name: str
    coords: tuple[int, int] = (0, 0)
    number_of_buildings: int = 0
    buildings: list[Building] = field(default_factory=list)

    def __post_init__(self) -> None:
        _require_id(self.town_id, field_name="town_id")
        if not isinstance(self.name, str):
            raise ValueError("town name must be a string")

    def to_dict(self) -> dict[str, Any]:
        return {
            "town_id": self.town_id,
            "name": self.name,
            "coords": list(self.coords),
            "number_of_buildings": self.number_of_buildings,
            "buildings": [building.to_dict() for building in self.buildings],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Town":
        return cls(
            town_id=int(data["town_id"]),
            name=str(data["name"]),
            coords=_coords_from_payload(data.get("coords", (0, 0)), field_name="town.coords"),
            number_of_buildings=int(data.get("number_of_buildings", 0)),
            buildings=[Building.from_dict(row) for row in data.get("buildings", [])],
        )
