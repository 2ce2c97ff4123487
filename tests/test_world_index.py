from towngen.gen.index import INDEX_KINDS, WorldIndex, build_world_index
from towngen.gen.model import (
    Building,
    BuildingType,
    Container,
    ContainerType,
    Npc,
    NpcRace,
    NpcSex,
    Room,
    Town,
)


def _sample_town() -> Town:
    room = Room(room_id=30, town_id=10, building_id=20)
    room.containers.append(
        Container(container_id=40, container_type=ContainerType.CHEST, town_id=10, building_id=20, room_id=30)
    )
    room.place_npc(
        Npc(
            npc_id=50,
            name="Edith Cooper",
            sex=NpcSex.FEMALE,
            race=NpcRace.ELF,
            town_id=10,
            building_id=20,
        )
    )
    building = Building(
        building_id=20,
        name="Cooper Residence",
        building_type=BuildingType.RESIDENCE,
        town_id=10,
        coords=(0, 0),
        rooms=[room],
    )
    return Town(town_id=10, name="North Alderwood", number_of_buildings=1, buildings=[building])


def test_index_flattens_every_kind_by_id() -> None:
    town = _sample_town()

    world = build_world_index([town])

    assert list(world.towns) == [10]
    assert list(world.buildings) == [20]
    assert list(world.rooms) == [30]
    assert list(world.npcs) == [50]
    assert list(world.containers) == [40]
    assert world.entity_count() == 5
    assert sorted(world.all_ids()) == [10, 20, 30, 40, 50]
    assert world.npcs[50].room_id == 30


def test_index_is_a_projection_of_the_tree() -> None:
    town = _sample_town()
    before = town.to_dict()

    world = build_world_index([town])

    assert town.to_dict() == before
    assert world.buildings[20] is town.buildings[0]


def test_index_payload_round_trips() -> None:
    world = build_world_index([_sample_town()])

    payload = world.to_dict()
    restored = WorldIndex.from_dict(payload)

    assert tuple(payload) == INDEX_KINDS
    assert payload["npcs"]["50"]["sex"] == "Female"
    assert payload["containers"]["40"]["container_type"] == "Chest"
    assert payload["buildings"]["20"]["building_type"] == "Residence"
    assert restored.to_dict() == payload


def test_empty_index() -> None:
    world = build_world_index([])

    assert world.entity_count() == 0
    assert world.to_dict() == {kind: {} for kind in INDEX_KINDS}
