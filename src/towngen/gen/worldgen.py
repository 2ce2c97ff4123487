from __future__ import annotations

import math

from towngen.content.dot import RawGraph, parse_dot
from towngen.content.settings import GeneratorSettings
from towngen.content.wordlists import WordLists, load_word_lists
from towngen.gen.context import GenerationContext
from towngen.gen.graph import TownGraph, build_connectivity_graph, graph_from_raw
from towngen.gen.ids import check_id_capacity
from towngen.gen.index import WorldIndex, build_world_index
from towngen.gen.model import (
    BUILDING_TYPES,
    CONTAINER_TYPES,
    NPC_RACES,
    NPC_SEXES,
    Building,
    BuildingType,
    Container,
    Npc,
    Room,
    Town,
)
from towngen.gen.names import building_name, npc_name, town_name
from towngen.gen.rng import seed_from_phrase

SHOP_NPC_COUNT = 1
RESIDENCE_NPC_COUNT = 2


def grid_cell(index: int, building_count: int) -> tuple[int, int]:
    """Row-major cell of building ``index`` on a ``ceil(sqrt(count))`` wide grid."""
    width = max(1, math.ceil(math.sqrt(building_count)))
    return (index % width, index // width)


def _npc_count(ctx: GenerationContext, building_type: BuildingType) -> int:
    if building_type is BuildingType.SHOP:
        return SHOP_NPC_COUNT
    if building_type is BuildingType.RESIDENCE:
        return RESIDENCE_NPC_COUNT
    return ctx.draw_count(ctx.settings.min_npcs, ctx.settings.max_npcs)


def generate_npcs(ctx: GenerationContext, building: Building) -> list[Npc]:
    npcs: list[Npc] = []
    for _ in range(_npc_count(ctx, building.building_type)):
        npc_id = ctx.next_id()
        sex = ctx.rng.choice(NPC_SEXES)
        race = ctx.rng.choice(NPC_RACES)
        npcs.append(
            Npc(
                npc_id=npc_id,
                name=npc_name(
                    ctx.rng,
                    sex=sex,
                    home_name=building.name,
                    home_type=building.building_type,
                    word_lists=ctx.word_lists,
                ),
                sex=sex,
                race=race,
                town_id=building.town_id,
                building_id=building.building_id,
            )
        )
    return npcs


def generate_containers(ctx: GenerationContext, room: Room) -> list[Container]:
    containers: list[Container] = []
    for _ in range(ctx.draw_count(ctx.settings.min_containers, ctx.settings.max_containers)):
        container_id = ctx.next_id()
        containers.append(
            Container(
                container_id=container_id,
                container_type=ctx.rng.choice(CONTAINER_TYPES),
                town_id=room.town_id,
                building_id=room.building_id,
                room_id=room.room_id,
            )
        )
    return containers


def generate_rooms(ctx: GenerationContext, building: Building, npcs: list[Npc]) -> list[Room]:
    """Create the rooms of ``building`` and distribute ``npcs`` among them.

    Inhabitants are shuffled, then each lands in an independently chosen room,
    so a room may hold none or several.
    """
    rooms: list[Room] = []
    for _ in range(ctx.draw_count(ctx.settings.min_rooms, ctx.settings.max_rooms)):
        room = Room(room_id=ctx.next_id(), town_id=building.town_id, building_id=building.building_id)
        room.containers = generate_containers(ctx, room)
        rooms.append(room)

    if npcs and not rooms:
        raise ValueError(f"building {building.building_id} has inhabitants but no rooms")
    ctx.rng.shuffle(npcs)
    for npc in npcs:
        ctx.rng.choice(rooms).place_npc(npc)
    return rooms


def generate_buildings(ctx: GenerationContext, town_id: int, building_count: int) -> list[Building]:
    buildings: list[Building] = []
    for index in range(building_count):
        building_id = ctx.next_id()
        building_type = ctx.rng.choice(BUILDING_TYPES)
        building = Building(
            building_id=building_id,
            name=building_name(ctx.rng, building_type, ctx.word_lists),
            building_type=building_type,
            town_id=town_id,
            coords=grid_cell(index, building_count),
        )
        npcs = generate_npcs(ctx, building)
        building.rooms = generate_rooms(ctx, building, npcs)
        buildings.append(building)
    return buildings


def populate_town(ctx: GenerationContext, name: str | None = None) -> Town:
    """Generate one town; without ``name`` the name is drawn after its buildings."""
    town_id = ctx.next_id()
    building_count = ctx.draw_count(ctx.settings.min_buildings, ctx.settings.max_buildings)
    buildings = generate_buildings(ctx, town_id, building_count)
    return Town(
        town_id=town_id,
        name=name if name is not None else town_name(ctx.rng, ctx.word_lists),
        coords=(0, 0),
        number_of_buildings=building_count,
        buildings=buildings,
    )


def _prepare_context(
    seed_phrase: str,
    settings: GeneratorSettings,
    town_count: int,
    word_lists: WordLists | None,
) -> GenerationContext:
    settings.validate()
    check_id_capacity(settings, town_count)
    if word_lists is None:
        word_lists = load_word_lists(settings.input_dir)
    return GenerationContext.create(seed_from_phrase(seed_phrase), settings, word_lists)


def generate_world(
    seed_phrase: str,
    settings: GeneratorSettings,
    *,
    word_lists: WordLists | None = None,
) -> tuple[TownGraph, WorldIndex]:
    ctx = _prepare_context(seed_phrase, settings, settings.num_of_towns, word_lists)
    towns = [populate_town(ctx) for _ in range(settings.num_of_towns)]
    graph = build_connectivity_graph(towns, settings, ctx.rng)
    return graph, build_world_index(graph.towns)


def populate_raw_graph(
    raw: RawGraph,
    seed_phrase: str,
    settings: GeneratorSettings,
    *,
    word_lists: WordLists | None = None,
) -> tuple[TownGraph, WorldIndex]:
    ctx = _prepare_context(seed_phrase, settings, len(raw.towns), word_lists)
    towns = [populate_town(ctx, name=name) for name in raw.towns]
    graph = graph_from_raw(towns, raw.edges)
    return graph, build_world_index(graph.towns)


def import_world(
    raw_text: str,
    seed_phrase: str,
    settings: GeneratorSettings,
    *,
    word_lists: WordLists | None = None,
) -> tuple[TownGraph, WorldIndex]:
    return populate_raw_graph(parse_dot(raw_text), seed_phrase, settings, word_lists=word_lists)
