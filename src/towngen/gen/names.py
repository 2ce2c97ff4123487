from __future__ import annotations

import random
import re
from collections.abc import Sequence

from towngen.content.wordlists import WordLists
from towngen.gen.model import BuildingType, NpcSex

NO_DATA = "NO DATA"
_SURNAME_BOUNDARY = re.compile(r"[ ']")


def pick_word(rng: random.Random, words: Sequence[str]) -> str:
    """Uniform pick from ``words``; an empty list degrades to ``NO_DATA`` without drawing."""
    if not words:
        return NO_DATA
    return words[rng.randrange(len(words))]


def town_name(rng: random.Random, word_lists: WordLists) -> str:
    prefix = pick_word(rng, word_lists.town_prefixes)
    root = pick_word(rng, word_lists.town_roots)
    suffix = pick_word(rng, word_lists.town_suffixes)
    return f"{prefix} {root}{suffix}"


def building_name(rng: random.Random, building_type: BuildingType, word_lists: WordLists) -> str:
    if building_type is BuildingType.RESIDENCE:
        return f"{pick_word(rng, word_lists.surnames)} Residence"
    if building_type is BuildingType.SHOP:
        surname = pick_word(rng, word_lists.surnames)
        shop = pick_word(rng, word_lists.shops)
        return f"{surname}'s {shop}"
    if building_type is BuildingType.TAVERN:
        return pick_word(rng, word_lists.taverns)
    return f"Temple of the {pick_word(rng, word_lists.temples)}"


def family_name(name: str) -> str:
    """Token before the first space or apostrophe: ``"Smith's Forge"`` -> ``"Smith"``."""
    return _SURNAME_BOUNDARY.split(name, maxsplit=1)[0]


def first_name(rng: random.Random, sex: NpcSex, word_lists: WordLists) -> str:
    if sex is NpcSex.MALE:
        return pick_word(rng, word_lists.names_male)
    if sex is NpcSex.FEMALE:
        return pick_word(rng, word_lists.names_female)
    return pick_word(rng, word_lists.names_unisex)


def npc_name(
    rng: random.Random,
    *,
    sex: NpcSex,
    home_name: str,
    home_type: BuildingType,
    word_lists: WordLists,
) -> str:
    given = first_name(rng, sex, word_lists)
    if home_type in (BuildingType.RESIDENCE, BuildingType.SHOP):
        return f"{given} {family_name(home_name)}"
    if home_type is BuildingType.TAVERN:
        return f"{given} {pick_word(rng, word_lists.surnames)}"
    return f"{given} of the {home_name}"
