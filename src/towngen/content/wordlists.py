from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TOWN_PREFIXES_FILE = "town-prefixes.txt"
TOWN_ROOTS_FILE = "town-roots.txt"
TOWN_SUFFIXES_FILE = "town-suffixes.txt"
SURNAMES_FILE = "surnames.txt"
SHOPS_FILE = "shops.txt"
TAVERNS_FILE = "taverns.txt"
TEMPLES_FILE = "temples.txt"
NAMES_MALE_FILE = "names-male.txt"
NAMES_FEMALE_FILE = "names-female.txt"
NAMES_UNISEX_FILE = "names-unisex.txt"


@dataclass(frozen=True)
class WordLists:
    """Candidate words per naming category, in file order."""

    town_prefixes: tuple[str, ...] = ()
    town_roots: tuple[str, ...] = ()
    town_suffixes: tuple[str, ...] = ()
    surnames: tuple[str, ...] = ()
    shops: tuple[str, ...] = ()
    taverns: tuple[str, ...] = ()
    temples: tuple[str, ...] = ()
    names_male: tuple[str, ...] = ()
    names_female: tuple[str, ...] = ()
    names_unisex: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "WordLists":
        return cls()

    def missing(self) -> list[str]:
        return sorted(name for name, words in vars(self).items() if not words)


def load_word_list(path: str | Path) -> tuple[str, ...]:
    """Read one candidate per line; an absent or unreadable file yields ``()``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ()
    return tuple(line.rstrip("\r") for line in text.split("\n") if line.strip())


def load_word_lists(input_dir: str | Path) -> WordLists:
    base = Path(input_dir)
    return WordLists(
        town_prefixes=load_word_list(base / TOWN_PREFIXES_FILE),
        town_roots=load_word_list(base / TOWN_ROOTS_FILE),
        town_suffixes=load_word_list(base / TOWN_SUFFIXES_FILE),
        surnames=load_word_list(base / SURNAMES_FILE),
        shops=load_word_list(base / SHOPS_FILE),
        taverns=load_word_list(base / TAVERNS_FILE),
        temples=load_word_list(base / TEMPLES_FILE),
        names_male=load_word_list(base / NAMES_MALE_FILE),
        names_female=load_word_list(base / NAMES_FEMALE_FILE),
        names_unisex=load_word_list(base / NAMES_UNISEX_FILE),
    )
