from __future__ import annotations

import random
from dataclasses import dataclass

from towngen.content.settings import GeneratorSettings
from towngen.content.wordlists import WordLists
from towngen.gen.ids import IdAllocator
from towngen.gen.rng import RNG_IDS_STREAM_NAME, RNG_WORLDGEN_STREAM_NAME, derive_stream_seed


@dataclass
class GenerationContext:
    """Mutable state of one generation run.

    ``rng`` drives structure and names in one interleaved stream; ``ids`` owns a
    separate stream so id collisions never shift structural draws. A context is
    created per run and must not be shared between runs.
    """

    master_seed: int
    settings: GeneratorSettings
    word_lists: WordLists
    rng: random.Random
    ids: IdAllocator

    @classmethod
    def create(cls, master_seed: int, settings: GeneratorSettings, word_lists: WordLists) -> "GenerationContext":
        return cls(
            master_seed=master_seed,
            settings=settings,
            word_lists=word_lists,
            rng=random.Random(derive_stream_seed(master_seed=master_seed, stream_name=RNG_WORLDGEN_STREAM_NAME)),
            ids=IdAllocator(
                derive_stream_seed(master_seed=master_seed, stream_name=RNG_IDS_STREAM_NAME),
                settings.min_id,
                settings.max_id,
            ),
        )

    def draw_count(self, low: int, high: int) -> int:
        """Uniform count from ``[low, high)``; an empty range is zero and draws nothing."""
        if high <= low:
            return 0
        return self.rng.randrange(low, high)

    def next_id(self) -> int:
        return self.ids.next_id()
