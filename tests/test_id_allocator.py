import pytest

from towngen.content.settings import GeneratorSettings
from towngen.gen import ids as ids_module
from towngen.gen.ids import (
    ID_CAPACITY_FACTOR,
    IdAllocator,
    IdSpaceExhaustedError,
    check_id_capacity,
    estimate_id_demand,
)


def test_allocator_issues_unique_ids_within_half_open_range() -> None:
    allocator = IdAllocator(seed=17, min_id=10, max_id=60)

    issued = [allocator.next_id() for _ in range(50)]

    assert len(set(issued)) == 50
    assert set(issued) == set(range(10, 60))
    assert allocator.issued_count == 50


def test_allocator_sequence_is_deterministic_for_seed() -> None:
    first = IdAllocator(seed=99, min_id=1, max_id=100000)
    second = IdAllocator(seed=99, min_id=1, max_id=100000)

    assert [first.next_id() for _ in range(25)] == [second.next_id() for _ in range(25)]


def test_allocator_raises_when_range_is_full() -> None:
    allocator = IdAllocator(seed=3, min_id=1, max_id=4)
    for _ in range(3):
        allocator.next_id()

    with pytest.raises(IdSpaceExhaustedError, match="exhausted"):
        allocator.next_id()


class _RepeatingRng:
    def __init__(self, value: int) -> None:
        self.value = value
        self.calls = 0

    def randrange(self, start: int, stop: int) -> int:
        self.calls += 1
        return self.value


def test_allocator_gives_up_after_bounded_draws(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ids_module, "MAX_ID_DRAW_ATTEMPTS", 5)
    allocator = IdAllocator(seed=8, min_id=0, max_id=1000)
    taken = allocator.next_id()
    assert allocator.is_issued(taken)

    stuck_rng = _RepeatingRng(taken)
    allocator._rng = stuck_rng

    with pytest.raises(IdSpaceExhaustedError, match="after 5 draws"):
        allocator.next_id()
    assert stuck_rng.calls == 5
    assert allocator.issued_count == 1


def test_is_issued_tracks_only_drawn_ids() -> None:
    allocator = IdAllocator(seed=4, min_id=1, max_id=3)
    first = allocator.next_id()

    assert allocator.is_issued(first)
    assert not allocator.is_issued(3 - first)
    assert not allocator.is_issued(0)


def test_allocator_rejects_empty_range() -> None:
    with pytest.raises(ValueError, match="max_id must be > min_id"):
        IdAllocator(seed=3, min_id=5, max_id=5)


def test_exhaustion_error_is_a_value_error() -> None:
    assert issubclass(IdSpaceExhaustedError, ValueError)


def test_estimate_id_demand_uses_worst_case_draws() -> None:
    settings = GeneratorSettings(
        min_buildings=1,
        max_buildings=3,
        min_npcs=2,
        max_npcs=5,
        min_rooms=1,
        max_rooms=3,
        min_containers=0,
        max_containers=2,
    )

    # per building: 1 id + 4 npcs + 2 rooms * (1 room id + 1 container)
    per_building = 1 + 4 + 2 * (1 + 1)
    assert estimate_id_demand(settings, town_count=3) == 3 * (1 + 2 * per_building)


def test_estimate_id_demand_counts_residence_pair_when_npc_range_is_small() -> None:
    settings = GeneratorSettings(min_buildings=1, max_buildings=2, min_npcs=0, max_npcs=0, max_containers=0)

    assert estimate_id_demand(settings, town_count=1) == 1 + 1 * (1 + 2 + 5 * 1)


def test_capacity_check_rejects_small_id_space() -> None:
    settings = GeneratorSettings(max_id=50, num_of_towns=5)

    with pytest.raises(IdSpaceExhaustedError, match="need at least"):
        check_id_capacity(settings, town_count=5)


def test_capacity_check_accepts_default_settings() -> None:
    settings = GeneratorSettings()
    check_id_capacity(settings, town_count=settings.num_of_towns)

    demand = estimate_id_demand(settings, settings.num_of_towns)
    assert settings.max_id - settings.min_id >= ID_CAPACITY_FACTOR * demand
