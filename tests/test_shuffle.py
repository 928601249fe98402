from __future__ import annotations

from array import array
from itertools import permutations

import pytest

from pcg32 import Pcg32


def test_shuffle_golden_permutation() -> None:
    rng = Pcg32.from_seed(42, 54)
    values = list(range(10))
    rng.shuffle(values)
    assert values == [8, 2, 6, 4, 5, 1, 7, 0, 9, 3]
    assert rng.state == 0x91723B7B84518C9D


@pytest.mark.parametrize("seed", [0, 1, 42, 0xBEEF, 2**63])
def test_shuffle_preserves_multiset(seed: int) -> None:
    rng = Pcg32.from_seed(seed, 5)
    values = list(range(10))
    rng.shuffle(values)
    assert sorted(values) == list(range(10))


@pytest.mark.parametrize("values", [[], ["only"]])
def test_short_sequences_untouched(values: list[str]) -> None:
    rng = Pcg32.from_seed(42, 54)
    before_state = rng.state
    expected = list(values)
    rng.shuffle(values)
    assert values == expected
    assert rng.state == before_state


def test_shuffle_uses_bounded_draws_from_the_end() -> None:
    rng = Pcg32.from_seed(42, 54)
    twin = rng.copy()
    values = ["a", "b", "c", "d"]
    rng.shuffle(values)

    expected = ["a", "b", "c", "d"]
    for i in range(3, 0, -1):
        j = twin.next_uint32(i + 1)
        expected[i], expected[j] = expected[j], expected[i]
    assert values == expected
    assert rng == twin


def test_shuffle_accepts_any_indexed_sequence() -> None:
    rng = Pcg32.from_seed(1, 2)
    data = bytearray(b"abcdefgh")
    rng.shuffle(data)
    assert sorted(data) == sorted(b"abcdefgh")

    numbers = array("i", range(20))
    rng.shuffle(numbers)
    assert sorted(numbers) == list(range(20))


def test_shuffle_custom_container() -> None:
    class Slots:
        def __init__(self, items: list[object]) -> None:
            self._items = items

        def __len__(self) -> int:
            return len(self._items)

        def __getitem__(self, index: int) -> object:
            return self._items[index]

        def __setitem__(self, index: int, value: object) -> None:
            self._items[index] = value

    items: list[object] = [object(), None, 3.5, "x", (1, 2)]
    slots = Slots(list(items))
    Pcg32.from_seed(9, 9).shuffle(slots)
    assert sorted(map(id, slots._items)) == sorted(map(id, items))


def test_shuffle_reaches_every_permutation() -> None:
    rng = Pcg32.from_seed(2024, 1)
    seen = set()
    for _ in range(600):
        values = [0, 1, 2]
        rng.shuffle(values)
        seen.add(tuple(values))
    assert seen == set(permutations([0, 1, 2]))
