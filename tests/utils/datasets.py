from __future__ import annotations

import string
from typing import Callable, List, Sequence, Tuple

import numpy as np
from numpy.random import Generator, default_rng


def _ensure_rng(rng: Generator | None) -> Generator:
    return rng or default_rng()


def random_words(
    rng: Generator | None,
    count: int,
    *,
    min_length: int = 3,
    max_length: int = 6,
    alphabet: str = "abcd",
) -> List[str]:
    """Sample `count` words; a small alphabet yields many near neighbours."""

    generator = _ensure_rng(rng)
    letters = np.asarray(list(alphabet))
    lengths = generator.integers(min_length, max_length + 1, size=count)
    return ["".join(generator.choice(letters, size=int(n))) for n in lengths]


def fixed_length_words(
    rng: Generator | None,
    count: int,
    length: int,
    *,
    alphabet: str = string.ascii_lowercase,
) -> List[str]:
    generator = _ensure_rng(rng)
    letters = np.asarray(list(alphabet))
    return ["".join(generator.choice(letters, size=length)) for _ in range(count)]


def random_integers(rng: Generator | None, count: int, *, high: int) -> List[int]:
    generator = _ensure_rng(rng)
    return [int(value) for value in generator.integers(0, high, size=count)]


def word_corpus(
    rng: Generator | None,
    *,
    tree_items: int,
    queries: int,
) -> Tuple[List[str], List[str]]:
    """Return a tuple `(items, queries)` drawn from the same distribution."""

    generator = _ensure_rng(rng)
    return random_words(generator, tree_items), random_words(generator, queries)


def brute_force(
    items: Sequence[object],
    distance: Callable[[object, object], int],
    center: object,
    k: int,
) -> List[object]:
    return sorted(item for item in set(items) if distance(item, center) <= k)


class CountingDistance:
    """Wraps a distance and records every pair it is asked to measure."""

    def __init__(self, distance: Callable[[object, object], int]) -> None:
        self._distance = distance
        self.calls: List[Tuple[object, object]] = []

    def __call__(self, lhs: object, rhs: object) -> int:
        self.calls.append((lhs, rhs))
        return self._distance(lhs, rhs)

    def reset(self) -> None:
        self.calls.clear()
