from __future__ import annotations

import random
from typing import Callable, Sequence, TypeVar

from duel.core.errors import SamplingError


T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 10_000


def draw(
    rng: random.Random,
    accept: Callable[[T], bool],
    population: Sequence[T],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> T:
    """Return the first uniform draw from ``population`` that ``accept`` allows.

    Raises SamplingError once ``max_attempts`` draws have all been rejected.
    """
    for _ in range(max_attempts):
        candidate = rng.choice(population)
        if accept(candidate):
            return candidate
    raise SamplingError(f"no acceptable value after {max_attempts} attempts")


def draw_batch(
    rng: random.Random,
    accept: Callable[[T], bool],
    population: Sequence[T],
    count: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[T]:
    return [draw(rng, accept, population, max_attempts) for _ in range(max(count, 0))]
