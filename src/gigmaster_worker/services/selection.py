"""Roulette-wheel selection shared by the content engines."""

from __future__ import annotations

from typing import Sequence, TypeVar

from .exceptions import EmptyCandidateSet
from .seeded_random import SeededRandom

T = TypeVar("T")


def jitter(rng: SeededRandom) -> float:
    return 0.7 + 0.3 * rng.next()


def weighted_choice(candidates: Sequence[T], weights: Sequence[float], rng: SeededRandom) -> T:
    """Pick one candidate with probability proportional to its weight.

    Draws once in [0, total) and walks the list subtracting weights until the
    running draw reaches zero. Float slack past the end lands on the last
    candidate.
    """
    if not candidates:
        raise EmptyCandidateSet("weighted selection needs at least one candidate")
    if len(weights) != len(candidates):
        raise ValueError(
            f"expected {len(candidates)} weights, received {len(weights)}"
        )

    total = sum(weights)
    draw = rng.next() * total
    for candidate, weight in zip(candidates, weights):
        draw -= weight
        if draw <= 0:
            return candidate
    return candidates[-1]
