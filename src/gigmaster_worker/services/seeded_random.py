"""Deterministic pseudo-random stream owned by each generation engine."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**31
FALLBACK_SEED = 12345

T = TypeVar("T")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def hash_seed(seed: object) -> int:
    """Fold a seed into the generator's starting state.

    Integers are used directly (reduced into the modulus); every other value is
    stringified and run through a 31-multiplier rolling hash over its UTF-16
    code units, wrapped to a signed 32-bit integer.
    """
    if isinstance(seed, int) and not isinstance(seed, bool):
        return seed % LCG_MODULUS or FALLBACK_SEED

    text = "" if seed is None else str(seed)
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    value = 0
    for index in range(0, len(encoded), 2):
        unit = int.from_bytes(encoded[index : index + 2], "little")
        value = _to_int32(value * 31 + unit)
    return abs(value) or FALLBACK_SEED


def derive_seed(master_seed: str, stage: str) -> str:
    return f"{master_seed}-{stage}"


class SeededRandom:
    """Linear congruential generator with a reproducible stream per seed."""

    def __init__(self, seed: object = "") -> None:
        self._seed = hash_seed(seed)
        self._state = self._seed

    @property
    def seed(self) -> int:
        return self._seed

    def next(self) -> float:
        self._state = (LCG_MULTIPLIER * self._state + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Integer in the half-open range [low, high)."""
        return math.floor(self.next() * (high - low)) + low

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise IndexError("cannot choose from an empty sequence")
        return options[self.next_int(0, len(options))]

    def reset(self) -> None:
        self._state = self._seed
