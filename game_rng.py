"""Deterministic random number generator used across the project.

Every consumer receives a :class:`GameRNG` instance explicitly; nothing in
the world core draws from the process-wide :mod:`random` state.  Two
instances built with the same seed produce identical streams, which is what
makes dungeon generation reproducible in tests.
"""

from __future__ import annotations

import random
from typing import List, Optional, Union

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError(f"empty range: {a} > {b}")
        return int(self.rng.integers(a, b + 1))

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError(f"empty range: {a} > {b}")
        return a + (b - a) * float(self.rng.random())

    def coin_flip(
        self, num_flips: int = 1, heads_probability: float = 0.5
    ) -> Union[str, List[str]]:
        if not 0.0 <= heads_probability <= 1.0:
            raise ValueError("probability out of range")
        results = [
            "heads" if self.get_float() < heads_probability else "tails"
            for _ in range(num_flips)
        ]
        return results[0] if num_flips == 1 else results


__all__ = ["GameRNG"]
