from __future__ import annotations

from typing import List, MutableSequence, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource:
    """Dice, shuffles and random picks for one match.

    Anything exposing ``roll_die``, ``shuffle`` and ``choice`` can stand in for
    it, which is how tests script dice rolls.
    """

    def __init__(self, seed: Optional[int] = None, generator: Optional[np.random.Generator] = None):
        self.seed = seed
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    def roll_die(self) -> int:
        return int(self._rng.integers(1, 7))

    def shuffle(self, items: MutableSequence[T]) -> None:
        order = self._rng.permutation(len(items))
        shuffled: List[T] = [items[int(idx)] for idx in order]
        items[:] = shuffled

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[int(self._rng.integers(0, len(items)))]


def seeded(seed: int) -> RandomSource:
    return RandomSource(seed=seed)
