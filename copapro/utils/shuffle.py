"""
Seeded shuffling.

Same seed + same input length -> same permutation, on every run and every
interpreter (string seeds are hashed with SHA-512 by random.Random, so the
result does not depend on PYTHONHASHSEED). No seed -> OS entropy.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def make_rng(seed: Optional[str] = None) -> random.Random:
    """Return a private PRNG; seeded when seed is given, OS-seeded otherwise."""
    if seed is None:
        return random.Random()
    return random.Random(seed)


def seeded_shuffle(items: Sequence[T], seed: Optional[str] = None) -> List[T]:
    """
    Fisher-Yates shuffle of a copy of items.

    Walks from the last index down to 1, swapping each position with a
    PRNG-chosen index in [0, i]. The input is never modified.
    """
    rng = make_rng(seed)
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
