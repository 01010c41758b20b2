"""
Random selection primitives.

The random source is always passed in so callers (and tests) control seeding.
"""

import hashlib
import math
import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def create_seeded_rng(seed: str | int | None = None) -> random.Random:
    """
    Create a random source.

    Args:
        seed: Any string/int for a reproducible stream, or None for OS entropy

    Returns:
        random.Random instance
    """
    if seed is None:
        return random.Random()
    if isinstance(seed, str):
        seed = int(hashlib.sha256(seed.encode()).hexdigest()[:16], 16)
    return random.Random(seed)


def shuffle_take(items: Sequence[T], count: int, rng: random.Random) -> list[T]:
    """Uniformly shuffle a copy of items and return the first `count`."""
    if count <= 0:
        return []
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled[:count]


def weighted_sample(
    candidates: Sequence[tuple[T, float]],
    count: int,
    rng: random.Random,
) -> list[T]:
    """
    Weighted random sampling without replacement.

    Each draw re-normalizes over the remaining pool: draw r in [0, total)
    and take the first item whose running weight sum reaches r. If every
    remaining weight is zero the first remaining item is taken.

    O(count * len(candidates)); pools are exam-sized.

    Args:
        candidates: (item, weight) pairs, weights finite and >= 0
        count: Number of items to draw
        rng: Random source

    Returns:
        Up to `count` distinct items in draw order

    Raises:
        ValueError: a weight is negative or not finite
    """
    if not candidates or count <= 0:
        return []

    for _, weight in candidates:
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"Sampling weights must be finite and non-negative, got {weight}")

    remaining = list(candidates)
    selected: list[T] = []

    for _ in range(min(count, len(remaining))):
        total = sum(weight for _, weight in remaining)
        if total <= 0:
            index = 0
        else:
            r = rng.random() * total
            index = len(remaining) - 1
            cumulative = 0.0
            for j, (_, weight) in enumerate(remaining):
                cumulative += weight
                if cumulative >= r:
                    index = j
                    break

        item, _ = remaining.pop(index)
        selected.append(item)

    return selected
