# =============================================================================
# lib/featured.py - Featured Item Selection
# =============================================================================
# Picks which rows of the home page result set fill the featured slots.
# =============================================================================

import random

FEATURED_SLOTS = 5


def pick_featured_indices(
    n: int,
    count: int = FEATURED_SLOTS,
    rng: random.Random | None = None,
) -> list[int]:
    """
    Choose up to `count` distinct indices into a result set of size `n`.

    When fewer than `count` rows are available, every index is returned
    exactly once (in random order) and the remaining slots stay empty.
    Indices are never repeated.

    Args:
        n: Number of rows available
        count: Number of featured slots
        rng: Random source; pass a seeded random.Random in tests

    Returns:
        List of min(n, count) distinct indices in [0, n)

    Raises:
        ValueError: If n or count is negative

    Example:
        pick_featured_indices(12)   # e.g. [7, 0, 11, 3, 5]
        pick_featured_indices(2)    # [1, 0] or [0, 1]
    """
    if n < 0:
        raise ValueError(f"Result set size cannot be negative: {n}")
    if count < 0:
        raise ValueError(f"Featured slot count cannot be negative: {count}")

    rng = rng or random.Random()
    return rng.sample(range(n), min(n, count))
