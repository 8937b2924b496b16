"""
Toolo Random Generator Tools
"""

# Standard library -----------------------------------------------------------------------------------------------------
import random

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["rand_int"]


# Methods --------------------------------------------------------------------------------------------------------------

def rand_int(start: int, end: int, seed: int | None = None) -> int:
    """
    Return a random integer N in the half-open range [start, end).

    Args:
        start: Inclusive lower bound.
        end: Exclusive upper bound.
        seed: If provided, use a dedicated deterministic RNG seeded with this value.
              If None, use random.SystemRandom (cryptographically strong).

    Returns:
        An integer with start <= N < end.

    Raises:
        TypeError: If start or end is not an integer.
        ValueError: If start is not less than end.
    """
    if isinstance(start, bool) or isinstance(end, bool) or not isinstance(start, int) or not isinstance(end, int):
        raise TypeError(f"start and end must be integers, got {type(start).__name__} and {type(end).__name__}")
    if start >= end:
        raise ValueError(f"start ({start}) must be less than end ({end})")

    rng = random.Random(seed) if seed is not None else random.SystemRandom()
    return rng.randrange(start, end)
