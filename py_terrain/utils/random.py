"""
Random number generation utilities.

Generation code never touches a process-wide generator. Callers build a
random source here (or bring their own) and pass it explicitly, so the
sequence of draws is owned by whoever owns the source.
"""

import hashlib
from typing import Optional, Protocol, Union, runtime_checkable

import numpy as np

Seed = Union[int, str, None]


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1) from ``random()``."""

    def random(self) -> float:
        ...


def seed_to_int(seed: Union[int, str]) -> int:
    """
    Turn a seed into a non-negative integer usable by numpy.

    Integers are used as-is (negatives are rejected by numpy, so they are
    folded into the unsigned 64-bit range). Strings are hashed as text, so
    calling this directly with "42" and 42 gives different seeds. The CLI,
    settings and API parse numeric strings to integers before they get here,
    so for them the two spellings agree.
    """
    if isinstance(seed, bool):
        raise TypeError("Seed must be an int or str, not bool")
    if isinstance(seed, int):
        return seed & 0xFFFFFFFFFFFFFFFF
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def create_random_source(seed: Seed = None) -> np.random.Generator:
    """
    Create a fresh random source.

    Args:
        seed: Integer or string seed. ``None`` draws entropy from the OS,
            giving a non-reproducible source.

    Returns:
        A ``numpy.random.Generator``; it satisfies :class:`RandomSource`.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(seed_to_int(seed))


def describe_seed(seed: Optional[Union[int, str]]) -> str:
    """Printable form of a seed for logs and API responses."""
    return "random" if seed is None else str(seed)
