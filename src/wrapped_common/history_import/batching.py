"""Order-preserving chunking used for transport, storage and playlist writes."""

from collections.abc import Generator, Sequence
from typing import TypeVar

T = TypeVar("T")


def iter_chunks(items: Sequence[T], size: int) -> Generator[list[T]]:
    """Yield contiguous slices of ``items`` with at most ``size`` elements each.

    Concatenating the yielded slices reproduces ``items`` exactly.
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Eager form of iter_chunks. An empty input gives an empty list."""
    return list(iter_chunks(items, size))
