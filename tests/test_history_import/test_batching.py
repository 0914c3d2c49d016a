"""Tests for order-preserving chunking."""

import pytest

from wrapped_common.history_import import chunked, iter_chunks


def test_empty_input_yields_no_chunks() -> None:
    assert chunked([], 500) == []


def test_exactly_one_full_chunk() -> None:
    items = list(range(500))
    chunks = chunked(items, 500)
    assert len(chunks) == 1
    assert chunks[0] == items


def test_remainder_goes_to_last_chunk() -> None:
    chunks = chunked(list(range(501)), 500)
    assert [len(c) for c in chunks] == [500, 1]
    assert chunks[1] == [500]


@pytest.mark.parametrize(("length", "size"), [(1, 1), (7, 3), (10, 5), (2001, 2000), (3, 10)])
def test_concatenation_reproduces_input(length: int, size: int) -> None:
    items = [f"entry-{i}" for i in range(length)]
    chunks = chunked(items, size)
    assert [x for chunk in chunks for x in chunk] == items
    assert all(len(c) == size for c in chunks[:-1])
    assert 1 <= len(chunks[-1]) <= size


def test_iter_chunks_is_lazy() -> None:
    gen = iter_chunks([1, 2, 3], 2)
    assert next(gen) == [1, 2]
    assert next(gen) == [3]


@pytest.mark.parametrize("size", [0, -1])
def test_non_positive_size_rejected(size: int) -> None:
    with pytest.raises(ValueError, match="positive"):
        chunked([1, 2], size)
