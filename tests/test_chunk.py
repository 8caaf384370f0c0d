import pytest

from motionmatch.chunk import ChunkOffsets, Chunked


class Letters(Chunked):
    def __init__(self, offsets, items):
        self._offsets = offsets
        self._items = items

    @property
    def offsets(self):
        return self._offsets

    @property
    def items(self):
        return self._items


def test_documented_example():
    offsets = ChunkOffsets()
    for n in (3, 2, 2):
        offsets.push_chunk(n)
    assert offsets.values == [0, 3, 5, 7]
    prev_end = 0
    for start, end in offsets:
        assert start == prev_end
        assert end > start
        prev_end = end
    assert offsets.num_chunks() == 3


def test_get_chunk_bounds():
    offsets = ChunkOffsets([0, 3, 5])
    assert offsets.get_chunk(1) == (3, 5)
    assert offsets.get_chunk(2) is None
    with pytest.raises(IndexError):
        offsets.chunk(2)


def test_empty_offsets():
    offsets = ChunkOffsets()
    assert offsets.num_chunks() == 0
    assert list(offsets) == []


def test_chunked_access():
    offsets = ChunkOffsets()
    offsets.push_chunk(3)
    offsets.push_chunk(2)
    data = Letters(offsets, list("abcde"))
    chunks = [list(c) for c in Chunked.iter_chunk(data)]
    assert chunks == [list("abc"), list("de")]
    assert list(Chunked.get_chunk(data, 1)) == list("de")
    assert Chunked.get_chunk(data, 5) is None
    with pytest.raises(IndexError):
        Chunked.chunk(data, 5)