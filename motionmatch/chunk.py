"""Offsets describing consecutive chunks inside a flat list."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")


class ChunkOffsets:
    """Offsets such as [0, 3, 5, 7] describing chunks [0,3), [3,5), [5,7)."""

    def __init__(self, values: Optional[Iterable[int]] = None) -> None:
        self.values: list[int] = list(values) if values is not None else [0]

    def num_chunks(self) -> int:
        return max(0, len(self.values) - 1)

    def push_chunk(self, chunk_len: int) -> None:
        self.values.append(self.values[self.num_chunks()] + chunk_len)

    def get_chunk(self, index: int) -> Optional[tuple[int, int]]:
        if 0 <= index and index + 1 < len(self.values):
            return self.values[index], self.values[index + 1]
        return None

    def chunk(self, index: int) -> tuple[int, int]:
        """Like get_chunk, but raises IndexError for an invalid index."""
        found = self.get_chunk(index)
        if found is None:
            raise IndexError(f"chunk index out of range: {index}")
        return found

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return zip(self.values, self.values[1:])

    def __len__(self) -> int:
        return self.num_chunks()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ChunkOffsets) and self.values == other.values

    def __repr__(self) -> str:
        return f"ChunkOffsets({self.values!r})"


class Chunked(ABC, Generic[T]):
    """Mixin giving chunk access to a flat item list split by ChunkOffsets."""

    @property
    @abstractmethod
    def offsets(self) -> ChunkOffsets: ...

    @property
    @abstractmethod
    def items(self) -> Sequence[T]: ...

    def iter_chunk(self) -> Iterator[Sequence[T]]:
        items = self.items
        for start, end in self.offsets:
            yield items[start:end]

    def get_chunk(self, chunk_index: int) -> Optional[Sequence[T]]:
        bounds = self.offsets.get_chunk(chunk_index)
        if bounds is None:
            return None
        return self.items[bounds[0]:bounds[1]]

    def chunk(self, chunk_index: int) -> Sequence[T]:
        start, end = self.offsets.chunk(chunk_index)
        return self.items[start:end]