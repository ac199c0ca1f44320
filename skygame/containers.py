"""Small container types: fixed arrays, intrusive lists and segment lists."""

from __future__ import annotations

from typing import Any, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class StaticArray(Generic[T]):
    """An array whose length is fixed until it is reinitialised."""

    def __init__(self, length: int = 0, default: Any = None) -> None:
        self._default = default
        self._data: List[Any] = []
        self.reinit(length)

    def reinit(self, length: int) -> None:
        """Discard the contents and make a fresh array of ``length`` slots."""
        if length < 0:
            raise ValueError("length must not be negative")
        self._data = [self._default] * length

    def clear(self) -> None:
        """Discard the contents, leaving an empty array."""
        self._data = []

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._data):
            raise IndexError(f"index {index} out of range for length {len(self._data)}")

    def __getitem__(self, index: int) -> T:
        self._check(index)
        return self._data[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._check(index)
        self._data[index] = value

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)


class ListNode(Generic[T]):
    """A node carrying a value that can belong to at most one linked list."""

    def __init__(self, value: Optional[T] = None) -> None:
        self.value = value
        self.next: Optional[ListNode[T]] = None
        self.prev: Optional[ListNode[T]] = None
        self.parent: Optional[LinkedList[T]] = None

    def remove(self) -> None:
        """Unlink this node from the list it belongs to, if any."""
        if self.prev is not None:
            self.prev.next = self.next
        elif self.parent is not None:
            self.parent._first = self.next

        if self.next is not None:
            self.next.prev = self.prev
        elif self.parent is not None:
            self.parent._last = self.prev

        self.next = None
        self.prev = None
        self.parent = None

    def insert(self, after: "ListNode[T]") -> None:
        """Move this node to directly after ``after`` in its list."""
        self.remove()
        if after.parent is None:
            raise ValueError("insert target does not belong to a list")

        self.parent = after.parent
        if after.next is not None:
            after.next.prev = self
        else:
            self.parent._last = self

        self.next = after.next
        self.prev = after
        after.next = self

    def append(self, linked_list: "LinkedList[T]") -> None:
        """Move this node to the end of ``linked_list``."""
        self.remove()
        last = linked_list._last
        if last is not None:
            self.prev = last
            last.next = self
        else:
            linked_list._first = self
        linked_list._last = self
        self.parent = linked_list

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class LinkedList(Generic[T]):
    """A doubly linked list of :class:`ListNode` objects."""

    def __init__(self) -> None:
        self._first: Optional[ListNode[T]] = None
        self._last: Optional[ListNode[T]] = None

    def first(self) -> Optional[ListNode[T]]:
        """The first node, or ``None`` when the list is empty."""
        return self._first

    def last(self) -> Optional[ListNode[T]]:
        """The last node, or ``None`` when the list is empty."""
        return self._last

    def add(self, node: ListNode[T]) -> None:
        """Append ``node`` to the end of the list."""
        node.append(self)

    def _nodes(self) -> Iterator[ListNode[T]]:
        node = self._first
        while node is not None:
            following = node.next
            yield node
            node = following

    def __iter__(self) -> Iterator[T]:
        for node in self._nodes():
            yield node.value

    def __len__(self) -> int:
        return sum(1 for _ in self._nodes())


class SegmentList(Generic[T]):
    """A list stored in fixed-size segments, iterated newest first.

    Erasing swaps the newest element into the erased slot, so removal is
    constant time and order is not preserved.
    """

    def __init__(self, segment_len: int = 64) -> None:
        if segment_len <= 0:
            raise ValueError("segment_len must be positive")
        self._segment_len = segment_len
        # Newest segment first; within a segment, newest element last.
        self._segments: List[List[T]] = []

    def append(self, value: T) -> T:
        """Add ``value`` and return it."""
        if not self._segments or len(self._segments[0]) == self._segment_len:
            self._segments.insert(0, [])
        self._segments[0].append(value)
        return value

    def _locate(self, index: int) -> tuple:
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError(f"index out of range for length {size}")
        for seg_idx, segment in enumerate(self._segments):
            if index < len(segment):
                return seg_idx, len(segment) - 1 - index
            index -= len(segment)
        raise IndexError("index out of range")

    def erase(self, index: int) -> T:
        """Remove the element at ``index`` in iteration order and return it."""
        seg_idx, pos = self._locate(index)
        erased = self._segments[seg_idx][pos]
        newest = self._segments[0].pop()
        if (seg_idx, pos) != (0, len(self._segments[0])):
            self._segments[seg_idx][pos] = newest
        if not self._segments[0]:
            del self._segments[0]
        return erased

    def clear(self) -> None:
        """Remove every element."""
        self._segments.clear()

    def __iter__(self) -> Iterator[T]:
        for segment in self._segments:
            yield from reversed(segment)

    def __len__(self) -> int:
        return sum(len(segment) for segment in self._segments)