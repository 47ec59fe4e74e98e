"""A singly linked list stored on a simulated heap, and a demonstration run."""

from __future__ import annotations

import itertools
import struct
from typing import Iterator, Optional

from tuheap.heap import INT_SIZE, Heap, HeapCorruptionError

_LINK = struct.Struct("<Q")
_DATA_OFFSET = 0
_LINK_OFFSET = 8
NODE_SIZE = 16


class HeapList:
    """A list of 32-bit ints whose nodes live in a :class:`Heap`."""

    def __init__(self, heap: Heap, data: int) -> None:
        self._heap = heap
        self._head: Optional[int] = self._new_node(data)

    def _new_node(self, data: int) -> int:
        node = self._heap.malloc(NODE_SIZE)
        try:
            self._heap.write_int(node, _DATA_OFFSET, data)
        except OverflowError:
            self._heap.free(node)
            raise
        self._set_next(node, None)
        return node

    def _next(self, node: int) -> Optional[int]:
        (link,) = _LINK.unpack(self._heap.read(node + _LINK_OFFSET, _LINK.size))
        return link or None

    def _set_next(self, node: int, successor: Optional[int]) -> None:
        self._heap.write(node + _LINK_OFFSET, _LINK.pack(successor or 0))

    def _nodes(self) -> Iterator[int]:
        node = self._head
        while node is not None:
            yield node
            node = self._next(node)

    def append(self, data: int) -> None:
        """Add ``data`` at the end of the list."""
        node = self._new_node(data)
        if self._head is None:
            self._head = node
            return
        *_, tail = self._nodes()
        self._set_next(tail, node)

    def remove(self, index: int) -> None:
        """Remove the element at ``index``; raise IndexError if there is none."""
        if index < 0 or self._head is None:
            raise IndexError("list index out of range")
        if index == 0:
            node = self._head
            self._head = self._next(node)
            self._heap.free(node)
            return
        prev = next(itertools.islice(self._nodes(), index - 1, None), None)
        target = None if prev is None else self._next(prev)
        if target is None:
            raise IndexError("list index out of range")
        self._set_next(prev, self._next(target))
        self._heap.free(target)

    def clear(self) -> None:
        """Free every node."""
        for node in list(self._nodes()):
            self._heap.free(node)
        self._head = None

    def __iter__(self) -> Iterator[int]:
        for node in self._nodes():
            yield self._heap.read_int(node, _DATA_OFFSET)

    def __len__(self) -> int:
        return sum(1 for _ in self._nodes())


def run_demo(heap: Heap) -> Iterator[str]:
    """Exercise the allocator, yielding each line of output.

    The run ends by freeing a block that was already released by ``realloc``,
    so it finishes with :class:`HeapCorruptionError`.
    """
    values = (5, 10, 20, 30, 40)

    thing = heap.malloc(5 * INT_SIZE)
    for i, value in enumerate(values):
        heap.write_int(thing, i, value)
    yield str(heap.read_int(thing, 0))

    other_thing = heap.malloc(5 * INT_SIZE)
    for i, value in enumerate(values):
        heap.write_int(other_thing, i, value)
    yield str(heap.read_int(other_thing, 0))

    heap.free(thing)
    heap.free(other_thing)

    items = HeapList(heap, values[0])
    for value in values[1:]:
        items.append(value)
    yield from map(str, items)

    items.remove(0)
    yield from map(str, items)

    items.clear()

    more_things = heap.calloc(10, INT_SIZE)
    for i, value in {0: 5, 1: 10, 2: 20, 3: 30, 4: 40, 6: 60, 7: 70, 8: 80, 9: 90}.items():
        heap.write_int(more_things, i, value)
    yield from (str(heap.read_int(more_things, i)) for i in range(10))

    bigger_things = heap.realloc(more_things, 20 * INT_SIZE)
    for i in range(10, 20):
        heap.write_int(bigger_things, i, i * 10)
    yield from (str(heap.read_int(bigger_things, i)) for i in range(20))

    heap.free(more_things)


def main(argv: Optional[list] = None) -> int:
    """Run the demonstration on a fresh heap; ``argv`` is accepted and ignored."""
    heap = Heap()
    try:
        for line in run_demo(heap):
            print(line)
    except MemoryError:
        print("Failed to allocate memory")
        return 1
    except IndexError:
        print("Failed to remove element")
        return 1
    except HeapCorruptionError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())