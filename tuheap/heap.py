"""A simulated heap managed by a next-fit free-list allocator.

Memory is a fixed-size ``bytearray``; addresses are offsets into it.  Each
block is preceded by a header holding its usable size, a magic number that
marks it as allocated, and the link to the next free block.
"""

from __future__ import annotations

import struct
from typing import Iterator, List, Optional, Tuple

ALIGNMENT = 16
MAGIC_NUMBER = 0x01234567
DEFAULT_CAPACITY = 1 << 20
CORRUPTION_MESSAGE = "MEMORY CORRUPTION DETECTED"

# size, magic, padding, link to the next free block (its payload address, 0 for none)
_HEADER = struct.Struct("<QiiQ")
HEADER_SIZE = _HEADER.size
_INT = struct.Struct("<i")
INT_SIZE = _INT.size
_INT_MIN = -(1 << 31)
_INT_MAX = (1 << 31) - 1


class HeapCorruptionError(RuntimeError):
    """Raised when a block header does not carry the allocation marker."""

    def __init__(self, message: str = CORRUPTION_MESSAGE) -> None:
        super().__init__(message)


def _align(size: int) -> int:
    return (size + ALIGNMENT - 1) & ~(ALIGNMENT - 1)


class Heap:
    """A fixed-capacity arena that hands out aligned blocks of memory."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._memory = bytearray(capacity)
        self._brk = 0
        self._head: Optional[int] = None
        self._next_fit: Optional[int] = None

    # -- header access (blocks are addressed by their header offset) --

    def _load(self, header: int) -> Tuple[int, int, Optional[int]]:
        size, magic, _pad, link = _HEADER.unpack_from(self._memory, header)
        return size, magic, (link - HEADER_SIZE if link else None)

    def _store(self, header: int, size: int, magic: int, link: Optional[int]) -> None:
        encoded = 0 if link is None else link + HEADER_SIZE
        _HEADER.pack_into(self._memory, header, size, magic, 0, encoded)

    def _size(self, header: int) -> int:
        return self._load(header)[0]

    def _link(self, header: int) -> Optional[int]:
        return self._load(header)[2]

    def _set_size(self, header: int, size: int) -> None:
        _, magic, link = self._load(header)
        self._store(header, size, magic, link)

    def _set_link(self, header: int, link: Optional[int]) -> None:
        size, magic, _ = self._load(header)
        self._store(header, size, magic, link)

    def _walk(self, start: Optional[int]) -> Iterator[int]:
        seen = set()
        header = start
        while header is not None:
            if header in seen or not 0 <= header <= self._brk - HEADER_SIZE:
                raise HeapCorruptionError()
            seen.add(header)
            yield header
            header = self._link(header)

    def _unlink(self, header: int) -> None:
        successor = self._link(header)
        if self._head == header:
            self._head = successor
            return
        for curr in self._walk(self._head):
            if self._link(curr) == header:
                self._set_link(curr, successor)
                return

    def _header_of(self, ptr: int) -> int:
        if not isinstance(ptr, int) or ptr < HEADER_SIZE or ptr > self._brk:
            raise HeapCorruptionError()
        header = ptr - HEADER_SIZE
        if self._load(header)[1] != MAGIC_NUMBER:
            raise HeapCorruptionError()
        return header

    def _grow(self, size: int) -> int:
        total = size + HEADER_SIZE
        if self._brk + total > len(self._memory):
            raise MemoryError(f"cannot extend heap by {total} bytes")
        header = self._brk
        self._brk += total
        self._store(header, size, MAGIC_NUMBER, None)
        return header + HEADER_SIZE

    def _span(self, address: int, length: int) -> slice:
        if address < 0 or length < 0 or address + length > self._brk:
            raise IndexError(f"address range {address}+{length} is outside the heap")
        return slice(address, address + length)

    # -- allocation --

    def malloc(self, size: int) -> int:
        """Allocate at least ``size`` bytes and return the block's address."""
        if size < 0:
            raise ValueError("size must be non-negative")
        size = _align(size)
        start = self._next_fit if self._next_fit is not None else self._head
        block = next((h for h in self._walk(start) if self._size(h) >= size), None)
        if block is None:
            return self._grow(size)

        successor = self._link(block)
        self._unlink(block)
        block_size = self._size(block)
        if block_size >= size + HEADER_SIZE + ALIGNMENT:
            rest = block + HEADER_SIZE + size
            self._store(rest, block_size - size - HEADER_SIZE, 0, self._head)
            self._head = rest
            block_size = size
        self._store(block, block_size, MAGIC_NUMBER, None)
        self._next_fit = successor
        return block + HEADER_SIZE

    def calloc(self, num: int, size: int) -> int:
        """Allocate ``num * size`` bytes and zero them."""
        if num < 0 or size < 0:
            raise ValueError("num and size must be non-negative")
        total = num * size
        ptr = self.malloc(total)
        self._memory[ptr:ptr + total] = bytes(total)
        return ptr

    def realloc(self, ptr: Optional[int], new_size: int) -> int:
        """Resize a block, moving its contents when it has to grow."""
        if ptr is None:
            return self.malloc(new_size)
        header = self._header_of(ptr)
        old_size = self._size(header)
        if old_size >= new_size:
            return ptr
        new_ptr = self.malloc(new_size)
        self._memory[new_ptr:new_ptr + old_size] = self._memory[ptr:ptr + old_size]
        self.free(ptr)
        return new_ptr

    def free(self, ptr: Optional[int]) -> None:
        """Return a block to the free list, merging it into a free block just before it."""
        if ptr is None:
            return
        header = self._header_of(ptr)
        size = self._size(header)
        self._store(header, size, 0, self._head)
        self._head = header
        for curr in self._walk(self._head):
            if curr != header and curr + HEADER_SIZE + self._size(curr) == header:
                self._set_size(curr, self._size(curr) + size + HEADER_SIZE)
                self._head = self._link(header)
                if self._next_fit == header:
                    self._next_fit = curr
                return

    # -- raw memory access --

    def read(self, ptr: int, size: int) -> bytes:
        """Return ``size`` bytes starting at ``ptr``."""
        return bytes(self._memory[self._span(ptr, size)])

    def write(self, ptr: int, data: bytes) -> None:
        """Store ``data`` starting at ``ptr``; nothing stops it crossing block bounds."""
        self._memory[self._span(ptr, len(data))] = data

    def read_int(self, ptr: int, index: int) -> int:
        """Read the 32-bit signed integer at position ``index`` of an int array."""
        address = ptr + index * INT_SIZE
        return _INT.unpack(self._memory[self._span(address, INT_SIZE)])[0]

    def write_int(self, ptr: int, index: int, value: int) -> None:
        """Store a 32-bit signed integer at position ``index`` of an int array."""
        if not _INT_MIN <= value <= _INT_MAX:
            raise OverflowError(f"{value} does not fit in a 32-bit int")
        address = ptr + index * INT_SIZE
        self._memory[self._span(address, INT_SIZE)] = _INT.pack(value)

    # -- inspection --

    def block_size(self, ptr: int) -> int:
        """Usable size of an allocated block."""
        return self._size(self._header_of(ptr))

    def free_blocks(self) -> List[Tuple[int, int]]:
        """The free list in order, as ``(address, size)`` pairs."""
        return [(h + HEADER_SIZE, self._size(h)) for h in self._walk(self._head)]