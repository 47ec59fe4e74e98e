# tuheap

A small heap allocator that manages memory inside a fixed-size byte arena
(`bytearray`). Addresses are integer offsets into the arena. Each block is
preceded by a header that holds its usable size, a magic number marking it as
allocated, and a link to the next free block.

The allocator keeps a singly linked free list and searches it next-fit. It
splits a free block when enough room is left over for another header and at
least 16 bytes. When a block is freed, it is merged into a free block that ends
right where it starts. Freeing or reallocating an address whose header lacks
the magic number raises `HeapCorruptionError`. This includes freeing a block a
second time.

## Installation

```
pip install .
```

## Usage

```python
from tuheap.heap import Heap

heap = Heap(4096)                 # default capacity is 1 MiB

ptr = heap.malloc(5 * 4)          # sizes round up to multiples of 16
for i, value in enumerate([5, 10, 20, 30, 40]):
    heap.write_int(ptr, i, value)
print(heap.read_int(ptr, 0))      # 5

zeros = heap.calloc(10, 4)        # zero-filled block
bigger = heap.realloc(zeros, 80)  # contents carried over, old block freed
print(heap.block_size(bigger))    # 80

heap.free(ptr)
print(heap.free_blocks())         # the free list as (address, size) pairs
```

Details:

- `realloc` returns the same address when the block is already large enough.
- `realloc(None, n)` behaves like `malloc(n)`.
- `free(None)` does nothing.
- `read` and `write` move raw bytes. Nothing stops them from crossing block
  bounds.
- `read_int` and `write_int` treat a block as an array of 32-bit signed
  little-endian integers.

Errors:

- `MemoryError` is raised when the arena has no room left for a new block.
- `ValueError` is raised for negative sizes.
- `IndexError` is raised for an access outside the part of the arena in use.
- `OverflowError` is raised for an integer that does not fit in 32 bits.
- `HeapCorruptionError`, a subclass of `RuntimeError`, is raised for a bad
  header.

### Lists stored on the heap

`tuheap.demo.HeapList` is a singly linked list of 32-bit integers. Its nodes
are allocated from a `Heap`:

```python
from tuheap.heap import Heap
from tuheap.demo import HeapList

heap = Heap(4096)
items = HeapList(heap, 5)
items.append(10)
items.append(20)
items.remove(0)
print(list(items), len(items))   # [10, 20] 2
items.clear()                    # frees every node
```

`remove` raises `IndexError` when there is no element at the index.

## Command line

```
tuheap-demo
```

This runs the demonstration on a fresh 1 MiB heap. It allocates and frees two
arrays. It then builds a heap-backed list, prints it, removes the first element,
prints it again and clears it. Next it fills a zeroed array, grows the array
with `realloc` and prints every value. Its last step frees the array's original
address, which `realloc` has already released. The command therefore prints
`MEMORY CORRUPTION DETECTED` and exits with status 1. The generator
`tuheap.demo.run_demo(heap)` yields the same lines and raises the same error at
the end.

## What it does not do

The allocator works only inside its own arena. It hands out no real process
memory, and the arena never grows beyond the capacity given to `Heap`. A freed
block is merged only with a free block directly before it, not with one after
it.

## Tests

```
pip install .[test]
pytest
```