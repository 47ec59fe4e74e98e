import pytest

from tuheap.demo import NODE_SIZE, HeapList, main, run_demo
from tuheap.heap import CORRUPTION_MESSAGE, HEADER_SIZE, Heap, HeapCorruptionError


@pytest.fixture
def heap():
    return Heap(4096)


def make_list(heap, values):
    items = HeapList(heap, values[0])
    for value in values[1:]:
        items.append(value)
    return items


def test_list_keeps_insertion_order(heap):
    items = make_list(heap, [5, 10, 20, 30, 40])
    assert list(items) == [5, 10, 20, 30, 40]
    assert len(items) == 5


def test_remove_first(heap):
    items = make_list(heap, [5, 10, 20, 30, 40])
    items.remove(0)
    assert list(items) == [10, 20, 30, 40]


def test_remove_middle_and_last(heap):
    items = make_list(heap, [5, 10, 20, 30, 40])
    items.remove(2)
    assert list(items) == [5, 10, 30, 40]
    items.remove(3)
    assert list(items) == [5, 10, 30]


@pytest.mark.parametrize("index", [5, 9, -1])
def test_remove_missing_index(heap, index):
    items = make_list(heap, [5, 10, 20, 30, 40])
    with pytest.raises(IndexError):
        items.remove(index)
    assert list(items) == [5, 10, 20, 30, 40]


def test_remove_from_emptied_list(heap):
    items = HeapList(heap, 1)
    items.remove(0)
    assert len(items) == 0
    with pytest.raises(IndexError):
        items.remove(0)


def test_clear_returns_memory(heap):
    items = make_list(heap, [1, 2, 3])
    items.clear()
    assert list(items) == []
    assert [size for _, size in heap.free_blocks()] == [3 * NODE_SIZE + 2 * HEADER_SIZE]


def test_append_after_clear_reuses_memory(heap):
    items = make_list(heap, [1, 2])
    items.clear()
    items.append(7)
    assert list(items) == [7]
    assert len(heap.free_blocks()) == 1


def test_append_without_memory_leaves_list_unchanged():
    heap = Heap(HEADER_SIZE + NODE_SIZE)
    items = HeapList(heap, 1)
    with pytest.raises(MemoryError):
        items.append(2)
    assert list(items) == [1]


def test_data_must_fit_an_int(heap):
    with pytest.raises(OverflowError):
        HeapList(heap, 2**31)


def test_run_demo_output_then_corruption():
    lines = []
    with pytest.raises(HeapCorruptionError):
        for line in run_demo(Heap()):
            lines.append(line)
    assert lines[:2] == ["5", "5"]
    assert lines[2:7] == ["5", "10", "20", "30", "40"]
    assert lines[7:11] == ["10", "20", "30", "40"]
    assert lines[11:21] == ["5", "10", "20", "30", "40", "0", "60", "70", "80", "90"]
    assert lines[21:31] == lines[11:21]
    assert lines[31:] == [str(i * 10) for i in range(10, 20)]


def test_run_demo_on_tiny_heap():
    with pytest.raises(MemoryError):
        next(run_demo(Heap(32)))


def test_main_reports_double_free(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out[:2] == ["5", "5"]
    assert out[-1] == CORRUPTION_MESSAGE