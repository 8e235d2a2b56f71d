"""
Tests for the memory register
"""
from memory_manager import MemoryStore


def test_defaults_to_zero():
    assert MemoryStore().recall() == 0


def test_add_subtract_clear():
    memory = MemoryStore()
    memory.add(5)
    memory.add(3)
    memory.subtract(1.5)
    assert memory.recall() == 6.5

    memory.clear()
    assert memory.recall() == 0


def test_recall_does_not_mutate():
    memory = MemoryStore(4)
    memory.recall()
    assert memory.recall() == 4


def test_restore():
    memory = MemoryStore()
    memory.restore("2.5")
    assert memory.recall() == 2.5
