"""
Tests for flatdb.core.index.InMemoryIndex

This module contains tests for the InMemoryIndex component, which maps text
keys to the records held for them.

The test suite covers:
- Set, get, has and clear
- Replacement semantics (last-write-wins, original position kept)
- Error handling for missing keys
- Iteration order
"""

import pytest

from flatdb.core.codec import Float64, Int32, String
from flatdb.core.index import InMemoryIndex, InMemoryIndexKeyNotFoundError
from flatdb.core.record import Record

BASE_SCENARIOS = [
    # fmt: off

    # The smallest possible key.
    pytest.param(
        "A", Record.from_value(Int32(1)),
        id="single-char-key",
    ),

    # Ensures leading/trailing whitespace is treated as part of the key, not trimmed.
    pytest.param(
        "  leading-and-trailing-spaces  ", Record.from_value(String("x")),
        id="key-with-whitespace",
    ),

    # A key containing multi-byte UTF-8 characters.
    pytest.param(
        "chave-com-acentuação-ç", Record.from_value(Float64(0.5)),
        id="utf8-key",
    ),

    # A record already placed in the value region.
    pytest.param(
        "placed", Record.from_value(String("abc")).placed_at(2**32 - 1),
        id="max-offset-record",
    ),
]


@pytest.fixture
def in_memory_index() -> InMemoryIndex:
    """Returns a new, empty InMemoryIndex instance for each test."""

    return InMemoryIndex()


@pytest.mark.parametrize("key, record", BASE_SCENARIOS)
def test_set_new_key_can_be_retrieved(in_memory_index: InMemoryIndex, key: str, record: Record) -> None:
    """
    Test setting a new key and retrieving its record.

    Given: An empty InMemoryIndex
    When: A key is set with a record
    Then: The record can be retrieved immediately
    """

    # ARRANGE
    index = in_memory_index

    # ACT
    index.set(key, record)

    # ASSERT
    assert index.get(key) == record
    assert index.has(key) is True
    assert len(index) == 1


@pytest.mark.parametrize("key, record", BASE_SCENARIOS)
def test_set_existing_key_replaces_record(in_memory_index: InMemoryIndex, key: str, record: Record) -> None:
    """
    Test replacing the record of an existing key.

    Given: An InMemoryIndex with a key already set
    When: The same key is set again with a different record
    Then: The newest record is returned and the index does not grow
    """

    # ARRANGE
    index = in_memory_index
    replacement = Record.from_value(String("replacement"))

    # ACT
    index.set(key, record)
    index.set(key, replacement)

    # ASSERT
    assert index.get(key) == replacement
    assert len(index) == 1


@pytest.mark.parametrize("key, _", BASE_SCENARIOS)
def test_get_nonexistent_key_raises_error(in_memory_index: InMemoryIndex, key: str, _: Record) -> None:
    """
    Test getting a non-existent key.

    Given: An empty InMemoryIndex
    When: Attempting to get a key that was never set
    Then: InMemoryIndexKeyNotFoundError is raised with the correct key
    """

    # ACT & ASSERT
    with pytest.raises(InMemoryIndexKeyNotFoundError) as exc_info:
        in_memory_index.get(key)

    assert exc_info.value.key == key
    assert in_memory_index.has(key) is False


def test_items_follow_first_insertion_order(in_memory_index: InMemoryIndex) -> None:
    # ARRANGE
    index = in_memory_index

    # ACT
    index.set("b", Record.from_value(Int32(1)))
    index.set("a", Record.from_value(Int32(2)))
    index.set("b", Record.from_value(Int32(3)))

    # ASSERT
    assert [key for key, _ in index.items()] == ["b", "a"]
    assert index.get("b").decode() == Int32(3)


def test_clear_drops_every_record(in_memory_index: InMemoryIndex) -> None:
    # ARRANGE
    index = in_memory_index

    for key, record in (p.values for p in BASE_SCENARIOS):
        index.set(key, record)

    # ACT
    index.clear()

    # ASSERT
    assert len(index) == 0
    assert list(index.items()) == []
