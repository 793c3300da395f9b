import pytest

from sourcemap3.model import GeneratedPosition, PositionIndex


def test_sources_ordered_by_rank_not_insertion():
    index = PositionIndex(["z.js", "a.js"])
    index.add("a.js", 0, 0, GeneratedPosition(0, 0))
    index.add("z.js", 0, 0, GeneratedPosition(1, 0))
    index.add("new.js", 0, 0, GeneratedPosition(2, 0))
    assert index.sources == ["z.js", "a.js", "new.js"]
    assert list(index) == ["z.js", "a.js", "new.js"]


def test_lines_and_columns_walk_in_numeric_order():
    index = PositionIndex(["a.js"])
    index.add("a.js", 10, 5, GeneratedPosition(0, 3))
    index.add("a.js", 2, 9, GeneratedPosition(0, 2))
    index.add("a.js", 10, 1, GeneratedPosition(0, 1))
    index.add("a.js", 2, 0, GeneratedPosition(0, 0))
    assert [(line, col) for _, line, col, _ in index.entries()] == [(2, 0), (2, 9), (10, 1), (10, 5)]


def test_add_appends():
    index = PositionIndex()
    index.add("a.js", 1, 1, GeneratedPosition(0, 0))
    index.add("a.js", 1, 1, GeneratedPosition(3, 4, "f"))
    assert index.get("a.js", 1, 1) == [GeneratedPosition(0, 0), GeneratedPosition(3, 4, "f")]


def test_get_missing_is_empty():
    assert PositionIndex().get("a.js", 0, 0) == []


def test_from_dict_and_equality():
    mapping = {"a.js": {1: {0: [GeneratedPosition(0, 0)]}}, "b.js": {}}
    index = PositionIndex.from_dict(mapping)
    assert index.sources == ["a.js", "b.js"]
    assert index.to_dict() == mapping
    assert index == PositionIndex.from_dict(mapping)
    assert index != PositionIndex.from_dict(mapping, sources=["b.js", "a.js"])
    assert "b.js" in index
    assert len(index) == 2


def test_single_file():
    index = PositionIndex.from_dict({"out.js": {0: {4: [GeneratedPosition(2, 1)]}}})
    assert index.single_file() == {0: {4: [GeneratedPosition(2, 1)]}}
    assert PositionIndex().single_file() == {}


def test_single_file_rejects_several_sources():
    with pytest.raises(ValueError):
        PositionIndex(["a.js", "b.js"]).single_file()
