import pytest

from sourcemap3.codec import decode, decode_mappings, encode, encode_mappings
from sourcemap3.merge import merge, merge_lines
from sourcemap3.model import GeneratedPosition, PositionIndex


def test_merge_composes_positions():
    first = PositionIndex.from_dict({"a.js": {1: {0: [GeneratedPosition(0, 0)]}}})
    second = {0: {0: [GeneratedPosition(5, 2)]}}
    assert merge(first, second).to_dict() == {"a.js": {1: {0: [GeneratedPosition(5, 2)]}}}


def test_merge_drops_positions_without_counterpart():
    first = PositionIndex.from_dict({
        "a.js": {
            1: {0: [GeneratedPosition(0, 0)], 4: [GeneratedPosition(0, 9)]},
        }
    })
    second = {0: {0: [GeneratedPosition(5, 2)]}}
    merged = merge(first, second)
    assert merged.get("a.js", 1, 4) == []
    assert merged.to_dict() == {"a.js": {1: {0: [GeneratedPosition(5, 2)], 4: []}}}


def test_merge_concatenates_in_order():
    first = PositionIndex.from_dict({
        "a.js": {0: {0: [GeneratedPosition(0, 0), GeneratedPosition(1, 3)]}},
    })
    second = {
        0: {0: [GeneratedPosition(4, 0), GeneratedPosition(9, 1, "inlined")]},
        1: {3: [GeneratedPosition(4, 7)]},
    }
    assert merge(first, second).get("a.js", 0, 0) == [
        GeneratedPosition(4, 0), GeneratedPosition(9, 1, "inlined"), GeneratedPosition(4, 7)]


def test_merged_index_survives_encoding():
    first = PositionIndex.from_dict({"a.js": {0: {0: [GeneratedPosition(0, 0), GeneratedPosition(1, 3)]}}})
    second = {0: {0: [GeneratedPosition(4, 7)]}, 1: {3: [GeneratedPosition(4, 0)]}}
    merged = merge(first, second)
    assert merged.get("a.js", 0, 0) == [GeneratedPosition(4, 7), GeneratedPosition(4, 0)]

    mappings, sources, names = encode_mappings(merged)
    assert decode_mappings(mappings, sources, names) == merged


def test_merge_keeps_first_source_order():
    first = PositionIndex.from_dict(
        {"b.js": {0: {0: [GeneratedPosition(0, 0)]}}, "a.js": {0: {0: [GeneratedPosition(0, 0)]}}},
        sources=["b.js", "a.js"])
    merged = merge(first, {0: {0: [GeneratedPosition(2, 2)]}})
    assert merged.sources == ["b.js", "a.js"]


def test_merge_with_decoded_intermediate_map():
    # source-level compiler: a.src line 1 col 0 -> intermediate line 0 col 0, a.src line 3 col 2 -> line 1 col 4
    first = decode({"version": 3, "sources": ["a.src"], "names": [], "mappings": "AACA;IAEE"})
    # optimizer: intermediate line 0 col 0 -> final line 5 col 2; intermediate line 1 col 4 was eliminated
    second = decode({"version": 3, "sources": ["inter.js"], "names": [], "mappings": ";;;;;EAAA"})

    merged = merge(first, second)
    assert merged.to_dict() == {
        "a.src": {
            1: {0: [GeneratedPosition(5, 2)]},
            3: {2: []},
        }
    }
    assert encode(merged, file="final.js") == {
        "version": 3,
        "file": "final.js",
        "sources": ["a.src"],
        "mappings": ";;;;;EACA",
        "names": [],
    }


def test_merge_rejects_multi_file_intermediate():
    first = PositionIndex.from_dict({"a.js": {0: {0: [GeneratedPosition(0, 0)]}}})
    second = decode_mappings("AAAA,CCAA", ["x.js", "y.js"], [])
    with pytest.raises(ValueError):
        merge(first, second)


def test_merge_lines():
    lines = {2: {1: [GeneratedPosition(0, 3)]}}
    second_lines = {0: {3: [GeneratedPosition(7, 7)]}}
    assert merge_lines(lines, second_lines) == {2: {1: [GeneratedPosition(7, 7)]}}
