# Composition of two successive position-translating passes. The typical pipeline is a source-level compiler whose
# map points original sources at an intermediate file, followed by a whole-program optimizer whose map points that
# intermediate file at the final output. Looking up each intermediate (gline, gcol) in the second map gives the final
# coordinates for every original location.

import logging
from collections.abc import Mapping

from .model import FileLines, GeneratedPosition, PositionIndex

logger = logging.getLogger(__name__)


def merge_lines(lines: Mapping, second_lines: Mapping) -> FileLines:
    """Merge one file's line -> col -> positions with the single-file line -> col -> positions of the second pass.

    Positions without a counterpart in the second pass were optimized away; they are dropped and their column keeps
    an empty list.
    """
    merged: FileLines = {}
    for line, cols in lines.items():
        new_cols: dict[int, list[GeneratedPosition]] = {}
        for col, positions in cols.items():
            new_positions: list[GeneratedPosition] = []
            for position in positions:
                new_positions.extend(
                    second_lines.get(position.generated_line, {}).get(position.generated_col, ()))
            new_cols[col] = new_positions
        merged[line] = new_cols
    return merged


def merge(first: PositionIndex, second: PositionIndex | Mapping) -> PositionIndex:
    if isinstance(second, PositionIndex):
        second_lines = second.single_file()
    else:
        second_lines = second

    merged = {source: merge_lines(first.file_lines(source), second_lines) for source in first.sources}
    result = PositionIndex.from_dict(merged, sources=first.sources)

    if logger.isEnabledFor(logging.DEBUG):
        before = sum(len(positions) for *_, positions in first.entries())
        after = sum(len(positions) for *_, positions in result.entries())
        logger.debug("merged %d generated positions into %d", before, after)
    return result
