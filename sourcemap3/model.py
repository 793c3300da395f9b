from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedPosition:
    """Where in the generated file a given original location ends up (0-based line and column)."""

    generated_line: int
    generated_col: int
    name: str | None = None


@dataclass(frozen=True)
class OriginalPosition:
    """A decoded segment with its source and name indices resolved against the 'sources' / 'names' arrays."""

    generated_col: int
    source: str
    original_line: int
    original_col: int
    name: str | None = None


# line -> col -> generated positions, for a single file
FileLines = dict[int, dict[int, list[GeneratedPosition]]]


class PositionIndex:
    """Original positions -> generated positions, organized as source -> line -> column -> [GeneratedPosition].

    Sources are ordered by rank: their position in the 'sources' sequence the index was created with (sources added
    later rank after those, in order of insertion). Lines and columns are always walked in ascending order. The
    encoder relies on both orderings to reproduce a stable 'sources' array and to derive generated line gaps.
    """

    def __init__(self, sources: Iterable[str] = ()):
        self._rank: dict[str, int] = {}
        self._files: dict[str, dict[int, dict[int, list[GeneratedPosition]]]] = {}
        for source in sources:
            self._ensure(source)

    def _ensure(self, source: str) -> dict[int, dict[int, list[GeneratedPosition]]]:
        if source not in self._rank:
            self._rank[source] = len(self._rank)
            self._files[source] = {}
        return self._files[source]

    def add(self, source: str, line: int, col: int, position: GeneratedPosition) -> None:
        # append, never overwrite: an optimizer may emit several generated locations for one original location
        self._ensure(source).setdefault(line, {}).setdefault(col, []).append(position)

    def get(self, source: str, line: int, col: int) -> list[GeneratedPosition]:
        return list(self._files.get(source, {}).get(line, {}).get(col, []))

    @property
    def sources(self) -> list[str]:
        return sorted(self._files, key=self._rank.__getitem__)

    def lines(self, source: str) -> list[tuple[int, dict[int, list[GeneratedPosition]]]]:
        return [
            (line, {col: cols[col] for col in sorted(cols)})
            for line, cols in sorted(self._files.get(source, {}).items())
        ]

    def file_lines(self, source: str) -> FileLines:
        return {line: {col: list(positions) for col, positions in cols.items()} for line, cols in self.lines(source)}

    def single_file(self) -> FileLines:
        """The line -> col -> positions view of an index that describes exactly one file (or none)."""
        sources = self.sources
        if len(sources) > 1:
            raise ValueError(f"expected a single-file index, got {len(sources)} sources: {sources!r}")
        if not sources:
            return {}
        return self.file_lines(sources[0])

    def entries(self) -> Iterator[tuple[str, int, int, list[GeneratedPosition]]]:
        for source in self.sources:
            for line, cols in self.lines(source):
                for col, positions in cols.items():
                    yield source, line, col, positions

    def to_dict(self) -> dict[str, FileLines]:
        return {source: self.file_lines(source) for source in self.sources}

    @classmethod
    def from_dict(cls, mapping: Mapping, sources: Iterable[str] | None = None) -> "PositionIndex":
        """Build an index from nested mappings; 'sources' fixes the rank, defaulting to the mapping's own order."""
        index = cls(mapping.keys() if sources is None else sources)
        for source, lines in mapping.items():
            file = index._ensure(source)
            for line, cols in lines.items():
                file_cols = file.setdefault(line, {})
                for col, positions in cols.items():
                    # empty lists are kept; a merge leaves them behind for positions that were optimized away
                    file_cols.setdefault(col, []).extend(positions)
        return index

    def __iter__(self) -> Iterator[str]:
        return iter(self.sources)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, source: object) -> bool:
        return source in self._files

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PositionIndex):
            return NotImplemented
        return self.sources == other.sources and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"PositionIndex({self.to_dict()!r})"
