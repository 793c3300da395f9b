import json
import logging
from collections.abc import Callable

from .exceptions import IndexOutOfRange, InvalidPosition, MalformedMapping, MalformedVlq
from .model import GeneratedPosition, PositionIndex
from .segment import INITIAL_STATE, Segment, combine, encode_offset, next_line, resolve
from .vlq import decode_string, encode_values

logger = logging.getLogger(__name__)


class IndexArray:
    """Array of unique strings with index lookup."""

    def __init__(self):
        self._index = {}
        self._items = []

    def index_for(self, value: str) -> int:
        idx = self._index.get(value)
        if idx is None:
            idx = len(self._items)
            self._index[value] = idx
            self._items.append(value)
        return idx

    @property
    def items(self) -> list[str]:
        return self._items


def decode_mappings(mappings: str, sources: list[str], names: list[str]) -> PositionIndex:

    # Decodes a SourceMap "mappings" string into a PositionIndex. The string is structured as lines (separated by ';'),
    # then segments per line (','), and finally fields within each segment (no delimiters needed, VLQs are
    # self-delimiting). Segments have 4 fields (mapped) or 5 fields (mapped with name). Fields are deltas against the
    # previous segment; the generated column restarts at every line, everything else runs on across lines.

    index = PositionIndex(sources)
    state = INITIAL_STATE
    count = 0

    for dst_line, line in enumerate(mappings.split(";") if mappings else []):
        state = next_line(state)
        if not line.strip():
            continue  # empty line is fine, it just has nothing mapped

        for seg_no, token in enumerate(line.split(",")):
            try:
                fields = decode_string(token)
            except MalformedVlq as e:
                raise MalformedVlq(str(e), line=dst_line, segment=seg_no, column=state.gcol) from e

            try:
                segment, state = combine(fields, state)
            except MalformedMapping as e:
                raise MalformedMapping(str(e), line=dst_line, segment=seg_no, column=state.gcol) from e

            if segment.gcol < 0 or segment.line < 0 or segment.col < 0:
                raise MalformedMapping(
                    f"negative absolute position (col {segment.gcol}, source line {segment.line}, "
                    f"source col {segment.col})", line=dst_line, segment=seg_no, column=segment.gcol)

            try:
                original = resolve(segment, sources, names)
            except IndexOutOfRange as e:
                raise IndexOutOfRange(str(e), line=dst_line, segment=seg_no, column=segment.gcol) from e

            index.add(
                original.source, original.original_line, original.original_col,
                GeneratedPosition(dst_line, original.generated_col, original.name))
            count += 1

    logger.debug("decoded %d segments for %d sources", count, len(index))
    return index


def _check_position(source, line, col, position) -> None:
    if not isinstance(source, str):
        raise InvalidPosition(f"source must be a string, got {source!r}")

    for label, value in [
            ("original line", line),
            ("original column", col),
            ("generated line", getattr(position, "generated_line", None)),
            ("generated column", getattr(position, "generated_col", None))]:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise InvalidPosition(f"{label} must be a non-negative integer, got {value!r} in {source!r}")

    name = getattr(position, "name", None)
    if name is not None and not isinstance(name, str):
        raise InvalidPosition(f"name must be a string or None, got {name!r} in {source!r}")


def encode_mappings(index: PositionIndex) -> tuple[str, list[str], list[str]]:
    try:
        entries = list(index.entries())
    except TypeError as e:
        # lines or columns that can't be ordered against each other aren't integer coordinates
        raise InvalidPosition(f"unorderable position keys: {e}") from e

    # validate everything before building any output
    for source, line, col, positions in entries:
        for position in positions:
            _check_position(source, line, col, position)

    sources = index.sources
    source_idx = {source: i for i, source in enumerate(sources)}
    names = IndexArray()

    # generated line -> segments, grown with empty lines so gaps stay empty groups rather than shifting later lines
    per_dst_line: list[list[Segment]] = []
    for source, line, col, positions in entries:
        for position in positions:
            while len(per_dst_line) <= position.generated_line:
                per_dst_line.append([])

            name_idx = None if position.name is None else names.index_for(position.name)
            per_dst_line[position.generated_line].append(
                Segment(position.generated_col, source_idx[source], line, col, name_idx))

    state = INITIAL_STATE
    lines = []
    for segments in per_dst_line:
        state = next_line(state)
        encoded = []
        # walk order, not column order: generated column deltas may be negative, and each position list keeps its
        # order through a decode
        for segment in segments:
            fields, state = encode_offset(segment, state)
            encoded.append(encode_values(fields))
        lines.append(",".join(encoded))

    logger.debug("encoded %d generated lines for %d sources", len(lines), len(sources))
    return ";".join(lines), sources, names.items


def _parse_regular_map_fields(obj: dict) -> tuple[list[str], list[str], str]:
    sources_array = obj.get("sources", [])
    names_array = obj.get("names", [])
    mappings_string = obj.get("mappings", "")

    # Each entry of 'sources' is either a string that is a (potentially relative) URL or null if the source name is
    # not known; null is kept as the empty string so it still has a rank.
    if not isinstance(sources_array, list) or any(x is not None and not isinstance(x, str) for x in sources_array):
        raise TypeError("'sources' must be a list of strings or nulls")
    if not isinstance(names_array, list) or any(not isinstance(x, str) for x in names_array):
        raise TypeError("'names' must be a list of strings")
    if not isinstance(mappings_string, str):
        raise TypeError("'mappings' must be a string")

    return ["" if x is None else x for x in sources_array], names_array, mappings_string


def decode(obj: dict) -> PositionIndex:
    version = obj.get("version")
    if version is not None and version != 3:
        raise ValueError(f"unsupported version {version!r}; expected 3")

    if "sections" in obj:
        raise ValueError("index maps ('sections') are not supported")

    sources_array, names_array, mappings_string = _parse_regular_map_fields(obj)
    return decode_mappings(mappings_string, sources_array, names_array)


def encode(
        index: PositionIndex, *, file: str | None = None, line_count: int | None = None,
        relativize: Callable[[str], str] | None = None) -> dict:
    mappings_string, sources_array, names_array = encode_mappings(index)
    if relativize is not None:
        sources_array = [relativize(source) for source in sources_array]

    out = {"version": 3}
    if file is not None:
        out["file"] = file
    out["sources"] = sources_array
    if line_count is not None:
        out["lineCount"] = line_count
    out["mappings"] = mappings_string
    out["names"] = names_array
    return out


def loads(text: str) -> PositionIndex:
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise TypeError("a source map must be a JSON object")
    return decode(obj)


def dumps(document: dict, indent: int | None = 2) -> str:
    return json.dumps(document, indent=indent)
