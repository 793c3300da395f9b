from collections.abc import Sequence
from typing import NamedTuple

from .exceptions import IndexOutOfRange, MalformedMapping
from .model import OriginalPosition


class State(NamedTuple):
    """Running absolute values that the relative segment fields are added to (or subtracted from)."""

    gcol: int = 0
    source: int = 0
    line: int = 0
    col: int = 0
    name: int = 0


INITIAL_STATE = State()


class Segment(NamedTuple):
    """An absolute, not yet resolved segment. 'name' is None when the segment has no name field; 0 is a real index."""

    gcol: int
    source: int
    line: int
    col: int
    name: int | None = None


def next_line(state: State) -> State:
    # only the generated column restarts on a new generated line; the other fields run on for the whole map
    return state._replace(gcol=0)


def combine(fields: Sequence[int], state: State) -> tuple[Segment, State]:
    if len(fields) not in (4, 5):
        raise MalformedMapping(f"invalid segment shape {len(fields)}: {list(fields)!r}")

    gcol = state.gcol + fields[0]
    source = state.source + fields[1]
    line = state.line + fields[2]
    col = state.col + fields[3]
    name = state.name + fields[4] if len(fields) == 5 else None

    new_state = State(gcol, source, line, col, state.name if name is None else name)
    return Segment(gcol, source, line, col, name), new_state


def resolve(segment: Segment, sources: Sequence[str], names: Sequence[str]) -> OriginalPosition:
    if not (0 <= segment.source < len(sources)):
        raise IndexOutOfRange(f"source index {segment.source} out of range")

    name = None
    if segment.name is not None:
        if not (0 <= segment.name < len(names)):
            raise IndexOutOfRange(f"name index {segment.name} out of range")
        name = names[segment.name]

    return OriginalPosition(
        generated_col=segment.gcol, source=sources[segment.source], original_line=segment.line,
        original_col=segment.col, name=name)


def decode_segment(
        fields: Sequence[int], state: State, sources: Sequence[str], names: Sequence[str]
) -> tuple[OriginalPosition, State]:
    segment, state = combine(fields, state)
    return resolve(segment, sources, names), state


def encode_offset(segment: Segment, state: State) -> tuple[tuple[int, ...], State]:
    """The relative fields for 'segment' given the running state, and the state to use for the next segment."""
    fields = (
        segment.gcol - state.gcol,
        segment.source - state.source,
        segment.line - state.line,
        segment.col - state.col,
    )
    if segment.name is None:
        return fields, State(segment.gcol, segment.source, segment.line, segment.col, state.name)

    return fields + (segment.name - state.name,), State(*segment)
