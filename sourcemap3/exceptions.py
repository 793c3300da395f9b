class SourceMapError(ValueError):
    """Base class for all errors raised on bad source map input."""


class _PositionedError(SourceMapError):
    """An error in the mappings string, optionally located by generated line, generated column and segment number.

    When the offending segment's own column can't be decoded, 'column' is the generated column reached by the
    segment before it on the same line.
    """

    def __init__(
            self, message: str, line: int | None = None, segment: int | None = None, column: int | None = None):
        self.line = line
        self.segment = segment
        self.column = column
        if line is not None:
            where = [f"generated line {line}"]
            if column is not None:
                where.append(f"column {column}")
            if segment is not None:
                where.append(f"segment {segment}")
            message = f"{message} ({', '.join(where)})"
        super().__init__(message)


class MalformedMapping(_PositionedError):
    """A segment of the mappings string could not be decoded."""


class MalformedVlq(MalformedMapping):
    """Invalid base64 character or truncated continuation chain."""


class IndexOutOfRange(_PositionedError):
    """A source or name index points outside of the 'sources' / 'names' arrays."""


class InvalidPosition(SourceMapError):
    """A position handed to the encoder is not a non-negative integer coordinate."""
