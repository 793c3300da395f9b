# Base64 VLQ as used by the "mappings" field. Each character carries 6 bits: the high bit (0x20) is the continuation
# flag, the low 5 bits are payload, least significant group first. The sign lives in bit 0 of the first group and
# the magnitude is shifted left by one before chunking, so 1 -> "C", -1 -> "D", 16 -> "gB".

from .exceptions import MalformedVlq

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DECODE = {c: i for i, c in enumerate(ALPHABET)}

SHIFT = 5
CONTINUATION = 1 << SHIFT  # 0b100000
MASK = CONTINUATION - 1  # 0b011111


def encode_value(value: int) -> str:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"can only VLQ-encode integers, got {value!r}")

    raw = ((-value) << 1) | 1 if value < 0 else value << 1
    chars = []
    while True:
        digit = raw & MASK
        raw >>= SHIFT
        if raw:
            digit |= CONTINUATION
        chars.append(ALPHABET[digit])
        if not raw:
            return "".join(chars)


def encode_values(values) -> str:
    return "".join(encode_value(v) for v in values)


def decode_value(s: str, start: int = 0) -> tuple[int, int]:
    """Decode the single VLQ starting at s[start]; returns (value, number of characters consumed)."""
    result = 0
    shift = 0
    pos = start
    while True:
        if pos >= len(s):
            if pos == start:
                raise MalformedVlq("empty VLQ")
            raise MalformedVlq(f"truncated VLQ {s[start:]!r}")

        c = s[pos]
        digit = _DECODE.get(c)
        if digit is None:
            raise MalformedVlq(f"invalid base64 VLQ character {c!r} in {s!r}")
        pos += 1

        result += (digit & MASK) << shift
        shift += SHIFT
        if not digit & CONTINUATION:
            break

    value = result >> 1
    return (-value if result & 1 else value), pos - start


def decode_string(s: str) -> list[int]:
    """Decode a run of VLQs (no separators, they're self-delimiting) into its integers."""
    if not s:
        raise MalformedVlq("empty VLQ")

    values = []
    pos = 0
    while pos < len(s):
        value, consumed = decode_value(s, pos)
        values.append(value)
        pos += consumed
    return values
