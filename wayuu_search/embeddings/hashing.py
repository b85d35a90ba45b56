"""Deterministic hash-based text embedding.

Used when the remote embedding model is unavailable. Vectors must match the
ones earlier deployments stored, so hashing runs over UTF-16 code units with
signed 32-bit wraparound and the weight remainder keeps the dividend's sign.
"""

import math
import re

# ECMAScript whitespace and line terminators; differs from Python's \s
# (no \x1c-\x1f, includes U+FEFF).
_WHITESPACE = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)
_SPREAD = 10


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def word_hash(word: str) -> int:
    """Rolling ``hash * 31 + unit`` over UTF-16 code units, as signed int32."""
    units = word.encode("utf-16-le")
    h = 0
    for i in range(0, len(units), 2):
        unit = units[i] | (units[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return h


def hash_embedding(text: str, dimensions: int) -> list[float]:
    """Derive a unit-length vector of ``dimensions`` components from text.

    Args:
        text: Text to embed.
        dimensions: Target vector length.

    Returns:
        L2-normalized vector.

    Raises:
        ZeroDivisionError: If the text yields an all-zero vector (for
            example empty or whitespace-only input).
    """
    vector = [0.0] * dimensions

    # re.split keeps leading/trailing empty tokens, which shift word positions
    for position, word in enumerate(_WHITESPACE.split(text.lower())):
        h = word_hash(word)
        base = (abs(h) + position) % dimensions
        weight = math.fmod(h, 100) / 100
        for offset in range(min(_SPREAD, dimensions - base)):
            vector[base + offset] += weight

    norm = math.sqrt(sum(v * v for v in vector))
    if norm == 0.0:
        raise ZeroDivisionError("cannot normalize an all-zero embedding")
    return [v / norm for v in vector]
