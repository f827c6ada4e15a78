"""Splitting of raw numeric input into tokens.

A single unbroken run of digits is cut into fixed-width groups when the
field has a chunk width, so a pasted ``48656C6C6F`` reads as five bytes.
"""

import re
from typing import List, Optional

from .fields import FieldSpec

_SEPARATORS = re.compile(r"[\s,;]+")


def strip_prefix(value: str, prefix: Optional[str]) -> str:
    lower = value.lower()
    if prefix and lower.startswith(prefix):
        return lower[len(prefix):]
    return value


def chunk_token(value: str, size: int) -> List[str]:
    return [value[i:i + size] for i in range(0, len(value), size)]


def split_tokens(raw: str) -> List[str]:
    trimmed = raw.strip()
    if not trimmed:
        return []
    return [token for token in _SEPARATORS.split(trimmed) if token]


def tokenize(raw: str, spec: FieldSpec) -> List[str]:
    tokens = split_tokens(raw)
    if len(tokens) == 1 and spec.chunk_width:
        width = spec.chunk_width
        normalized = strip_prefix(tokens[0], spec.prefix)
        # Lengths that are not an exact multiple stay one token.
        if len(normalized) > width and len(normalized) % width == 0:
            return chunk_token(normalized, width)
        return [normalized]
    return tokens
