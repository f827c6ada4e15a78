import math
from typing import Dict, Iterable, Optional

from .fields import FIELD_SPECS, SourceField, spec_for

MAX_CODE_POINT = 0x10FFFF

_DIGIT_FORMATS = {2: "b", 8: "o", 10: "d", 16: "X"}


def _round(value) -> int:
    if isinstance(value, int):
        return value
    # Half-up, the way the page rounds.
    return math.floor(value + 0.5)


def _is_finite(value) -> bool:
    return isinstance(value, int) or math.isfinite(value)


def to_text(values: Iterable) -> str:
    output = []
    for value in values:
        if not _is_finite(value):
            continue
        safe = max(0, min(MAX_CODE_POINT, _round(value)))
        output.append(chr(safe))
    return "".join(output)


def format_value(value, radix: int, pad_width: Optional[int] = None) -> str:
    digits = _DIGIT_FORMATS.get(radix)
    if digits is None:
        raise ValueError(f"Unsupported radix: {radix}")
    safe = max(0, _round(value)) if _is_finite(value) else 0
    formatted = format(safe, digits)
    return formatted.rjust(pad_width, "0") if pad_width else formatted


def to_numeric(values: Iterable, radix: int, pad_width: Optional[int] = None) -> str:
    return " ".join(format_value(value, radix, pad_width) for value in values)


def format_field(field, values) -> str:
    spec = spec_for(field)
    if spec.field is SourceField.TEXT:
        return to_text(values)
    return to_numeric(values, spec.radix, spec.pad_width)


def render_all(values) -> Dict[SourceField, str]:
    values = tuple(values)
    return {field: format_field(field, values) for field in FIELD_SPECS}
