import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SourceField(str, Enum):
    TEXT = "text"
    DECIMAL = "decimal"
    BINARY = "binary"
    HEX = "hex"
    OCTAL = "octal"


@dataclass(frozen=True)
class FieldSpec:
    field: SourceField
    label: str
    error_label: str
    caption: str
    radix: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    prefix: Optional[str] = None
    chunk_width: Optional[int] = None
    pad_width: Optional[int] = None

    @property
    def is_numeric(self) -> bool:
        return self.radix is not None


FIELD_SPECS = {
    SourceField.TEXT: FieldSpec(
        field=SourceField.TEXT,
        label="Text",
        error_label="text",
        caption="Text",
    ),
    SourceField.DECIMAL: FieldSpec(
        field=SourceField.DECIMAL,
        label="Decimal",
        error_label="decimal",
        caption="Decimal",
        radix=10,
        pattern=re.compile(r"\d+", re.ASCII),
    ),
    SourceField.BINARY: FieldSpec(
        field=SourceField.BINARY,
        label="Binary",
        error_label="binary",
        caption="Binary",
        radix=2,
        pattern=re.compile(r"[01]+"),
        prefix="0b",
        chunk_width=8,
        pad_width=8,
    ),
    SourceField.HEX: FieldSpec(
        field=SourceField.HEX,
        label="Hexadecimal",
        error_label="hexadecimal",
        caption="Hex",
        radix=16,
        pattern=re.compile(r"[0-9a-f]+", re.IGNORECASE),
        prefix="0x",
        chunk_width=2,
        pad_width=2,
    ),
    SourceField.OCTAL: FieldSpec(
        field=SourceField.OCTAL,
        label="Octal",
        error_label="octal",
        caption="Octal",
        radix=8,
        pattern=re.compile(r"[0-7]+"),
        prefix="0o",
        chunk_width=3,
        pad_width=3,
    ),
}


def field_from_key(key) -> SourceField:
    if isinstance(key, SourceField):
        return key
    try:
        return SourceField(str(key).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown field: {key!r}")


def spec_for(field) -> FieldSpec:
    return FIELD_SPECS[field_from_key(field)]
