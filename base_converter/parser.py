import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .fields import FieldSpec, SourceField, spec_for
from .tokenizer import strip_prefix, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidToken:
    """A token that is empty after prefix stripping or fails its field's pattern."""

    token: str
    field: SourceField

    @property
    def message(self) -> str:
        return f'Invalid {spec_for(self.field).error_label} value: "{self.token}"'


@dataclass(frozen=True)
class ParseOutcome:
    values: Tuple[int, ...] = ()
    error: Optional[InvalidToken] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_text(raw: str) -> ParseOutcome:
    if not raw:
        return ParseOutcome()
    return ParseOutcome(values=tuple(ord(char) for char in raw))


def parse_numeric(raw: str, spec: FieldSpec) -> ParseOutcome:
    if not spec.is_numeric:
        raise ValueError(f"Field {spec.field.value} has no radix")
    if not raw.strip():
        return ParseOutcome()

    values = []
    for token in tokenize(raw, spec):
        normalized = strip_prefix(token, spec.prefix)
        if not normalized or not spec.pattern.fullmatch(normalized):
            error = InvalidToken(token=token, field=spec.field)
            logger.debug(f"Rejected {spec.label} input: {error.message}")
            return ParseOutcome(error=error)
        values.append(int(normalized, spec.radix))
    return ParseOutcome(values=tuple(values))


def parse_field(field, raw: str) -> ParseOutcome:
    spec = spec_for(field)
    if spec.field is SourceField.TEXT:
        return parse_text(raw)
    return parse_numeric(raw, spec)
