from .fields import FIELD_SPECS, FieldSpec, SourceField, field_from_key, spec_for
from .formatter import format_field, render_all, to_numeric, to_text
from .parser import InvalidToken, ParseOutcome, parse_field, parse_numeric, parse_text
from .reporter import READY, Severity, Status, report
from .session import SAMPLE_TEXT, Converter, copy_all_payload, copy_field_payload, field_snapshot
from .synchronizer import (
    SetByteCount,
    SetCharCount,
    SetFieldInvalid,
    SetFieldText,
    SetStatus,
    Transition,
    UIState,
    clear_transition,
    transition,
)
from .tokenizer import split_tokens, strip_prefix, tokenize

__version__ = "0.1.0"
