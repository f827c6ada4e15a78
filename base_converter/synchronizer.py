"""Edit transitions.

A transition is a pure function of the edited field, its raw text and the
previous display state. It returns the effects a UI has to perform and the
state that results from performing them. Nothing here writes to a field,
so there is nothing that could echo back as a new edit.
"""

import logging
from dataclasses import dataclass, field as dataclass_field, replace
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple, Union

from .fields import FIELD_SPECS, SourceField, field_from_key
from .formatter import format_field
from .parser import ParseOutcome, parse_field
from .reporter import READY, Severity, Status, report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetFieldText:
    field: SourceField
    text: str


@dataclass(frozen=True)
class SetFieldInvalid:
    field: SourceField
    invalid: bool


@dataclass(frozen=True)
class SetStatus:
    message: str
    severity: Severity


@dataclass(frozen=True)
class SetByteCount:
    count: int


@dataclass(frozen=True)
class SetCharCount:
    count: int


Effect = Union[SetFieldText, SetFieldInvalid, SetStatus, SetByteCount, SetCharCount]


def _blank_texts():
    return MappingProxyType({field: "" for field in FIELD_SPECS})


@dataclass(frozen=True)
class UIState:
    texts: Mapping[SourceField, str] = dataclass_field(default_factory=_blank_texts)
    invalid: FrozenSet[SourceField] = frozenset()
    status: Status = READY
    byte_count: int = 0
    char_count: int = 0

    @classmethod
    def empty(cls) -> "UIState":
        return cls()

    @classmethod
    def from_texts(cls, texts: Mapping) -> "UIState":
        merged = {field: "" for field in FIELD_SPECS}
        for key, value in texts.items():
            merged[field_from_key(key)] = value if value is not None else ""
        return cls(
            texts=MappingProxyType(merged),
            char_count=len(merged[SourceField.TEXT]),
        )

    def with_text(self, field, text: str) -> "UIState":
        texts = dict(self.texts)
        texts[field_from_key(field)] = text
        return replace(self, texts=MappingProxyType(texts))

    def text_of(self, field) -> str:
        return self.texts.get(field_from_key(field), "")

    def apply(self, effects) -> "UIState":
        texts = dict(self.texts)
        invalid = set(self.invalid)
        changes = {}
        for effect in effects:
            if isinstance(effect, SetFieldText):
                texts[effect.field] = effect.text
            elif isinstance(effect, SetFieldInvalid):
                if effect.invalid:
                    invalid.add(effect.field)
                else:
                    invalid.discard(effect.field)
            elif isinstance(effect, SetStatus):
                changes["status"] = Status(effect.message, effect.severity)
            elif isinstance(effect, SetByteCount):
                changes["byte_count"] = effect.count
            elif isinstance(effect, SetCharCount):
                changes["char_count"] = effect.count
            else:
                raise ValueError(f"Unknown effect: {effect!r}")
        return replace(
            self,
            texts=MappingProxyType(texts),
            invalid=frozenset(invalid),
            **changes,
        )


@dataclass(frozen=True)
class Transition:
    source: SourceField
    outcome: ParseOutcome
    effects: Tuple[Effect, ...]
    state: UIState

    @property
    def failed(self) -> bool:
        return not self.outcome.ok

    def writes(self) -> Tuple[SetFieldText, ...]:
        return tuple(effect for effect in self.effects if isinstance(effect, SetFieldText))


def _reset_invalid():
    return [SetFieldInvalid(field, False) for field in FIELD_SPECS]


def _status_effects(status: Status, byte_count: int, text: str):
    return [
        SetStatus(status.message, status.severity),
        SetByteCount(byte_count),
        SetCharCount(len(text)),
    ]


def _clear_effects():
    effects = _reset_invalid()
    effects.extend(SetFieldText(field, "") for field in FIELD_SPECS)
    effects.extend(_status_effects(READY, 0, ""))
    return effects


def transition(field, raw: str, previous: Optional[UIState] = None) -> Transition:
    source = field_from_key(field)
    raw = raw or ""
    # The edited field already shows what the user typed.
    previous = (previous or UIState.empty()).with_text(source, raw)
    outcome = parse_field(source, raw)

    if not outcome.ok:
        effects = _reset_invalid()
        effects.append(SetFieldInvalid(source, True))
        status = report((), source, outcome.error)
        effects.extend(_status_effects(status, 0, previous.text_of(SourceField.TEXT)))
        logger.debug(f"Edit of {source.value} rejected: {status.message}")

    elif not outcome.values and not raw.strip():
        effects = _clear_effects()
        logger.debug(f"Edit of {source.value} emptied the converter")

    else:
        effects = _reset_invalid()
        for target in FIELD_SPECS:
            if target is not source:
                effects.append(SetFieldText(target, format_field(target, outcome.values)))
        text = raw if source is SourceField.TEXT else format_field(SourceField.TEXT, outcome.values)
        status = report(outcome.values, source)
        effects.extend(_status_effects(status, len(outcome.values), text))
        logger.debug(f"Edit of {source.value} produced {len(outcome.values)} values")

    effects = tuple(effects)
    return Transition(source, outcome, effects, previous.apply(effects))


def clear_transition(previous: Optional[UIState] = None) -> Transition:
    previous = previous or UIState.empty()
    effects = tuple(_clear_effects())
    return Transition(SourceField.TEXT, ParseOutcome(), effects, previous.apply(effects))
