"""A live converter that owns the display state between edits."""

import logging
from typing import Callable, Dict, Optional

from .fields import FIELD_SPECS, SourceField, field_from_key
from .synchronizer import Transition, UIState, clear_transition, transition

logger = logging.getLogger(__name__)

SAMPLE_TEXT = "Hello"


def field_snapshot(state: UIState) -> Dict[str, str]:
    return {field.value: (state.texts.get(field) or "").strip() for field in FIELD_SPECS}


def copy_all_payload(snapshot: Dict[str, str]) -> Optional[str]:
    """Text for the "copy all" action, or None when there is nothing to copy."""
    values = {field: (snapshot.get(field.value) or "").strip() for field in FIELD_SPECS}
    if not any(values.values()):
        return None
    return "\n".join(f"{FIELD_SPECS[field].caption}: {value}" for field, value in values.items())


def copy_field_payload(snapshot: Dict[str, str], field) -> Optional[str]:
    value = (snapshot.get(field_from_key(field).value) or "").strip()
    return value or None


class Converter:
    """Holds the current UIState and feeds edits through transitions.

    ``renderer`` is called with every effect of a transition, in order. A
    renderer that reports its own writes back through ``edit`` is ignored
    for as long as the transition that caused them is being rendered.
    """

    def __init__(self, renderer: Optional[Callable] = None, state: Optional[UIState] = None):
        self.renderer = renderer
        self.state = state or UIState.empty()
        self._rendering: Optional[Transition] = None

    @property
    def busy(self) -> bool:
        return self._rendering is not None

    def _commit(self, result: Transition) -> Transition:
        self._rendering = result
        try:
            if self.renderer is not None:
                for effect in result.effects:
                    self.renderer(effect)
        finally:
            self._rendering = None
        self.state = result.state
        return result

    def edit(self, field, raw: str) -> Optional[Transition]:
        if self._rendering is not None:
            logger.debug(f"Ignoring edit of {field} while rendering {self._rendering.source.value}")
            return None
        return self._commit(transition(field, raw, self.state))

    def clear(self) -> Transition:
        return self._commit(clear_transition(self.state))

    def load_sample(self) -> Transition:
        return self.edit(SourceField.TEXT, SAMPLE_TEXT)

    def snapshot(self) -> Dict[str, str]:
        return field_snapshot(self.state)
