from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .fields import spec_for
from .parser import InvalidToken

ASCII_MAX = 127


class Severity(str, Enum):
    NONE = ""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Status:
    message: str
    severity: Severity = Severity.NONE

    @property
    def css_class(self) -> str:
        return f"status-text {self.severity.value}".strip()


READY = Status("Ready")


def has_non_ascii(values: Sequence[int]) -> bool:
    return any(value > ASCII_MAX for value in values)


def report(values: Sequence[int], source, error: Optional[InvalidToken] = None) -> Status:
    if error is not None:
        return Status(error.message, Severity.ERROR)
    if not values:
        return READY
    message = f"Updated from {spec_for(source).label}"
    if has_non_ascii(values):
        return Status(f"{message} · Non-ASCII values", Severity.WARNING)
    return Status(message, Severity.SUCCESS)


def byte_count_label(count: int) -> str:
    return f"{count} bytes"


def char_count_label(count: int) -> str:
    return f"{count} chars"
