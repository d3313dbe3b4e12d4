# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Generic, TypeVar

from ..core.errors import ValidationError

T = TypeVar("T")

DATE_FORMAT = "%d/%m/%Y"  # dd/MM/yyyy, used for input and display
HISTORY_TS_FORMAT = "%d/%m/%Y %H:%M"


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class StatusFilter(StrEnum):
    PENDING = "pending"
    COMPLETE = "complete"


class SearchKind(StrEnum):
    TEXT = "text"
    STATUS = "status"
    PRIORITY = "priority"


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Outcome of a bounded text -> enum parse: either `value` or `error` is set."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None or self.value is None:
            raise ValidationError(self.error or "Invalid value.")
        return self.value


def _parse_choice(text: str | None, choices: dict[str, T], label: str) -> ParseResult[T]:
    key = (text or "").strip().lower()
    if key in choices:
        return ParseResult(value=choices[key])
    allowed = "/".join(choices)
    return ParseResult(error=f"Invalid {label} '{(text or '').strip()}'. Use one of: {allowed}.")


_PRIORITY_CHOICES = {p.value.lower(): p for p in Priority}
_STATUS_CHOICES = {s.value: s for s in StatusFilter}
_SEARCH_KIND_CHOICES = {k.value: k for k in SearchKind}


def parse_priority(text: str | None) -> ParseResult[Priority]:
    return _parse_choice(text, _PRIORITY_CHOICES, "priority")


def parse_status(text: str | None) -> ParseResult[StatusFilter]:
    return _parse_choice(text, _STATUS_CHOICES, "status")


def parse_search_kind(text: str | None) -> ParseResult[SearchKind]:
    return _parse_choice(text, _SEARCH_KIND_CHOICES, "search kind")


def parse_due_date(text: str | None) -> date:
    """Parse a dd/MM/yyyy date typed by the user."""
    raw = (text or "").strip()
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date '{raw}'. Use dd/MM/yyyy.") from None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def history_entry(ts: datetime, text: str) -> str:
    return f"{ts.strftime(HISTORY_TS_FORMAT)} - {text}"


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    due_date: date
    created_at: datetime

    priority: Priority = Priority.LOW
    is_complete: bool = False
    history: list[str] = field(default_factory=list)

    @property
    def status_label(self) -> str:
        return "Complete" if self.is_complete else "Pending"


@dataclass(frozen=True, slots=True)
class TaskChanges:
    """
    Field updates for TaskStore.update.

    None means "leave unchanged"; toggle_complete flips the completion flag.
    """

    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: Priority | None = None
    toggle_complete: bool = False

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.description is None
            and self.due_date is None
            and self.priority is None
            and not self.toggle_complete
        )
