from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

DEFAULT_CATEGORY = "general"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


class CompletionFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def matches(self, task: Task) -> bool:
        if self is CompletionFilter.ACTIVE:
            return not task.completed
        if self is CompletionFilter.COMPLETED:
            return task.completed
        return True


class PriorityFilter(StrEnum):
    ALL = "all"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def matches(self, task: Task) -> bool:
        return self is PriorityFilter.ALL or task.priority.value == self.value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False
    created_at: str = field(default_factory=lambda: utc_now().isoformat())
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    category: str = DEFAULT_CATEGORY
    order: int | None = None

    def __post_init__(self) -> None:
        self.text = self.text.strip()
        if not self.text:
            raise ValueError("text must not be empty")
        datetime.fromisoformat(self.created_at)
        self.priority = Priority(self.priority)

    @property
    def created(self) -> datetime:
        return datetime.fromisoformat(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "dueDate": self.due_date.isoformat() if self.due_date is not None else None,
            "priority": self.priority.value,
            "category": self.category,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Task":
        # Records saved before priorities and ordering existed only carry
        # id, text, completed and createdAt.
        due = raw.get("dueDate")
        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"completed must be a boolean, got {completed!r}")
        order = raw.get("order")
        return cls(
            id=str(raw["id"]),
            text=str(raw["text"]),
            completed=completed,
            created_at=str(raw.get("createdAt") or utc_now().isoformat()),
            due_date=date.fromisoformat(str(due)) if due else None,
            priority=Priority(raw.get("priority") or Priority.MEDIUM),
            category=str(raw.get("category") or DEFAULT_CATEGORY),
            order=int(order) if order is not None else None,
        )
