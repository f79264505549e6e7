from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, TypeVar
from uuid import uuid4

from tasklist.models import (
    DEFAULT_CATEGORY,
    CompletionFilter,
    Priority,
    PriorityFilter,
    Task,
    utc_now,
)
from tasklist.query import count_label, project, summarize
from tasklist.reorder import DragSession, reorder_tasks
from tasklist.storage import TaskStorage

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class EditResult(Enum):
    UPDATED = "updated"
    DELETED_BECAUSE_EMPTY = "deleted_because_empty"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class ViewState:
    completion: CompletionFilter = CompletionFilter.ALL
    priority: PriorityFilter = PriorityFilter.ALL
    search: str = ""


@dataclass(frozen=True, slots=True)
class View:
    tasks: list[Task] = field(default_factory=list)
    total: int = 0
    active: int = 0
    has_completed: bool = False

    @property
    def label(self) -> str:
        return count_label(self.total, self.active)


@dataclass(slots=True)
class EditSession:
    task_id: str
    draft: str


class TaskService:
    def __init__(
        self,
        storage: TaskStorage,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.storage = storage
        self.state = ViewState()
        self._clock = clock or utc_now
        self._id_factory = id_factory or (lambda: str(uuid4()))
        self._tasks: list[Task] = storage.load_tasks()
        self._edit: EditSession | None = None
        self._drag: DragSession | None = None

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add_task(
        self,
        text: str,
        due_date: date | None = None,
        priority: Priority | str = Priority.MEDIUM,
        category: str = DEFAULT_CATEGORY,
    ) -> Task | None:
        text = text.strip()
        if not text:
            return None

        task_id = self._id_factory()
        while self.get_task(task_id) is not None:
            task_id = self._id_factory()

        task = Task(
            id=task_id,
            text=text,
            created_at=self._clock().isoformat(),
            due_date=due_date,
            priority=self._coerce(Priority, priority, Priority.MEDIUM),
            category=category.strip() or DEFAULT_CATEGORY,
            order=self._next_order(),
        )
        self._commit([task, *self._tasks])
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        return task

    def edit_task(self, task_id: str, text: str) -> EditResult:
        if self.get_task(task_id) is None:
            return EditResult.NOT_FOUND

        text = text.strip()
        if not text:
            self.delete_task(task_id)
            return EditResult.DELETED_BECAUSE_EMPTY

        self._commit([replace(task, text=text) if task.id == task_id else task for task in self._tasks])
        return EditResult.UPDATED

    def toggle_task(self, task_id: str, completed: bool) -> bool:
        if self.get_task(task_id) is None:
            return False
        self._commit(
            [replace(task, completed=completed) if task.id == task_id else task for task in self._tasks]
        )
        return True

    def delete_task(self, task_id: str) -> bool:
        kept = [task for task in self._tasks if task.id != task_id]
        if len(kept) == len(self._tasks):
            return False
        self._commit(kept)
        logger.debug("Task deleted id=%s", task_id)
        return True

    def clear_completed(self) -> int:
        kept = [task for task in self._tasks if not task.completed]
        removed = len(self._tasks) - len(kept)
        if removed:
            self._commit(kept)
            logger.debug("Cleared %s completed tasks", removed)
        return removed

    def reorder(self, ids: Iterable[str]) -> None:
        self._commit(reorder_tasks(self._tasks, ids))

    def set_filter(self, value: CompletionFilter | str) -> None:
        self.state.completion = self._coerce(CompletionFilter, value, self.state.completion)

    def set_priority_filter(self, value: PriorityFilter | str) -> None:
        self.state.priority = self._coerce(PriorityFilter, value, self.state.priority)

    def set_search(self, text: str) -> None:
        self.state.search = text

    def view(self) -> View:
        summary = summarize(self._tasks)
        return View(
            tasks=project(self._tasks, self.state.completion, self.state.priority, self.state.search),
            total=summary.total,
            active=summary.active,
            has_completed=summary.has_completed,
        )

    @property
    def editing_id(self) -> str | None:
        return self._edit.task_id if self._edit else None

    def begin_edit(self, task_id: str) -> bool:
        task = self.get_task(task_id)
        if task is None:
            return False
        if self._edit is not None and self._edit.task_id != task_id:
            # Flush the other task's draft; last writer wins.
            self.commit_edit()
        if self._edit is None or self._edit.task_id != task_id:
            self._edit = EditSession(task_id=task_id, draft=task.text)
        return True

    def update_draft(self, text: str) -> None:
        if self._edit is not None:
            self._edit.draft = text

    def commit_edit(self) -> EditResult | None:
        session, self._edit = self._edit, None
        if session is None:
            return None
        return self.edit_task(session.task_id, session.draft)

    def cancel_edit(self) -> None:
        self._edit = None

    @property
    def dragging_id(self) -> str | None:
        return self._drag.dragged_id if self._drag else None

    def begin_drag(self, task_id: str) -> bool:
        visible = [task.id for task in self.view().tasks]
        if task_id not in visible:
            return False
        self._drag = DragSession(visible, task_id)
        return True

    def drag_over(self, target_id: str, after: bool = False) -> list[str]:
        if self._drag is None:
            return []
        self._drag.hover(target_id, after=after)
        return self._drag.proposed()

    def drop(self) -> bool:
        session, self._drag = self._drag, None
        if session is None:
            return False
        self.reorder(session.proposed())
        return True

    def cancel_drag(self) -> None:
        self._drag = None

    def _commit(self, tasks: list[Task]) -> None:
        self._tasks = tasks
        if self._edit is not None and self.get_task(self._edit.task_id) is None:
            self._edit = None
        if not self.storage.save_tasks(self._tasks):
            logger.warning("Tasks kept in memory only; changes will be lost on exit.")

    def _next_order(self) -> int:
        # Deletes leave gaps, so the collection size alone can collide.
        highest = max((task.order for task in self._tasks if task.order is not None), default=-1)
        return max(len(self._tasks), highest + 1)

    @staticmethod
    def _coerce(enum_type: type[E], value: E | str, current: E) -> E:
        try:
            return enum_type(value)
        except ValueError:
            logger.warning("Ignoring unknown %s value %r", enum_type.__name__, value)
            return current
