from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from tasklist.models import DEFAULT_CATEGORY, CompletionFilter, Priority, PriorityFilter
from tasklist.service import EditResult, TaskService, View


@dataclass(frozen=True, slots=True)
class Add:
    text: str
    due_date: date | None = None
    priority: Priority | str = Priority.MEDIUM
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class Edit:
    task_id: str
    text: str


@dataclass(frozen=True, slots=True)
class Toggle:
    task_id: str
    completed: bool


@dataclass(frozen=True, slots=True)
class Delete:
    task_id: str


@dataclass(frozen=True, slots=True)
class ClearCompleted:
    pass


@dataclass(frozen=True, slots=True)
class SetFilter:
    value: CompletionFilter | str


@dataclass(frozen=True, slots=True)
class SetPriorityFilter:
    value: PriorityFilter | str


@dataclass(frozen=True, slots=True)
class SetSearch:
    text: str


@dataclass(frozen=True, slots=True)
class Reorder:
    ids: tuple[str, ...]


Intent = Add | Edit | Toggle | Delete | ClearCompleted | SetFilter | SetPriorityFilter | SetSearch | Reorder


@dataclass(frozen=True, slots=True)
class Outcome:
    view: View
    refocus: bool = False
    edit_result: EditResult | None = None


def handle_add(service: TaskService, intent: Add) -> Outcome:
    task = service.add_task(intent.text, intent.due_date, intent.priority, intent.category)
    return Outcome(view=service.view(), refocus=task is None)


def handle_edit(service: TaskService, intent: Edit) -> Outcome:
    result = service.edit_task(intent.task_id, intent.text)
    return Outcome(view=service.view(), edit_result=result)


def handle_toggle(service: TaskService, intent: Toggle) -> Outcome:
    service.toggle_task(intent.task_id, intent.completed)
    return Outcome(view=service.view())


def handle_delete(service: TaskService, intent: Delete) -> Outcome:
    service.delete_task(intent.task_id)
    return Outcome(view=service.view())


def handle_clear_completed(service: TaskService, _intent: ClearCompleted) -> Outcome:
    service.clear_completed()
    return Outcome(view=service.view())


def handle_set_filter(service: TaskService, intent: SetFilter) -> Outcome:
    service.set_filter(intent.value)
    return Outcome(view=service.view())


def handle_set_priority_filter(service: TaskService, intent: SetPriorityFilter) -> Outcome:
    service.set_priority_filter(intent.value)
    return Outcome(view=service.view())


def handle_set_search(service: TaskService, intent: SetSearch) -> Outcome:
    service.set_search(intent.text)
    return Outcome(view=service.view())


def handle_reorder(service: TaskService, intent: Reorder) -> Outcome:
    service.reorder(intent.ids)
    return Outcome(view=service.view())


HANDLERS: dict[type, Callable[[TaskService, Any], Outcome]] = {
    Add: handle_add,
    Edit: handle_edit,
    Toggle: handle_toggle,
    Delete: handle_delete,
    ClearCompleted: handle_clear_completed,
    SetFilter: handle_set_filter,
    SetPriorityFilter: handle_set_priority_filter,
    SetSearch: handle_set_search,
    Reorder: handle_reorder,
}


def dispatch(service: TaskService, intent: Intent) -> Outcome:
    handler = HANDLERS.get(type(intent))
    if handler is None:
        raise TypeError(f"unsupported intent: {type(intent).__name__}")
    return handler(service, intent)
