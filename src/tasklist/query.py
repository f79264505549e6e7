from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from tasklist.models import CompletionFilter, PriorityFilter, Task


@dataclass(frozen=True, slots=True)
class Summary:
    total: int
    active: int
    has_completed: bool


def matches_search(task: Task, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in task.text.lower() or needle in task.category.lower()


def has_manual_order(tasks: Iterable[Task]) -> bool:
    return all(task.order is not None for task in tasks)


def automatic_sort_key(task: Task) -> tuple[bool, int, bool, date, float]:
    return (
        task.completed,
        -task.priority.rank,
        task.due_date is None,
        task.due_date or date.max,
        -task.created.timestamp(),
    )


def project(
    tasks: Sequence[Task],
    completion: CompletionFilter = CompletionFilter.ALL,
    priority: PriorityFilter = PriorityFilter.ALL,
    search: str = "",
) -> list[Task]:
    visible = [
        task
        for task in tasks
        if completion.matches(task) and priority.matches(task) and matches_search(task, search)
    ]
    # A single task without an order puts the whole view back on automatic sorting.
    if has_manual_order(visible):
        return sorted(visible, key=lambda item: item.order)
    return sorted(visible, key=automatic_sort_key)


def summarize(tasks: Iterable[Task]) -> Summary:
    task_list = list(tasks)
    active = sum(1 for task in task_list if not task.completed)
    return Summary(
        total=len(task_list),
        active=active,
        has_completed=active < len(task_list),
    )


def count_label(total: int, active: int) -> str:
    noun = "item" if total == 1 else "items"
    return f"{total} {noun} total • {active} active"
