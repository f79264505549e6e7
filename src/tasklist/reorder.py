from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from tasklist.models import Task


def reorder_tasks(tasks: Sequence[Task], ids: Iterable[str]) -> list[Task]:
    """
    Rewrite the collection to follow a dropped id sequence.

    Ids that are unknown or repeated are skipped. Tasks missing from the
    sequence (for example hidden by a filter while dragging) keep their
    relative order and go after the listed ones. Every task gets its new
    zero-based position as `order`.
    """
    by_id = {task.id: task for task in tasks}
    placed: list[Task] = []
    seen: set[str] = set()
    for task_id in ids:
        if task_id in seen or task_id not in by_id:
            continue
        seen.add(task_id)
        placed.append(by_id[task_id])

    placed.extend(task for task in tasks if task.id not in seen)
    return [replace(task, order=index) for index, task in enumerate(placed)]


class DragSession:
    def __init__(self, visible_ids: Sequence[str], dragged_id: str) -> None:
        if dragged_id not in visible_ids:
            raise ValueError(f"dragged task {dragged_id!r} is not visible")
        self.dragged_id = dragged_id
        self._ids = list(visible_ids)

    def hover(self, target_id: str, after: bool = False) -> None:
        if target_id == self.dragged_id or target_id not in self._ids:
            return
        self._ids.remove(self.dragged_id)
        index = self._ids.index(target_id) + (1 if after else 0)
        self._ids.insert(index, self.dragged_id)

    def proposed(self) -> list[str]:
        return list(self._ids)
