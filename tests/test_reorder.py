from __future__ import annotations

import pytest

from tasklist.models import Task
from tasklist.reorder import DragSession, reorder_tasks


def make_tasks(*ids: str) -> list[Task]:
    return [Task(id=task_id, text=task_id.upper()) for task_id in ids]


def test_reorder_assigns_positions() -> None:
    result = reorder_tasks(make_tasks("a", "b", "c"), ["b", "a", "c"])
    assert [(task.id, task.order) for task in result] == [("b", 0), ("a", 1), ("c", 2)]


def test_reorder_appends_missing_tasks_in_relative_order() -> None:
    result = reorder_tasks(make_tasks("a", "b", "c", "d"), ["d", "b"])
    assert [task.id for task in result] == ["d", "b", "a", "c"]
    assert [task.order for task in result] == [0, 1, 2, 3]


def test_reorder_ignores_unknown_and_repeated_ids() -> None:
    result = reorder_tasks(make_tasks("a", "b"), ["x", "b", "b", "a"])
    assert [task.id for task in result] == ["b", "a"]


def test_reorder_does_not_touch_input() -> None:
    tasks = make_tasks("a", "b")
    reorder_tasks(tasks, ["b", "a"])
    assert [task.order for task in tasks] == [None, None]


def test_drag_session_moves_before_and_after_target() -> None:
    session = DragSession(["a", "b", "c", "d"], "a")

    session.hover("c")
    assert session.proposed() == ["b", "a", "c", "d"]

    session.hover("d", after=True)
    assert session.proposed() == ["b", "c", "d", "a"]


def test_drag_session_ignores_self_and_unknown_targets() -> None:
    session = DragSession(["a", "b"], "b")
    session.hover("b")
    session.hover("zzz")
    assert session.proposed() == ["a", "b"]


def test_drag_session_requires_visible_task() -> None:
    with pytest.raises(ValueError):
        DragSession(["a"], "b")
