from __future__ import annotations

import argparse
import logging
from datetime import date

from tasklist.config import load_settings
from tasklist.logging_setup import setup_logging
from tasklist.models import CompletionFilter, Priority, PriorityFilter, Task
from tasklist.service import EditResult, TaskService
from tasklist.storage import TaskStorage


def build_service() -> TaskService:
    settings = load_settings()
    return TaskService(TaskStorage(settings.db_path))


def format_task(task: Task) -> str:
    state = "x" if task.completed else " "
    due = f" due={task.due_date.isoformat()}" if task.due_date else ""
    return f"[{state}] ({task.priority}) {task.id} {task.text} #{task.category}{due}"


def cmd_add(args: argparse.Namespace) -> int:
    service = build_service()
    task = service.add_task(
        text=args.text,
        due_date=args.due,
        priority=args.priority,
        category=args.category,
    )
    if task is None:
        print("task text must not be empty")
        return 1
    print(f"created: {task.id}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    service = build_service()
    service.set_filter(args.filter)
    service.set_priority_filter(args.priority)
    service.set_search(args.search or "")
    view = service.view()
    if not view.tasks:
        print("no tasks")
    for task in view.tasks:
        print(format_task(task))
    print(view.label)
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    service = build_service()
    result = service.edit_task(args.task_id, args.text)
    if result is EditResult.NOT_FOUND:
        print("not found")
        return 1
    print("deleted" if result is EditResult.DELETED_BECAUSE_EMPTY else "updated")
    return 0


def cmd_done(args: argparse.Namespace) -> int:
    service = build_service()
    changed = service.toggle_task(args.task_id, completed=True)
    print("done" if changed else "not found")
    return 0 if changed else 1


def cmd_undo(args: argparse.Namespace) -> int:
    service = build_service()
    changed = service.toggle_task(args.task_id, completed=False)
    print("reopened" if changed else "not found")
    return 0 if changed else 1


def cmd_delete(args: argparse.Namespace) -> int:
    service = build_service()
    changed = service.delete_task(args.task_id)
    print("deleted" if changed else "not found")
    return 0 if changed else 1


def cmd_clear(_args: argparse.Namespace) -> int:
    service = build_service()
    removed = service.clear_completed()
    print(f"cleared {removed}")
    return 0


def cmd_move(args: argparse.Namespace) -> int:
    service = build_service()
    service.reorder(args.task_ids)
    for task in service.view().tasks:
        print(format_task(task))
    return 0


def cmd_stats(_args: argparse.Namespace) -> int:
    service = build_service()
    view = service.view()
    print(f"total={view.total} active={view.active} done={view.total - view.active}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasklist", description="Task list manager")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="add task")
    add.add_argument("text")
    add.add_argument("-p", "--priority", choices=[p.value for p in Priority], default=Priority.MEDIUM.value)
    add.add_argument("-c", "--category", default="general")
    add.add_argument("--due", type=date.fromisoformat, help="due date, YYYY-MM-DD")
    add.set_defaults(handler=cmd_add)

    show = sub.add_parser("list", help="list tasks")
    show.add_argument("--filter", choices=[f.value for f in CompletionFilter], default=CompletionFilter.ALL.value)
    show.add_argument("--priority", choices=[f.value for f in PriorityFilter], default=PriorityFilter.ALL.value)
    show.add_argument("--search")
    show.set_defaults(handler=cmd_list)

    edit = sub.add_parser("edit", help="change task text (empty text deletes the task)")
    edit.add_argument("task_id")
    edit.add_argument("text")
    edit.set_defaults(handler=cmd_edit)

    done = sub.add_parser("done", help="mark task as completed")
    done.add_argument("task_id")
    done.set_defaults(handler=cmd_done)

    undo = sub.add_parser("undo", help="mark task as active again")
    undo.add_argument("task_id")
    undo.set_defaults(handler=cmd_undo)

    delete = sub.add_parser("delete", help="delete task")
    delete.add_argument("task_id")
    delete.set_defaults(handler=cmd_delete)

    clear = sub.add_parser("clear", help="delete all completed tasks")
    clear.set_defaults(handler=cmd_clear)

    move = sub.add_parser("move", help="set manual order from a sequence of task ids")
    move.add_argument("task_ids", nargs="+")
    move.set_defaults(handler=cmd_move)

    stats = sub.add_parser("stats", help="show counts")
    stats.set_defaults(handler=cmd_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, load_settings().log_level, logging.WARNING))
    handler = args.handler
    return int(handler(args))


if __name__ == "__main__":
    raise SystemExit(main())
