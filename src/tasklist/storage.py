from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Sequence

from tasklist.models import Task

logger = logging.getLogger(__name__)

STORAGE_KEY = "todos"


class TaskStorage:
    def __init__(self, path: Path, key: str = STORAGE_KEY) -> None:
        self.path = path
        self.key = key

    def load_tasks(self) -> list[Task]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            records = self._records(data)
            tasks = [Task.from_dict(item) for item in records]
        except (OSError, ValueError, KeyError, TypeError):
            logger.exception("Failed to parse stored tasks path=%s; starting empty.", self.path)
            return []

        seen: set[str] = set()
        unique: list[Task] = []
        for task in tasks:
            if task.id in seen:
                logger.warning("Dropping stored task with duplicate id=%s", task.id)
                continue
            seen.add(task.id)
            unique.append(task)

        logger.debug("Loaded %s tasks from %s", len(unique), self.path)
        return unique

    def save_tasks(self, tasks: Sequence[Task]) -> bool:
        try:
            payload = {self.key: [task.to_dict() for task in tasks]}
            text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save tasks path=%s", self.path)
            return False
        return True

    def _records(self, data: Any) -> list[dict[str, Any]]:
        # Older files hold a bare list instead of the keyed document.
        if isinstance(data, dict):
            data = data.get(self.key, [])
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ValueError(f"storage file must contain a JSON list under {self.key!r}")
        return data
