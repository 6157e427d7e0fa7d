import json
import os
import shutil
import tempfile
from datetime import datetime
from typing import List

from pydantic import ValidationError

from todo_api.errors import PersistenceError
from todo_api.models import TaskItem


class TaskList:
    """Ordered list of todo items backed by a JSON file.

    An item's ID is its 1-based position, so deleting an item shifts the IDs
    of every item after it down by one. Mutations only touch memory; callers
    persist explicitly with save().
    """

    def __init__(self):
        self._items: List[TaskItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def _read_data(self, path: str) -> List[dict]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

        if not content.strip():
            return []

        try:
            data = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as e:
            raise PersistenceError(f"Malformed todo file {path}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"Malformed todo file {path}: expected a list")
        return data

    def _write_data(self, path: str, data: List[dict]):
        directory = os.path.dirname(os.path.abspath(path))
        tmp_path = None
        try:
            # Write next to the target and rename over it so a crash never
            # leaves a partially written file behind.
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, prefix=".todo-", delete=False
            ) as f:
                tmp_path = f.name
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            if os.path.exists(path):
                shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError(f"Failed to write {path}: {e}") from e

    def load(self, path: str):
        data = self._read_data(path)
        try:
            self._items = [TaskItem.model_validate(item) for item in data]
        except ValidationError as e:
            raise PersistenceError(f"Malformed todo item in {path}: {e}") from e

    def save(self, path: str):
        self._write_data(path, [item.model_dump(mode="json") for item in self._items])

    def _index(self, item_id: int) -> int:
        if item_id < 1 or item_id > len(self._items):
            raise IndexError(f"todo item {item_id} out of range")
        return item_id - 1

    def add(self, task: str) -> TaskItem:
        item = TaskItem(task=task)
        self._items.append(item)
        return item

    def complete(self, item_id: int):
        item = self._items[self._index(item_id)]
        item.done = True
        item.completed_at = datetime.now()

    def delete(self, item_id: int):
        del self._items[self._index(item_id)]

    def get_one(self, item_id: int) -> TaskItem:
        return self._items[self._index(item_id)]

    def get_all(self) -> List[TaskItem]:
        return list(self._items)
