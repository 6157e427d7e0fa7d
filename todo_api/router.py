import logging
import re
from http import HTTPStatus
from typing import Container, Optional

from pydantic import TypeAdapter, ValidationError

from todo_api.database import TaskList
from todo_api.errors import InvalidDataError, MethodNotAllowedError, NotFoundError
from todo_api.guard import ConcurrencyGuard, guard_for
from todo_api.models import NewTask
from todo_api.responses import Reply, todo_envelope

logger = logging.getLogger("request_logger")

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# IDs are bounded like a signed 64-bit integer; anything wider is malformed.
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)

# A JSON null body is accepted and treated like an empty object.
_NEW_TASK_BODY = TypeAdapter(Optional[NewTask])


def validate_id(remainder: str, todo_list: TaskList) -> int:
    if not _ID_PATTERN.fullmatch(remainder):
        raise InvalidDataError(f"Invalid ID: {remainder!r} is not an integer")

    try:
        item_id = int(remainder)
    except ValueError as e:
        raise InvalidDataError(f"Invalid ID: {e}") from e
    if not MIN_ID <= item_id <= MAX_ID:
        raise InvalidDataError("Invalid ID: value out of range")

    if item_id < 1:
        raise InvalidDataError("Invalid ID: less than one")
    if item_id > len(todo_list):
        raise NotFoundError(f"ID {item_id} not found")
    return item_id


class ResourceRouter:
    """Maps an HTTP method and the path after /todo onto todo list operations.

    Every call loads the list from disk, applies at most one mutation and
    saves it back, all while holding the guard for the todo file.
    """

    def __init__(
        self,
        todo_file: str,
        guard: Optional[ConcurrencyGuard] = None,
        lock_timeout: Optional[float] = None,
    ):
        self.todo_file = todo_file
        self.guard = guard or guard_for(todo_file)
        self.lock_timeout = lock_timeout

    def handle(self, method: str, remainder: str, query: Container[str], body: bytes = b"") -> Reply:
        with self.guard.critical_section(self.lock_timeout):
            todo_list = TaskList()
            todo_list.load(self.todo_file)

            if remainder == "":
                return self._handle_collection(method, todo_list, body)

            item_id = validate_id(remainder, todo_list)
            return self._handle_item(method, todo_list, item_id, query)

    def _handle_collection(self, method: str, todo_list: TaskList, body: bytes) -> Reply:
        if method == "GET":
            return Reply(HTTPStatus.OK, todo_envelope(todo_list.get_all()))
        if method == "POST":
            try:
                new_task = _NEW_TASK_BODY.validate_json(body)
            except ValidationError as e:
                raise InvalidDataError(f"Invalid JSON: {e}") from e
            if new_task is None:
                new_task = NewTask()

            todo_list.add(new_task.task)
            todo_list.save(self.todo_file)
            logger.info(f"Added todo #{len(todo_list)}")
            return Reply(HTTPStatus.CREATED, "Todo added successfully")
        raise MethodNotAllowedError("Method not supported")

    def _handle_item(self, method: str, todo_list: TaskList, item_id: int, query: Container[str]) -> Reply:
        if method == "GET":
            return Reply(HTTPStatus.OK, todo_envelope([todo_list.get_one(item_id)]))
        if method == "PATCH":
            if "complete" not in query:
                raise InvalidDataError("Missing query param 'complete'")

            todo_list.complete(item_id)
            todo_list.save(self.todo_file)
            logger.info(f"Completed todo #{item_id}")
            return Reply(HTTPStatus.NO_CONTENT)
        if method == "DELETE":
            todo_list.delete(item_id)
            todo_list.save(self.todo_file)
            logger.info(f"Deleted todo #{item_id}")
            return Reply(HTTPStatus.NO_CONTENT)
        raise MethodNotAllowedError("Method not supported")
