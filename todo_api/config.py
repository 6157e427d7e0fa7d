import os
from typing import Mapping, Optional

from pydantic import BaseModel

DEFAULT_TODO_FILE = "todo.json"

ENV_VARS = {
    "todo_file": "TODO_FILE",
    "host": "TODO_HOST",
    "port": "TODO_PORT",
    "log_level": "TODO_LOG_LEVEL",
    "log_file": "TODO_LOG_FILE",
    "lock_timeout": "TODO_LOCK_TIMEOUT",
}


class Settings(BaseModel):
    todo_file: str = DEFAULT_TODO_FILE
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_file: Optional[str] = None
    # Seconds to wait for the todo file lock; None waits forever.
    lock_timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from TODO_* environment variables.

        Unset or empty variables fall back to the defaults.
        """
        if environ is None:
            environ = os.environ
        values = {}
        for field, var in ENV_VARS.items():
            value = environ.get(var)
            if value:
                values[field] = value
        return cls(**values)
