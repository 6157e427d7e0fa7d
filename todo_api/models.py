from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TaskItem(BaseModel):
    task: str
    done: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None


class NewTask(BaseModel):
    """Body of a create request. A missing or null "task" yields an empty task."""

    task: Optional[str] = ""

    @field_validator("task")
    @classmethod
    def null_task_is_empty(cls, value: Optional[str]) -> str:
        return value or ""
