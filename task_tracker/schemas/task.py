from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from task_tracker.models.task import TaskStatus, Priority
from .user import UserSummary


class TaskRequest(BaseModel):
    """Body of both create and update; update overwrites every field."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    status: TaskStatus
    priority: Priority
    # Clients send assignedToId; assigned_to_id is accepted too
    assigned_to_id: Optional[int] = Field(None, alias="assignedToId")

    model_config = {"populate_by_name": True}

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: Priority
    created_by: UserSummary
    assigned_to: Optional[UserSummary]
    created_at: datetime
    updated_at: datetime
