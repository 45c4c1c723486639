from typing import Optional

from task_tracker.models.task import Task
from task_tracker.models.user import User
from task_tracker.schemas.task import TaskResponse
from task_tracker.schemas.user import UserSummary


def to_user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=user.id, username=user.username, email=user.email, role=user.role)


def to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        created_by=to_user_summary(task.created_by),
        assigned_to=to_user_summary(task.assigned_to),
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
