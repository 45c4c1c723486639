"""
Authorization policy for tasks.

All gating decisions live here as pure functions over the acting user and
the target task. Ownership is compared by id; roles are a flat ADMIN/USER
check with no hierarchy.
"""

import enum
import logging
from typing import Optional

from task_tracker.errors import UnauthorizedError
from task_tracker.models.user import Role

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    CREATE = "create"
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"


DENIED_MESSAGES = {
    Action.CREATE: "You don't have permission to create tasks",
    Action.VIEW: "You don't have permission to view this task",
    Action.UPDATE: "You don't have permission to update this task",
    Action.DELETE: "Only administrators can delete tasks",
}


def is_admin(user) -> bool:
    return user.role == Role.ADMIN


def is_owner(user, task) -> bool:
    return task.created_by_id == user.id


def can_create(user) -> bool:
    return True


def can_view(user, task) -> bool:
    return is_admin(user) or is_owner(user, task)


def can_update(user, task) -> bool:
    return can_view(user, task)


def can_delete(user, task) -> bool:
    return is_admin(user)


_DECISIONS = {
    Action.CREATE: lambda user, task: can_create(user),
    Action.VIEW: can_view,
    Action.UPDATE: can_update,
    Action.DELETE: can_delete,
}


def visibility_filter(user) -> Optional[int]:
    """
    Owner id a listing must be restricted to.

    Returns None when the caller may see every task.
    """
    if is_admin(user):
        return None
    return user.id


def authorize(user, task, action: Action) -> None:
    """
    Raise UnauthorizedError unless `user` may perform `action` on `task`.

    `task` is None for Action.CREATE.
    """
    if not _DECISIONS[action](user, task):
        task_id = task.id if task is not None else None
        logger.warning("Denied %s on task %s for user %s", action.value, task_id, user.id)
        raise UnauthorizedError(DENIED_MESSAGES[action])
