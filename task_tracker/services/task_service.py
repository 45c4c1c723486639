"""
Task business logic service.

Every operation receives the acting user explicitly, loads the target task,
runs it past the authorization policy and commits at most once.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.config import settings
from task_tracker.errors import BadRequestError, NotFoundError
from task_tracker.models.task import Task, TaskStatus, Priority
from task_tracker.models.user import User
from task_tracker.repositories.task_repository import TaskRepository
from task_tracker.repositories.user_repository import UserRepository
from task_tracker.schemas.task import TaskRequest, TaskResponse
from task_tracker.services import policy
from task_tracker.services.mapper import to_task_response

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "id": Task.id,
    "title": Task.title,
    "status": Task.status,
    "priority": Task.priority,
    "createdAt": Task.created_at,
    "created_at": Task.created_at,
    "updatedAt": Task.updated_at,
    "updated_at": Task.updated_at,
}

DEFAULT_SORT = "createdAt"


class TaskService:
    """Service for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tasks = TaskRepository(db)
        self.users = UserRepository(db)

    async def _get_task_or_404(self, task_id: int) -> Task:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task not found with id: {task_id}")
        return task

    async def _get_user_or_404(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    async def create_task(self, acting_user: User, draft: TaskRequest) -> TaskResponse:
        policy.authorize(acting_user, None, policy.Action.CREATE)

        assignee = None
        if draft.assigned_to_id is not None:
            assignee = await self._get_user_or_404(draft.assigned_to_id)

        task = Task(
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            created_by=acting_user,
            assigned_to=assignee,
        )
        await self.tasks.save(task)
        await self.db.commit()

        logger.info("User %s created task %s", acting_user.id, task.id)
        return to_task_response(task)

    async def list_tasks(
        self,
        acting_user: User,
        page: int = 0,
        size: Optional[int] = None,
        sort_by: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[Priority] = None,
    ) -> List[TaskResponse]:
        """
        One page of the tasks visible to `acting_user`, newest `sort_by` first.

        Admins page over every task; other users over the tasks they created.
        """
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        if page < 0 or size < 0:
            raise BadRequestError("Page and size must not be negative")
        size = min(size, settings.MAX_PAGE_SIZE)

        sort_key = sort_by or DEFAULT_SORT
        sort_column = SORTABLE_COLUMNS.get(sort_key)
        if sort_column is None:
            raise BadRequestError(f"Cannot sort tasks by '{sort_key}'")

        if size == 0:
            return []

        tasks = await self.tasks.list_page(
            owner_id=policy.visibility_filter(acting_user),
            status=status,
            priority=priority,
            sort_column=sort_column,
            offset=page * size,
            limit=size,
        )
        return [to_task_response(task) for task in tasks]

    async def list_my_tasks(self, acting_user: User) -> List[TaskResponse]:
        tasks = await self.tasks.list_by_creator(acting_user.id)
        return [to_task_response(task) for task in tasks]

    async def get_task(self, acting_user: User, task_id: int) -> TaskResponse:
        task = await self._get_task_or_404(task_id)
        policy.authorize(acting_user, task, policy.Action.VIEW)
        return to_task_response(task)

    async def update_task(self, acting_user: User, task_id: int, draft: TaskRequest) -> TaskResponse:
        task = await self._get_task_or_404(task_id)
        policy.authorize(acting_user, task, policy.Action.UPDATE)

        # Resolve before mutating so a missing assignee leaves the task untouched
        assignee = None
        if draft.assigned_to_id is not None:
            assignee = await self._get_user_or_404(draft.assigned_to_id)

        task.title = draft.title
        task.description = draft.description
        task.status = draft.status
        task.priority = draft.priority
        task.assigned_to = assignee

        await self.tasks.save(task)
        await self.db.commit()

        logger.info("User %s updated task %s", acting_user.id, task.id)
        return to_task_response(task)

    async def delete_task(self, acting_user: User, task_id: int) -> None:
        task = await self._get_task_or_404(task_id)
        policy.authorize(acting_user, task, policy.Action.DELETE)

        await self.tasks.delete(task)
        await self.db.commit()

        logger.info("User %s deleted task %s", acting_user.id, task_id)
