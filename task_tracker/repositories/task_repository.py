"""
Task store - database operations for Task.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.models.task import Task, TaskStatus, Priority


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        return result.scalar_one_or_none()

    async def save(self, task: Task) -> Task:
        """Insert or update; flush assigns id and timestamps."""
        self.db.add(task)
        await self.db.flush()
        return task

    async def delete(self, task: Task) -> None:
        await self.db.delete(task)
        await self.db.flush()

    async def list_page(
        self,
        *,
        owner_id: Optional[int] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[Priority] = None,
        sort_column=Task.created_at,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Task]:
        """
        One page of tasks sorted descending by `sort_column`.

        owner_id=None means no owner restriction. Ties are broken by id
        descending so page boundaries are stable.
        """
        query = select(Task)
        if owner_id is not None:
            query = query.where(Task.created_by_id == owner_id)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)

        query = query.order_by(sort_column.desc(), Task.id.desc()).offset(offset).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_by_creator(self, owner_id: int) -> List[Task]:
        result = await self.db.execute(
            select(Task)
            .where(Task.created_by_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(result.scalars().all())
