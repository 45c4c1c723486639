from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from task_tracker.database import get_db
from task_tracker.core.auth import get_current_user
from task_tracker.models.task import TaskStatus, Priority
from task_tracker.models.user import User
from task_tracker.schemas.auth import MessageResponse
from task_tracker.schemas.task import TaskRequest, TaskResponse
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])

@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await TaskService(db).create_task(current_user, task_in)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=0),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    priority: Optional[Priority] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Admins see every task, users only the ones they created
    return await TaskService(db).list_tasks(
        current_user,
        page=page,
        size=size,
        sort_by=sort_by,
        status=task_status,
        priority=priority,
    )


@router.get("/my-tasks", response_model=List[TaskResponse])
async def list_my_tasks(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await TaskService(db).list_my_tasks(current_user)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await TaskService(db).get_task(current_user, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_in: TaskRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await TaskService(db).update_task(current_user, task_id, task_in)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await TaskService(db).delete_task(current_user, task_id)
    return MessageResponse(message="Task deleted successfully")
