"""
Demo data loaded into an empty database on startup.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.models.task import Task, TaskStatus, Priority
from task_tracker.models.user import User, Role
from task_tracker.repositories.task_repository import TaskRepository
from task_tracker.repositories.user_repository import UserRepository
from task_tracker.utils.password import hash_password

logger = logging.getLogger(__name__)

DEMO_USERS = [
    # username, email, password, role
    ("admin", "admin@example.com", "Admin@123", Role.ADMIN),
    ("user1", "user@example.com", "User@123", Role.USER),
    ("user2", "user2@example.com", "User@123", Role.USER),
]

DEMO_TASKS = [
    # title, description, status, priority, creator, assignee
    ("Setup Project Environment",
     "Install and configure all necessary development tools and dependencies",
     TaskStatus.DONE, Priority.HIGH, "admin", "user1"),
    ("Implement User Authentication",
     "Create JWT-based authentication system with login and registration",
     TaskStatus.IN_PROGRESS, Priority.HIGH, "admin", "user1"),
    ("Design Database Schema",
     "Create ER diagram and design database tables for the application",
     TaskStatus.DONE, Priority.MEDIUM, "user1", "user2"),
    ("Write API Documentation",
     "Document all REST API endpoints with examples and response formats",
     TaskStatus.TODO, Priority.MEDIUM, "user1", "user2"),
    ("Implement Unit Tests",
     "Write comprehensive unit tests for all service and controller methods",
     TaskStatus.TODO, Priority.LOW, "user2", None),
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """Populate demo users and tasks. Returns False if any user already exists."""
    users = UserRepository(db)
    if await users.count() > 0:
        return False

    by_username = {}
    for username, email, password, role in DEMO_USERS:
        user = User(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            role=role,
            is_active=True,
        )
        by_username[username] = await users.save(user)

    tasks = TaskRepository(db)
    for title, description, status, priority, creator, assignee in DEMO_TASKS:
        await tasks.save(Task(
            title=title,
            description=description,
            status=status,
            priority=priority,
            created_by=by_username[creator],
            assigned_to=by_username.get(assignee),
        ))

    await db.commit()

    logger.info("Demo data loaded: %d users, %d tasks", len(DEMO_USERS), len(DEMO_TASKS))
    for username, email, password, role in DEMO_USERS:
        logger.info("  %s %s / %s", role.value, email, password)
    return True
