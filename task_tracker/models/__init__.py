from task_tracker.models.user import User, Role
from task_tracker.models.task import Task, TaskStatus, Priority

__all__ = ["User", "Role", "Task", "TaskStatus", "Priority"]
