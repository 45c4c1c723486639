from task_tracker.errors import NotFoundError
from task_tracker.models.user import User
from task_tracker.repositories.user_repository import UserRepository


async def resolve_acting_user(users: UserRepository, email: str) -> User:
    """Load the user behind an already-verified identity (token subject)."""
    user = await users.get_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user
