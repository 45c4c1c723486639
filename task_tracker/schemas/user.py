from pydantic import BaseModel, EmailStr
from datetime import datetime
from task_tracker.models.user import Role


class UserSummary(BaseModel):
    """Public view of a user embedded in task payloads."""
    id: int
    username: str
    email: EmailStr
    role: Role


class UserResponse(UserSummary):
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
