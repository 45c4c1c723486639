"""
Registration, login and token refresh.
"""

import logging

from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    REFRESH_TOKEN_TYPE,
)
from task_tracker.errors import AuthenticationError, BadRequestError
from task_tracker.models.user import User, Role
from task_tracker.repositories.user_repository import UserRepository
from task_tracker.schemas.auth import RegisterRequest, LoginRequest, Token
from task_tracker.schemas.user import UserResponse
from task_tracker.services.identity import resolve_acting_user
from task_tracker.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> Token:
    claims = {"sub": user.email}
    return Token(
        access_token=create_access_token(claims),
        refresh_token=create_refresh_token(claims),
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def register(self, request: RegisterRequest) -> User:
        if await self.users.exists_by_username(request.username):
            raise BadRequestError("Username is already taken")
        if await self.users.exists_by_email(request.email):
            raise BadRequestError("Email is already registered")

        user = User(
            username=request.username,
            email=request.email,
            hashed_password=hash_password(request.password),
            role=Role.USER,
            is_active=True,
        )
        await self.users.save(user)
        await self.db.commit()

        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    async def login(self, request: LoginRequest) -> Token:
        user = await self.users.get_by_email(request.email)
        if not user or not verify_password(request.password, user.hashed_password):
            logger.warning("Failed login for %s", request.email)
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise AuthenticationError("Account is disabled")
        return issue_tokens(user)

    async def refresh(self, refresh_token: str) -> Token:
        try:
            payload = decode_token(refresh_token)
        except JWTError:
            raise AuthenticationError("Invalid refresh token")

        email = payload.get("sub")
        if email is None or payload.get("type") != REFRESH_TOKEN_TYPE:
            raise AuthenticationError("Invalid refresh token")

        user = await resolve_acting_user(self.users, email)
        if not user.is_active:
            raise AuthenticationError("Account is disabled")
        return issue_tokens(user)
