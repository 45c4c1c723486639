# task_tracker/core/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from task_tracker.database import get_db
from task_tracker.core.security import decode_token, ACCESS_TOKEN_TYPE
from task_tracker.models.user import User
from task_tracker.repositories.user_repository import UserRepository
from task_tracker.services.identity import resolve_acting_user

reusable_oauth2 = HTTPBearer()

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: HTTPAuthorizationCredentials = Depends(reusable_oauth2)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token.credentials)
    except JWTError:
        raise credentials_exception

    email = payload.get("sub")
    if email is None or payload.get("type") != ACCESS_TOKEN_TYPE:
        raise credentials_exception

    # Token is trusted from here on; a missing user surfaces as NotFound
    return await resolve_acting_user(UserRepository(db), email)
