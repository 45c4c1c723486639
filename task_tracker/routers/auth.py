# task_tracker/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_tracker.models.user import User
from task_tracker.schemas.auth import RegisterRequest, LoginRequest, RefreshRequest, Token, MessageResponse
from task_tracker.schemas.user import UserResponse
from task_tracker.database import get_db
from task_tracker.core.auth import get_current_user
from task_tracker.services.auth_service import AuthService


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(user_in: RegisterRequest, db: AsyncSession = Depends(get_db)):
    await AuthService(db).register(user_in)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=Token)
async def login(user_in: LoginRequest, db: AsyncSession = Depends(get_db)):
    return await AuthService(db).login(user_in)


@router.post("/refresh", response_model=Token)
async def refresh(request: RefreshRequest, db: AsyncSession = Depends(get_db)):
    return await AuthService(db).refresh(request.refresh_token)


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user
