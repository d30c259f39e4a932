"""
Endpoints de autenticación: registro, login y usuario actual.
"""

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.config import Settings
from app.db.models.user_model import User
from app.schemas import user_schema
from app.services.user_service import user_service

router = APIRouter()

@router.post("/register", response_model=user_schema.AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: user_schema.UserCreate,
    db: AsyncSession = Depends(deps.get_db),
    config: Settings = Depends(deps.get_settings),
):
    """Registra un usuario y devuelve su token (login automático)."""
    return await user_service.register(db, user_in, config)

@router.post("/login", response_model=user_schema.AuthResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(deps.get_db),
    config: Settings = Depends(deps.get_settings),
):
    """Login con formulario OAuth2 (username/password)."""
    return await user_service.login(db, form_data.username, form_data.password, config)

@router.get("/me", response_model=user_schema.UserPublic)
async def read_users_me(current_user: User = Depends(deps.get_current_user)):
    return current_user
