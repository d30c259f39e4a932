# backend/app/services/user_service.py
"""
Servicio de usuarios: registro, inicio de sesión y emisión de tokens.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core import security
from app.core.config import Settings
from app.core.exceptions import AuthenticationError, ConflictError
from app.crud import user_crud
from app.db.database import transactional
from app.db.models.user_model import User
from app.schemas import user_schema

logger = logging.getLogger(__name__)


class UserService:

    async def register(
        self, db: AsyncSession, user_in: user_schema.UserCreate, config: Optional[Settings] = None
    ) -> user_schema.AuthResponse:
        """Crea el usuario y devuelve directamente su token (auto-login)."""
        async with transactional(db):
            existing = await user_crud.get_user_by_username_or_email(db, user_in.username, user_in.email)
            if existing:
                raise ConflictError("Username or email already exists.")

            user = await user_crud.create_user(
                db,
                username=user_in.username,
                email=user_in.email,
                hashed_password=security.get_password_hash(user_in.password),
            )

        logger.info("Usuario %s registrado (id=%s)", user.username, user.id)
        return self.issue_token(user, config)

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        user = await user_crud.get_user_by_username(db, username)
        if not user or not security.verify_password(password, user.hashed_password):
            raise AuthenticationError("Incorrect username or password")
        return user

    async def login(
        self, db: AsyncSession, username: str, password: str, config: Optional[Settings] = None
    ) -> user_schema.AuthResponse:
        user = await self.authenticate(db, username, password)
        logger.info("Inicio de sesión del usuario %s", user.username)
        return self.issue_token(user, config)

    def issue_token(self, user: User, config: Optional[Settings] = None) -> user_schema.AuthResponse:
        token = security.create_access_token(user.id, extra_claims={"username": user.username}, config=config)
        return user_schema.AuthResponse(
            access_token=token,
            user=user_schema.UserPublic.model_validate(user),
        )


user_service = UserService()
