# backend/app/crud/user_crud.py

"""
Operaciones CRUD para el modelo User.
"""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_model import User


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.username == username))
    return result.scalars().first()


async def get_user_by_username_or_email(db: AsyncSession, username: str, email: str) -> Optional[User]:
    """Se usa en el registro para detectar usuario o email ya en uso."""
    result = await db.execute(
        select(User).filter(or_(User.username == username, User.email == email))
    )
    return result.scalars().first()


async def create_user(db: AsyncSession, username: str, email: str, hashed_password: str) -> User:
    db_user = User(username=username, email=email, hashed_password=hashed_password)
    db.add(db_user)
    await db.flush()
    return db_user
