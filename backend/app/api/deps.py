# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: la sesión de base de datos (obtenida del
manejador Database guardado en app.state al arrancar), la configuración
con la que se construyó la app, los servicios ligados a esa configuración
y el usuario autenticado a partir del token bearer.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import security
from app.core.config import Settings, settings
from app.core.exceptions import AuthenticationError
from app.crud import user_crud
from app.db.models.user_model import User
from app.services.category_service import CategoryService
from app.services.product_service import ProductService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    database = request.app.state.database
    async with database.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    Usa la configuración con la que se construyó la app, si la hay.
    """
    return getattr(request.app.state, "settings", settings)


def get_category_service(config: Settings = Depends(get_settings)) -> CategoryService:
    return CategoryService.from_settings(config)


def get_product_service(config: Settings = Depends(get_settings)) -> ProductService:
    return ProductService.from_settings(config)


async def get_current_user_id(
    token: str = Depends(oauth2_scheme),
    config: Settings = Depends(get_settings),
) -> int:
    """Id del usuario contenido en el token (sin consultar la base de datos)."""
    return security.decode_access_token(token, config)


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Usuario del token; un token de un usuario borrado no autentica."""
    user = await user_crud.get_user(db, user_id)
    if not user:
        raise AuthenticationError("Could not validate credentials")
    return user
