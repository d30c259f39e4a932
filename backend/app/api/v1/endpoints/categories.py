"""
Endpoints REST para operaciones CRUD de categorías.

Todas las rutas exigen token; cada usuario solo ve y modifica sus categorías.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api import deps
from app.db.models.user_model import User
from app.schemas import category_schema
from app.services.category_service import CategoryService

router = APIRouter()

@router.post("/", response_model=category_schema.CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: CategoryService = Depends(deps.get_category_service),
    category_in: category_schema.CategoryCreate,
):
    """Crea una nueva categoría para el usuario autenticado."""
    return await service.create_category(db, current_user.id, category_in)

@router.get("/", response_model=List[category_schema.CategoryListItem])
async def read_categories(
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: CategoryService = Depends(deps.get_category_service),
):
    """Lista las categorías del usuario con el número de productos de cada una."""
    return await service.list_categories(db, user_id)

@router.get("/{category_id}", response_model=category_schema.CategoryDetail)
async def read_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
):
    """Obtiene los detalles de una categoría, incluidos sus productos."""
    return await service.get_category(db, category_id, user_id)

@router.patch("/{category_id}", response_model=category_schema.CategoryResponse)
async def update_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
    category_in: category_schema.CategoryUpdate,
):
    """Actualiza nombre y/o padre. parent_id=null deja la categoría en la raíz."""
    return await service.update_category(db, category_id, user_id, category_in)

@router.delete("/{category_id}", response_model=category_schema.CategorySummary)
async def delete_category(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: CategoryService = Depends(deps.get_category_service),
    category_id: int,
):
    """Elimina una categoría sin subcategorías; sus productos quedan sin categoría."""
    return await service.delete_category(db, category_id, user_id)
