# backend/app/services/category_service.py
"""
Servicio para operaciones de negocio relacionadas con categorías.

Este servicio se encarga de gestionar la lógica de negocio para el manejo de
categorías de cada usuario, incluyendo validaciones de unicidad por dueño,
verificación de propiedad del padre y orquestación de operaciones que
involucran varias entidades (borrar una categoría desvincula sus productos).
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.permissions import ensure_owner
from app.crud import category_crud
from app.db.database import transactional
from app.db.models.category_model import Category
from app.schemas import category_schema

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Servicio para operaciones de negocio relacionadas con categorías.

    Características:
    - Nombre único dentro de las categorías de cada usuario
    - El padre debe existir y pertenecer al mismo usuario
    - Sin auto-referencias ni ciclos en la jerarquía
    - Solo se borran categorías sin hijas; sus productos quedan sin categoría
    """

    def __init__(self, id_strategy: Optional[str] = None):
        # None: se usa ID_ALLOCATION_STRATEGY de la configuración global
        self.id_strategy = id_strategy

    @classmethod
    def from_settings(cls, config: Settings) -> "CategoryService":
        return cls(id_strategy=config.ID_ALLOCATION_STRATEGY)

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_category(self, db: AsyncSession, category_id: int, user_id: Optional[int] = None) -> Category:
        """
        Obtiene una categoría con padre, hijas y productos.

        Si se indica user_id, la categoría debe pertenecer a ese usuario.

        Raises:
            NotFoundError: si la categoría no existe
            ForbiddenError: si user_id no es el dueño
        """
        category = await category_crud.get_category_with_relations(db, category_id, include_products=True)
        if not category:
            raise NotFoundError(f"Category with id {category_id} not found.")
        if user_id is not None:
            ensure_owner(category.user_id, user_id, "No permission to access this category.")
        return category

    async def list_categories(self, db: AsyncSession, user_id: int) -> List[Category]:
        """Categorías del usuario, más recientes primero, con product_count."""
        return await category_crud.get_categories_by_owner(db, user_id)

    async def _resolve_parent(self, db: AsyncSession, parent_id: int, user_id: int) -> Category:
        parent = await category_crud.get_category(db, parent_id)
        if not parent:
            raise NotFoundError(f"Parent category with id {parent_id} not found.")
        ensure_owner(parent.user_id, user_id, "No permission to use this parent category.")
        return parent

    # ========================================
    # OPERACIONES DE ESCRITURA CON LÓGICA DE NEGOCIO
    # ========================================

    async def create_category(self, db: AsyncSession, user_id: int, category_in: category_schema.CategoryCreate) -> Category:
        """
        Crea una nueva categoría para user_id.

        Raises:
            ValidationError: nombre vacío
            ConflictError: el usuario ya tiene una categoría con ese nombre
            NotFoundError / ForbiddenError: padre inexistente o ajeno
        """
        name = category_in.name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty.")

        async with transactional(db):
            existing = await category_crud.get_category_by_owner_and_name(db, user_id, name)
            if existing:
                raise ConflictError(f"Category '{name}' already exists.")

            if category_in.parent_id is not None:
                await self._resolve_parent(db, category_in.parent_id, user_id)

            category = await category_crud.create_category(
                db, user_id=user_id, name=name, parent_id=category_in.parent_id,
                id_strategy=self.id_strategy,
            )
            category_id = category.id

        logger.info("Categoría %s '%s' creada para el usuario %s", category_id, name, user_id)
        return await category_crud.get_category_with_relations(db, category_id)

    async def update_category(
        self, db: AsyncSession, category_id: int, user_id: int, category_in: category_schema.CategoryUpdate
    ) -> Category:
        """
        Actualiza nombre y/o padre de una categoría del usuario.

        parent_id ausente deja el padre igual; parent_id=None lo elimina.
        """
        update_data = category_in.model_dump(exclude_unset=True)

        async with transactional(db):
            category = await self.get_category(db, category_id, user_id)

            if 'name' in update_data:
                name = update_data['name'].strip()
                if not name:
                    raise ValidationError("Category name cannot be empty.")
                update_data['name'] = name
                if name != category.name:
                    existing = await category_crud.get_category_by_owner_and_name(db, user_id, name)
                    if existing and existing.id != category_id:
                        raise ConflictError(f"Category '{name}' already exists.")

            new_parent_id = update_data.get('parent_id')
            if new_parent_id is not None:
                if new_parent_id == category_id:
                    raise ConflictError("A category cannot be its own parent.")
                await self._resolve_parent(db, new_parent_id, user_id)

                descendant_ids = await category_crud.get_category_and_all_children_ids(db, category_id)
                if new_parent_id in descendant_ids:
                    raise ConflictError("Cannot move a category under one of its own descendants.")

            await category_crud.update_category(db, category, update_data)

        logger.info("Categoría %s actualizada: %s", category_id, sorted(update_data))
        return await category_crud.get_category_with_relations(db, category_id)

    async def delete_category(self, db: AsyncSession, category_id: int, user_id: int) -> Category:
        """
        Elimina una categoría sin hijas.

        Los productos que la referencian quedan con category_id = NULL en la
        misma transacción que el borrado.
        """
        async with transactional(db):
            category = await self.get_category(db, category_id, user_id)

            if await category_crud.has_children(db, category_id):
                raise ConflictError("Cannot delete a category that has child categories.")

            detached = await category_crud.detach_products(db, category_id)
            await category_crud.delete_category(db, category)

        logger.info("Categoría %s eliminada (%s productos desvinculados)", category_id, detached)
        return category

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

# Instancia con la configuración global; los endpoints usan deps.get_category_service
category_service = CategoryService()
