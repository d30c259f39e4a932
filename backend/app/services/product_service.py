# backend/app/services/product_service.py

"""
Capa de servicios para operaciones de negocio relacionadas con productos.

Responsabilidades principales:
- Solo el dueño de un producto puede modificarlo o borrarlo
- La categoría de un producto debe pertenecer a su mismo dueño
- Actualizaciones parciales por presencia explícita de cada campo
- Alta con ID asignado por el asignador de huecos, dentro de la transacción

El detalle de un producto (get_product) no comprueba la propiedad salvo que
PRODUCT_DETAIL_REQUIRES_OWNERSHIP esté activado; el listado sí está
limitado al usuario.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, settings
from app.core.exceptions import NotFoundError
from app.core.permissions import ensure_owner
from app.crud import category_crud, product_crud
from app.db.database import transactional
from app.db.models.product_model import Product
from app.schemas import product_schema

# Configurar logger
logger = logging.getLogger(__name__)


class ProductService:
    """
    Servicio para operaciones de negocio relacionadas con productos.

    Características principales:
    - Validación de la categoría asociada (existencia y dueño)
    - Comprobación de propiedad en toda mutación
    - Campos omitidos en una actualización conservan su valor
    """

    def __init__(self, detail_requires_ownership: Optional[bool] = None, id_strategy: Optional[str] = None):
        self._detail_requires_ownership = detail_requires_ownership
        self.id_strategy = id_strategy

    @classmethod
    def from_settings(cls, config: Settings) -> "ProductService":
        """Servicio ligado a una configuración concreta (la de la app que atiende la petición)."""
        return cls(
            detail_requires_ownership=config.PRODUCT_DETAIL_REQUIRES_OWNERSHIP,
            id_strategy=config.ID_ALLOCATION_STRATEGY,
        )

    @property
    def detail_requires_ownership(self) -> bool:
        if self._detail_requires_ownership is None:
            return settings.PRODUCT_DETAIL_REQUIRES_OWNERSHIP
        return self._detail_requires_ownership

    async def _check_category(self, db: AsyncSession, category_id: int, user_id: int) -> None:
        category = await category_crud.get_category(db, category_id)
        if not category:
            raise NotFoundError(f"Category with id {category_id} not found.")
        ensure_owner(category.user_id, user_id, "No permission to use this category.")

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_product(self, db: AsyncSession, product_id: int, user_id: Optional[int] = None) -> Product:
        """
        Obtiene un producto con su categoría y dueño.

        user_id solo se tiene en cuenta si el detalle exige propiedad.
        """
        product = await product_crud.get_product(db, product_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found.")
        if self.detail_requires_ownership and user_id is not None:
            ensure_owner(product.user_id, user_id, "No permission to access this product.")
        return product

    async def list_products(self, db: AsyncSession, user_id: int) -> List[Product]:
        return await product_crud.get_products_by_owner(db, user_id)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_product(self, db: AsyncSession, user_id: int, product_in: product_schema.ProductCreate) -> Product:
        """
        Crea un producto para user_id.

        Raises:
            NotFoundError: la categoría indicada no existe
            ForbiddenError: la categoría pertenece a otro usuario
        """
        async with transactional(db):
            if product_in.category_id is not None:
                await self._check_category(db, product_in.category_id, user_id)

            product = await product_crud.create_product(
                db,
                user_id=user_id,
                name=product_in.name,
                description=product_in.description,
                price=product_in.price,
                stock=product_in.stock,
                category_id=product_in.category_id,
                image_url=product_in.image_url,
                id_strategy=self.id_strategy,
            )
            product_id = product.id

        logger.info("Producto %s '%s' creado para el usuario %s", product_id, product_in.name, user_id)
        return await product_crud.get_product(db, product_id)

    async def update_product(
        self, db: AsyncSession, product_id: int, user_id: int, product_in: product_schema.ProductUpdate
    ) -> Product:
        """
        Actualiza solo los campos enviados.

        Un valor presente se aplica aunque sea 0 o cadena vacía;
        category_id=None deja el producto sin categoría.
        """
        update_data = product_in.model_dump(exclude_unset=True)

        async with transactional(db):
            product = await self.get_product(db, product_id)
            ensure_owner(product.user_id, user_id, "No permission to modify this product.")

            new_category_id = update_data.get('category_id')
            if new_category_id is not None:
                await self._check_category(db, new_category_id, user_id)

            await product_crud.update_product(db, product, update_data)

        logger.info("Producto %s actualizado: %s", product_id, sorted(update_data))
        return await product_crud.get_product(db, product_id)

    async def delete_product(self, db: AsyncSession, product_id: int, user_id: int) -> Product:
        async with transactional(db):
            product = await self.get_product(db, product_id)
            ensure_owner(product.user_id, user_id, "No permission to delete this product.")
            await product_crud.delete_product(db, product)

        logger.info("Producto %s eliminado por el usuario %s", product_id, user_id)
        return product

# Instancia con la configuración global; los endpoints usan deps.get_product_service
product_service = ProductService()
