# backend/app/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Funcionalidades principales:
- Consultas con eager loading (categoría y dueño) para evitar N+1 queries
  y cargas perezosas, que no están permitidas con AsyncSession
- Listado por usuario, más recientes primero
- Alta con ID asignado por app.crud.id_allocator

Como en category_crud, las escrituras solo hacen flush; la confirmación
la hace el servicio dentro de transactional().
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud import id_allocator
from app.db.models.product_model import Product

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_product(db: AsyncSession, product_id: int) -> Optional[Product]:
    """Obtiene un producto por su ID con categoría y dueño precargados."""
    result = await db.execute(
        select(Product)
        .options(selectinload(Product.category), selectinload(Product.owner))
        .filter(Product.id == product_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_products_by_owner(db: AsyncSession, user_id: int) -> List[Product]:
    result = await db.execute(
        select(Product)
        .options(selectinload(Product.category))
        .filter(Product.user_id == user_id)
        .order_by(Product.created_at.desc(), Product.id.desc())
    )
    return result.scalars().all()


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_product(
    db: AsyncSession,
    user_id: int,
    name: str,
    description: Optional[str],
    price,
    stock: int,
    category_id: Optional[int] = None,
    image_url: Optional[str] = None,
    id_strategy: Optional[str] = None,
) -> Product:
    """Inserta un producto con el ID calculado por el asignador."""
    new_id = await id_allocator.allocate_id(db, Product, strategy=id_strategy)

    db_product = Product(
        name=name,
        description=description,
        price=price,
        stock=stock,
        image_url=image_url or None,
        user_id=user_id,
        category_id=category_id,
    )
    if new_id is not None:
        db_product.id = new_id
    db.add(db_product)
    await db.flush()

    await id_allocator.sync_id_sequence(db, Product, new_id)
    logger.debug("Producto %s insertado para el usuario %s", db_product.id, user_id)
    return db_product


async def update_product(db: AsyncSession, db_product: Product, update_data: Dict[str, Any]) -> Product:
    for key, value in update_data.items():
        setattr(db_product, key, value)

    db.add(db_product)
    await db.flush()
    return db_product


async def delete_product(db: AsyncSession, db_product: Product) -> Product:
    await db.delete(db_product)
    await db.flush()
    return db_product
