# backend/app/crud/category_crud.py

"""
Operaciones CRUD para el modelo Category.

Este módulo implementa las operaciones de Create, Read, Update, Delete para
categorías, proporcionando una capa de abstracción entre los servicios y la
base de datos.

Funcionalidades principales:
- Consultas por ID y por (dueño, nombre)
- Manejo de jerarquías (categorías padre/hijo, descendientes vía CTE recursiva)
- Listados por usuario con recuento de productos
- Desvinculación de productos al borrar una categoría

Las funciones de escritura NO confirman la transacción: solo hacen flush.
El servicio las agrupa dentro de app.db.database.transactional() para que
la asignación de ID, el insert y los efectos colaterales sean atómicos.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud import id_allocator
from app.db.models.category_model import Category
from app.db.models.product_model import Product

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_category(db: AsyncSession, category_id: int) -> Optional[Category]:
    """Obtiene una categoría por su ID, sin relaciones."""
    result = await db.execute(select(Category).filter(Category.id == category_id))
    return result.scalars().first()


async def get_category_with_relations(
    db: AsyncSession, category_id: int, include_products: bool = False
) -> Optional[Category]:
    """
    Obtiene una categoría con padre e hijas precargados.

    populate_existing fuerza a recargar la instancia aunque ya esté en la
    sesión, de modo que tras un update las relaciones reflejan el estado
    confirmado.
    """
    options = [selectinload(Category.parent), selectinload(Category.children)]
    if include_products:
        options.append(selectinload(Category.products))

    result = await db.execute(
        select(Category)
        .options(*options)
        .filter(Category.id == category_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_category_by_owner_and_name(db: AsyncSession, user_id: int, name: str) -> Optional[Category]:
    """
    Busca una categoría por nombre dentro de las categorías de un usuario.

    El nombre es único por dueño: dos usuarios distintos pueden tener
    una categoría "Electrónica" cada uno.
    """
    result = await db.execute(
        select(Category).filter(Category.user_id == user_id, Category.name == name)
    )
    return result.scalars().first()


async def get_categories_by_owner(db: AsyncSession, user_id: int) -> List[Category]:
    """
    Categorías de un usuario, más recientes primero, con padre, hijas y
    el número de productos asociados en el atributo product_count.
    """
    product_count = (
        select(func.count(Product.id))
        .where(Product.category_id == Category.id)
        .correlate(Category)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Category, product_count.label("product_count"))
        .options(selectinload(Category.parent), selectinload(Category.children))
        .filter(Category.user_id == user_id)
        .order_by(Category.created_at.desc(), Category.id.desc())
    )

    categories = []
    for category, count in result.all():
        category.product_count = count
        categories.append(category)
    return categories


async def has_children(db: AsyncSession, category_id: int) -> bool:
    result = await db.execute(
        select(func.count(Category.id)).filter(Category.parent_id == category_id)
    )
    return result.scalar_one() > 0


async def get_category_and_all_children_ids(db: AsyncSession, category_id: int) -> List[int]:
    """
    Obtiene el ID de la categoría dada y los IDs de toda su descendencia.
    Utiliza una consulta recursiva (CTE) para recorrer la jerarquía.
    """
    category_cte = select(Category.id).filter(Category.id == category_id).cte(name='category_cte', recursive=True)

    recursive_part = select(Category.id).join(category_cte, Category.parent_id == category_cte.c.id)

    full_cte = category_cte.union_all(recursive_part)

    result = await db.execute(select(full_cte.c.id))

    return [r[0] for r in result.fetchall()]


# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_category(
    db: AsyncSession,
    user_id: int,
    name: str,
    parent_id: Optional[int] = None,
    id_strategy: Optional[str] = None,
) -> Category:
    """
    Inserta una categoría con el ID que indique el asignador.

    Debe ejecutarse dentro de una transacción abierta: el cálculo del ID, el
    insert y el ajuste de la secuencia forman una sola unidad.
    """
    new_id = await id_allocator.allocate_id(db, Category, strategy=id_strategy)

    db_category = Category(name=name, user_id=user_id, parent_id=parent_id)
    if new_id is not None:
        db_category.id = new_id
    db.add(db_category)
    await db.flush()

    await id_allocator.sync_id_sequence(db, Category, new_id)
    return db_category


async def update_category(db: AsyncSession, db_category: Category, update_data: Dict[str, Any]) -> Category:
    """Aplica solo los campos presentes en update_data."""
    for key, value in update_data.items():
        setattr(db_category, key, value)

    db.add(db_category)
    await db.flush()
    return db_category


async def detach_products(db: AsyncSession, category_id: int) -> int:
    """Deja sin categoría a todos los productos que apuntan a category_id."""
    result = await db.execute(
        update(Product)
        .where(Product.category_id == category_id)
        .values(category_id=None)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


async def delete_category(db: AsyncSession, db_category: Category) -> Category:
    await db.delete(db_category)
    await db.flush()
    return db_category
