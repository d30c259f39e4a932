# backend/app/api/v1/endpoints/products.py

"""
Endpoints REST para operaciones CRUD de productos.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from app.api import deps
from app.db.models.user_model import User
from app.schemas import product_schema
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=product_schema.ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: ProductService = Depends(deps.get_product_service),
    product_in: product_schema.ProductCreate,
):
    """Crea un nuevo producto en el catálogo del usuario."""
    logger.info(f"🆕 PRODUCTO: Creando producto '{product_in.name}' para el usuario {current_user.id}")
    product = await service.create_product(db, current_user.id, product_in)
    logger.info(f"✅ PRODUCTO: Creado exitosamente ID {product.id}")
    return product


@router.get("/", response_model=List[product_schema.ProductListItem])
async def read_products(
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: ProductService = Depends(deps.get_product_service),
):
    """Lista los productos del usuario, más recientes primero."""
    products = await service.list_products(db, user_id)
    logger.debug(f"📋 PRODUCTOS: Encontrados {len(products)} resultados")
    return products


@router.get("/{product_id}", response_model=product_schema.ProductResponse)
async def read_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: ProductService = Depends(deps.get_product_service),
    product_id: int,
):
    """Obtiene los detalles de un producto por ID."""
    logger.debug(f"🔍 PRODUCTO: Buscando producto ID {product_id}")
    return await service.get_product(db, product_id, user_id)


@router.patch("/{product_id}", response_model=product_schema.ProductResponse)
async def update_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: ProductService = Depends(deps.get_product_service),
    product_id: int,
    product_in: product_schema.ProductUpdate,
):
    """Actualiza parcialmente un producto propio."""
    logger.info(f"🔄 PRODUCTO: Actualizando producto ID {product_id}")
    return await service.update_product(db, product_id, user_id, product_in)


@router.delete("/{product_id}", response_model=product_schema.ProductSummary)
async def delete_product(
    *,
    db: AsyncSession = Depends(deps.get_db),
    user_id: int = Depends(deps.get_current_user_id),
    service: ProductService = Depends(deps.get_product_service),
    product_id: int,
):
    """Elimina un producto propio."""
    logger.info(f"🗑️ PRODUCTO: Eliminando producto ID {product_id}")
    return await service.delete_product(db, product_id, user_id)
