# backend/app/schemas/product_schema.py

"""
Esquemas Pydantic para el modelo Product.

Notas sobre tipos de datos:
- price: Decimal en la entrada, Numeric(10,2) en SQLAlchemy (redondea a 2 decimales)
  y float en las respuestas
- price y stock deben ser >= 0; la validación ocurre antes de llegar al servicio

Actualizaciones parciales: ProductUpdate se vuelca con exclude_unset=True.
Solo los campos enviados cambian; un 0 o una cadena vacía enviados
explícitamente se aplican tal cual. category_id, description e image_url
aceptan null para limpiar el valor; name, price y stock no.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.category_schema import CategorySummary
from app.schemas.user_schema import UserPublic

# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(BaseModel):
    """Propiedades comunes de un producto."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    category_id: Optional[int] = None
    image_url: Optional[str] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductCreate(ProductBase):
    """
    Esquema para crear un nuevo producto.

    Ejemplo de uso:
    POST /api/v1/products/
    {
        "name": "Taladro Eléctrico",
        "description": "800W",
        "price": 89.99,
        "stock": 10,
        "category_id": 1
    }
    """
    description: Optional[str] = ""

    @field_validator("description")
    @classmethod
    def empty_description(cls, value):
        # null se guarda como cadena vacía
        return value or ""


class ProductUpdate(BaseModel):
    """Esquema para actualizar un producto existente. Todos los campos son opcionales."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    image_url: Optional[str] = None

    @field_validator("name", "price", "stock")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class ProductSummary(BaseModel):
    """Fila de producto sin relaciones (respuesta de borrado)."""
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    image_url: Optional[str] = None
    user_id: int
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListItem(ProductSummary):
    category: Optional[CategorySummary] = None


class ProductResponse(ProductListItem):
    """Producto con su categoría y la información abreviada del dueño."""
    owner: UserPublic
