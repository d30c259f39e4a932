# backend/app/schemas/category_schema.py

"""
Esquemas Pydantic para el modelo Category.

Patrón de esquemas utilizado:
- CategoryBase: Propiedades comunes compartidas
- CategoryCreate: Para crear nuevas categorías (POST)
- CategoryUpdate: Para actualizaciones parciales (PATCH)
- CategorySummary: Fila plana, usada también anidada como padre/hija
- CategoryResponse / CategoryListItem / CategoryDetail: respuestas con relaciones

En CategoryUpdate la distinción entre "campo ausente" y "campo a null" es
importante: el servicio usa model_dump(exclude_unset=True), de modo que
parent_id=null limpia el padre y omitir parent_id lo deja como está.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ========================================
# ESQUEMA BASE
# ========================================

class CategoryBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de categoría."""
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: Optional[int] = None


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class CategoryCreate(CategoryBase):
    """Esquema para crear una nueva categoría. El ID lo asigna el servidor."""
    pass


class CategoryUpdate(BaseModel):
    """Esquema para actualizar una categoría. Todos los campos son opcionales."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    parent_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        # Omitir el nombre está permitido; enviarlo a null no
        if value is None:
            raise ValueError("name cannot be null")
        return value


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CategorySummary(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryProduct(BaseModel):
    """Producto tal y como aparece en el detalle de una categoría."""
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


class CategoryResponse(CategorySummary):
    """Categoría con su padre e hijas directas."""
    parent: Optional[CategorySummary] = None
    children: List[CategorySummary] = []


class CategoryListItem(CategoryResponse):
    product_count: int = 0


class CategoryDetail(CategoryResponse):
    products: List[CategoryProduct] = []
