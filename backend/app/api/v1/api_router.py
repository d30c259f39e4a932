# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    auth,
    categories,
    products,
    upload
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE AUTENTICACIÓN
# Registro, login y usuario actual
api_router_v1.include_router(
    auth.router,
    prefix="/auth",                 # Prefijo: /api/v1/auth
    tags=["Auth"]
)

# ROUTER DE CATEGORÍAS
# Maneja operaciones CRUD para las categorías jerárquicas de cada usuario
api_router_v1.include_router(
    categories.router,              # Router con endpoints de categorías
    prefix="/categories",           # Prefijo: /api/v1/categories
    tags=["Categories"]             # Tag para documentación OpenAPI/Swagger
)

# ROUTER DE PRODUCTOS
api_router_v1.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# ROUTER DE SUBIDA DE IMÁGENES
api_router_v1.include_router(
    upload.router,
    prefix="/upload",
    tags=["Upload"]
)
