# backend/app/core/permissions.py
"""
Predicado único de autorización por propietario.

Todas las comprobaciones de "este recurso es tuyo" de los servicios pasan por
aquí en lugar de repetir la comparación en cada operación.
"""

from app.core.exceptions import ForbiddenError


def authorize(resource_owner_id: int, caller_id: int) -> bool:
    """Devuelve True si el llamante es el dueño del recurso."""
    return resource_owner_id == caller_id


def ensure_owner(resource_owner_id: int, caller_id: int, detail: str) -> None:
    """Lanza ForbiddenError si el llamante no es el dueño del recurso."""
    if not authorize(resource_owner_id, caller_id):
        raise ForbiddenError(detail)
