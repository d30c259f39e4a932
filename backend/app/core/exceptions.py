# backend/app/core/exceptions.py
"""
Excepciones de negocio de la aplicación.

Los servicios lanzan estas excepciones en el punto de detección; la capa HTTP
(app.main) las traduce a respuestas JSON con el código de estado indicado.
Ninguna se reintenta internamente.
"""

from starlette import status


class AppError(Exception):
    """Base de todos los errores de dominio."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(AppError):
    """La entidad referenciada (categoría, producto, padre) no existe."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Se viola una restricción de unicidad o estructural."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(AppError):
    """El usuario autenticado no es dueño del recurso."""

    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(AppError):
    status_code = 422


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidUploadError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
