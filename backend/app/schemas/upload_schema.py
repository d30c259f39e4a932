# backend/app/schemas/upload_schema.py

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    """Resultado de subir una imagen de producto."""
    url: str  # Ruta pública, p.ej. /uploads/images/1700000000000-123456789.png
    filename: str
    original_name: str
    size: int
