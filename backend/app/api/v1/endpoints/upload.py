"""
Endpoint de subida de imágenes de producto.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.api import deps
from app.core.config import Settings
from app.schemas.upload_schema import ImageUploadResponse
from app.services.upload_service import UploadService

router = APIRouter()

@router.post("/image", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    user_id: int = Depends(deps.get_current_user_id),
    config: Settings = Depends(deps.get_settings),
):
    """Sube una imagen (jpg, png, gif, webp; máx. 5MB) y devuelve su URL."""
    return await UploadService.from_settings(config).save_image(file)
