# backend/app/services/upload_service.py
"""
Almacenamiento en disco de las imágenes de producto.

Las imágenes se guardan en UPLOAD_DIR/images con un nombre único
(<milisegundos>-<aleatorio><extensión>) y se sirven como estáticos bajo
UPLOAD_URL_PREFIX.
"""

import logging
import os
import random
import time
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from app.core.config import Settings, settings
from app.core.exceptions import InvalidUploadError
from app.schemas.upload_schema import ImageUploadResponse

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadService:

    def __init__(self, upload_dir: Optional[Path] = None, max_size: Optional[int] = None,
                 allowed_types: Optional[List[str]] = None, url_prefix: Optional[str] = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE
        self.allowed_types = allowed_types or settings.ALLOWED_IMAGE_TYPES
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")

    @classmethod
    def from_settings(cls, config: Settings) -> "UploadService":
        return cls(
            upload_dir=config.UPLOAD_DIR,
            max_size=config.MAX_UPLOAD_SIZE,
            allowed_types=config.ALLOWED_IMAGE_TYPES,
            url_prefix=config.UPLOAD_URL_PREFIX,
        )

    @property
    def images_dir(self) -> Path:
        return self.upload_dir / "images"

    @staticmethod
    def build_filename(original_name: str) -> str:
        ext = os.path.splitext(original_name or "")[1].lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
        return f"{unique_suffix}{ext}"

    async def save_image(self, file: Optional[UploadFile]) -> ImageUploadResponse:
        """
        Valida y guarda la imagen subida.

        Raises:
            InvalidUploadError: sin fichero, tipo no permitido o tamaño excesivo
        """
        if file is None or not file.filename:
            raise InvalidUploadError("Please select an image to upload.")
        if file.content_type not in self.allowed_types:
            raise InvalidUploadError("Only jpg, png, gif, webp image formats are supported.")

        self.images_dir.mkdir(parents=True, exist_ok=True)
        filename = self.build_filename(file.filename)
        target = self.images_dir / filename

        size = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_size:
                        raise InvalidUploadError(
                            f"File too large, the maximum size is {self.max_size // (1024 * 1024)}MB."
                        )
                    out.write(chunk)
        except InvalidUploadError:
            target.unlink(missing_ok=True)
            raise

        if size == 0:
            target.unlink(missing_ok=True)
            raise InvalidUploadError("The uploaded file is empty.")

        logger.info("Imagen '%s' guardada como %s (%s bytes)", file.filename, filename, size)
        return ImageUploadResponse(
            url=f"{self.url_prefix}/images/{filename}",
            filename=filename,
            original_name=file.filename,
            size=size,
        )
