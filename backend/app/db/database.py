# backend/app/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo define los componentes básicos que serán utilizados por toda la
aplicación:
- Clase base para modelos (Base)
- Database: manejador explícito que agrupa motor y fábrica de sesiones.
  Se construye al arrancar la app, se guarda en app.state y se libera al
  apagarla; nunca es un singleton de módulo.
- transactional(): ámbito de transacción para operaciones de varios pasos.

La dependencia get_db() vive en app/api/deps.py.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


def utcnow() -> datetime:
    """Marca temporal con microsegundos para created_at/updated_at."""
    return datetime.now(timezone.utc)


class Database:
    """Motor asíncrono + sessionmaker, inyectado en cada petición."""

    def __init__(self, url: str, engine: Optional[AsyncEngine] = None, **engine_kwargs):
        if engine is None:
            if url.startswith("postgresql"):
                engine_kwargs.setdefault("pool_pre_ping", True)
            engine = create_async_engine(url, **engine_kwargs)
        self.engine = engine
        # expire_on_commit=False es importante para que los objetos sigan siendo
        # utilizables después de que la transacción se haya confirmado.
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Crea las tablas que falten (útil en desarrollo y pruebas)."""
        # Registrar todos los modelos en Base.metadata
        from app.db.models import category_model, product_model, user_model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Conexiones a la base de datos cerradas")


@asynccontextmanager
async def transactional(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Confirma al salir sin errores y revierte ante cualquier excepción.

    Las violaciones de integridad (unicidad, clave primaria duplicada por una
    asignación de ID concurrente) se convierten en ConflictError para que el
    llamante decida si reintenta.
    """
    try:
        yield db
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Violación de integridad, transacción revertida: %s", exc.orig)
        raise ConflictError("The operation conflicts with existing data.") from exc
    except Exception:
        await db.rollback()
        raise
