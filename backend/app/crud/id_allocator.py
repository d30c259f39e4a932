# backend/app/crud/id_allocator.py

"""
Asignación de identificadores reutilizando huecos.

En lugar de depender del autoincremento (que crece sin parar al borrar y
volver a crear filas), se asigna el menor entero positivo que no esté en uso:

    ids existentes {1, 2, 4} -> siguiente 3
    ids existentes {1, 2, 3} -> siguiente 4

El escaneo es O(n) y lee todos los ids de la tabla en cada alta, algo
asumible solo a la escala de una herramienta de administración privada.

Todas las funciones operan dentro de la transacción de la sesión recibida:
el llamante debe insertar la fila con el id devuelto antes de confirmar
(ver app.db.database.transactional). En PostgreSQL la tabla se bloquea en
modo SHARE ROW EXCLUSIVE hasta el commit, de modo que dos altas concurrentes
no pueden calcular el mismo hueco.
"""

import logging
from typing import Iterable, Optional, Type

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings

logger = logging.getLogger(__name__)

GAP_FILL = "gap_fill"
SEQUENTIAL = "sequential"


def find_first_gap(sorted_ids: Iterable[int]) -> int:
    """
    Devuelve el menor entero positivo ausente de una secuencia ordenada.

    Si no hay huecos el resultado es len(ids) + 1.
    """
    next_id = 1
    for existing_id in sorted_ids:
        if existing_id == next_id:
            next_id += 1
        elif existing_id > next_id:
            break
    return next_id


def _is_postgres(db: AsyncSession) -> bool:
    return db.get_bind().dialect.name == "postgresql"


async def _lock_table(db: AsyncSession, table_name: str) -> None:
    if _is_postgres(db):
        await db.execute(text(f'LOCK TABLE "{table_name}" IN SHARE ROW EXCLUSIVE MODE'))


async def allocate_id(db: AsyncSession, model: Type, strategy: Optional[str] = None) -> Optional[int]:
    """
    Calcula el id para la próxima fila de `model`.

    Devuelve None con la estrategia "sequential": la fila se inserta sin id
    explícito y la base de datos usa su autoincremento.
    """
    strategy = strategy or settings.ID_ALLOCATION_STRATEGY
    if strategy == SEQUENTIAL:
        return None
    if strategy != GAP_FILL:
        raise ValueError(f"Unknown ID allocation strategy: {strategy!r}")

    table_name = model.__tablename__
    await _lock_table(db, table_name)

    result = await db.execute(select(model.id).order_by(model.id.asc()))
    next_id = find_first_gap(result.scalars().all())
    logger.debug("Id asignado para %s: %s", table_name, next_id)
    return next_id


async def sync_id_sequence(db: AsyncSession, model: Type, allocated_id: Optional[int]) -> None:
    """
    Ajusta la secuencia del autoincremento al máximo id de la tabla.

    Así un alta que no pase por allocate_id no colisiona con ids asignados
    a mano. Solo PostgreSQL tiene secuencia que ajustar.
    """
    if allocated_id is None or not _is_postgres(db):
        return

    table_name = model.__tablename__
    result = await db.execute(select(func.max(model.id)))
    max_id = max(result.scalar() or 0, allocated_id)
    await db.execute(
        text("SELECT setval(pg_get_serial_sequence(:table_name, 'id'), :max_id, true)"),
        {"table_name": table_name, "max_id": max_id},
    )
