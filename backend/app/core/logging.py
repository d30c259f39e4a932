# backend/app/core/logging.py
"""
Configuración del logging de la aplicación.

Los módulos obtienen su logger con logging.getLogger(__name__); aquí solo se
configura el logger raíz a partir de LOG_LEVEL, LOG_FORMAT y LOG_FILE_PATH.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from app.core.config import Settings, settings as default_settings


def setup_logging(config: Optional[Settings] = None) -> None:
    """Configura handlers de consola y, opcionalmente, de fichero rotativo."""
    config = config or default_settings

    root_logger = logging.getLogger()
    root_logger.setLevel(config.LOG_LEVEL.upper())

    formatter = logging.Formatter(config.LOG_FORMAT)

    # Evitar handlers duplicados si la app se arranca varias veces (tests, reload)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_catalogo_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler._catalogo_handler = True
    root_logger.addHandler(console_handler)

    if config.LOG_FILE_PATH:
        log_path = Path(config.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler._catalogo_handler = True
        root_logger.addHandler(file_handler)

    # SQLAlchemy es muy verboso en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
