# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, middleware, manejo de errores de
negocio y eventos del ciclo de vida de la aplicación.

Características principales:
- Configuración centralizada de la aplicación
- Registro de routers de la API con prefijos
- Traducción de las excepciones de app.core.exceptions a respuestas JSON
- Manejador de base de datos creado al arrancar y liberado al apagar
- Servido de las imágenes subidas como ficheros estáticos
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import AppError, AuthenticationError
from app.core.logging import setup_logging
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.db.database import Database

logger = logging.getLogger(__name__)


def create_app(config: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Construye la aplicación.

    Si se pasa `database`, se usa ese manejador en lugar de crear uno a partir
    de DATABASE_URL (las pruebas inyectan así una base SQLite en memoria).
    """
    config = config or default_settings

    app = FastAPI(
        title=config.PROJECT_NAME,
        openapi_url=f"{config.API_V1_STR}/openapi.json",
        version=config.PROJECT_VERSION,
        description="API de back-office para categorías y productos por usuario"
    )

    app.state.settings = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================
    # REGISTRO DE ROUTERS DE LA API
    # ========================================

    app.include_router(api_router_v1, prefix=config.API_V1_STR)

    # El directorio se crea al arrancar (o con la primera subida)
    app.mount(
        config.UPLOAD_URL_PREFIX,
        StaticFiles(directory=config.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    # ========================================
    # MANEJO DE ERRORES DE NEGOCIO
    # ========================================

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        logger.info(f"⚠️ {request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)

    # ========================================
    # ENDPOINT RAÍZ
    # ========================================

    @app.get("/", tags=["Root"])
    async def read_root():
        """
        Endpoint raíz para verificación básica del estado de la API.

        Example:
            GET /
            Response: {"message": "Bienvenido a Catálogo Back-Office API v0.1.0"}
        """
        return {"message": f"Bienvenido a {config.PROJECT_NAME} v{config.PROJECT_VERSION}"}

    # ========================================
    # EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
    # ========================================

    @app.on_event("startup")
    async def startup_event():
        """Configura el logging, prepara el directorio de subidas y abre la base de datos."""
        setup_logging(config)
        config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
        if database is not None:
            app.state.database = database
        else:
            app.state.database = Database(config.DATABASE_URL)
            if config.APP_ENVIRONMENT == "development":
                await app.state.database.create_all()
        logger.info(f"✅ {config.PROJECT_NAME} iniciada ({config.APP_ENVIRONMENT})")

    @app.on_event("shutdown")
    async def shutdown_event():
        # El manejador inyectado lo libera quien lo creó
        if database is None:
            await app.state.database.dispose()

    if database is not None:
        # Disponible también cuando no se disparan los eventos de arranque
        app.state.database = database

    return app


app = create_app()
