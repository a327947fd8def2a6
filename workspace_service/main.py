"""
Punto de entrada principal del workspace service.

Expone una función `create_app` para facilitar el testeo y la integración
con servidores ASGI (Uvicorn, Gunicorn, etc.), y una instancia global
`app` usada por defecto cuando se ejecuta directamente con Uvicorn.

Usage:
    uvicorn workspace_service.main:app --reload
    python -m workspace_service.main
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from . import __version__
from .api.routes import router
from .config import get_settings
from .logging_config import setup_logging


def create_app() -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    - Configura logging según `LOG_LEVEL`.
    - Configura CORS para permitir peticiones desde el editor.
    - Registra las rutas de fragmentos y de salud.

    Returns:
        Instancia configurada de `FastAPI`.
    """
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Workspace Service",
        description="Servicio de workspace del composer: parsing de fragmentos del lenguaje.",
        version=__version__,
    )

    # --- CORS Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    logger = logging.getLogger(__name__)
    logger.info("Workspace Service iniciado - Entorno: %s", settings.ENV)

    return app


# Instancia por defecto utilizada por Uvicorn
app = create_app()

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
