"""
Módulo de configuración del workspace service.

Utiliza `pydantic-settings` para cargar la configuración desde variables
de entorno y/o archivos `.env`. Todos los atributos definidos en `Settings`
pueden sobreescribirse mediante variables de entorno con el mismo nombre.

Ejemplo de `.env`:
    APP_NAME=workspace_service
    ENV=prod
    LOG_LEVEL=INFO
    PARSE_TIMEOUT=5
    CORS_ORIGINS=http://localhost:9091,http://localhost:8080
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración central del workspace service.

    Atributos principales:
        APP_NAME:
            Nombre de la aplicación (aparece en la documentación de FastAPI).
        ENV:
            Entorno de ejecución: "dev", "prod", "test", etc.
        LOG_LEVEL:
            Nivel del logger raíz ("DEBUG", "INFO", ...).
        PARSE_TIMEOUT:
            Tiempo máximo (en segundos) de una petición de parsing de
            fragmento; al vencer se responde con un error `cancelled`.
        CORS_ORIGINS:
            Orígenes permitidos separados por coma ("*" para todos).
        HOST / PORT:
            Dirección de escucha cuando se ejecuta con `python -m`.
    """

    APP_NAME: str = "workspace_service"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    PARSE_TIMEOUT: float = 10.0

    CORS_ORIGINS: str = "*"

    HOST: str = "0.0.0.0"
    PORT: int = 8289

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Instancia única de configuración usada en el resto de la app
settings = get_settings()
