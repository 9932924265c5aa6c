"""
Configuración centralizada del SDK.

Este módulo maneja las variables de entorno del SDK usando Pydantic Settings
para validación automática, y define el objeto ``Config`` que recibe el
cliente de storefront.
"""

import base64
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from storefront_sdk.utils.error_handler import ValidationException

MAX_PAGE_SIZE = 250


class Settings(BaseSettings):
    """
    Configuración del SDK usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA ===
    APP_NAME: str = "Storefront SDK"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DEL STOREFRONT ===
    STOREFRONT_DOMAIN: str = Field(default="your-shop.myshopify.com")
    STOREFRONT_ACCESS_TOKEN: str = Field(default="your-storefront-access-token")
    STOREFRONT_API_PATH: str = Field(default="/api/graphql")
    STOREFRONT_PAGE_SIZE: int = Field(default=MAX_PAGE_SIZE)
    STOREFRONT_TIMEOUT_SECONDS: int = Field(default=30)
    STOREFRONT_CONNECT_TIMEOUT_SECONDS: int = Field(default=10)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("STOREFRONT_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Valida que el tamaño de página esté entre 1 y 250."""
        if not 1 <= v <= MAX_PAGE_SIZE:
            raise ValueError(f"STOREFRONT_PAGE_SIZE debe estar entre 1 y {MAX_PAGE_SIZE}")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene la configuración (cacheada).

    Returns:
        Settings: Instancia única de configuración
    """
    return Settings()


class Config(BaseModel):
    """
    Configuración de un cliente de storefront.

    Inmutable durante la vida del cliente: el endpoint y el header de
    autorización se derivan una sola vez de estos valores.
    """

    domain: str
    storefront_access_token: str
    api_path: str = "/api/graphql"
    page_size: int = MAX_PAGE_SIZE
    timeout_seconds: int = 30
    connect_timeout_seconds: int = 10

    model_config = {"frozen": True}

    @field_validator("domain", "storefront_access_token")
    @classmethod
    def validate_required(cls, v):
        """Valida que los campos requeridos no estén vacíos."""
        if not v or not v.strip():
            raise ValueError("no puede estar vacío")
        return v.strip()

    @field_validator("domain")
    @classmethod
    def strip_scheme(cls, v):
        """Acepta dominios con o sin esquema y sin barra final."""
        for prefix in ("https://", "http://"):
            if v.startswith(prefix):
                v = v[len(prefix):]
        v = v.rstrip("/").strip()
        if not v:
            raise ValueError("no puede estar vacío")
        return v

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v):
        """Valida que el tamaño de página esté entre 1 y 250."""
        if not 1 <= v <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size debe estar entre 1 y {MAX_PAGE_SIZE}")
        return v

    @classmethod
    def create(cls, **values) -> "Config":
        """
        Crea una configuración convirtiendo errores de Pydantic.

        Raises:
            ValidationException: Si algún valor es inválido
        """
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "config"
            raise ValidationException(
                f"Configuración inválida: {first.get('msg')}",
                field=field,
                invalid_value=first.get("input"),
            ) from e

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Config":
        """Construye la configuración a partir de las variables de entorno."""
        settings = settings or get_settings()
        return cls.create(
            domain=settings.STOREFRONT_DOMAIN,
            storefront_access_token=settings.STOREFRONT_ACCESS_TOKEN,
            api_path=settings.STOREFRONT_API_PATH,
            page_size=settings.STOREFRONT_PAGE_SIZE,
            timeout_seconds=settings.STOREFRONT_TIMEOUT_SECONDS,
            connect_timeout_seconds=settings.STOREFRONT_CONNECT_TIMEOUT_SECONDS,
        )

    @property
    def api_url(self) -> str:
        """URL del endpoint GraphQL."""
        return f"https://{self.domain}{self.api_path}"

    @property
    def authorization_header(self) -> str:
        """Header de autorización Basic con el token codificado en base64."""
        token = base64.b64encode(self.storefront_access_token.encode("utf-8")).decode("ascii")
        return f"Basic {token}"
