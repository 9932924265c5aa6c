"""
Sistema de manejo de errores personalizado.

Este módulo define todas las excepciones del SDK: fallos de transporte,
fallos de paginación, mutaciones rechazadas por el servidor y errores de
validación de configuración o de inputs.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados del SDK.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores de API
    STOREFRONT_CONNECTION_FAILED = "STOREFRONT_CONNECTION_FAILED"
    STOREFRONT_API_ERROR = "STOREFRONT_API_ERROR"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"

    # Errores de operaciones
    PAGINATION_FAILED = "PAGINATION_FAILED"
    MUTATION_REJECTED = "MUTATION_REJECTED"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones del SDK.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            status_code: Código HTTP asociado
            severity: Severidad del error
            is_retryable: Si el llamador puede reintentar la operación
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.timestamp = datetime.now(timezone.utc)
        self.traceback_str = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de configuración o inputs.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
            }
        )


class StorefrontAPIException(AppException):
    """
    Excepción para fallos de transporte contra la API de storefront.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        graphql_errors: Optional[List[Dict[str, Any]]] = None,
        error_code: ErrorCode = ErrorCode.STOREFRONT_API_ERROR,
        **kwargs,
    ):
        """
        Inicializa la excepción de la API.

        Args:
            message: Mensaje de error
            api_response_code: Código HTTP de la respuesta
            endpoint: Endpoint que falló
            graphql_errors: Errores GraphQL de nivel superior
            error_code: Código de error
            **kwargs: Argumentos adicionales para AppException
        """
        severity = ErrorSeverity.MEDIUM
        if api_response_code and api_response_code >= 500:
            severity = ErrorSeverity.HIGH

        kwargs.setdefault("severity", severity)
        kwargs.setdefault("is_retryable", True)
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=api_response_code or 503,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint
        self.graphql_errors = graphql_errors or []

        self.details.update(
            {
                "api_response_code": api_response_code,
                "endpoint": endpoint,
                "graphql_errors": self.graphql_errors,
            }
        )


class PaginationException(StorefrontAPIException):
    """
    Excepción cuando una conexión paginada no puede completarse.

    La operación completa falla: nunca se devuelve una colección parcial.
    """

    def __init__(self, message: str, connection_field: str, pages_fetched: int = 0, **kwargs):
        """
        Inicializa la excepción de paginación.

        Args:
            message: Mensaje de error
            connection_field: Campo de conexión que se estaba recorriendo
            pages_fetched: Páginas obtenidas antes del fallo
            **kwargs: Argumentos adicionales para StorefrontAPIException
        """
        super().__init__(message=message, error_code=ErrorCode.PAGINATION_FAILED, **kwargs)
        self.connection_field = connection_field
        self.pages_fetched = pages_fetched

        self.details.update({"connection_field": connection_field, "pages_fetched": pages_fetched})


class UserError(BaseModel):
    """Error de validación/negocio devuelto por una mutación."""

    message: str
    field: Optional[List[str]] = Field(default=None)


def serialize_user_errors(user_errors: Sequence[UserError]) -> str:
    """
    Serializa errores de usuario de forma determinista.

    Mantiene el orden del servidor y ordena las claves de cada error.
    """
    return json.dumps(
        [{"field": error.field, "message": error.message} for error in user_errors],
        sort_keys=True,
        ensure_ascii=False,
    )


class MutationRejectedException(AppException):
    """
    Excepción cuando el servidor rechaza una mutación con userErrors.
    """

    def __init__(self, operation: str, user_errors: Sequence[UserError], **kwargs):
        """
        Inicializa la excepción de mutación rechazada.

        Args:
            operation: Campo raíz de la mutación (ej: checkoutCreate)
            user_errors: Errores reportados por el servidor
            **kwargs: Argumentos adicionales para AppException
        """
        self.operation = operation
        self.user_errors = list(user_errors)
        self.serialized_errors = serialize_user_errors(self.user_errors)

        super().__init__(
            message=self.serialized_errors,
            error_code=ErrorCode.MUTATION_REJECTED,
            status_code=422,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )

        self.details.update(
            {
                "operation": operation,
                "user_errors": [error.model_dump() for error in self.user_errors],
            }
        )
