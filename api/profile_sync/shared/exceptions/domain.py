"""
Excepciones relacionadas con la lógica de dominio.
"""
from typing import Any

from profile_sync.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class EntityNotFoundException(DomainException):
    """Excepción cuando no se encuentra una entidad."""

    def __init__(self, entity_name: str, entity_id: Any):
        super().__init__(
            message=f"{entity_name} con ID {entity_id} no encontrado",
            error_code="ENTITY_NOT_FOUND",
            details={"entity": entity_name, "id": str(entity_id)}
        )
        self.status_code = 404


class WebhookNotFoundException(AppException):
    """Suscripcion de webhook inexistente."""

    def __init__(self, webhook_id: str):
        super().__init__(
            message="Webhook not found",
            status_code=404,
            error_code="webhook_not_found",
            details={"id": webhook_id}
        )


class ValidationException(DomainException):
    """Excepción para errores de validación."""

    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details
        )


class UserCreationException(AppException):
    """El usuario local no pudo crearse durante un upsert."""

    def __init__(self, email: str, reason: str):
        super().__init__(
            message=f"No se pudo crear el usuario para {email}: {reason}",
            status_code=500,
            error_code="user_creation_failed",
            details={"email": email}
        )
