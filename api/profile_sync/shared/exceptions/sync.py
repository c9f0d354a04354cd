"""
Excepciones de la sincronizacion de perfiles (push por webhook y pull desde el hub).

Los error_code de este modulo viajan tal cual en las respuestas del receptor,
por eso van en minusculas: los hubs existentes los interpretan por nombre.
"""
from typing import Any, Dict, Optional

from profile_sync.shared.exceptions.base import AppException


class ConfigurationException(AppException):
    """Falta configuracion necesaria (hub URL, secreto). No se hace nada."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="configuration_error",
            details={"setting": setting} if setting else None
        )


class WebhookAuthException(AppException):
    """Base para rechazos de autenticacion del receptor de webhooks."""

    def __init__(self, message: str, error_code: str, status_code: int = 401):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code
        )


class WebhookNotConfiguredException(WebhookAuthException):
    """El sitio no tiene secreto: se rechaza todo el trafico entrante."""

    def __init__(self):
        super().__init__(
            message="Webhook secret not configured",
            error_code="webhook_not_configured",
            status_code=403
        )


class MissingSignatureException(WebhookAuthException):
    def __init__(self):
        super().__init__(
            message="Missing webhook signature",
            error_code="missing_signature"
        )


class InvalidSignatureException(WebhookAuthException):
    def __init__(self):
        super().__init__(
            message="Invalid webhook signature",
            error_code="invalid_signature"
        )


class WebhookPayloadException(AppException):
    """Payload entrante mal formado (evento ausente, desconocido o sin datos)."""

    def __init__(self, message: str, error_code: str = "invalid_payload"):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code
        )


class AuthoritativeSiteException(AppException):
    """
    Un sitio con edicion habilitada es el unico escritor de los perfiles:
    no acepta cambios de otro hub.
    """

    def __init__(self, context: str):
        super().__init__(
            message=f"Site context '{context}' is authoritative and does not accept synced profiles",
            status_code=409,
            error_code="authoritative_site",
            details={"site_context": context}
        )


class SyncWriteException(AppException):
    """Fallo de escritura local al aplicar un registro sincronizado."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="sync_write_failed",
            details=details
        )


class HubRequestException(AppException):
    """La llamada al API de lectura del hub fallo (red, timeout o status no 2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="hub_request_failed",
            details={"upstream_status": status_code} if status_code else None
        )
