"""
Casos de uso del receptor de webhooks (satelite).

Flujo: verificar firma sobre el body crudo -> parsear -> despachar por evento.
Sin secreto local se rechaza todo: un satelite nunca acepta datos sin firmar.
"""
import json
from typing import Any, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.services.role_translator import role_translator
from profile_sync.application.services.upsert_engine import UpsertEngine
from profile_sync.application.services.webhook_signer import verify_signature
from profile_sync.domain.entities.profile import ProfileRecord, normalize_email
from profile_sync.domain.entities.sync import ReceiverResult, SyncContext, UpsertAction
from profile_sync.domain.entities.webhook import WebhookEvent
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.exceptions.base import AppException
from profile_sync.shared.exceptions.sync import (
    AuthoritativeSiteException,
    InvalidSignatureException,
    MissingSignatureException,
    SyncWriteException,
    WebhookNotConfiguredException,
    WebhookPayloadException,
)

SKIPPED_MESSAGE = "Profile skipped (company role not active for this site)."
NOT_FOUND_MESSAGE = "User not found (already deleted or never existed)."
DEACTIVATED_MESSAGE = "Profile deactivated."


class WebhookReceiverUseCases:
    """
    Autentica y aplica eventos de perfil entrantes.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.registry = EndpointRegistry(db)
        self.engine = UpsertEngine(ProfileRepositoryImpl(db))

    async def verify_signature(self, raw_body: bytes, signature: Optional[str]) -> None:
        """
        Raises:
            WebhookNotConfiguredException: No hay secreto local (403)
            MissingSignatureException: Falta la cabecera de firma (401)
            InvalidSignatureException: La firma no coincide (401)
        """
        secret = await self.registry.get_secret()
        if not secret:
            raise WebhookNotConfiguredException()
        if not signature:
            raise MissingSignatureException()
        if not verify_signature(secret, raw_body, signature):
            logger.warning("Webhook rechazado: firma invalida")
            raise InvalidSignatureException()

    async def receive(self, raw_body: bytes, signature: Optional[str], context: SyncContext) -> ReceiverResult:
        """Punto de entrada del endpoint: firma, parseo y aplicacion."""
        await self.verify_signature(raw_body, signature)
        try:
            payload = json.loads(raw_body)
        except (ValueError, UnicodeDecodeError):
            raise WebhookPayloadException("Request body is not valid JSON")
        return await self.handle(payload, context)

    async def handle(self, payload: Any, context: SyncContext) -> ReceiverResult:
        """
        Despacha por `payload.event`.

        Raises:
            WebhookPayloadException: invalid_payload, unknown_event,
                missing_profile_data o missing_email (400)
            AuthoritativeSiteException: El sitio local es el escritor (409)
        """
        if not isinstance(payload, dict) or not payload.get("event"):
            raise WebhookPayloadException("Missing event type", "invalid_payload")

        try:
            event = WebhookEvent(payload["event"])
        except ValueError:
            raise WebhookPayloadException(f"Unknown event type: {payload['event']}", "unknown_event")

        if not context.accepts_synced_profiles:
            logger.warning(f"Evento {event.value} rechazado: sitio autoritativo ({context.site_context.value})")
            raise AuthoritativeSiteException(context.site_context.value)

        if event == WebhookEvent.PROFILE_UPDATED:
            return await self._handle_profile_updated(payload.get("profile"), context)
        return await self._handle_profile_deleted(payload.get("email"))

    async def _handle_profile_updated(self, profile: Any, context: SyncContext) -> ReceiverResult:
        if not isinstance(profile, dict) or not normalize_email(profile.get("email")):
            raise WebhookPayloadException("Missing profile data or email", "missing_profile_data")

        record = ProfileRecord.from_payload(profile)
        if record.company_role and not role_translator.is_company_role_active(
            record.company_role, context.site_context
        ):
            logger.info(f"Perfil {record.email} omitido: rol {record.company_role} inactivo en este sitio")
            return ReceiverResult(action=UpsertAction.SKIPPED, message=SKIPPED_MESSAGE)

        try:
            outcome = await self.engine.upsert(record)
            await self.db.commit()
        except AppException:
            await self.db.rollback()
            raise
        except Exception as exc:
            await self.db.rollback()
            logger.exception(f"Error aplicando perfil {record.email}")
            raise SyncWriteException(f"Failed to apply profile: {exc}", {"email": record.email}) from exc

        logger.info(f"Perfil {record.email} {outcome.action.value} (user_id={outcome.user_id})")
        return ReceiverResult(
            action=outcome.action,
            user_id=outcome.user_id,
            message=f"Profile {outcome.action.value} successfully.",
        )

    async def _handle_profile_deleted(self, email: Any) -> ReceiverResult:
        if not isinstance(email, str) or not normalize_email(email):
            raise WebhookPayloadException("Missing email", "missing_email")

        try:
            user_id = await self.engine.soft_delete(email)
            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            raise SyncWriteException(f"Failed to deactivate profile: {exc}", {"email": email}) from exc

        if user_id is None:
            return ReceiverResult(action=UpsertAction.NOT_FOUND, message=NOT_FOUND_MESSAGE)
        return ReceiverResult(action=UpsertAction.DELETED, user_id=user_id, message=DEACTIVATED_MESSAGE)
