"""
Casos de uso para el envio de webhooks de perfiles (push desde el hub).

Entrega fire-and-forget: un POST por destino, en secuencia, sin reintentos
ni cola. Un destino que falla no bloquea al resto; el fallo queda en el log
y en el DispatchReport.
"""
import time
import uuid
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.services.role_translator import role_translator
from profile_sync.application.services.webhook_signer import (
    DELIVERY_HEADER,
    SIGNATURE_HEADER,
    compute_signature,
    serialize_payload,
)
from profile_sync.domain.entities.profile import normalize_email
from profile_sync.domain.entities.sync import DeliveryResult, DispatchReport, SyncContext
from profile_sync.domain.entities.webhook import WebhookEvent
from profile_sync.infrastructure.external.webhooks.webhook_client import WebhookClient
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.exceptions.domain import EntityNotFoundException


class WebhookDispatchUseCases:
    """
    Construye, firma y entrega los eventos profile_updated / profile_deleted.
    """

    def __init__(self, db: AsyncSession, client: Optional[WebhookClient] = None):
        self.db = db
        self.profile_repo = ProfileRepositoryImpl(db)
        self.registry = EndpointRegistry(db)
        self.client = client or WebhookClient()

    async def dispatch(self, user_id: int, context: SyncContext) -> DispatchReport:
        """
        Envia el perfil completo del usuario a todos los destinos activos.
        Un sitio sin edicion habilitada nunca envia.

        Raises:
            EntityNotFoundException: El usuario no existe
        """
        event = WebhookEvent.PROFILE_UPDATED
        if not context.profile_editing:
            return self._skipped(event, context)

        profile = await self.profile_repo.get_profile(user_id)
        if profile is None:
            raise EntityNotFoundException("User", user_id)

        payload = {
            "event": event.value,
            "timestamp": int(time.time()),
            "profile": profile.to_payload(),
        }
        return await self._deliver(event, payload)

    async def dispatch_deleted(self, email: str, context: SyncContext) -> DispatchReport:
        event = WebhookEvent.PROFILE_DELETED
        if not context.profile_editing:
            return self._skipped(event, context)
        payload = {"event": event.value, "email": normalize_email(email)}
        return await self._deliver(event, payload)

    async def notify_user_updated(self, user_id: int, context: SyncContext) -> DispatchReport:
        """
        Disparador de cambios a nivel de usuario: solo usuarios con un rol
        de plataforma gestionado generan webhook.
        """
        roles = await self.profile_repo.get_platform_roles(user_id)
        if not any(role_translator.is_managed_platform_role(role) for role in roles):
            logger.debug(f"Usuario {user_id} sin rol gestionado, no se notifica")
            return DispatchReport(
                event=WebhookEvent.PROFILE_UPDATED.value,
                skipped_reason="user holds no managed platform role",
            )
        return await self.dispatch(user_id, context)

    async def _deliver(self, event: WebhookEvent, payload: Dict[str, Any]) -> DispatchReport:
        targets = await self.registry.delivery_targets(event)
        if not targets:
            logger.info(f"Sin endpoints registrados para {event.value}")
            return DispatchReport(event=event.value)

        # Se serializa una vez: la firma cubre exactamente estos bytes
        body = serialize_payload(payload)
        deliveries: List[DeliveryResult] = []
        for target in targets:
            delivery_id = str(uuid.uuid4())
            headers = {
                "Content-Type": "application/json",
                DELIVERY_HEADER: delivery_id,
            }
            if target.secret:
                headers[SIGNATURE_HEADER] = compute_signature(target.secret, body)
            result = await self.client.post(
                target.url,
                body,
                headers,
                delivery_id=delivery_id,
                signed=bool(target.secret),
            )
            deliveries.append(result)

        report = DispatchReport(event=event.value, deliveries=tuple(deliveries))
        logger.info(
            f"Evento {event.value}: {report.delivered} entregados, {report.failed} fallidos"
        )
        return report

    @staticmethod
    def _skipped(event: WebhookEvent, context: SyncContext) -> DispatchReport:
        reason = f"profile editing disabled for site context '{context.site_context.value}'"
        logger.debug(f"No se envia {event.value}: {reason}")
        return DispatchReport(event=event.value, skipped_reason=reason)
