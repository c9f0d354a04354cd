"""
Registro de endpoints y configuracion de sincronizacion persistida.

Todo vive en system_settings (valores JSON):
- webhook_endpoints: lista deduplicada de URLs (firmadas con el secreto compartido)
- webhook_secret: secreto compartido del sitio
- webhook_subscriptions: id -> {url, events, secret, status, created_at}
- hub_url / hub_api_token: cliente de pull
- site_context: contexto del sitio (salvo que SITE_CONTEXT lo bloquee)
- last_sync: resumen de la ultima sincronizacion masiva
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.webhook_signer import generate_secret
from profile_sync.core.config import Settings, settings as default_settings
from profile_sync.domain.entities.sync import SyncContext
from profile_sync.domain.entities.webhook import (
    DeliveryTarget,
    WebhookEndpoint,
    WebhookEvent,
    WebhookStatus,
)
from profile_sync.infrastructure.repositories.system_settings_repository import SystemSettingsRepository
from profile_sync.shared.constants.role_constants import SiteContext
from profile_sync.shared.exceptions.domain import EntityNotFoundException, ValidationException

HUB_URL_KEY = "hub_url"
HUB_API_TOKEN_KEY = "hub_api_token"
WEBHOOK_SECRET_KEY = "webhook_secret"
WEBHOOK_ENDPOINTS_KEY = "webhook_endpoints"
WEBHOOK_SUBSCRIPTIONS_KEY = "webhook_subscriptions"
SITE_CONTEXT_KEY = "site_context"
LAST_SYNC_KEY = "last_sync"

SUBSCRIPTION_SECRET_LENGTH = 32


def validate_url(url: str) -> str:
    """Normaliza y valida una URL http(s). Lanza ValidationException si no lo es."""
    cleaned = (url or "").strip()
    parsed = urlparse(cleaned)
    # httpx rechaza caracteres de control en cualquier parte de la URL
    if parsed.scheme not in ("http", "https") or not parsed.netloc or not cleaned.isprintable():
        raise ValidationException(f"URL invalida: '{url}'", field="url")
    return cleaned


class EndpointRegistry:
    """
    Acceso tipado a la configuracion de sincronizacion.

    Los cambios se hacen con flush; el commit es responsabilidad del llamador
    (dependencia get_db en la API, use case en el CLI).
    """

    def __init__(self, db: AsyncSession, app_settings: Optional[Settings] = None):
        self.db = db
        self.settings = app_settings or default_settings
        self.repository = SystemSettingsRepository(db)

    # --- Endpoints (lista de URLs) -------------------------------------------------

    async def list_endpoints(self) -> List[str]:
        return list(await self.repository.get_value(WEBHOOK_ENDPOINTS_KEY, []))

    async def add_endpoint(self, url: str) -> bool:
        """Agrega una URL. Retorna False si ya estaba registrada."""
        url = validate_url(url)
        endpoints = await self.list_endpoints()
        if url in endpoints:
            return False
        endpoints.append(url)
        await self.repository.set_value(WEBHOOK_ENDPOINTS_KEY, endpoints, "Webhook endpoint URLs")
        return True

    async def remove_endpoint(self, url: str) -> bool:
        url = (url or "").strip()
        endpoints = await self.list_endpoints()
        if url not in endpoints:
            return False
        endpoints.remove(url)
        await self.repository.set_value(WEBHOOK_ENDPOINTS_KEY, endpoints)
        return True

    # --- Secreto compartido ------------------------------------------------------

    async def get_secret(self) -> str:
        return await self.repository.get_value(WEBHOOK_SECRET_KEY, "") or ""

    async def set_secret(self, secret: str) -> None:
        secret = (secret or "").strip()
        if not secret:
            raise ValidationException("El secreto no puede estar vacio", field="webhook_secret")
        await self.repository.set_value(WEBHOOK_SECRET_KEY, secret, "Shared webhook signing secret")

    async def generate_secret(self) -> str:
        secret = generate_secret(SUBSCRIPTION_SECRET_LENGTH)
        await self.set_secret(secret)
        return secret

    # --- Cliente de pull ---------------------------------------------------------

    async def get_hub_url(self) -> str:
        stored = await self.repository.get_value(HUB_URL_KEY, "")
        return (stored or self.settings.HUB_URL or "").rstrip("/")

    async def set_hub_url(self, url: str) -> None:
        await self.repository.set_value(HUB_URL_KEY, validate_url(url).rstrip("/"), "Hub read API base URL")

    async def get_hub_token(self) -> str:
        stored = await self.repository.get_value(HUB_API_TOKEN_KEY, "")
        return stored or self.settings.HUB_API_TOKEN or ""

    async def set_hub_token(self, token: str) -> None:
        await self.repository.set_value(HUB_API_TOKEN_KEY, (token or "").strip(), "Hub read API bearer token")

    # --- Contexto del sitio ------------------------------------------------------

    def is_context_locked(self) -> bool:
        return bool(self.settings.SITE_CONTEXT)

    async def get_site_context(self) -> SyncContext:
        """
        Precedencia: SITE_CONTEXT del entorno (bloquea), valor guardado, development.
        """
        locked = self.is_context_locked()
        value = self.settings.SITE_CONTEXT if locked else await self.repository.get_value(SITE_CONTEXT_KEY)
        return SyncContext.from_value(
            value,
            locked=locked,
            enforce_single_writer=self.settings.ENFORCE_SINGLE_WRITER,
        )

    async def set_site_context(self, value: str) -> SyncContext:
        if self.is_context_locked():
            raise ValidationException(
                f"El contexto esta bloqueado por SITE_CONTEXT={self.settings.SITE_CONTEXT}",
                field="site_context",
            )
        try:
            context = SiteContext(value)
        except ValueError:
            raise ValidationException(f"Contexto desconocido: '{value}'", field="site_context")
        await self.repository.set_value(SITE_CONTEXT_KEY, context.value, "Deployment site context")
        return await self.get_site_context()

    # --- Suscripciones -----------------------------------------------------------

    async def _load_subscriptions(self) -> Dict[str, Dict[str, Any]]:
        return dict(await self.repository.get_value(WEBHOOK_SUBSCRIPTIONS_KEY, {}))

    async def _save_subscriptions(self, subscriptions: Dict[str, Dict[str, Any]]) -> None:
        await self.repository.set_value(WEBHOOK_SUBSCRIPTIONS_KEY, subscriptions, "Webhook subscriptions")

    async def list_subscriptions(self) -> List[WebhookEndpoint]:
        subscriptions = await self._load_subscriptions()
        return [WebhookEndpoint.from_dict(data) for data in subscriptions.values()]

    async def get_subscription(self, subscription_id: str) -> Optional[WebhookEndpoint]:
        data = (await self._load_subscriptions()).get(subscription_id)
        return WebhookEndpoint.from_dict(data) if data else None

    async def create_subscription(
        self,
        url: str,
        events: Iterable[str],
        secret: Optional[str] = None,
    ) -> WebhookEndpoint:
        """
        Registra una suscripcion. Sin secreto se genera uno de 32 caracteres.

        Raises:
            ValidationException: URL invalida o eventos vacios/desconocidos
        """
        url = validate_url(url)
        event_set = set()
        for event in events:
            try:
                event_set.add(WebhookEvent(event))
            except ValueError:
                raise ValidationException(f"Evento desconocido: '{event}'", field="events")
        if not event_set:
            raise ValidationException("Debe indicar al menos un evento", field="events")

        endpoint = WebhookEndpoint(
            id=f"wh_{uuid.uuid4().hex[:12]}",
            url=url,
            subscribed_events=frozenset(event_set),
            secret=(secret or "").strip() or generate_secret(SUBSCRIPTION_SECRET_LENGTH),
            status=WebhookStatus.ACTIVE,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        subscriptions = await self._load_subscriptions()
        subscriptions[endpoint.id] = endpoint.to_dict()
        await self._save_subscriptions(subscriptions)
        logger.info(f"Webhook registrado: {endpoint.id} -> {url}")
        return endpoint

    async def delete_subscription(self, subscription_id: str) -> bool:
        subscriptions = await self._load_subscriptions()
        if subscription_id not in subscriptions:
            return False
        del subscriptions[subscription_id]
        await self._save_subscriptions(subscriptions)
        logger.info(f"Webhook eliminado: {subscription_id}")
        return True

    async def set_subscription_status(self, subscription_id: str, status: str) -> WebhookEndpoint:
        subscriptions = await self._load_subscriptions()
        if subscription_id not in subscriptions:
            raise EntityNotFoundException("Webhook", subscription_id)
        try:
            new_status = WebhookStatus(status)
        except ValueError:
            raise ValidationException(f"Estado desconocido: '{status}'", field="status")
        data = dict(subscriptions[subscription_id], status=new_status.value)
        subscriptions[subscription_id] = data
        await self._save_subscriptions(subscriptions)
        return WebhookEndpoint.from_dict(data)

    # --- Destinos de entrega -----------------------------------------------------

    async def delivery_targets(self, event: WebhookEvent) -> List[DeliveryTarget]:
        """
        URLs de la lista (secreto compartido) mas suscripciones activas al evento
        (su propio secreto). Una URL presente en ambos sitios se notifica una vez,
        con el secreto de la suscripcion.
        """
        targets: List[DeliveryTarget] = []
        seen = set()
        for subscription in await self.list_subscriptions():
            if subscription.wants(event) and subscription.url not in seen:
                targets.append(DeliveryTarget(
                    url=subscription.url,
                    secret=subscription.secret,
                    endpoint_id=subscription.id,
                ))
                seen.add(subscription.url)

        shared_secret = await self.get_secret()
        for url in await self.list_endpoints():
            if url not in seen:
                targets.append(DeliveryTarget(url=url, secret=shared_secret))
                seen.add(url)
        return targets

    # --- Ultima sincronizacion ---------------------------------------------------

    async def get_last_sync(self) -> Optional[Dict[str, Any]]:
        return await self.repository.get_value(LAST_SYNC_KEY)

    async def set_last_sync(self, summary: Dict[str, Any]) -> None:
        await self.repository.set_value(LAST_SYNC_KEY, summary, "Last bulk sync summary")
