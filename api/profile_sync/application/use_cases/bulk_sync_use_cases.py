"""
Casos de uso de sincronizacion masiva (pull desde el hub).

Operador -> GET <hub>/profiles -> mismo tratamiento por registro que el
evento profile_updated del receptor. En dry-run solo se clasifica por email
(created/updated) sin filtrar roles ni escribir.
"""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.services.role_translator import role_translator
from profile_sync.application.services.upsert_engine import UpsertEngine
from profile_sync.core.config import settings
from profile_sync.domain.entities.profile import ProfileRecord
from profile_sync.domain.entities.sync import SyncContext, SyncResult, UpsertAction
from profile_sync.infrastructure.external.hub.hub_client import HubClient
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.exceptions.sync import AuthoritativeSiteException, ConfigurationException

# (indice, total, email) -> None. El CLI lo usa para mostrar progreso.
ProgressCallback = Callable[[int, int, str], None]


class BulkSyncUseCases:
    """
    Reconciliacion de un satelite contra el API de lectura del hub.
    """

    def __init__(self, db: AsyncSession, hub_client_factory: Optional[Callable[..., HubClient]] = None):
        self.db = db
        self.registry = EndpointRegistry(db)
        self.engine = UpsertEngine(ProfileRepositoryImpl(db))
        self._hub_client_factory = hub_client_factory or HubClient

    async def sync(
        self,
        context: SyncContext,
        hub_url: Optional[str] = None,
        type_filter: Optional[str] = None,
        limit: Optional[int] = None,
        dry_run: bool = False,
        progress: Optional[ProgressCallback] = None,
    ) -> SyncResult:
        """
        Descarga y aplica perfiles del hub.

        Args:
            context: Contexto del sitio local
            hub_url: URL del hub (por defecto la configurada)
            type_filter: Company role a pedir al hub
            limit: Maximo de perfiles (por defecto HUB_DEFAULT_PAGE_SIZE)
            dry_run: Solo clasificar, sin escribir
            progress: Callback de progreso por registro

        Raises:
            ConfigurationException: No hay hub URL configurada
            AuthoritativeSiteException: El sitio local es el escritor
            HubRequestException: Fallo la llamada al hub (no se aplica nada)
        """
        hub_url = (hub_url or await self.registry.get_hub_url()).rstrip("/")
        if not hub_url:
            raise ConfigurationException("No hub URL configured. Use --hub-url or setup-sync first.", "hub_url")
        if not context.accepts_synced_profiles:
            raise AuthoritativeSiteException(context.site_context.value)

        per_page = limit if limit and limit > 0 else settings.HUB_DEFAULT_PAGE_SIZE
        client = self._hub_client_factory(hub_url, await self.registry.get_hub_token())
        profiles = await client.fetch_profiles(per_page=per_page, type_filter=type_filter)
        if limit and limit > 0:
            profiles = profiles[:limit]

        logger.info(f"Hub devolvio {len(profiles)} perfiles (dry_run={dry_run})")
        result = SyncResult()
        total = len(profiles)
        for index, data in enumerate(profiles, start=1):
            email = data.get("email", "") if isinstance(data, dict) else ""
            if progress:
                progress(index, total, email)
            await self._apply(data, context, dry_run, result)

        if not dry_run:
            await self._record_last_sync(type_filter, result)
        logger.info(
            f"Sincronizacion terminada: {result.created} creados, {result.updated} actualizados, "
            f"{result.skipped} omitidos, {len(result.errors)} errores"
        )
        return result

    async def _apply(self, data: Any, context: SyncContext, dry_run: bool, result: SyncResult) -> None:
        if not isinstance(data, dict):
            result.errors.append("Invalid profile entry (not an object)")
            return
        try:
            record = ProfileRecord.from_payload(data)
        except (TypeError, ValueError) as exc:
            result.errors.append(f"Invalid profile entry: {exc}")
            return
        if not record.email:
            result.errors.append("Profile without email")
            return

        if dry_run:
            result.record(await self.engine.classify(record.email))
            return

        if record.company_role and not role_translator.is_company_role_active(
            record.company_role, context.site_context
        ):
            result.record(UpsertAction.SKIPPED)
            return

        try:
            outcome = await self.engine.upsert(record)
            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            logger.error(f"Error sincronizando {record.email}: {exc}")
            result.errors.append(f"{record.email}: {exc}")
            return
        result.record(outcome.action)

    async def _record_last_sync(self, type_filter: Optional[str], result: SyncResult) -> None:
        summary: Dict[str, Any] = {
            "type": type_filter or "all",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **result.to_dict(),
        }
        await self.registry.set_last_sync(summary)
        await self.db.commit()
