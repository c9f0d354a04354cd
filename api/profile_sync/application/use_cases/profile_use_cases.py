"""
Casos de uso de perfiles locales: API de lectura del hub y disparadores
de cambios locales (guardar / desactivar) que generan webhooks.
"""
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.upsert_engine import UpsertEngine
from profile_sync.application.use_cases.webhook_dispatch_use_cases import WebhookDispatchUseCases
from profile_sync.domain.entities.profile import ATTRIBUTE_FIELDS, ProfileRecord
from profile_sync.domain.entities.sync import DispatchReport, SyncContext
from profile_sync.infrastructure.external.webhooks.webhook_client import WebhookClient
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.exceptions.domain import EntityNotFoundException


class ProfileUseCases:
    """
    Lectura y mutacion local de perfiles.
    """

    def __init__(self, db: AsyncSession, webhook_client: Optional[WebhookClient] = None):
        self.db = db
        self.profile_repo = ProfileRepositoryImpl(db)
        self.engine = UpsertEngine(self.profile_repo)
        self.dispatcher = WebhookDispatchUseCases(db, client=webhook_client)

    async def list_profiles(self, per_page: int = 100, type_filter: Optional[str] = None) -> Tuple[List[ProfileRecord], int]:
        """
        Listado para el API de lectura que consumen los satelites.

        Returns:
            Tuple[List[ProfileRecord], int]: Pagina de perfiles y total disponible
        """
        profiles = await self.profile_repo.list_profiles(company_role=type_filter, limit=per_page)
        total = await self.profile_repo.count_profiles(company_role=type_filter)
        return profiles, total

    async def get_profile(self, user_id: int) -> ProfileRecord:
        profile = await self.profile_repo.get_profile(user_id)
        if profile is None:
            raise EntityNotFoundException("User", user_id)
        return profile

    async def update_profile(
        self,
        user_id: int,
        changes: Dict[str, Any],
        context: SyncContext,
    ) -> Tuple[ProfileRecord, DispatchReport]:
        """
        Guarda cambios locales y notifica a los satelites.

        Solo se escriben claves presentes en `changes`. Si cambia el company
        role se reasigna el rol de plataforma. Un cambio que solo toca nombres
        es un cambio de usuario: notifica solo si tiene un rol gestionado.
        """
        await self.get_profile(user_id)

        await self.profile_repo.update_names(
            user_id,
            first_name=changes.get("first_name"),
            last_name=changes.get("last_name"),
            display_name=changes.get("display_name"),
        )
        # Un null explicito se trata como "no informado", igual que en el upsert
        attributes = {k: v for k, v in changes.items() if k in ATTRIBUTE_FIELDS and v is not None}
        if attributes:
            await self.profile_repo.set_attributes(user_id, attributes)
        if changes.get("company_role"):
            await self.engine.assign_platform_role_for(user_id, changes["company_role"])
        await self.db.commit()
        logger.info(f"Perfil {user_id} actualizado localmente: {sorted(changes)}")

        if attributes:
            report = await self.dispatcher.dispatch(user_id, context)
        else:
            report = await self.dispatcher.notify_user_updated(user_id, context)
        return await self.get_profile(user_id), report

    async def deactivate_profile(self, user_id: int, context: SyncContext) -> DispatchReport:
        profile = await self.get_profile(user_id)
        await self.engine.soft_delete(profile.email)
        await self.db.commit()
        return await self.dispatcher.dispatch_deleted(profile.email, context)
