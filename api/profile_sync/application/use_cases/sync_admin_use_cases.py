"""
Casos de uso de administracion de la sincronizacion: configuracion,
diagnostico del contexto y estado de la ultima sincronizacion.
"""
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.services.role_translator import role_translator
from profile_sync.shared.constants.role_constants import (
    COMPANY_ROLE_LABELS,
    COMPANY_TO_PLATFORM_ROLE,
    PLATFORM_ROLE_LABELS,
    CompanyRole,
)


class SyncAdminUseCases:
    """
    Gestiona la configuracion persistida de sincronizacion.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.registry = EndpointRegistry(db)

    async def update_settings(
        self,
        hub_url: Optional[str] = None,
        hub_token: Optional[str] = None,
        webhook_secret: Optional[str] = None,
        generate_secret: bool = False,
        site_context: Optional[str] = None,
        add_endpoint: Optional[str] = None,
        remove_endpoint: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Aplica solo los valores informados y confirma todo junto.

        Returns:
            Dict[str, Any]: Cambios realizados (el secreto generado incluido,
            para poder copiarlo al hub)
        """
        changes: Dict[str, Any] = {}

        if hub_url:
            await self.registry.set_hub_url(hub_url)
            changes["hub_url"] = await self.registry.get_hub_url()
        if hub_token:
            await self.registry.set_hub_token(hub_token)
            changes["hub_api_token"] = "updated"
        if generate_secret:
            changes["webhook_secret"] = await self.registry.generate_secret()
        elif webhook_secret:
            await self.registry.set_secret(webhook_secret)
            changes["webhook_secret"] = "updated"
        if site_context:
            context = await self.registry.set_site_context(site_context)
            changes["site_context"] = context.site_context.value
        if add_endpoint:
            changes["endpoint_added"] = await self.registry.add_endpoint(add_endpoint)
        if remove_endpoint:
            changes["endpoint_removed"] = await self.registry.remove_endpoint(remove_endpoint)

        if changes:
            await self.db.commit()
            logger.info(f"Configuracion de sincronizacion actualizada: {sorted(changes)}")
        return changes

    async def site_context_info(self) -> Dict[str, Any]:
        """Diagnostico del contexto, roles y configuracion de sincronizacion."""
        context = await self.registry.get_site_context()
        allowed = role_translator.allowed_company_roles(context.site_context)
        hub_url = await self.registry.get_hub_url()
        return {
            "site_context": context.site_context.value,
            "label": context.label,
            "locked": context.locked,
            "profile_editing": context.profile_editing,
            "accepts_synced_profiles": context.accepts_synced_profiles,
            "company_roles": [
                {
                    "slug": role.value,
                    "label": COMPANY_ROLE_LABELS[role],
                    "platform_role": COMPANY_TO_PLATFORM_ROLE[role].value,
                    "platform_role_label": PLATFORM_ROLE_LABELS[COMPANY_TO_PLATFORM_ROLE[role]],
                    "active": role in allowed,
                }
                for role in CompanyRole
            ],
            "hub_url": hub_url or None,
            "hub_token_configured": bool(await self.registry.get_hub_token()),
            "webhook_secret_configured": bool(await self.registry.get_secret()),
            "webhook_endpoints": await self.registry.list_endpoints(),
            "webhook_subscriptions": len(await self.registry.list_subscriptions()),
        }

    async def sync_status(self) -> Dict[str, Any]:
        return {
            "last_sync": await self.registry.get_last_sync(),
            "hub_url": await self.registry.get_hub_url() or None,
        }
