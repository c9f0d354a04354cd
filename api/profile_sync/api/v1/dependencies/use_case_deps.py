"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from profile_sync.application.use_cases.profile_use_cases import ProfileUseCases
from profile_sync.application.use_cases.sync_admin_use_cases import SyncAdminUseCases
from profile_sync.application.use_cases.webhook_receiver_use_cases import WebhookReceiverUseCases
from profile_sync.domain.entities.sync import SyncContext
from profile_sync.infrastructure.database.session import get_db


async def get_endpoint_registry(
    db: AsyncSession = Depends(get_db)
) -> EndpointRegistry:
    """
    Dependencia para obtener el registro de endpoints.

    Args:
        db: Sesion de base de datos

    Returns:
        EndpointRegistry: Registro sobre system_settings
    """
    return EndpointRegistry(db)


async def get_sync_context(
    registry: EndpointRegistry = Depends(get_endpoint_registry)
) -> SyncContext:
    """Contexto del sitio resuelto por peticion (entorno > configuracion > development)."""
    return await registry.get_site_context()


async def get_webhook_receiver_use_cases(
    db: AsyncSession = Depends(get_db)
) -> WebhookReceiverUseCases:
    return WebhookReceiverUseCases(db)


async def get_profile_use_cases(
    db: AsyncSession = Depends(get_db)
) -> ProfileUseCases:
    return ProfileUseCases(db)


async def get_bulk_sync_use_cases(
    db: AsyncSession = Depends(get_db)
) -> BulkSyncUseCases:
    return BulkSyncUseCases(db)


async def get_sync_admin_use_cases(
    db: AsyncSession = Depends(get_db)
) -> SyncAdminUseCases:
    return SyncAdminUseCases(db)
