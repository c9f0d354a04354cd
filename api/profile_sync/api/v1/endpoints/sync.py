"""
Endpoints de administracion de la sincronizacion: pull desde el hub,
estado, diagnostico de contexto y configuracion.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from profile_sync.api.v1.dependencies.auth_deps import require_operator
from profile_sync.api.v1.dependencies.use_case_deps import (
    get_bulk_sync_use_cases,
    get_sync_admin_use_cases,
    get_sync_context,
)
from profile_sync.application.dto.sync_dto import (
    HubSyncRequestDTO,
    SyncResultDTO,
    SyncSettingsResponseDTO,
    SyncSettingsUpdateDTO,
    SyncStatusDTO,
)
from profile_sync.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from profile_sync.application.use_cases.sync_admin_use_cases import SyncAdminUseCases
from profile_sync.domain.entities.sync import SyncContext


router = APIRouter(
    prefix="/sync",
    tags=["Sync"],
    dependencies=[Depends(require_operator)],
)


@router.post("/hub", response_model=SyncResultDTO, summary="Sincronizar perfiles desde el hub")
async def sync_from_hub(
    dto: HubSyncRequestDTO,
    context: SyncContext = Depends(get_sync_context),
    use_cases: BulkSyncUseCases = Depends(get_bulk_sync_use_cases),
) -> SyncResultDTO:
    result = await use_cases.sync(
        context,
        hub_url=dto.hub_url,
        type_filter=dto.type,
        limit=dto.limit,
        dry_run=dto.dry_run,
    )
    return SyncResultDTO.from_result(result, dry_run=dto.dry_run)


@router.get("/status", response_model=SyncStatusDTO, summary="Ultima sincronizacion")
async def sync_status(
    use_cases: SyncAdminUseCases = Depends(get_sync_admin_use_cases),
) -> SyncStatusDTO:
    return SyncStatusDTO(**await use_cases.sync_status())


@router.get("/site-context", response_model=Dict[str, Any], summary="Diagnostico de contexto y roles")
async def site_context(
    use_cases: SyncAdminUseCases = Depends(get_sync_admin_use_cases),
) -> Dict[str, Any]:
    return await use_cases.site_context_info()


@router.post("/settings", response_model=SyncSettingsResponseDTO, summary="Actualizar configuracion de sincronizacion")
async def update_sync_settings(
    dto: SyncSettingsUpdateDTO,
    use_cases: SyncAdminUseCases = Depends(get_sync_admin_use_cases),
) -> SyncSettingsResponseDTO:
    changes = await use_cases.update_settings(
        hub_url=dto.hub_url,
        hub_token=dto.hub_api_token,
        webhook_secret=dto.webhook_secret,
        generate_secret=dto.generate_secret,
        site_context=dto.site_context,
        add_endpoint=dto.add_endpoint,
        remove_endpoint=dto.remove_endpoint,
    )
    return SyncSettingsResponseDTO(changes=changes)
