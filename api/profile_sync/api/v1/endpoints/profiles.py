"""
Endpoints de perfiles: API de lectura que consumen los satelites y
disparadores de cambios locales.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from profile_sync.api.v1.dependencies.auth_deps import require_operator
from profile_sync.api.v1.dependencies.use_case_deps import get_profile_use_cases, get_sync_context
from profile_sync.application.dto.profile_dto import (
    ProfileDeactivateResponseDTO,
    ProfileListResponseDTO,
    ProfileUpdateDTO,
    ProfileUpdateResponseDTO,
)
from profile_sync.application.dto.webhook_dto import DispatchReportDTO
from profile_sync.application.use_cases.profile_use_cases import ProfileUseCases
from profile_sync.domain.entities.sync import SyncContext


router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(require_operator)],
)


@router.get("", response_model=ProfileListResponseDTO, summary="Listar perfiles (API de lectura del hub)")
async def list_profiles(
    per_page: int = Query(100, ge=1, le=5000),
    type: Optional[str] = Query(None, description="Company role"),
    use_cases: ProfileUseCases = Depends(get_profile_use_cases),
) -> ProfileListResponseDTO:
    profiles, total = await use_cases.list_profiles(per_page=per_page, type_filter=type)
    return ProfileListResponseDTO(data=[p.to_payload() for p in profiles], total=total)


@router.get("/{user_id}", response_model=Dict[str, Any], summary="Obtener perfil")
async def get_profile(
    user_id: int,
    use_cases: ProfileUseCases = Depends(get_profile_use_cases),
) -> Dict[str, Any]:
    profile = await use_cases.get_profile(user_id)
    return profile.to_payload()


@router.put("/{user_id}", response_model=ProfileUpdateResponseDTO, summary="Guardar perfil y notificar satelites")
async def update_profile(
    user_id: int,
    dto: ProfileUpdateDTO,
    context: SyncContext = Depends(get_sync_context),
    use_cases: ProfileUseCases = Depends(get_profile_use_cases),
) -> ProfileUpdateResponseDTO:
    profile, report = await use_cases.update_profile(
        user_id,
        dto.model_dump(exclude_unset=True),
        context,
    )
    return ProfileUpdateResponseDTO(
        profile=profile.to_payload(),
        dispatch=DispatchReportDTO.from_report(report),
    )


@router.delete("/{user_id}", response_model=ProfileDeactivateResponseDTO, summary="Desactivar perfil y notificar")
async def deactivate_profile(
    user_id: int,
    context: SyncContext = Depends(get_sync_context),
    use_cases: ProfileUseCases = Depends(get_profile_use_cases),
) -> ProfileDeactivateResponseDTO:
    report = await use_cases.deactivate_profile(user_id, context)
    return ProfileDeactivateResponseDTO(
        message="Profile deactivated.",
        dispatch=DispatchReportDTO.from_report(report),
    )
