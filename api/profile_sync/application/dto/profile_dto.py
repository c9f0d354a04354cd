"""
DTOs relacionados con perfiles.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from profile_sync.application.dto.webhook_dto import DispatchReportDTO


class ProfileUpdateDTO(BaseModel):
    """
    Cambios locales de un perfil. Solo se aplican los campos enviados.
    El email no se modifica: es la clave entre sitios.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    display_name: Optional[str] = Field(None, max_length=255)

    phone_number: Optional[str] = None
    mobile_number: Optional[str] = None
    city_state: Optional[str] = None
    region: Optional[str] = None
    office: Optional[str] = None

    job_title: Optional[str] = None
    nmls: Optional[str] = None
    dre_license: Optional[str] = None
    specialties: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    awards: Optional[List[str]] = None
    namb_certifications: Optional[List[str]] = None
    service_areas: Optional[List[str]] = None
    arrive: Optional[str] = None
    niche_bio_content: Optional[str] = None
    canva_folder_link: Optional[str] = None
    headshot_id: Optional[int] = None
    date_of_birth: Optional[str] = None
    profile_slug: Optional[str] = None

    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    century21_url: Optional[str] = None
    zillow_url: Optional[str] = None

    biography: Optional[str] = None
    is_active: Optional[bool] = None
    company_role: Optional[str] = None
    company_roles: Optional[List[str]] = None


class ProfileListResponseDTO(BaseModel):
    """Formato que consume el cliente de pull de los satelites."""

    data: List[Dict[str, Any]]
    total: int


class ProfileUpdateResponseDTO(BaseModel):
    success: bool = True
    profile: Dict[str, Any]
    dispatch: DispatchReportDTO


class ProfileDeactivateResponseDTO(BaseModel):
    success: bool = True
    message: str
    dispatch: DispatchReportDTO
