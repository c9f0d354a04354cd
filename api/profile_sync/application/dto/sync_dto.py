"""
DTOs de administracion de la sincronizacion.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from profile_sync.domain.entities.sync import SyncResult


class HubSyncRequestDTO(BaseModel):
    """Parametros del pull desde el hub."""

    hub_url: Optional[str] = Field(None, description="URL del hub; por defecto la configurada")
    type: Optional[str] = Field(None, description="Company role a sincronizar")
    limit: Optional[int] = Field(None, ge=1, le=5000)
    dry_run: bool = False


class SyncResultDTO(BaseModel):
    success: bool
    dry_run: bool
    created: int
    updated: int
    skipped: int
    errors: List[str]

    @classmethod
    def from_result(cls, result: SyncResult, dry_run: bool) -> "SyncResultDTO":
        return cls(success=not result.errors, dry_run=dry_run, **result.to_dict())


class SyncSettingsUpdateDTO(BaseModel):
    hub_url: Optional[str] = None
    hub_api_token: Optional[str] = None
    webhook_secret: Optional[str] = Field(None, min_length=8)
    generate_secret: bool = False
    site_context: Optional[str] = None
    add_endpoint: Optional[str] = None
    remove_endpoint: Optional[str] = None


class SyncSettingsResponseDTO(BaseModel):
    success: bool = True
    changes: Dict[str, Any]


class SyncStatusDTO(BaseModel):
    last_sync: Optional[Dict[str, Any]] = None
    hub_url: Optional[str] = None
