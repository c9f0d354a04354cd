"""
Valores de dominio de la sincronizacion: contexto del sitio y resultados.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from profile_sync.shared.constants.role_constants import (
    DEFAULT_SITE_CONTEXT,
    SITE_CONTEXTS,
    SiteContext,
)


@dataclass(frozen=True)
class SyncContext:
    """
    Contexto de despliegue pasado explicitamente a cada operacion.

    `locked` indica que el contexto viene fijado por entorno (SITE_CONTEXT)
    y no puede cambiarse desde la configuracion persistida.
    """

    site_context: SiteContext = DEFAULT_SITE_CONTEXT
    locked: bool = False
    enforce_single_writer: bool = True

    @classmethod
    def from_value(cls, value: Optional[str], **kwargs) -> "SyncContext":
        """Contextos desconocidos o vacios caen a development."""
        try:
            site_context = SiteContext(value) if value else DEFAULT_SITE_CONTEXT
        except ValueError:
            site_context = DEFAULT_SITE_CONTEXT
        return cls(site_context=site_context, **kwargs)

    @property
    def label(self) -> str:
        return SITE_CONTEXTS[self.site_context].label

    @property
    def profile_editing(self) -> bool:
        return SITE_CONTEXTS[self.site_context].profile_editing

    @property
    def accepts_synced_profiles(self) -> bool:
        """Un sitio editor es el unico escritor: no acepta perfiles de otro hub."""
        return not (self.enforce_single_writer and self.profile_editing)


class UpsertAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class UpsertOutcome:
    action: UpsertAction
    user_id: Optional[int] = None


@dataclass
class SyncResult:
    """
    Resumen de una ejecucion de sincronizacion (un registro o un lote).
    """

    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)

    def record(self, action: UpsertAction) -> None:
        if action == UpsertAction.CREATED:
            self.created += 1
        elif action == UpsertAction.UPDATED:
            self.updated += 1
        elif action == UpsertAction.SKIPPED:
            self.skipped += 1

    @property
    def total(self) -> int:
        return self.created + self.updated + self.skipped + len(self.errors)

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ReceiverResult:
    """Respuesta del receptor para un evento aplicado."""

    action: UpsertAction
    message: str
    user_id: Optional[int] = None


@dataclass(frozen=True)
class DeliveryResult:
    """Resultado de un POST a un endpoint."""

    url: str
    delivery_id: str
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None
    signed: bool = False


@dataclass(frozen=True)
class DispatchReport:
    event: str
    deliveries: tuple = ()
    skipped_reason: Optional[str] = None

    @property
    def delivered(self) -> int:
        return sum(1 for d in self.deliveries if d.success)

    @property
    def failed(self) -> int:
        return sum(1 for d in self.deliveries if not d.success)
