"""
Entidad de dominio: suscripciones de webhooks salientes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class WebhookEvent(str, Enum):
    PROFILE_UPDATED = "profile_updated"
    PROFILE_DELETED = "profile_deleted"


class WebhookStatus(str, Enum):
    ACTIVE = "active"
    DISABLED = "disabled"


@dataclass(frozen=True)
class WebhookEndpoint:
    """
    Suscripcion registrada por API. Las deshabilitadas se conservan
    pero no reciben entregas.
    """

    id: str
    url: str
    subscribed_events: FrozenSet[WebhookEvent] = field(default_factory=frozenset)
    secret: str = ""
    status: WebhookStatus = WebhookStatus.ACTIVE
    created_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == WebhookStatus.ACTIVE

    def wants(self, event: WebhookEvent) -> bool:
        return self.is_active and event in self.subscribed_events

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookEndpoint":
        events = frozenset(
            WebhookEvent(e) for e in data.get("events", []) if e in WebhookEvent._value2member_map_
        )
        try:
            status = WebhookStatus(data.get("status", WebhookStatus.ACTIVE.value))
        except ValueError:
            status = WebhookStatus.DISABLED
        return cls(
            id=data["id"],
            url=data["url"],
            subscribed_events=events,
            secret=data.get("secret") or "",
            status=status,
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "events": sorted(e.value for e in self.subscribed_events),
            "secret": self.secret,
            "status": self.status.value,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class DeliveryTarget:
    """URL a notificar y secreto con el que se firma (vacio = sin firma)."""

    url: str
    secret: str = ""
    endpoint_id: Optional[str] = None
