"""
Entidades del dominio.
"""
from profile_sync.domain.entities.profile import ProfileRecord, normalize_email
from profile_sync.domain.entities.sync import (
    SyncContext,
    SyncResult,
    UpsertAction,
    UpsertOutcome,
    ReceiverResult,
    DeliveryResult,
    DispatchReport,
)
from profile_sync.domain.entities.webhook import (
    WebhookEvent,
    WebhookStatus,
    WebhookEndpoint,
    DeliveryTarget,
)

__all__ = [
    "ProfileRecord",
    "normalize_email",
    "SyncContext",
    "SyncResult",
    "UpsertAction",
    "UpsertOutcome",
    "ReceiverResult",
    "DeliveryResult",
    "DispatchReport",
    "WebhookEvent",
    "WebhookStatus",
    "WebhookEndpoint",
    "DeliveryTarget",
]
