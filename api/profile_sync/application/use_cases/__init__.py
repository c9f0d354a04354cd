"""
Casos de uso de la aplicacion.
"""
from .auth_use_cases import AuthUseCases
from .bulk_sync_use_cases import BulkSyncUseCases
from .profile_use_cases import ProfileUseCases
from .sync_admin_use_cases import SyncAdminUseCases
from .webhook_dispatch_use_cases import WebhookDispatchUseCases
from .webhook_receiver_use_cases import WebhookReceiverUseCases

__all__ = [
    "AuthUseCases",
    "BulkSyncUseCases",
    "ProfileUseCases",
    "SyncAdminUseCases",
    "WebhookDispatchUseCases",
    "WebhookReceiverUseCases",
]
