"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .auth_dto import AuthLoginRequestDTO, TokenResponseDTO
from .webhook_dto import (
    WebhookCreateDTO,
    WebhookStatusUpdateDTO,
    WebhookResponseDTO,
    WebhookListResponseDTO,
    WebhookCreateResponseDTO,
    WebhookDeleteResponseDTO,
    EndpointRequestDTO,
    EndpointListResponseDTO,
    ReceiverResponseDTO,
    DeliveryResultDTO,
    DispatchReportDTO,
)
from .profile_dto import (
    ProfileUpdateDTO,
    ProfileListResponseDTO,
    ProfileUpdateResponseDTO,
    ProfileDeactivateResponseDTO,
)
from .sync_dto import (
    HubSyncRequestDTO,
    SyncResultDTO,
    SyncSettingsUpdateDTO,
    SyncSettingsResponseDTO,
    SyncStatusDTO,
)

__all__ = [
    "AuthLoginRequestDTO",
    "TokenResponseDTO",
    "WebhookCreateDTO",
    "WebhookStatusUpdateDTO",
    "WebhookResponseDTO",
    "WebhookListResponseDTO",
    "WebhookCreateResponseDTO",
    "WebhookDeleteResponseDTO",
    "EndpointRequestDTO",
    "EndpointListResponseDTO",
    "ReceiverResponseDTO",
    "DeliveryResultDTO",
    "DispatchReportDTO",
    "ProfileUpdateDTO",
    "ProfileListResponseDTO",
    "ProfileUpdateResponseDTO",
    "ProfileDeactivateResponseDTO",
    "HubSyncRequestDTO",
    "SyncResultDTO",
    "SyncSettingsUpdateDTO",
    "SyncSettingsResponseDTO",
    "SyncStatusDTO",
]
