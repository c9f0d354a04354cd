"""
DTOs relacionados con webhooks (gestion, receptor y entregas).
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from profile_sync.domain.entities.sync import DispatchReport
from profile_sync.domain.entities.webhook import WebhookEndpoint, WebhookEvent, WebhookStatus


class WebhookCreateDTO(BaseModel):
    """DTO para registrar una suscripcion."""

    url: str = Field(..., min_length=1, max_length=500, description="URL del receptor")
    events: List[WebhookEvent] = Field(
        default_factory=lambda: [WebhookEvent.PROFILE_UPDATED, WebhookEvent.PROFILE_DELETED],
        min_length=1,
        description="Eventos suscritos",
    )
    secret: Optional[str] = Field(None, description="Secreto de firma; se genera si se omite")


class WebhookStatusUpdateDTO(BaseModel):
    status: WebhookStatus


class WebhookResponseDTO(BaseModel):
    """DTO de respuesta para una suscripcion."""

    id: str
    url: str
    events: List[str]
    secret: str
    status: str
    created_at: Optional[str] = None

    @classmethod
    def from_entity(cls, endpoint: WebhookEndpoint, reveal_secret: bool = False) -> "WebhookResponseDTO":
        data = endpoint.to_dict()
        if not reveal_secret:
            data["secret"] = mask_secret(endpoint.secret)
        return cls(**data)


class WebhookListResponseDTO(BaseModel):
    success: bool = True
    webhooks: List[WebhookResponseDTO]
    total: int


class WebhookCreateResponseDTO(BaseModel):
    success: bool = True
    webhook: WebhookResponseDTO
    message: str


class WebhookDeleteResponseDTO(BaseModel):
    success: bool = True
    message: str


class EndpointRequestDTO(BaseModel):
    url: str = Field(..., min_length=1, max_length=500)


class EndpointListResponseDTO(BaseModel):
    endpoints: List[str]
    total: int


class ReceiverResponseDTO(BaseModel):
    """Respuesta del receptor de webhooks."""

    success: bool = True
    action: str
    user_id: Optional[int] = None
    message: str


class DeliveryResultDTO(BaseModel):
    url: str
    delivery_id: str
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None
    signed: bool = False


class DispatchReportDTO(BaseModel):
    event: str
    delivered: int
    failed: int
    skipped_reason: Optional[str] = None
    deliveries: List[DeliveryResultDTO]

    @classmethod
    def from_report(cls, report: DispatchReport) -> "DispatchReportDTO":
        return cls(
            event=report.event,
            delivered=report.delivered,
            failed=report.failed,
            skipped_reason=report.skipped_reason,
            deliveries=[
                DeliveryResultDTO(
                    url=d.url,
                    delivery_id=d.delivery_id,
                    success=d.success,
                    status_code=d.status_code,
                    error=d.error,
                    signed=d.signed,
                )
                for d in report.deliveries
            ],
        )


def mask_secret(secret: str) -> str:
    if not secret:
        return ""
    return "*" * max(len(secret) - 4, 4) + secret[-4:]
