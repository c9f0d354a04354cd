"""
Endpoints de gestion de webhooks salientes (operador).
"""
from fastapi import APIRouter, Depends, Query, status

from profile_sync.api.v1.dependencies.auth_deps import require_operator
from profile_sync.api.v1.dependencies.use_case_deps import get_endpoint_registry
from profile_sync.application.dto.webhook_dto import (
    EndpointListResponseDTO,
    EndpointRequestDTO,
    WebhookCreateDTO,
    WebhookCreateResponseDTO,
    WebhookDeleteResponseDTO,
    WebhookListResponseDTO,
    WebhookResponseDTO,
    WebhookStatusUpdateDTO,
)
from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.shared.exceptions.domain import WebhookNotFoundException


router = APIRouter(
    prefix="/webhooks",
    tags=["Webhooks"],
    dependencies=[Depends(require_operator)],
)


@router.get("", response_model=WebhookListResponseDTO, summary="Listar suscripciones")
async def list_webhooks(
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> WebhookListResponseDTO:
    subscriptions = await registry.list_subscriptions()
    return WebhookListResponseDTO(
        webhooks=[WebhookResponseDTO.from_entity(s) for s in subscriptions],
        total=len(subscriptions),
    )


@router.post(
    "",
    response_model=WebhookCreateResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar suscripcion (genera secreto si se omite)",
)
async def create_webhook(
    dto: WebhookCreateDTO,
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> WebhookCreateResponseDTO:
    endpoint = await registry.create_subscription(
        url=dto.url,
        events=[event.value for event in dto.events],
        secret=dto.secret,
    )
    # El secreto solo se muestra completo al crear
    return WebhookCreateResponseDTO(
        webhook=WebhookResponseDTO.from_entity(endpoint, reveal_secret=True),
        message="Webhook created successfully",
    )


@router.get("/endpoints", response_model=EndpointListResponseDTO, summary="Listar URLs notificadas")
async def list_endpoints(
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> EndpointListResponseDTO:
    endpoints = await registry.list_endpoints()
    return EndpointListResponseDTO(endpoints=endpoints, total=len(endpoints))


@router.post(
    "/endpoints",
    response_model=EndpointListResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Agregar URL notificada",
)
async def add_endpoint(
    dto: EndpointRequestDTO,
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> EndpointListResponseDTO:
    await registry.add_endpoint(dto.url)
    endpoints = await registry.list_endpoints()
    return EndpointListResponseDTO(endpoints=endpoints, total=len(endpoints))


@router.delete("/endpoints", response_model=EndpointListResponseDTO, summary="Quitar URL notificada")
async def remove_endpoint(
    url: str = Query(..., min_length=1),
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> EndpointListResponseDTO:
    await registry.remove_endpoint(url)
    endpoints = await registry.list_endpoints()
    return EndpointListResponseDTO(endpoints=endpoints, total=len(endpoints))


@router.patch("/{webhook_id}", response_model=WebhookResponseDTO, summary="Activar / deshabilitar suscripcion")
async def update_webhook_status(
    webhook_id: str,
    dto: WebhookStatusUpdateDTO,
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> WebhookResponseDTO:
    if await registry.get_subscription(webhook_id) is None:
        raise WebhookNotFoundException(webhook_id)
    endpoint = await registry.set_subscription_status(webhook_id, dto.status.value)
    return WebhookResponseDTO.from_entity(endpoint)


@router.delete("/{webhook_id}", response_model=WebhookDeleteResponseDTO, summary="Eliminar suscripcion")
async def delete_webhook(
    webhook_id: str,
    registry: EndpointRegistry = Depends(get_endpoint_registry),
) -> WebhookDeleteResponseDTO:
    if not await registry.delete_subscription(webhook_id):
        raise WebhookNotFoundException(webhook_id)
    return WebhookDeleteResponseDTO(message="Webhook deleted successfully")
