"""
Receptor de webhooks de perfiles.

La autenticacion es la firma HMAC del body, no el token de operador.
"""
from fastapi import APIRouter, Depends, Request, status

from profile_sync.api.v1.dependencies.use_case_deps import (
    get_sync_context,
    get_webhook_receiver_use_cases,
)
from profile_sync.application.dto.webhook_dto import ReceiverResponseDTO
from profile_sync.application.services.webhook_signer import SIGNATURE_HEADER
from profile_sync.application.use_cases.webhook_receiver_use_cases import WebhookReceiverUseCases
from profile_sync.domain.entities.sync import SyncContext


router = APIRouter(prefix="/webhook", tags=["Webhook Receiver"])


@router.post(
    "/profile-updated",
    response_model=ReceiverResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Recibir evento de perfil firmado desde el hub",
)
async def receive_profile_event(
    request: Request,
    context: SyncContext = Depends(get_sync_context),
    use_cases: WebhookReceiverUseCases = Depends(get_webhook_receiver_use_cases),
) -> ReceiverResponseDTO:
    # La firma se verifica sobre los bytes recibidos, antes de parsear
    raw_body = await request.body()
    result = await use_cases.receive(raw_body, request.headers.get(SIGNATURE_HEADER), context)
    return ReceiverResponseDTO(
        action=result.action.value,
        user_id=result.user_id,
        message=result.message,
    )
