"""
Endpoints de autenticación.

Login único configurado por env. El token emitido se envía como
`Authorization: Bearer <token>` al resto de endpoints de operador.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from profile_sync.api.v1.dependencies.auth_deps import get_auth_use_cases
from profile_sync.application.dto.auth_dto import AuthLoginRequestDTO, TokenResponseDTO
from profile_sync.application.use_cases.auth_use_cases import AuthUseCases
from profile_sync.shared.exceptions.auth import AuthNotConfiguredException, InvalidCredentialsException


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=TokenResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Validar credenciales y emitir token de operador",
)
def login(
    dto: AuthLoginRequestDTO,
    use_cases: AuthUseCases = Depends(get_auth_use_cases),
) -> TokenResponseDTO:
    if not use_cases.is_configured():
        raise AuthNotConfiguredException()

    if not use_cases.verify_login(dto.username, dto.password):
        raise InvalidCredentialsException()

    return TokenResponseDTO(access_token=use_cases.issue_token(dto.username))
