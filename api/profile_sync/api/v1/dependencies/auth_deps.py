"""
Dependencias de autenticación del operador.
"""
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from profile_sync.application.use_cases.auth_use_cases import AuthUseCases
from profile_sync.core.config import settings
from profile_sync.core.security import security_service
from profile_sync.infrastructure.security.single_user_auth_service import SingleUserAuthService
from profile_sync.shared.exceptions.auth import UnauthorizedException


bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_use_cases() -> AuthUseCases:
    return AuthUseCases(SingleUserAuthService(settings.AUTH_USERNAME, settings.AUTH_PASSWORD))


async def require_operator(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """
    Exige un token Bearer valido emitido por /auth/login.

    Returns:
        Dict[str, Any]: Claims del token
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Token de acceso requerido")
    return security_service.decode_access_token(credentials.credentials)
