"""
Casos de uso para autenticación.

Un único operador configurado por env. El login emite un JWT que protege
la gestión de webhooks, el API de perfiles y la administración de la
sincronización.
"""

from __future__ import annotations

from profile_sync.core.security import security_service
from profile_sync.infrastructure.security.single_user_auth_service import SingleUserAuthService


class AuthUseCases:
    def __init__(self, auth_service: SingleUserAuthService) -> None:
        self._auth_service = auth_service

    def is_configured(self) -> bool:
        return self._auth_service.is_configured()

    def verify_login(self, username: str, password: str) -> bool:
        return self._auth_service.verify(username=username, password=password)

    def issue_token(self, username: str) -> str:
        return security_service.create_access_token({"sub": username, "scope": "operator"})
