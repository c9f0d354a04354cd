"""
Servicio de autenticación de 1 usuario (credenciales definidas por env).

Solo valida credenciales; el token lo emite AuthUseCases.
"""

from __future__ import annotations

import hmac


class SingleUserAuthService:
    """
    Verifica credenciales contra un único usuario/contraseña esperados.

    Usa comparación en tiempo constante (hmac.compare_digest) para reducir leaks
    por timing.
    """

    def __init__(self, expected_username: str, expected_password: str) -> None:
        self._expected_username = expected_username or ""
        self._expected_password = expected_password or ""

    def is_configured(self) -> bool:
        return bool(self._expected_username and self._expected_password)

    def verify(self, username: str, password: str) -> bool:
        if not self.is_configured():
            return False

        # compare_digest con bytes admite cualquier caracter
        username_ok = hmac.compare_digest((username or "").encode("utf-8"), self._expected_username.encode("utf-8"))
        password_ok = hmac.compare_digest((password or "").encode("utf-8"), self._expected_password.encode("utf-8"))
        return bool(username_ok and password_ok)
