"""
Motor de upsert compartido por el receptor de webhooks y el pull masivo.

Idempotente: aplicar dos veces el mismo registro deja el mismo estado.
- Busca por email normalizado.
- Crea el usuario si no existe (username derivado del nombre, credencial inusable).
- Solo escribe lo que el registro trae; lo ausente no se borra.
- Si trae company role, deja un unico rol de plataforma gestionado.
"""
from __future__ import annotations

import random
import re
from typing import Callable, Optional

from loguru import logger

from profile_sync.application.services.role_translator import RoleTranslator, role_translator
from profile_sync.core.security import security_service
from profile_sync.domain.entities.profile import ProfileRecord, normalize_email
from profile_sync.domain.entities.sync import UpsertAction, UpsertOutcome
from profile_sync.domain.repositories.profile_repository import IProfileRepository
from profile_sync.shared.exceptions.domain import UserCreationException, ValidationException

_USERNAME_INVALID = re.compile(r"[^a-z0-9._-]")
USERNAME_SUFFIX_RANGE = (1, 999)


def sanitize_username(raw: str) -> str:
    """Minusculas, sin espacios y solo caracteres [a-z0-9._-]."""
    cleaned = _USERNAME_INVALID.sub("", (raw or "").strip().lower().replace(" ", ""))
    return cleaned.strip(".")


def base_username(record: ProfileRecord) -> str:
    """`first.last` saneado; si no hay nombres, la parte local del email."""
    parts = [sanitize_username(p) for p in (record.first_name, record.last_name) if p]
    candidate = ".".join(p for p in parts if p)
    if not candidate:
        candidate = sanitize_username(record.email.split("@", 1)[0])
    return candidate or "user"


class UpsertEngine:
    """
    Aplica un ProfileRecord sobre el repositorio local.

    Args:
        repository: Repositorio de perfiles
        translator: Traductor de roles
        rand: Generador del sufijo de colision (inyectable en tests)
    """

    def __init__(
        self,
        repository: IProfileRepository,
        translator: RoleTranslator = role_translator,
        rand: Optional[Callable[[int, int], int]] = None,
    ):
        self.repository = repository
        self.translator = translator
        self._rand = rand or random.randint

    async def upsert(self, record: ProfileRecord) -> UpsertOutcome:
        """
        Crea o actualiza el usuario del registro.

        Raises:
            ValidationException: El registro no trae email
            UserCreationException: No se pudo crear el usuario
        """
        email = normalize_email(record.email)
        if not email:
            raise ValidationException("El perfil no tiene email", field="email")

        user_id = await self.repository.find_id_by_email(email)
        if user_id is None:
            user_id = await self._create_user(record)
            action = UpsertAction.CREATED
        else:
            await self.repository.update_names(
                user_id,
                first_name=record.first_name,
                last_name=record.last_name,
                display_name=record.display_name,
            )
            action = UpsertAction.UPDATED

        attributes = record.supplied_attributes()
        if attributes:
            await self.repository.set_attributes(user_id, attributes)

        if record.company_role:
            await self.assign_platform_role_for(user_id, record.company_role)

        logger.debug(f"Upsert {action.value}: {email} (user_id={user_id})")
        return UpsertOutcome(action=action, user_id=user_id)

    async def assign_platform_role_for(self, user_id: int, company_role: str) -> Optional[str]:
        """
        Reemplaza los roles de plataforma gestionados por el que corresponde
        al company role. Company roles desconocidos no tocan los roles.
        """
        platform_role = self.translator.platform_role_for_company_role(company_role)
        if platform_role is None:
            logger.warning(f"Company role sin rol de plataforma: {company_role} (user_id={user_id})")
            return None

        current = await self.repository.get_platform_roles(user_id)
        managed = self.translator.managed_platform_role_names()
        to_remove = [role for role in current if role in managed and role != platform_role.value]
        await self.repository.remove_platform_roles(user_id, to_remove)
        await self.repository.add_platform_role(user_id, platform_role.value)
        return platform_role.value

    async def soft_delete(self, email: str) -> Optional[int]:
        """Marca is_active=False. Retorna None si el email no existe."""
        user_id = await self.repository.find_id_by_email(email)
        if user_id is None:
            return None
        await self.repository.set_attributes(user_id, {"is_active": False})
        logger.info(f"Usuario desactivado por sincronizacion: {normalize_email(email)} (user_id={user_id})")
        return user_id

    async def classify(self, email: str) -> UpsertAction:
        """Clasificacion sin escritura para dry-runs."""
        user_id = await self.repository.find_id_by_email(email)
        return UpsertAction.CREATED if user_id is None else UpsertAction.UPDATED

    async def _create_user(self, record: ProfileRecord) -> int:
        username = await self._unique_username(base_username(record))
        try:
            return await self.repository.create_user(
                username=username,
                email=record.email,
                password_hash=security_service.unusable_password_hash(),
                first_name=record.first_name,
                last_name=record.last_name,
                display_name=record.computed_display_name() or username,
            )
        except Exception as exc:
            logger.error(f"Error creando usuario {record.email}: {exc}")
            raise UserCreationException(record.email, str(exc)) from exc

    async def _unique_username(self, base: str) -> str:
        if not await self.repository.username_exists(base):
            return base
        low, high = USERNAME_SUFFIX_RANGE
        while True:
            candidate = f"{base}{self._rand(low, high)}"
            if not await self.repository.username_exists(candidate):
                return candidate
