"""
Traductor de roles.

Mapea en ambos sentidos roles de plataforma y company roles, y filtra
company roles por contexto de sitio. Puro: sin I/O ni estado. Entradas
desconocidas retornan None o False, nunca lanzan excepciones.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Union

from profile_sync.shared.constants.role_constants import (
    COMPANY_TO_PLATFORM_ROLE,
    DEFAULT_SITE_CONTEXT,
    MANAGED_PLATFORM_ROLES,
    PLATFORM_TO_COMPANY_ROLE,
    SITE_CONTEXTS,
    CompanyRole,
    PlatformRole,
    SiteContext,
)

RoleInput = Union[str, None]


def _as_company_role(value: RoleInput) -> Optional[CompanyRole]:
    if value is None:
        return None
    try:
        return CompanyRole(value)
    except ValueError:
        return None


def _as_platform_role(value: RoleInput) -> Optional[PlatformRole]:
    if value is None:
        return None
    try:
        return PlatformRole(value)
    except ValueError:
        return None


def _as_context(value: RoleInput) -> SiteContext:
    try:
        return SiteContext(value) if value else DEFAULT_SITE_CONTEXT
    except ValueError:
        return DEFAULT_SITE_CONTEXT


class RoleTranslator:
    """
    Consultas sobre las tablas de role_constants.

    Uso:
        role_translator.platform_role_for_company_role("broker_associate")
        # -> PlatformRole.RE_AGENT
    """

    @staticmethod
    def platform_role_for_company_role(company_role: RoleInput) -> Optional[PlatformRole]:
        role = _as_company_role(company_role)
        return COMPANY_TO_PLATFORM_ROLE.get(role) if role else None

    @staticmethod
    def company_role_for_platform_role(platform_role: RoleInput) -> Optional[CompanyRole]:
        role = _as_platform_role(platform_role)
        if role is None:
            return None
        for candidate, company_role in PLATFORM_TO_COMPANY_ROLE:
            if candidate == role:
                return company_role
        return None

    @staticmethod
    def derive_company_role(platform_roles: Iterable[str]) -> Optional[CompanyRole]:
        """
        Company role por defecto para un usuario con varios roles de plataforma.
        Gana el primero segun el orden de la tabla, no el del usuario.
        """
        held = set(platform_roles)
        for platform_role, company_role in PLATFORM_TO_COMPANY_ROLE:
            if platform_role.value in held:
                return company_role
        return None

    @staticmethod
    def allowed_company_roles(context: RoleInput) -> FrozenSet[CompanyRole]:
        return SITE_CONTEXTS[_as_context(context)].company_roles

    @staticmethod
    def is_company_role_active(company_role: RoleInput, context: RoleInput) -> bool:
        role = _as_company_role(company_role)
        if role is None:
            return False
        return role in RoleTranslator.allowed_company_roles(context)

    @staticmethod
    def is_profile_editing_enabled(context: RoleInput) -> bool:
        return SITE_CONTEXTS[_as_context(context)].profile_editing

    @staticmethod
    def is_managed_platform_role(role: RoleInput) -> bool:
        platform_role = _as_platform_role(role)
        return platform_role is not None and platform_role in MANAGED_PLATFORM_ROLES

    @staticmethod
    def managed_platform_role_names() -> FrozenSet[str]:
        return frozenset(role.value for role in MANAGED_PLATFORM_ROLES)


# Instancia global del traductor
role_translator = RoleTranslator()
