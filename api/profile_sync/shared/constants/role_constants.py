"""
Constantes de roles y contextos de sitio.

Dos ejes independientes por usuario:
- PlatformRole: lo que el usuario puede hacer en la plataforma.
- CompanyRole: donde aparece en los directorios publicos.

Las tablas de este modulo son la unica fuente de verdad de los mapeos;
RoleTranslator solo las consulta.
"""
from enum import Enum
from typing import Dict, FrozenSet, NamedTuple, Tuple


class PlatformRole(str, Enum):
    """Roles de plataforma gestionados por la sincronizacion."""
    LOAN_OFFICER = "loan_officer"
    RE_AGENT = "re_agent"
    ESCROW_OFFICER = "escrow_officer"
    PROPERTY_MANAGER = "property_manager"
    DUAL_LICENSE = "dual_license"
    PARTNER = "partner"
    STAFF = "staff"
    LEADERSHIP = "leadership"
    ASSISTANT = "assistant"


class CompanyRole(str, Enum):
    """Categorias de directorio."""
    LOAN_ORIGINATOR = "loan_originator"
    BROKER_ASSOCIATE = "broker_associate"
    SALES_ASSOCIATE = "sales_associate"
    ESCROW_OFFICER = "escrow_officer"
    PROPERTY_MANAGER = "property_manager"
    PARTNER = "partner"
    LEADERSHIP = "leadership"
    STAFF = "staff"


class SiteContext(str, Enum):
    """Contextos de despliegue conocidos."""
    DEVELOPMENT = "development"
    LENDING = "21stcenturylending"
    C21_MASTERS = "c21masters"
    HUB = "hub"


class ContextConfig(NamedTuple):
    label: str
    company_roles: FrozenSet[CompanyRole]
    profile_editing: bool


# Conjunto de roles de plataforma que la sincronizacion puede quitar/asignar.
MANAGED_PLATFORM_ROLES: FrozenSet[PlatformRole] = frozenset(PlatformRole)

PLATFORM_ROLE_LABELS: Dict[PlatformRole, str] = {
    PlatformRole.LOAN_OFFICER: "Loan Officer",
    PlatformRole.RE_AGENT: "Real Estate Agent",
    PlatformRole.ESCROW_OFFICER: "Escrow Officer",
    PlatformRole.PROPERTY_MANAGER: "Property Manager",
    PlatformRole.DUAL_LICENSE: "Dual License",
    PlatformRole.PARTNER: "Partner",
    PlatformRole.STAFF: "Staff",
    PlatformRole.LEADERSHIP: "Leadership",
    PlatformRole.ASSISTANT: "Assistant",
}

COMPANY_ROLE_LABELS: Dict[CompanyRole, str] = {
    CompanyRole.LOAN_ORIGINATOR: "Loan Originator",
    CompanyRole.BROKER_ASSOCIATE: "Broker Associate",
    CompanyRole.SALES_ASSOCIATE: "Sales Associate",
    CompanyRole.ESCROW_OFFICER: "Escrow Officer",
    CompanyRole.PROPERTY_MANAGER: "Property Manager",
    CompanyRole.PARTNER: "Partner",
    CompanyRole.LEADERSHIP: "Leadership",
    CompanyRole.STAFF: "Staff",
}

# Rol de plataforma -> company role por defecto. El orden importa:
# derive_company_role usa la primera coincidencia.
PLATFORM_TO_COMPANY_ROLE: Tuple[Tuple[PlatformRole, CompanyRole], ...] = (
    (PlatformRole.LOAN_OFFICER, CompanyRole.LOAN_ORIGINATOR),
    (PlatformRole.RE_AGENT, CompanyRole.BROKER_ASSOCIATE),
    (PlatformRole.ESCROW_OFFICER, CompanyRole.ESCROW_OFFICER),
    (PlatformRole.PROPERTY_MANAGER, CompanyRole.PROPERTY_MANAGER),
    (PlatformRole.DUAL_LICENSE, CompanyRole.LOAN_ORIGINATOR),
    (PlatformRole.PARTNER, CompanyRole.PARTNER),
    (PlatformRole.LEADERSHIP, CompanyRole.LEADERSHIP),
    (PlatformRole.STAFF, CompanyRole.STAFF),
    (PlatformRole.ASSISTANT, CompanyRole.STAFF),
)

COMPANY_TO_PLATFORM_ROLE: Dict[CompanyRole, PlatformRole] = {
    CompanyRole.LOAN_ORIGINATOR: PlatformRole.LOAN_OFFICER,
    CompanyRole.BROKER_ASSOCIATE: PlatformRole.RE_AGENT,
    CompanyRole.SALES_ASSOCIATE: PlatformRole.RE_AGENT,
    CompanyRole.ESCROW_OFFICER: PlatformRole.ESCROW_OFFICER,
    CompanyRole.PROPERTY_MANAGER: PlatformRole.PROPERTY_MANAGER,
    CompanyRole.PARTNER: PlatformRole.PARTNER,
    CompanyRole.LEADERSHIP: PlatformRole.LEADERSHIP,
    CompanyRole.STAFF: PlatformRole.STAFF,
}

SITE_CONTEXTS: Dict[SiteContext, ContextConfig] = {
    SiteContext.DEVELOPMENT: ContextConfig(
        label="Development (All Roles)",
        company_roles=frozenset(CompanyRole),
        profile_editing=True,
    ),
    SiteContext.LENDING: ContextConfig(
        label="21st Century Lending (Marketing)",
        company_roles=frozenset({CompanyRole.LOAN_ORIGINATOR, CompanyRole.LEADERSHIP}),
        profile_editing=False,
    ),
    SiteContext.C21_MASTERS: ContextConfig(
        label="Century 21 Masters (Marketing)",
        company_roles=frozenset({
            CompanyRole.BROKER_ASSOCIATE,
            CompanyRole.SALES_ASSOCIATE,
            CompanyRole.LEADERSHIP,
        }),
        profile_editing=False,
    ),
    # Los partners no se publican en el hub
    SiteContext.HUB: ContextConfig(
        label="Hub / Intranet",
        company_roles=frozenset(CompanyRole) - {CompanyRole.PARTNER},
        profile_editing=True,
    ),
}

DEFAULT_SITE_CONTEXT = SiteContext.DEVELOPMENT

# Nombre antiguo de un rol de plataforma -> nombre vigente (un solo renombrado).
LEGACY_PLATFORM_ROLE_RENAME: Tuple[str, PlatformRole] = ("loan_originator", PlatformRole.LOAN_OFFICER)
