"""
Tests del traductor de roles: mapeos en ambos sentidos y filtro por contexto.
"""
import pytest

from profile_sync.application.services.role_translator import role_translator
from profile_sync.domain.entities.sync import SyncContext
from profile_sync.shared.constants.role_constants import CompanyRole, PlatformRole, SiteContext


@pytest.mark.parametrize(
    "company_role, expected",
    [
        ("loan_originator", PlatformRole.LOAN_OFFICER),
        ("broker_associate", PlatformRole.RE_AGENT),
        ("sales_associate", PlatformRole.RE_AGENT),
        ("escrow_officer", PlatformRole.ESCROW_OFFICER),
        ("property_manager", PlatformRole.PROPERTY_MANAGER),
        ("partner", PlatformRole.PARTNER),
        ("leadership", PlatformRole.LEADERSHIP),
        ("staff", PlatformRole.STAFF),
    ],
)
def test_company_to_platform_role(company_role, expected):
    assert role_translator.platform_role_for_company_role(company_role) == expected


def test_unknown_roles_return_none():
    assert role_translator.platform_role_for_company_role("astronaut") is None
    assert role_translator.platform_role_for_company_role(None) is None
    assert role_translator.company_role_for_platform_role("astronaut") is None
    assert role_translator.derive_company_role(["subscriber"]) is None


def test_platform_to_company_role_defaults():
    assert role_translator.company_role_for_platform_role("re_agent") == CompanyRole.BROKER_ASSOCIATE
    assert role_translator.company_role_for_platform_role("dual_license") == CompanyRole.LOAN_ORIGINATOR
    assert role_translator.company_role_for_platform_role("assistant") == CompanyRole.STAFF


def test_derive_company_role_uses_table_order_not_user_order():
    # staff aparece antes en la lista del usuario pero loan_officer va primero en la tabla
    assert role_translator.derive_company_role(["staff", "loan_officer"]) == CompanyRole.LOAN_ORIGINATOR


def test_context_filtering_for_marketing_sites():
    assert role_translator.is_company_role_active("broker_associate", "c21masters")
    assert not role_translator.is_company_role_active("loan_originator", "c21masters")
    assert role_translator.is_company_role_active("loan_originator", "21stcenturylending")
    assert not role_translator.is_company_role_active("staff", "21stcenturylending")


def test_hub_allows_everything_but_partner():
    allowed = role_translator.allowed_company_roles(SiteContext.HUB)
    assert CompanyRole.PARTNER not in allowed
    assert allowed == frozenset(CompanyRole) - {CompanyRole.PARTNER}


def test_unknown_context_falls_back_to_development():
    assert role_translator.allowed_company_roles("mars") == frozenset(CompanyRole)
    assert role_translator.is_profile_editing_enabled("mars") is True


def test_profile_editing_by_context():
    assert role_translator.is_profile_editing_enabled("hub")
    assert not role_translator.is_profile_editing_enabled("c21masters")
    assert not role_translator.is_profile_editing_enabled("21stcenturylending")


def test_managed_platform_roles():
    assert role_translator.is_managed_platform_role("loan_officer")
    assert not role_translator.is_managed_platform_role("administrator")
    assert "re_agent" in role_translator.managed_platform_role_names()


def test_sync_context_single_writer():
    assert not SyncContext(SiteContext.HUB).accepts_synced_profiles
    assert SyncContext(SiteContext.HUB, enforce_single_writer=False).accepts_synced_profiles
    assert SyncContext(SiteContext.LENDING).accepts_synced_profiles
    assert SyncContext.from_value("nope").site_context == SiteContext.DEVELOPMENT
