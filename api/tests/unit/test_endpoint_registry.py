"""
Tests del registro de endpoints y configuracion persistida.
"""
import pytest

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.core.config import Settings
from profile_sync.domain.entities.webhook import WebhookEvent, WebhookStatus
from profile_sync.shared.constants.role_constants import SiteContext
from profile_sync.shared.exceptions.domain import EntityNotFoundException, ValidationException


def _settings(**overrides) -> Settings:
    values = {"SITE_CONTEXT": "", "HUB_URL": "", "HUB_API_TOKEN": ""}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def registry(db_session) -> EndpointRegistry:
    return EndpointRegistry(db_session, app_settings=_settings())


@pytest.mark.asyncio
async def test_endpoint_list_is_deduplicated(registry):
    assert await registry.add_endpoint("https://sat.example.com/hook") is True
    assert await registry.add_endpoint(" https://sat.example.com/hook ") is False
    assert await registry.list_endpoints() == ["https://sat.example.com/hook"]

    assert await registry.remove_endpoint("https://sat.example.com/hook") is True
    assert await registry.remove_endpoint("https://sat.example.com/hook") is False
    assert await registry.list_endpoints() == []


@pytest.mark.asyncio
async def test_invalid_url_is_rejected(registry):
    with pytest.raises(ValidationException):
        await registry.add_endpoint("ftp://nope")
    with pytest.raises(ValidationException):
        await registry.add_endpoint("not a url")
    with pytest.raises(ValidationException):
        await registry.add_endpoint("http://bad\x01host.example.com/hook")


@pytest.mark.asyncio
async def test_secret_roundtrip_and_generation(registry):
    assert await registry.get_secret() == ""
    await registry.set_secret("  manual-secret  ")
    assert await registry.get_secret() == "manual-secret"

    generated = await registry.generate_secret()
    assert len(generated) == 32
    assert await registry.get_secret() == generated

    with pytest.raises(ValidationException):
        await registry.set_secret("   ")


@pytest.mark.asyncio
async def test_hub_url_falls_back_to_environment(db_session):
    registry = EndpointRegistry(db_session, app_settings=_settings(HUB_URL="https://env-hub.example.com/api/"))
    assert await registry.get_hub_url() == "https://env-hub.example.com/api"

    await registry.set_hub_url("https://stored-hub.example.com/api/")
    assert await registry.get_hub_url() == "https://stored-hub.example.com/api"


@pytest.mark.asyncio
async def test_site_context_precedence(db_session):
    registry = EndpointRegistry(db_session, app_settings=_settings())
    assert (await registry.get_site_context()).site_context == SiteContext.DEVELOPMENT

    context = await registry.set_site_context("c21masters")
    assert context.site_context == SiteContext.C21_MASTERS
    assert context.locked is False

    with pytest.raises(ValidationException):
        await registry.set_site_context("mars")

    locked = EndpointRegistry(db_session, app_settings=_settings(SITE_CONTEXT="21stcenturylending"))
    context = await locked.get_site_context()
    assert context.site_context == SiteContext.LENDING
    assert context.locked is True
    with pytest.raises(ValidationException):
        await locked.set_site_context("hub")


@pytest.mark.asyncio
async def test_subscription_lifecycle(registry):
    created = await registry.create_subscription("https://a.example.com/hook", ["profile_updated"])
    assert created.id.startswith("wh_")
    assert len(created.secret) == 32
    assert created.subscribed_events == frozenset({WebhookEvent.PROFILE_UPDATED})

    disabled = await registry.set_subscription_status(created.id, "disabled")
    assert disabled.status == WebhookStatus.DISABLED
    assert (await registry.get_subscription(created.id)).is_active is False

    assert await registry.delete_subscription(created.id) is True
    assert await registry.delete_subscription(created.id) is False
    with pytest.raises(EntityNotFoundException):
        await registry.set_subscription_status(created.id, "active")


@pytest.mark.asyncio
async def test_subscription_requires_known_events(registry):
    with pytest.raises(ValidationException):
        await registry.create_subscription("https://a.example.com/hook", [])
    with pytest.raises(ValidationException):
        await registry.create_subscription("https://a.example.com/hook", ["profile_exploded"])


@pytest.mark.asyncio
async def test_delivery_targets_merge_subscriptions_and_url_list(registry):
    await registry.set_secret("shared-secret")
    await registry.add_endpoint("https://list-only.example.com/hook")
    await registry.add_endpoint("https://both.example.com/hook")
    both = await registry.create_subscription("https://both.example.com/hook", ["profile_updated"], secret="own")
    await registry.create_subscription("https://deletes-only.example.com/hook", ["profile_deleted"])
    off = await registry.create_subscription("https://off.example.com/hook", ["profile_updated"])
    await registry.set_subscription_status(off.id, "disabled")

    targets = await registry.delivery_targets(WebhookEvent.PROFILE_UPDATED)

    assert [(t.url, t.secret, t.endpoint_id) for t in targets] == [
        ("https://both.example.com/hook", "own", both.id),
        ("https://list-only.example.com/hook", "shared-secret", None),
    ]


@pytest.mark.asyncio
async def test_last_sync_roundtrip(registry):
    assert await registry.get_last_sync() is None
    await registry.set_last_sync({"type": "all", "created": 1})
    assert await registry.get_last_sync() == {"type": "all", "created": 1}
