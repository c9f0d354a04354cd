"""
Tests de los endpoints de operador: login, gestion de webhooks
y administracion de la sincronizacion.
"""
import pytest
from httpx import ASGITransport, AsyncClient


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_login_issues_token_usable_on_protected_routes(app):
    async with _client(app) as client:
        bad = await client.post("/api/v1/auth/login", json={"username": "operator", "password": "nope"})
        good = await client.post("/api/v1/auth/login", json={"username": "operator", "password": "operator-pass"})
        token = good.json()["access_token"]
        listed = await client.get("/api/v1/webhooks", headers={"Authorization": f"Bearer {token}"})

    assert bad.status_code == 401
    assert good.status_code == 200
    assert good.json()["token_type"] == "bearer"
    assert listed.status_code == 200


@pytest.mark.asyncio
async def test_management_requires_token(app):
    async with _client(app) as client:
        response = await client.get("/api/v1/webhooks")
        garbage = await client.get("/api/v1/webhooks", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert garbage.status_code == 401


@pytest.mark.asyncio
async def test_webhook_crud(app, operator_headers):
    async with _client(app) as client:
        created = await client.post(
            "/api/v1/webhooks",
            json={"url": "https://sat.example.com/api/v1/webhook/profile-updated"},
            headers=operator_headers,
        )
        webhook = created.json()["webhook"]
        listed = await client.get("/api/v1/webhooks", headers=operator_headers)
        patched = await client.patch(
            f"/api/v1/webhooks/{webhook['id']}",
            json={"status": "disabled"},
            headers=operator_headers,
        )
        deleted = await client.delete(f"/api/v1/webhooks/{webhook['id']}", headers=operator_headers)
        missing = await client.delete(f"/api/v1/webhooks/{webhook['id']}", headers=operator_headers)

    assert created.status_code == 201
    assert sorted(webhook["events"]) == ["profile_deleted", "profile_updated"]
    assert len(webhook["secret"]) == 32 and "*" not in webhook["secret"]

    listed_hook = listed.json()["webhooks"][0]
    assert listed.json()["total"] == 1
    assert listed_hook["secret"].startswith("*")
    assert listed_hook["secret"].endswith(webhook["secret"][-4:])

    assert patched.status_code == 200
    assert patched.json()["status"] == "disabled"
    assert deleted.status_code == 200
    assert missing.status_code == 404
    assert missing.json()["error"] == "webhook_not_found"


@pytest.mark.asyncio
async def test_invalid_webhook_url_is_rejected(app, operator_headers):
    async with _client(app) as client:
        response = await client.post("/api/v1/webhooks", json={"url": "not-a-url"}, headers=operator_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_endpoint_url_list(app, operator_headers):
    url = "https://sat.example.com/hook"
    async with _client(app) as client:
        added = await client.post("/api/v1/webhooks/endpoints", json={"url": url}, headers=operator_headers)
        again = await client.post("/api/v1/webhooks/endpoints", json={"url": url}, headers=operator_headers)
        removed = await client.delete("/api/v1/webhooks/endpoints", params={"url": url}, headers=operator_headers)

    assert added.status_code == 201
    assert again.json() == {"endpoints": [url], "total": 1}
    assert removed.json() == {"endpoints": [], "total": 0}


@pytest.mark.asyncio
async def test_sync_settings_and_site_context(app, operator_headers):
    async with _client(app) as client:
        updated = await client.post(
            "/api/v1/sync/settings",
            json={
                "hub_url": "https://hub.example.com/api/",
                "generate_secret": True,
                "site_context": "c21masters",
            },
            headers=operator_headers,
        )
        info = await client.get("/api/v1/sync/site-context", headers=operator_headers)
        status = await client.get("/api/v1/sync/status", headers=operator_headers)

    changes = updated.json()["changes"]
    assert changes["hub_url"] == "https://hub.example.com/api"
    assert len(changes["webhook_secret"]) == 32
    assert changes["site_context"] == "c21masters"

    data = info.json()
    assert data["site_context"] == "c21masters"
    assert data["profile_editing"] is False
    assert data["accepts_synced_profiles"] is True
    assert data["webhook_secret_configured"] is True
    broker = next(role for role in data["company_roles"] if role["slug"] == "broker_associate")
    assert broker["platform_role_label"] == "Real Estate Agent"
    active = {role["slug"] for role in data["company_roles"] if role["active"]}
    assert active == {"broker_associate", "sales_associate", "leadership"}

    assert status.json() == {"last_sync": None, "hub_url": "https://hub.example.com/api"}


@pytest.mark.asyncio
async def test_unknown_site_context_is_rejected(app, operator_headers):
    async with _client(app) as client:
        response = await client.post(
            "/api/v1/sync/settings",
            json={"site_context": "mars"},
            headers=operator_headers,
        )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_pull_without_hub_url_is_configuration_error(app, operator_headers, monkeypatch):
    monkeypatch.setattr("profile_sync.core.config.settings.HUB_URL", "")
    async with _client(app) as client:
        await client.post("/api/v1/sync/settings", json={"site_context": "c21masters"}, headers=operator_headers)
        response = await client.post("/api/v1/sync/hub", json={"dry_run": True}, headers=operator_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "configuration_error"


@pytest.mark.asyncio
async def test_health(app):
    async with _client(app) as client:
        response = await client.get("/health")
    assert response.json()["status"] == "healthy"
