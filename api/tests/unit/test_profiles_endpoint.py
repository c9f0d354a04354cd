"""
Tests del API de perfiles: lectura para satelites y cambios locales
que disparan webhooks.
"""
import httpx
import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.api.v1.dependencies.use_case_deps import get_profile_use_cases
from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.use_cases.profile_use_cases import ProfileUseCases
from profile_sync.infrastructure.external.webhooks.webhook_client import WebhookClient
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.infrastructure.database.session import get_db


async def _seed(session_factory):
    async with session_factory() as session:
        repo = ProfileRepositoryImpl(session)
        broker = await repo.create_user("bea", "bea@example.com", "x", first_name="Bea")
        await repo.set_attributes(broker, {"company_role": "broker_associate", "job_title": "Broker"})
        await repo.add_platform_role(broker, "re_agent")
        lender = await repo.create_user("leo", "leo@example.com", "x", first_name="Leo")
        await repo.set_attributes(lender, {"company_role": "loan_originator"})
        retired = await repo.create_user("old", "old@example.com", "x")
        await repo.set_attributes(retired, {"company_role": "broker_associate", "is_active": False})

        registry = EndpointRegistry(session)
        await registry.set_site_context("hub")
        await registry.set_secret("hub-secret")
        await registry.add_endpoint("https://sat.example.com/hook")
        await session.commit()
        return broker


@pytest.fixture
def sent():
    return []


@pytest.fixture
def app_with_recorder(app, sent):
    """Sustituye el cliente de webhooks por uno con MockTransport."""

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200)

    client = WebhookClient(transport=httpx.MockTransport(handler))

    async def _override(db: AsyncSession = Depends(get_db)) -> ProfileUseCases:
        return ProfileUseCases(db, webhook_client=client)

    app.dependency_overrides[get_profile_use_cases] = _override
    return app


@pytest.mark.asyncio
async def test_list_profiles_filters_by_type_and_active(app, session_factory, operator_headers):
    await _seed(session_factory)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get(
            "/api/v1/profiles",
            params={"type": "broker_associate", "per_page": 50},
            headers=operator_headers,
        )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["data"][0]["email"] == "bea@example.com"
    assert data["data"][0]["job_title"] == "Broker"


@pytest.mark.asyncio
async def test_update_profile_dispatches_webhook(app_with_recorder, session_factory, operator_headers, sent):
    broker = await _seed(session_factory)

    async with AsyncClient(transport=ASGITransport(app=app_with_recorder), base_url="http://test") as client:
        response = await client.put(
            f"/api/v1/profiles/{broker}",
            json={"phone_number": "555-0199", "company_role": "leadership"},
            headers=operator_headers,
        )

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["phone_number"] == "555-0199"
    assert body["profile"]["company_role"] == "leadership"
    assert body["dispatch"]["delivered"] == 1
    assert len(sent) == 1
    assert b'"phone_number":"555-0199"' in sent[0].content

    async with session_factory() as session:
        assert await ProfileRepositoryImpl(session).get_platform_roles(broker) == ["leadership"]


@pytest.mark.asyncio
async def test_deactivate_profile_dispatches_delete(app_with_recorder, session_factory, operator_headers, sent):
    broker = await _seed(session_factory)

    async with AsyncClient(transport=ASGITransport(app=app_with_recorder), base_url="http://test") as client:
        response = await client.delete(f"/api/v1/profiles/{broker}", headers=operator_headers)

    assert response.status_code == 200
    assert response.json()["dispatch"]["event"] == "profile_deleted"
    assert sent[0].content == b'{"event":"profile_deleted","email":"bea@example.com"}'


@pytest.mark.asyncio
async def test_unknown_profile_returns_404(app, session_factory, operator_headers):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/profiles/999", headers=operator_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_field_is_rejected(app, session_factory, operator_headers):
    broker = await _seed(session_factory)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.put(
            f"/api/v1/profiles/{broker}",
            json={"email": "hijack@example.com"},
            headers=operator_headers,
        )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_name_only_change_without_managed_role_is_not_sent(
    app_with_recorder, session_factory, operator_headers, sent
):
    await _seed(session_factory)
    async with session_factory() as session:
        lender = await ProfileRepositoryImpl(session).find_id_by_email("leo@example.com")

    async with AsyncClient(transport=ASGITransport(app=app_with_recorder), base_url="http://test") as client:
        response = await client.put(
            f"/api/v1/profiles/{lender}",
            json={"first_name": "Leonard"},
            headers=operator_headers,
        )

    assert response.status_code == 200
    assert response.json()["profile"]["first_name"] == "Leonard"
    assert response.json()["dispatch"]["skipped_reason"] == "user holds no managed platform role"
    assert sent == []
