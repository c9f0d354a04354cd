"""
Tests del envio de webhooks usando httpx.MockTransport.
"""
import json
from typing import List

import httpx
import pytest

from profile_sync.application.services.endpoint_registry import WEBHOOK_ENDPOINTS_KEY, EndpointRegistry
from profile_sync.application.services.webhook_signer import (
    DELIVERY_HEADER,
    SIGNATURE_HEADER,
    verify_signature,
)
from profile_sync.application.use_cases.webhook_dispatch_use_cases import WebhookDispatchUseCases
from profile_sync.infrastructure.external.webhooks.webhook_client import WebhookClient
from profile_sync.infrastructure.repositories.system_settings_repository import SystemSettingsRepository
from profile_sync.shared.exceptions.domain import EntityNotFoundException

FAILING_URL = "https://down.example.com/hook"
OK_URL = "https://up.example.com/hook"


class _Recorder:
    """Captura las peticiones y responde 500 al endpoint caido."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == FAILING_URL:
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json={"success": True})


async def _make_user(repo, db_session, role="loan_officer") -> int:
    user_id = await repo.create_user("jane.doe", "jane@example.com", "x", first_name="Jane", last_name="Doe")
    await repo.set_attributes(user_id, {"job_title": "Loan Officer", "company_role": "loan_originator"})
    await repo.add_platform_role(user_id, role)
    await db_session.commit()
    return user_id


def _dispatcher(db_session, recorder) -> WebhookDispatchUseCases:
    client = WebhookClient(transport=httpx.MockTransport(recorder))
    return WebhookDispatchUseCases(db_session, client=client)


@pytest.mark.asyncio
async def test_failing_endpoint_does_not_block_others(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session)
    registry = EndpointRegistry(db_session)
    await registry.set_secret("shared-secret")
    await registry.add_endpoint(FAILING_URL)
    await registry.add_endpoint(OK_URL)
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).dispatch(user_id, hub_context)

    assert [str(r.url) for r in recorder.requests] == [FAILING_URL, OK_URL]
    assert report.delivered == 1
    assert report.failed == 1
    failed = report.deliveries[0]
    assert failed.status_code == 500
    assert failed.error == "HTTP 500"

    request = recorder.requests[1]
    assert verify_signature("shared-secret", request.content, request.headers[SIGNATURE_HEADER])
    assert request.headers[DELIVERY_HEADER] == report.deliveries[1].delivery_id
    body = json.loads(request.content)
    assert body["event"] == "profile_updated"
    assert isinstance(body["timestamp"], int)
    assert body["profile"]["email"] == "jane@example.com"
    assert body["profile"]["job_title"] == "Loan Officer"
    assert body["profile"]["id"] == user_id


@pytest.mark.asyncio
async def test_no_secret_sends_unsigned(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session)
    await EndpointRegistry(db_session).add_endpoint(OK_URL)
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).dispatch(user_id, hub_context)

    assert report.delivered == 1
    assert report.deliveries[0].signed is False
    assert SIGNATURE_HEADER not in recorder.requests[0].headers


@pytest.mark.asyncio
async def test_subscription_secret_is_used(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session)
    await EndpointRegistry(db_session).create_subscription(OK_URL, ["profile_updated"], secret="own-secret")
    await db_session.commit()
    recorder = _Recorder()

    await _dispatcher(db_session, recorder).dispatch(user_id, hub_context)

    request = recorder.requests[0]
    assert verify_signature("own-secret", request.content, request.headers[SIGNATURE_HEADER])


@pytest.mark.asyncio
async def test_non_editing_context_never_sends(db_session, repo, satellite_context):
    user_id = await _make_user(repo, db_session)
    await EndpointRegistry(db_session).add_endpoint(OK_URL)
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).dispatch(user_id, satellite_context)

    assert recorder.requests == []
    assert report.skipped_reason is not None


@pytest.mark.asyncio
async def test_dispatch_deleted_payload(db_session, hub_context):
    registry = EndpointRegistry(db_session)
    await registry.set_secret("shared-secret")
    await registry.add_endpoint(OK_URL)
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).dispatch_deleted(" Gone@Example.com ", hub_context)

    assert report.delivered == 1
    assert json.loads(recorder.requests[0].content) == {"event": "profile_deleted", "email": "gone@example.com"}


@pytest.mark.asyncio
async def test_network_error_is_reported(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session)
    await EndpointRegistry(db_session).add_endpoint(OK_URL)
    await db_session.commit()

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    report = await _dispatcher(db_session, refuse).dispatch(user_id, hub_context)

    assert report.failed == 1
    assert "connection refused" in report.deliveries[0].error


@pytest.mark.asyncio
async def test_only_managed_roles_trigger_user_updates(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session, role="subscriber")
    await EndpointRegistry(db_session).add_endpoint(OK_URL)
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).notify_user_updated(user_id, hub_context)
    assert report.skipped_reason == "user holds no managed platform role"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_missing_user_raises(db_session, hub_context):
    with pytest.raises(EntityNotFoundException):
        await _dispatcher(db_session, _Recorder()).dispatch(999, hub_context)


@pytest.mark.asyncio
async def test_unparseable_stored_url_does_not_block_others(db_session, repo, hub_context):
    user_id = await _make_user(repo, db_session)
    bad_url = "http://bad\x01host.example.com/hook"
    # Valor guardado antes de que add_endpoint validara caracteres de control
    await SystemSettingsRepository(db_session).set_value(WEBHOOK_ENDPOINTS_KEY, [bad_url, OK_URL])
    await db_session.commit()
    recorder = _Recorder()

    report = await _dispatcher(db_session, recorder).dispatch(user_id, hub_context)

    assert [str(r.url) for r in recorder.requests] == [OK_URL]
    assert report.delivered == 1
    assert report.failed == 1
    assert report.deliveries[0].url == bad_url
    assert report.deliveries[0].success is False
