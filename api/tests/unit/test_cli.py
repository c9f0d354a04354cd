"""
Tests del CLI de operador.

main() arranca su propio event loop, asi que estos tests son sincronos y
usan una base SQLite en archivo con NullPool (sin conexiones entre loops).
"""
import asyncio
import sys

import httpx
import pytest
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.cli import main
from profile_sync.infrastructure.database.session import Base
from profile_sync.infrastructure.external.hub.hub_client import HubClient
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl


@pytest.fixture
def cli_db(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}", poolclass=NullPool)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create())
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def _run(factory, fn):
    async def _inner():
        async with factory() as session:
            result = await fn(session)
            await session.commit()
            return result

    return asyncio.run(_inner())


def _seed_legacy_user(factory):
    async def seed(session):
        repo = ProfileRepositoryImpl(session)
        user_id = await repo.create_user("legacy", "legacy@example.com", "x")
        await repo.set_meta(user_id, "title", "Loan Officer")
        await repo.set_meta(user_id, "pinterest", "pins")
        await repo.add_platform_role(user_id, "loan_originator")
        return user_id

    return _run(factory, seed)


def test_migrate_fields_dry_run(cli_db, capsys):
    user_id = _seed_legacy_user(cli_db)

    assert main(["migrate-fields", "--dry-run"], session_factory=cli_db) == 0

    out = capsys.readouterr().out
    assert "=== DRY RUN MODE - No changes will be made ===" in out
    assert "Users processed: 1" in out
    assert "Fields migrated: 1" in out
    assert "This was a dry run. Run without --dry-run to apply changes." in out
    profile = _run(cli_db, lambda s: ProfileRepositoryImpl(s).get_profile(user_id))
    assert profile.job_title is None


def test_migrate_fields_applies_changes(cli_db, capsys):
    user_id = _seed_legacy_user(cli_db)

    assert main(["migrate-fields"], session_factory=cli_db) == 0

    out = capsys.readouterr().out
    assert "Roles updated: 1" in out
    assert "Migration complete!" in out
    profile = _run(cli_db, lambda s: ProfileRepositoryImpl(s).get_profile(user_id))
    assert profile.job_title == "Loan Officer"
    assert profile.company_role == "loan_originator"


def test_cleanup_requires_confirmation(cli_db, capsys, monkeypatch):
    user_id = _seed_legacy_user(cli_db)
    monkeypatch.setattr("builtins.input", lambda prompt: "n")

    assert main(["cleanup-fields"], session_factory=cli_db) == 1
    assert "Aborted." in capsys.readouterr().out
    assert "title" in _run(cli_db, lambda s: ProfileRepositoryImpl(s).get_meta(user_id))

    assert main(["cleanup-fields", "--yes"], session_factory=cli_db) == 0
    out = capsys.readouterr().out
    assert "Legacy field records deleted: 1" in out
    assert "Cleanup complete!" in out
    assert _run(cli_db, lambda s: ProfileRepositoryImpl(s).get_meta(user_id)) == {"pinterest": "pins"}


def test_setup_sync_and_site_context(cli_db, capsys):
    code = main(
        [
            "setup-sync",
            "--hub-url", "https://hub.example.com/api",
            "--generate-secret",
            "--site-context", "21stcenturylending",
            "--add-endpoint", "https://sat.example.com/hook",
        ],
        session_factory=cli_db,
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "Sync settings saved." in out
    secret = _run(cli_db, lambda s: EndpointRegistry(s).get_secret())
    assert f"webhook_secret: {secret}" in out

    assert main(["site-context"], session_factory=cli_db) == 0
    out = capsys.readouterr().out
    assert "Site context:     21stcenturylending" in out
    assert "Profile editing:  disabled" in out
    assert "[x] loan_originator" in out
    assert "-> Loan Officer (loan_officer)" in out
    assert "[ ] broker_associate" in out
    assert "https://sat.example.com/hook" in out


def test_setup_sync_rejects_unknown_context(cli_db, capsys):
    assert main(["setup-sync", "--site-context", "mars"], session_factory=cli_db) == 1
    assert "Error: Contexto desconocido" in capsys.readouterr().err


def test_sync_from_hub_without_url_fails(cli_db, capsys, monkeypatch):
    monkeypatch.setattr("profile_sync.core.config.settings.HUB_URL", "")

    assert main(["sync-from-hub"], session_factory=cli_db) == 1
    assert "Error: No hub URL configured" in capsys.readouterr().err


def test_sync_from_hub_dry_run(cli_db, capsys, monkeypatch):
    _seed_legacy_user(cli_db)
    _run(cli_db, lambda s: EndpointRegistry(s).set_site_context("21stcenturylending"))
    profiles = [
        {"email": "legacy@example.com", "company_role": "loan_originator"},
        {"email": "fresh@example.com", "company_role": "loan_originator"},
    ]

    def build(hub_url, token):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": profiles}))
        return HubClient(hub_url, token, transport=transport)

    monkeypatch.setattr("profile_sync.application.use_cases.bulk_sync_use_cases.HubClient", build)

    code = main(
        ["sync-from-hub", "--hub-url", "https://hub.example.com/api", "--dry-run"],
        session_factory=cli_db,
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "[2/2] fresh@example.com" in out
    assert "Would create: 1" in out
    assert "Would update: 1" in out
    fresh = _run(cli_db, lambda s: ProfileRepositoryImpl(s).find_id_by_email("fresh@example.com"))
    assert fresh is None
