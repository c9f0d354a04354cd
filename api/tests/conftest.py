"""
Configuración de fixtures para pytest.
"""
import os

# Antes de importar settings: SQLite en memoria y contexto no bloqueado
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["SITE_CONTEXT"] = ""
os.environ.setdefault("AUTH_USERNAME", "operator")
os.environ.setdefault("AUTH_PASSWORD", "operator-pass")
os.environ.setdefault("LOG_FILE", "logs/test.log")

from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from profile_sync.core.security import security_service
from profile_sync.domain.entities.sync import SyncContext
from profile_sync.infrastructure.database import models  # noqa: F401
from profile_sync.infrastructure.database.session import Base, get_db
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.constants.role_constants import SiteContext


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Session factory sobre una base en memoria nueva por test.
    StaticPool comparte la misma conexion entre sesiones.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Sesión de base de datos para tests de servicios y casos de uso."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(db_session) -> ProfileRepositoryImpl:
    return ProfileRepositoryImpl(db_session)


@pytest.fixture
def satellite_context() -> SyncContext:
    """Satelite de marketing: sin edicion, acepta perfiles sincronizados."""
    return SyncContext(site_context=SiteContext.C21_MASTERS)


@pytest.fixture
def hub_context() -> SyncContext:
    return SyncContext(site_context=SiteContext.HUB)


@pytest.fixture
def app(session_factory):
    """App FastAPI con get_db apuntando a la base de prueba."""
    from profile_sync.main import create_application

    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application = create_application()
    application.dependency_overrides[get_db] = _override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def operator_headers() -> Dict[str, str]:
    token = security_service.create_access_token({"sub": "operator", "scope": "operator"})
    return {"Authorization": f"Bearer {token}"}
