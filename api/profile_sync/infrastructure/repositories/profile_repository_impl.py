"""
Implementación del repositorio de perfiles usando SQLAlchemy.
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.domain.entities.profile import (
    ATTRIBUTE_FIELDS,
    LIST_FIELDS,
    NAME_FIELDS,
    ProfileRecord,
    normalize_email,
)
from profile_sync.domain.repositories.profile_repository import IProfileRepository
from profile_sync.infrastructure.database.models import UserMetaModel, UserModel, UserRoleModel
from profile_sync.shared.exceptions.domain import EntityNotFoundException


class ProfileRepositoryImpl(IProfileRepository):
    """Implementación del repositorio de perfiles con SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        """
        Inicializa el repositorio con una sesión de base de datos.

        Args:
            session: Sesión de SQLAlchemy
        """
        self.session = session

    async def find_id_by_email(self, email: str) -> Optional[int]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == normalized)
        )
        return result.scalar_one_or_none()

    async def get_profile(self, user_id: int) -> Optional[ProfileRecord]:
        db_user = await self.session.get(UserModel, user_id)
        if db_user is None:
            return None
        return self._to_entity(db_user)

    async def list_profiles(
        self,
        company_role: Optional[str] = None,
        limit: int = 100,
        active_only: bool = True,
    ) -> List[ProfileRecord]:
        query = self._filtered(select(UserModel), company_role, active_only)
        result = await self.session.execute(query.order_by(UserModel.id).limit(limit))
        return [self._to_entity(db_user) for db_user in result.scalars().all()]

    async def count_profiles(self, company_role: Optional[str] = None, active_only: bool = True) -> int:
        query = self._filtered(select(func.count(UserModel.id)), company_role, active_only)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def list_user_ids(self) -> List[int]:
        result = await self.session.execute(select(UserModel.id).order_by(UserModel.id))
        return list(result.scalars().all())

    async def username_exists(self, username: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username)
        )
        return result.scalar_one_or_none() is not None

    async def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> int:
        db_user = UserModel(
            username=username,
            email=normalize_email(email),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            display_name=display_name,
            is_active=True,
        )
        self.session.add(db_user)
        await self.session.flush()
        return db_user.id

    async def update_names(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> None:
        db_user = await self._get_or_raise(user_id)
        for name, value in zip(NAME_FIELDS, (first_name, last_name, display_name)):
            if value is not None:
                setattr(db_user, name, value)
        await self.session.flush()

    async def set_attributes(self, user_id: int, attributes: Dict[str, Any]) -> None:
        db_user = await self._get_or_raise(user_id)
        for name, value in attributes.items():
            if name not in ATTRIBUTE_FIELDS:
                raise ValueError(f"Atributo no canonico: {name}")
            # Las columnas JSON se reasignan con una copia para que el cambio se detecte
            if name in LIST_FIELDS and isinstance(value, list):
                value = list(value)
            setattr(db_user, name, value)
        await self.session.flush()

    async def get_platform_roles(self, user_id: int) -> List[str]:
        result = await self.session.execute(
            select(UserRoleModel.role)
            .where(UserRoleModel.user_id == user_id)
            .order_by(UserRoleModel.id)
        )
        return list(result.scalars().all())

    async def add_platform_role(self, user_id: int, role: str) -> None:
        if role in await self.get_platform_roles(user_id):
            return
        self.session.add(UserRoleModel(user_id=user_id, role=role))
        await self.session.flush()

    async def remove_platform_roles(self, user_id: int, roles: Iterable[str]) -> None:
        roles = list(roles)
        if not roles:
            return
        await self.session.execute(
            delete(UserRoleModel).where(
                UserRoleModel.user_id == user_id,
                UserRoleModel.role.in_(roles),
            )
        )
        await self.session.flush()

    async def get_meta(self, user_id: int) -> Dict[str, Any]:
        result = await self.session.execute(
            select(UserMetaModel).where(UserMetaModel.user_id == user_id)
        )
        return {row.meta_key: row.meta_value for row in result.scalars().all()}

    async def delete_meta(self, user_id: int, meta_key: str) -> None:
        await self.session.execute(
            delete(UserMetaModel).where(
                UserMetaModel.user_id == user_id,
                UserMetaModel.meta_key == meta_key,
            )
        )
        await self.session.flush()

    async def count_meta_key(self, meta_key: str) -> int:
        result = await self.session.execute(
            select(func.count(UserMetaModel.id)).where(UserMetaModel.meta_key == meta_key)
        )
        return int(result.scalar_one())

    async def delete_meta_key(self, meta_key: str) -> int:
        result = await self.session.execute(
            delete(UserMetaModel).where(UserMetaModel.meta_key == meta_key)
        )
        await self.session.flush()
        return result.rowcount or 0

    async def set_meta(self, user_id: int, meta_key: str, meta_value: Any) -> None:
        """Escribe una clave legacy. Solo lo usan cargas iniciales y tests."""
        result = await self.session.execute(
            select(UserMetaModel).where(
                UserMetaModel.user_id == user_id,
                UserMetaModel.meta_key == meta_key,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            self.session.add(UserMetaModel(user_id=user_id, meta_key=meta_key, meta_value=meta_value))
        else:
            row.meta_value = meta_value
        await self.session.flush()

    async def _get_or_raise(self, user_id: int) -> UserModel:
        db_user = await self.session.get(UserModel, user_id)
        if db_user is None:
            raise EntityNotFoundException("User", user_id)
        return db_user

    @staticmethod
    def _filtered(query, company_role: Optional[str], active_only: bool):
        if company_role:
            query = query.where(UserModel.company_role == company_role)
        if active_only:
            query = query.where(UserModel.is_active.is_(True))
        return query

    @staticmethod
    def _to_entity(db_user: UserModel) -> ProfileRecord:
        """Convierte un modelo de base de datos a entidad de dominio."""
        values = {name: getattr(db_user, name) for name in NAME_FIELDS + ATTRIBUTE_FIELDS}
        return ProfileRecord(email=db_user.email, user_id=db_user.id, **values)
