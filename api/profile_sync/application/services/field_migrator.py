"""
Migracion de campos legacy a columnas canonicas.

Pasos por usuario, en orden:
1. Copia cada clave legacy con valor a su columna canonica si esta vacia
   (la primera variante de la tabla gana; un valor canonico existente nunca se pisa).
2. Renombra el rol de plataforma legacy (un unico par).
3. Si no hay company role, lo deriva del rol de plataforma.
4. Borra las claves deprecadas que tengan valor.

Cada paso se salta lo ya hecho, asi que re-ejecutar no cambia nada.
Cada usuario se confirma por separado; un fallo queda en `errors` y se sigue.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.role_translator import RoleTranslator, role_translator
from profile_sync.domain.entities.profile import LIST_FIELDS
from profile_sync.infrastructure.repositories.profile_repository_impl import ProfileRepositoryImpl
from profile_sync.shared.constants.field_mappings import (
    CONSOLIDATED_KEY_PREFIX,
    DEPRECATED_KEYS,
    FIELD_MAPPINGS,
    FIELD_REFERENCE_PREFIX,
    legacy_keys,
)
from profile_sync.shared.constants.role_constants import LEGACY_PLATFORM_ROLE_RENAME


@dataclass
class MigrationReport:
    users_processed: int = 0
    fields_migrated: int = 0
    roles_updated: int = 0
    types_set: int = 0
    fields_deleted: int = 0
    errors: List[str] = field(default_factory=list)
    details: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def coerce_value(canonical_key: str, value: Any) -> Any:
    """
    Adapta un valor legacy al tipo de la columna canonica.
    Retorna None si no es convertible (no se migra).
    """
    if canonical_key == "headshot_id":
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    if canonical_key in LIST_FIELDS and isinstance(value, str):
        items = [item.strip() for item in value.split(",") if item.strip()]
        return items or None
    if canonical_key not in LIST_FIELDS and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class FieldMigrator:
    """
    Normaliza claves legacy de user_meta.

    Uso:
        report = await FieldMigrator(db).run(dry_run=True)
    """

    def __init__(self, db: AsyncSession, translator: RoleTranslator = role_translator):
        self.db = db
        self.repository = ProfileRepositoryImpl(db)
        self.translator = translator

    async def run(self, dry_run: bool = False) -> MigrationReport:
        report = MigrationReport()
        user_ids = await self.repository.list_user_ids()
        report.users_processed = len(user_ids)
        logger.info(f"Migracion de campos: {len(user_ids)} usuarios (dry_run={dry_run})")

        for user_id in user_ids:
            try:
                detail = await self._migrate_user(user_id, dry_run)
                if not dry_run:
                    await self.db.commit()
            except Exception as exc:
                await self.db.rollback()
                logger.error(f"Error migrando usuario {user_id}: {exc}")
                report.errors.append(f"User {user_id}: {exc}")
                continue

            report.fields_migrated += detail["fields_migrated"]
            report.roles_updated += int(detail["role_renamed"])
            report.types_set += int(detail["type_set"])
            report.fields_deleted += detail["fields_deleted"]
            if any((detail["fields_migrated"], detail["role_renamed"], detail["type_set"], detail["fields_deleted"])):
                report.details.append(detail)

        logger.info(
            f"Migracion terminada: {report.fields_migrated} campos, "
            f"{report.roles_updated} roles, {report.types_set} tipos, "
            f"{report.fields_deleted} borrados, {len(report.errors)} errores"
        )
        return report

    async def _migrate_user(self, user_id: int, dry_run: bool) -> Dict[str, Any]:
        profile = await self.repository.get_profile(user_id)
        meta = await self.repository.get_meta(user_id)

        # 1. Campos legacy -> canonicos
        planned: Dict[str, Any] = {}
        migrated_keys: List[str] = []
        for legacy_key, canonical_key in FIELD_MAPPINGS:
            value = meta.get(legacy_key)
            if is_empty(value):
                continue
            if isinstance(value, str) and value.startswith(FIELD_REFERENCE_PREFIX):
                continue
            current = planned.get(canonical_key, getattr(profile, canonical_key))
            if not is_empty(current):
                continue
            coerced = coerce_value(canonical_key, value)
            if is_empty(coerced):
                continue
            planned[canonical_key] = coerced
            migrated_keys.append(legacy_key)

        if planned and not dry_run:
            await self.repository.set_attributes(user_id, planned)

        # 2. Rol de plataforma legacy
        roles = await self.repository.get_platform_roles(user_id)
        legacy_role, successor = LEGACY_PLATFORM_ROLE_RENAME
        role_renamed = legacy_role in roles
        if role_renamed:
            if not dry_run:
                await self.repository.remove_platform_roles(user_id, [legacy_role])
                await self.repository.add_platform_role(user_id, successor.value)
            roles = [successor.value if r == legacy_role else r for r in roles]

        # 3. Company role derivado
        type_set = False
        company_role = planned.get("company_role", profile.company_role)
        if is_empty(company_role):
            derived = self.translator.derive_company_role(roles)
            if derived is not None:
                type_set = True
                if not dry_run:
                    attributes = {"company_role": derived.value}
                    if is_empty(planned.get("company_roles", profile.company_roles)):
                        attributes["company_roles"] = [derived.value]
                    await self.repository.set_attributes(user_id, attributes)

        # 4. Claves deprecadas
        deleted_keys = [key for key in sorted(DEPRECATED_KEYS) if not is_empty(meta.get(key))]
        if not dry_run:
            for key in deleted_keys:
                await self.repository.delete_meta(user_id, key)

        return {
            "user_id": user_id,
            "email": profile.email,
            "fields_migrated": len(migrated_keys),
            "migrated_keys": migrated_keys,
            "role_renamed": role_renamed,
            "type_set": type_set,
            "fields_deleted": len(deleted_keys),
        }

    async def cleanup_legacy_fields(self, dry_run: bool = False) -> int:
        """
        Borra todas las claves legacy de todos los usuarios. Irreversible:
        el llamador debe pedir confirmacion. En dry-run solo cuenta.
        """
        cleaned = 0
        for key in legacy_keys():
            if key.startswith(CONSOLIDATED_KEY_PREFIX):
                continue
            if dry_run:
                cleaned += await self.repository.count_meta_key(key)
            else:
                cleaned += await self.repository.delete_meta_key(key)

        if not dry_run:
            await self.db.commit()
        logger.info(f"Limpieza de campos legacy: {cleaned} filas (dry_run={dry_run})")
        return cleaned


def summarize(report: MigrationReport) -> List[str]:
    """Lineas de resumen para el CLI."""
    lines = [
        f"Users processed: {report.users_processed}",
        f"Fields migrated: {report.fields_migrated}",
        f"Roles updated: {report.roles_updated}",
        f"Company roles set: {report.types_set}",
        f"Fields deleted: {report.fields_deleted}",
    ]
    if report.errors:
        lines.append(f"Errors: {len(report.errors)}")
    return lines
