"""
Servicios de aplicacion.

Logica reutilizable compartida por receptor, despachador,
sincronizacion masiva y CLI.
"""
from profile_sync.application.services.role_translator import RoleTranslator, role_translator
from profile_sync.application.services.webhook_signer import (
    compute_signature,
    generate_secret,
    serialize_payload,
    verify_signature,
)
from profile_sync.application.services.upsert_engine import UpsertEngine
from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.services.field_migrator import FieldMigrator, MigrationReport

__all__ = [
    "RoleTranslator",
    "role_translator",
    "compute_signature",
    "generate_secret",
    "serialize_payload",
    "verify_signature",
    "UpsertEngine",
    "EndpointRegistry",
    "FieldMigrator",
    "MigrationReport",
]
