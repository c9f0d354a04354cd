"""
CLI de operador: migracion de campos y sincronizacion de perfiles.

Uso:
  profile-sync migrate-fields [--dry-run]
  profile-sync cleanup-fields [--dry-run] [--yes]
  profile-sync sync-from-hub [--hub-url=URL] [--type=ROLE] [--limit=N] [--dry-run]
  profile-sync setup-sync [--hub-url=URL] [--hub-token=T] [--webhook-secret=S]
                          [--generate-secret] [--add-endpoint=URL]
                          [--remove-endpoint=URL] [--site-context=CTX]
  profile-sync site-context

Errores de configuracion terminan con codigo 1 y una linea "Error: ...".
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from dotenv import load_dotenv
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from profile_sync.application.services.field_migrator import FieldMigrator, summarize
from profile_sync.application.services.endpoint_registry import EndpointRegistry
from profile_sync.application.use_cases.bulk_sync_use_cases import BulkSyncUseCases
from profile_sync.application.use_cases.sync_admin_use_cases import SyncAdminUseCases
from profile_sync.core.config import settings
from profile_sync.shared.exceptions.base import AppException

SessionFactory = Callable[[], AsyncSession]

DRY_RUN_BANNER = "=== DRY RUN MODE - No changes will be made ==="
DRY_RUN_FOOTER = "This was a dry run. Run without --dry-run to apply changes."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="profile-sync", description="Profile synchronization operator tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate-fields", help="Consolidar claves legacy en columnas canonicas")
    migrate.add_argument("--dry-run", action="store_true", help="Solo reportar, sin escribir")

    cleanup = subparsers.add_parser("cleanup-fields", help="Borrar claves legacy (irreversible)")
    cleanup.add_argument("--dry-run", action="store_true", help="Solo contar filas")
    cleanup.add_argument("--yes", action="store_true", help="No pedir confirmacion")

    pull = subparsers.add_parser("sync-from-hub", help="Traer perfiles desde el hub")
    pull.add_argument("--hub-url", default=None, help="URL del API del hub (por defecto la configurada)")
    pull.add_argument("--type", default=None, help="Company role a sincronizar")
    pull.add_argument("--limit", type=int, default=None, help="Maximo de perfiles")
    pull.add_argument("--dry-run", action="store_true", help="Clasificar sin escribir")

    setup = subparsers.add_parser("setup-sync", help="Configurar hub, secreto, endpoints y contexto")
    setup.add_argument("--hub-url", default=None)
    setup.add_argument("--hub-token", default=None)
    setup.add_argument("--webhook-secret", default=None)
    setup.add_argument("--generate-secret", action="store_true")
    setup.add_argument("--add-endpoint", default=None)
    setup.add_argument("--remove-endpoint", default=None)
    setup.add_argument("--site-context", default=None)

    subparsers.add_parser("site-context", help="Mostrar contexto, roles y configuracion de sincronizacion")
    return parser


def _configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL)


def _confirm(question: str) -> bool:
    answer = input(f"{question} [y/N] ").strip().lower()
    return answer in ("y", "yes")


async def cmd_migrate_fields(db: AsyncSession, args: argparse.Namespace) -> int:
    if args.dry_run:
        print(DRY_RUN_BANNER)
        print("")
    print("Starting field migration...")
    print("")

    report = await FieldMigrator(db).run(dry_run=args.dry_run)

    print("=== MIGRATION RESULTS ===")
    print("")
    for line in summarize(report):
        print(line)
    if report.errors:
        print("")
        print("Errors encountered:")
        for error in report.errors:
            print(f"  - {error}")

    print("")
    if args.dry_run:
        print(DRY_RUN_FOOTER)
    else:
        print("Migration complete!")
        print('Next step: run "profile-sync cleanup-fields" to remove legacy fields.')
    return 0


async def cmd_cleanup_fields(db: AsyncSession, args: argparse.Namespace) -> int:
    if args.dry_run:
        print(DRY_RUN_BANNER)
        print("")
    else:
        print("Warning: This will permanently delete legacy meta fields!")
        print('Warning: Make sure you have run "profile-sync migrate-fields" first.')
        print("")
        if not args.yes and not _confirm("Are you sure you want to proceed?"):
            print("Aborted.")
            return 1

    print("Cleaning up legacy fields...")
    cleaned = await FieldMigrator(db).cleanup_legacy_fields(dry_run=args.dry_run)
    print(f"Legacy field records {'to delete' if args.dry_run else 'deleted'}: {cleaned}")
    print("")
    print(DRY_RUN_FOOTER if args.dry_run else "Cleanup complete!")
    return 0


async def cmd_sync_from_hub(db: AsyncSession, args: argparse.Namespace) -> int:
    registry = EndpointRegistry(db)
    context = await registry.get_site_context()

    if args.dry_run:
        print(DRY_RUN_BANNER)
        print("")

    def progress(index: int, total: int, email: str) -> None:
        print(f"[{index}/{total}] {email or '(no email)'}")

    result = await BulkSyncUseCases(db).sync(
        context,
        hub_url=args.hub_url,
        type_filter=args.type,
        limit=args.limit,
        dry_run=args.dry_run,
        progress=progress,
    )

    print("")
    print("=== SYNC RESULTS ===")
    print(f"{'Would create' if args.dry_run else 'Created'}: {result.created}")
    print(f"{'Would update' if args.dry_run else 'Updated'}: {result.updated}")
    print(f"Skipped: {result.skipped}")
    print(f"Errors: {len(result.errors)}")
    for error in result.errors:
        print(f"  - {error}")
    if args.dry_run:
        print("")
        print(DRY_RUN_FOOTER)
    return 0


async def cmd_setup_sync(db: AsyncSession, args: argparse.Namespace) -> int:
    admin = SyncAdminUseCases(db)
    changes = await admin.update_settings(
        hub_url=args.hub_url,
        hub_token=args.hub_token,
        webhook_secret=args.webhook_secret,
        generate_secret=args.generate_secret,
        site_context=args.site_context,
        add_endpoint=args.add_endpoint,
        remove_endpoint=args.remove_endpoint,
    )
    if not changes:
        print("No changes requested. Current configuration:")
        print("")
        return await cmd_site_context(db, args)

    for key, value in changes.items():
        print(f"{key}: {value}")
    if args.generate_secret:
        print("")
        print("Copy this secret to the hub's endpoint configuration for this site.")
    print("Sync settings saved.")
    return 0


async def cmd_site_context(db: AsyncSession, args: argparse.Namespace) -> int:
    info = await SyncAdminUseCases(db).site_context_info()

    print(f"Site context:     {info['site_context']} ({info['label']})")
    print(f"Locked by env:    {'yes' if info['locked'] else 'no'}")
    print(f"Profile editing:  {'enabled' if info['profile_editing'] else 'disabled'}")
    print(f"Accepts sync:     {'yes' if info['accepts_synced_profiles'] else 'no'}")
    print("")
    print("Company roles:")
    for role in info["company_roles"]:
        marker = "x" if role["active"] else " "
        platform = f"{role['platform_role_label']} ({role['platform_role']})"
        print(f"  [{marker}] {role['slug']:<18} {role['label']:<18} -> {platform}")
    print("")
    print(f"Hub URL:          {info['hub_url'] or '(not set)'}")
    print(f"Hub token:        {'configured' if info['hub_token_configured'] else '(not set)'}")
    print(f"Webhook secret:   {'configured' if info['webhook_secret_configured'] else '(not set)'}")
    print(f"Webhook endpoints ({len(info['webhook_endpoints'])}):")
    for url in info["webhook_endpoints"]:
        print(f"  - {url}")
    print(f"Webhook subscriptions: {info['webhook_subscriptions']}")
    return 0


COMMANDS = {
    "migrate-fields": cmd_migrate_fields,
    "cleanup-fields": cmd_cleanup_fields,
    "sync-from-hub": cmd_sync_from_hub,
    "setup-sync": cmd_setup_sync,
    "site-context": cmd_site_context,
}


async def _run(args: argparse.Namespace, session_factory: Optional[SessionFactory]) -> int:
    owns_engine = session_factory is None
    if owns_engine:
        from profile_sync.infrastructure.database.session import AsyncSessionLocal, close_db, init_db

        await init_db()
        session_factory = AsyncSessionLocal

    try:
        async with session_factory() as db:
            return await COMMANDS[args.command](db, args)
    finally:
        if owns_engine:
            await close_db()


def main(argv: Optional[List[str]] = None, session_factory: Optional[SessionFactory] = None) -> int:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)
    _configure_logging()

    try:
        return asyncio.run(_run(args, session_factory))
    except AppException as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
