#!/usr/bin/env python3
"""
Retail POS management CLI.

Usage:
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Show migration status
    python manage.py verify      Run schema integrity checks
    python manage.py seed        Create default users and sample products
    python manage.py serve       Run the API server
"""

import argparse
import asyncio
import sys

from retail_pos.config import configure_logging, get_settings


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    from retail_pos.core.exceptions import MigrationError
    from retail_pos.infrastructure.storage.sqlite.migrations import migrate

    try:
        applied = asyncio.run(migrate())
    except MigrationError as e:
        print(f"Migration failed: {e.message}")
        sys.exit(1)

    if not applied:
        print("Database is up to date.")
    for m in applied:
        print(f"  v{m.version} {m.name} ({m.duration_ms}ms)")


def cmd_status(args: argparse.Namespace) -> None:
    """Show migration status."""
    from retail_pos.infrastructure.storage.sqlite.migrations import migration_status

    status = asyncio.run(migration_status())
    print(f"Database: {get_settings().storage.db_path}")
    if not status.db_exists:
        print("  (not created yet)")
    print(f"  Current version: {status.current_version or '-'}")
    print(f"  Applied: {', '.join(status.applied) or '-'}")
    print(f"  Pending: {', '.join(status.pending) or '-'}")


def cmd_verify(args: argparse.Namespace) -> None:
    """Run integrity checks; exit non-zero on failure."""
    from retail_pos.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity())
    for check in checks:
        print(f"  {check.name}: {check.status}")
    if not all(check.passed for check in checks):
        sys.exit(1)


async def _seed() -> None:
    from retail_pos.infrastructure.storage.sqlite import (
        close_pool,
        get_catalog_store,
        get_user_store,
    )
    from retail_pos.infrastructure.storage.sqlite.migrations import migrate
    from retail_pos.infrastructure.storage.sqlite.seed import seed_demo_data

    await migrate()
    try:
        result = await seed_demo_data(await get_user_store(), await get_catalog_store())
    finally:
        await close_pool()

    print(f"Users created: {', '.join(result.users_created) or 'none'}")
    print(f"Products created: {result.products_created}")


def cmd_seed(args: argparse.Namespace) -> None:
    """Create default users and sample products."""
    asyncio.run(_seed())


def cmd_serve(args: argparse.Namespace) -> None:
    """Run uvicorn in the foreground."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "retail_pos.api.main:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Retail POS management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.set_defaults(func=cmd_status)

    # verify
    p_verify = sub.add_parser("verify", help="Run schema integrity checks")
    p_verify.set_defaults(func=cmd_verify)

    # seed
    p_seed = sub.add_parser("seed", help="Create default users and sample products")
    p_seed.set_defaults(func=cmd_seed)

    # serve
    p_serve = sub.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: from settings)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: from settings)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
