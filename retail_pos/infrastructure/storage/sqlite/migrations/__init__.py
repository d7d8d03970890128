"""Database migrations module."""

from retail_pos.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    AppliedMigration,
    IntegrityCheck,
    Migration,
    MigrationStatus,
    load_migrations,
    migrate,
    migration_status,
    run_integrity_checks,
    verify_schema_integrity,
)

__all__ = [
    "REQUIRED_TABLES",
    "AppliedMigration",
    "IntegrityCheck",
    "Migration",
    "MigrationStatus",
    "load_migrations",
    "migrate",
    "migration_status",
    "run_integrity_checks",
    "verify_schema_integrity",
]
