"""
Versioned schema migrations for the POS database.

Files named ``vNNN_description.sql`` in this package are applied in
version order. Each one runs in its own transaction together with its
``schema_migrations`` row, so a failed script leaves no partial schema.
A recorded checksum that no longer matches its file stops the run.
"""

import hashlib
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiosqlite

from retail_pos.config import get_logger, get_settings
from retail_pos.core.exceptions import MigrationError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"^v(\d{3})_(\w+)\.sql$")

REQUIRED_TABLES = (
    "users",
    "products",
    "invoices",
    "invoice_items",
    "expenses",
    "schema_migrations",
)

# Allowed drift between an invoice total and the sum of its lines
TOTAL_TOLERANCE = 0.01


@dataclass(frozen=True)
class Migration:
    """One schema script on disk."""

    version: str
    name: str
    sql: str

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.sql.encode()).hexdigest()[:16]

    @classmethod
    def load(cls, path: Path) -> "Migration":
        match = FILENAME_PATTERN.match(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        return cls(
            version=match.group(1),
            name=match.group(2),
            sql=path.read_text(encoding="utf-8"),
        )


@dataclass
class AppliedMigration:
    version: str
    name: str
    duration_ms: int


@dataclass
class IntegrityCheck:
    """Outcome of one database health rule."""

    name: str
    passed: bool
    detail: dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"


@dataclass
class MigrationStatus:
    db_exists: bool
    applied: list[str]
    pending: list[str]

    @property
    def current_version(self) -> str | None:
        return self.applied[-1] if self.applied else None


def load_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Read migration scripts in version order, skipping misnamed files."""
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(Migration.load(path))
        except ValueError:
            logger.warning("migration_file_skipped", file=path.name)
    return migrations


async def recorded_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their checksums. Empty on a new database."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def _apply(conn: aiosqlite.Connection, migration: Migration) -> AppliedMigration:
    started = time.perf_counter()
    # executescript commits first, so the script opens and closes its own transaction.
    # Version, name and checksum are regex- or hash-constrained, safe to inline.
    script = (
        "BEGIN;\n"
        f"{migration.sql}\n"
        "INSERT INTO schema_migrations (version, name, checksum) "
        f"VALUES ('{migration.version}', '{migration.name}', '{migration.checksum}');\n"
        "COMMIT;"
    )
    try:
        await conn.executescript(script)
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        raise MigrationError(migration.version, str(e)) from e

    duration_ms = int((time.perf_counter() - started) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (duration_ms, migration.version),
    )
    await conn.commit()

    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        duration_ms=duration_ms,
    )
    return AppliedMigration(migration.version, migration.name, duration_ms)


async def migrate(db_path: Path | None = None) -> list[AppliedMigration]:
    """
    Bring the database up to the newest schema.

    Returns the migrations applied by this call. Raises MigrationError
    when a script fails, an applied file was edited, or the migrated
    database fails its integrity checks.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    applied: list[AppliedMigration] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        recorded = await recorded_migrations(conn)
        for migration in load_migrations():
            checksum = recorded.get(migration.version)
            if checksum is None:
                applied.append(await _apply(conn, migration))
            elif checksum != migration.checksum:
                logger.error("migration_checksum_changed", version=migration.version)
                raise MigrationError(migration.version, "file changed after it was applied")

        if applied:
            failed = [c.name for c in await run_integrity_checks(conn) if not c.passed]
            if failed:
                raise MigrationError(
                    applied[-1].version,
                    f"integrity checks failed: {', '.join(failed)}",
                )

    logger.info(
        "database_migrated",
        db_path=str(db_path),
        applied=[m.version for m in applied],
    )
    return applied


async def migration_status(db_path: Path | None = None) -> MigrationStatus:
    """Which known migrations are applied and which are still pending."""
    db_path = db_path or get_settings().storage.db_path
    known = [m.version for m in load_migrations()]

    if not db_path.exists():
        return MigrationStatus(db_exists=False, applied=[], pending=known)

    async with aiosqlite.connect(db_path) as conn:
        recorded = await recorded_migrations(conn)

    return MigrationStatus(
        db_exists=True,
        applied=sorted(recorded),
        pending=[v for v in known if v not in recorded],
    )


# Integrity rules


async def _check_sqlite_integrity(conn: aiosqlite.Connection) -> IntegrityCheck:
    cursor = await conn.execute("PRAGMA integrity_check")
    result = (await cursor.fetchone())[0]
    return IntegrityCheck("integrity", result == "ok", {"result": result})


async def _check_foreign_keys(conn: aiosqlite.Connection) -> IntegrityCheck:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    violations = len(await cursor.fetchall())
    return IntegrityCheck("foreign_keys", violations == 0, {"violations": violations})


async def _existing_tables(conn: aiosqlite.Connection) -> set[str]:
    cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row[0] for row in await cursor.fetchall()}


async def _check_required_tables(conn: aiosqlite.Connection) -> IntegrityCheck:
    existing = await _existing_tables(conn)
    missing = [t for t in REQUIRED_TABLES if t not in existing]
    return IntegrityCheck("required_tables", not missing, {"missing": missing})


async def _check_stock(conn: aiosqlite.Connection) -> IntegrityCheck:
    if "products" not in await _existing_tables(conn):
        return IntegrityCheck("non_negative_stock", False, {"missing": "products"})
    cursor = await conn.execute("SELECT id FROM products WHERE stock_quantity < 0")
    product_ids = [row[0] for row in await cursor.fetchall()]
    return IntegrityCheck("non_negative_stock", not product_ids, {"product_ids": product_ids})


async def _check_invoice_totals(conn: aiosqlite.Connection) -> IntegrityCheck:
    """Every invoice total equals the sum of its line totals."""
    tables = await _existing_tables(conn)
    if not {"invoices", "invoice_items"} <= tables:
        return IntegrityCheck("invoice_totals", False, {"missing": "invoices"})
    cursor = await conn.execute(
        """
        SELECT i.id FROM invoices i
        LEFT JOIN invoice_items ii ON ii.invoice_id = i.id
        GROUP BY i.id
        HAVING ABS(i.total - COALESCE(SUM(ii.quantity * ii.unit_price), 0)) > ?
        """,
        (TOTAL_TOLERANCE,),
    )
    invoice_ids = [row[0] for row in await cursor.fetchall()]
    return IntegrityCheck("invoice_totals", not invoice_ids, {"invoice_ids": invoice_ids})


INTEGRITY_RULES = (
    _check_sqlite_integrity,
    _check_foreign_keys,
    _check_required_tables,
    _check_stock,
    _check_invoice_totals,
)


async def run_integrity_checks(conn: aiosqlite.Connection) -> list[IntegrityCheck]:
    return [await rule(conn) for rule in INTEGRITY_RULES]


async def verify_schema_integrity(db_path: Path | None = None) -> list[IntegrityCheck]:
    """Run every integrity rule against the database file."""
    db_path = db_path or get_settings().storage.db_path
    async with aiosqlite.connect(db_path) as conn:
        checks = await run_integrity_checks(conn)

    failed = [c.name for c in checks if not c.passed]
    if failed:
        logger.warning("integrity_checks_failed", checks=failed)
    return checks
