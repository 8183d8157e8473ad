"""
Versioned schema migrations for the parts database.

Migration files live next to this module as ``vNNN_name.sql`` and are
applied in version order. Each applied version is recorded in
``schema_migrations`` with a checksum so that an edited migration is
detected instead of silently skipped.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILE = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "parts",
    "customers",
    "invoices",
    "activity_logs",
    "app_settings",
    "schema_migrations",
]


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILE.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        sql = path.read_text(encoding="utf-8")
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(sql.encode()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _db_path(db_path: Path | None) -> Path:
    return Path(db_path) if db_path is not None else get_settings().storage.db_path


def discover_migrations() -> list[MigrationInfo]:
    """Migration files sorted by version. Misnamed files are skipped."""
    found = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return found


async def _applied(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum. Empty before the first migration."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations ORDER BY version")
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await _applied(conn)
    return max(applied) if applied else None


async def _apply(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = int((time.perf_counter() - start) * 1000)
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=int((time.perf_counter() - start) * 1000),
            error=str(e),
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before migrating."""
    backup_path = db_path.with_suffix(f".backup_{datetime.now():%Y%m%d_%H%M%S}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema version.

    Stops at the first failed migration or at an applied migration whose
    file has changed. An existing database is backed up first and
    restored if migrating raises.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Whether to back up an existing file

    Returns:
        Results for the migrations that were attempted
    """
    db_path = _db_path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            applied = await _applied(conn)

            for migration in discover_migrations():
                if migration.version in applied:
                    if applied[migration.version] != migration.checksum:
                        logger.error("migration_checksum_changed", version=migration.version)
                        break
                    continue

                result = await _apply(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info("database_ready", applied=len(results))
    return results


# Name used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migration versions."""
    db_path = _db_path(db_path)
    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [],
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await _applied(conn)

    discovered = discover_migrations()
    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def _count(conn: aiosqlite.Connection, sql: str) -> int:
    cursor = await conn.execute(sql)
    return (await cursor.fetchone())[0]


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check the database file and the ledger's stored invariants.

    Besides SQLite's own integrity and foreign key checks this verifies
    that no part has negative stock, that every invoice's balance equals
    total minus paid, and that the settings row exists.
    """
    db_path = _db_path(db_path)

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = len(await cursor.fetchall())

        checks = [
            {"check": "required_tables", "status": "FAIL" if missing else "PASS", "missing": missing},
            {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
            {"check": "foreign_keys", "status": "FAIL" if fk_violations else "PASS", "violations": fk_violations},
        ]
        if missing:
            return checks

        ledger_checks = {
            "non_negative_stock": "SELECT COUNT(*) FROM parts WHERE stock < 0",
            "invoice_balances": (
                "SELECT COUNT(*) FROM invoices WHERE ABS(balance_due - (total - paid_amount)) > 0.005"
            ),
            "settings_row": "SELECT CASE WHEN COUNT(*) = 1 THEN 0 ELSE 1 END FROM app_settings",
        }
        for name, sql in ledger_checks.items():
            violations = await _count(conn, sql)
            checks.append({
                "check": name,
                "status": "FAIL" if violations else "PASS",
                "violations": violations,
            })

    return checks


def main() -> None:
    """Command-line entry point: migrate, show status, or verify."""
    import argparse

    parser = argparse.ArgumentParser(description="Parts Hub database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show applied and pending migrations")
    mode.add_argument("--verify", action="store_true", help="Check schema and ledger integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    args = parser.parse_args()

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Database exists: {status['exists']}")
            print(f"Current version: {status['current_version'] or 'none'}")
            print(f"Pending: {', '.join(status['pending_migrations']) or 'none'}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                extra = {k: v for k, v in check.items() if k not in ("check", "status")}
                print(f"[{check['status']}] {check['check']} {extra}")
            return 0 if all(c["status"] == "PASS" for c in checks) else 1

        results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
        if not results:
            print("Schema is up to date")
        for result in results:
            outcome = "OK" if result.success else "FAILED"
            print(f"[{outcome}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
            if result.error:
                print(f"    {result.error}")
        return 0 if all(r.success for r in results) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
