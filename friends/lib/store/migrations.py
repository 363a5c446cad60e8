"""Schema migrations with data loss safeguards."""

import logging
import sqlite3
from collections.abc import Callable

logger = logging.getLogger(__name__)

Migration = tuple[str, str | Callable[[sqlite3.Connection], None]]


def ensure_schema(conn: sqlite3.Connection, migs: list[Migration] | None = None) -> list[str]:
    """Apply pending migrations to an open connection. Returns applied names."""
    if not migs:
        return []
    return migrate(conn, migs)


def migrate(conn: sqlite3.Connection, migs: list[Migration]) -> list[str]:
    """Apply migrations in order, skipping those recorded in _migrations."""
    conn.execute("CREATE TABLE IF NOT EXISTS _migrations (name TEXT PRIMARY KEY)")

    applied_now = []
    for name, migration in migs:
        applied = conn.execute("SELECT 1 FROM _migrations WHERE name = ?", (name,)).fetchone()
        if applied:
            continue
        try:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name != '_migrations' AND name != 'sqlite_sequence'"
            )
            tables = [row[0] for row in cursor.fetchall()]
            before = {t: _get_table_count(conn, t) for t in tables}

            conn.execute("BEGIN")
            if callable(migration):
                migration(conn)
            else:
                for statement in _split(migration):
                    conn.execute(statement)

            for table, count_before in before.items():
                _check_migration_safety(conn, table, count_before, allow_loss=0)

            conn.execute("INSERT OR IGNORE INTO _migrations (name) VALUES (?)", (name,))
            conn.execute("COMMIT")
            applied_now.append(name)
            logger.info(f"Applied migration '{name}'")
        except Exception as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error(f"Migration '{name}' failed: {e}")
            raise

    return applied_now


def _split(script: str) -> list[str]:
    return [s.strip() for s in script.split(";") if s.strip()]


def _get_table_count(conn: sqlite3.Connection, table: str) -> int:
    """Get row count for table, returns 0 if table doesn't exist."""
    try:
        cursor = conn.execute(
            "SELECT COUNT(*) FROM sqlite_master WHERE type='table' AND name=?",
            (table,),
        )
        if not cursor.fetchone()[0]:
            return 0
        result = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        return result[0] if result else 0
    except sqlite3.OperationalError:
        return 0


def _check_migration_safety(
    conn: sqlite3.Connection, table: str, before: int, allow_loss: int = 0
) -> None:
    """Verify row count after migration, raise if data loss exceeds threshold.

    Args:
        conn: Database connection
        table: Table name to check
        before: Row count before migration
        allow_loss: Max rows permitted to be lost (e.g., duplicates removed)

    Raises:
        ValueError: If data loss detected exceeds allow_loss
    """
    after = _get_table_count(conn, table)
    lost = before - after

    if lost > allow_loss:
        msg = f"Migration {table}: {lost} rows lost (before: {before}, after: {after})"
        logger.error(msg)
        raise ValueError(msg)

    if lost > 0:
        logger.warning(
            f"Migration {table}: {lost} rows removed (expected for allow_loss={allow_loss})"
        )
