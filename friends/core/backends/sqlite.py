"""Persisted backend over SQLite."""

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterator
from pathlib import Path

from friends.core.models import Agent, Group, Member, Message
from friends.errors import BackendError, ConflictError
from friends.lib import store
from friends.lib.store import from_row
from friends.lib.store.migrations import Migration

logger = logging.getLogger(__name__)

MIGRATIONS: list[Migration] = [
    (
        "001_initial",
        """
        CREATE TABLE IF NOT EXISTS agents (
            agent_id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            skills_url TEXT NOT NULL DEFAULT 'none',
            endpoint TEXT NOT NULL DEFAULT 'none',
            created_at TEXT NOT NULL
        );
        CREATE TABLE IF NOT EXISTS "groups" (
            group_id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            icon TEXT NOT NULL,
            topic TEXT NOT NULL DEFAULT '',
            purpose TEXT NOT NULL DEFAULT '',
            created_by TEXT NOT NULL,
            created_at TEXT NOT NULL
        );
        CREATE TABLE IF NOT EXISTS group_members (
            group_id TEXT NOT NULL,
            agent_id TEXT NOT NULL,
            PRIMARY KEY (group_id, agent_id)
        );
        CREATE INDEX IF NOT EXISTS idx_group_members_agent ON group_members(agent_id);
        CREATE TABLE IF NOT EXISTS messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_id TEXT NOT NULL,
            agent_id TEXT NOT NULL,
            agent_name TEXT NOT NULL,
            content TEXT NOT NULL,
            reply_to INTEGER,
            created_at TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_messages_group ON messages(group_id, id)
        """,
    ),
]

_AGENT_COLUMNS = "agent_id, name, skills_url, endpoint, created_at AS registered_at"
_GROUP_COLUMNS = "group_id, name, description, icon, topic, purpose, created_by, created_at"
_MESSAGE_COLUMNS = (
    "id, group_id, agent_id, agent_name, content, reply_to, created_at AS timestamp"
)


class SqliteBackend:
    name = "sqlite"

    def __init__(self, db_path: Path | str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def init(self) -> None:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._guard() as conn:
            applied = store.ensure_schema(conn, MIGRATIONS)
        if applied:
            logger.info(f"Migrated {self.db_path}: {', '.join(applied)}")

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def ping(self) -> bool:
        with self._guard() as conn:
            conn.execute("SELECT 1").fetchone()
        return True

    @contextlib.contextmanager
    def _guard(self) -> Iterator[sqlite3.Connection]:
        """Serialize access to the connection and surface driver failures as BackendError."""
        with self._lock:
            try:
                if self._conn is None:
                    self._conn = store.connect(self.db_path, timeout=self.timeout)
                yield self._conn
            except sqlite3.IntegrityError:
                raise
            except sqlite3.Error as e:
                logger.error(f"SQLite backend failure on {self.db_path}: {e}")
                raise BackendError(f"Storage backend failure: {e}") from e

    def upsert_agent(self, agent: Agent) -> Agent:
        with self._guard() as conn:
            conn.execute(
                """
                INSERT INTO agents (agent_id, name, skills_url, endpoint, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(agent_id) DO UPDATE SET
                    name = excluded.name,
                    skills_url = excluded.skills_url,
                    endpoint = excluded.endpoint
                """,
                (agent.agent_id, agent.name, agent.skills_url, agent.endpoint, agent.registered_at),
            )
            row = conn.execute(
                f"SELECT {_AGENT_COLUMNS} FROM agents WHERE agent_id = ?", (agent.agent_id,)
            ).fetchone()
            return from_row(row, Agent)

    def get_agent(self, agent_id: str) -> Agent | None:
        with self._guard() as conn:
            row = conn.execute(
                f"SELECT {_AGENT_COLUMNS} FROM agents WHERE agent_id = ?", (agent_id,)
            ).fetchone()
            return from_row(row, Agent) if row else None

    def list_agents(self) -> list[Agent]:
        with self._guard() as conn:
            rows = conn.execute(f"SELECT {_AGENT_COLUMNS} FROM agents ORDER BY rowid").fetchall()
            return [from_row(row, Agent) for row in rows]

    def agent_exists(self, agent_id: str) -> bool:
        with self._guard() as conn:
            row = conn.execute("SELECT 1 FROM agents WHERE agent_id = ?", (agent_id,)).fetchone()
            return row is not None

    def insert_group(self, group: Group) -> Group:
        with self._guard() as conn:
            try:
                conn.execute(
                    f'INSERT INTO "groups" ({_GROUP_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)',
                    (
                        group.group_id,
                        group.name,
                        group.description,
                        group.icon,
                        group.topic,
                        group.purpose,
                        group.created_by,
                        group.created_at,
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise ConflictError(f"Group '{group.group_id}' already exists") from e
            row = conn.execute(
                f'SELECT {_GROUP_COLUMNS} FROM "groups" WHERE group_id = ?', (group.group_id,)
            ).fetchone()
            return from_row(row, Group)

    def get_group(self, group_id: str) -> Group | None:
        with self._guard() as conn:
            row = conn.execute(
                f'SELECT {_GROUP_COLUMNS} FROM "groups" WHERE group_id = ?', (group_id,)
            ).fetchone()
            return from_row(row, Group) if row else None

    def list_groups(self) -> list[Group]:
        with self._guard() as conn:
            rows = conn.execute(f'SELECT {_GROUP_COLUMNS} FROM "groups" ORDER BY rowid').fetchall()
            return [from_row(row, Group) for row in rows]

    def group_exists(self, group_id: str) -> bool:
        with self._guard() as conn:
            row = conn.execute('SELECT 1 FROM "groups" WHERE group_id = ?', (group_id,)).fetchone()
            return row is not None

    def add_member(self, group_id: str, agent_id: str) -> bool:
        with self._guard() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO group_members (group_id, agent_id) VALUES (?, ?)",
                (group_id, agent_id),
            )
            return cursor.rowcount > 0

    def list_members(self, group_id: str) -> list[Member]:
        with self._guard() as conn:
            rows = conn.execute(
                """
                SELECT gm.agent_id, a.name
                FROM group_members gm
                JOIN agents a ON a.agent_id = gm.agent_id
                WHERE gm.group_id = ?
                ORDER BY gm.rowid
                """,
                (group_id,),
            ).fetchall()
            return [from_row(row, Member) for row in rows]

    def count_members(self, group_id: str) -> int:
        with self._guard() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM group_members WHERE group_id = ?", (group_id,)
            ).fetchone()[0]

    def agent_groups(self, agent_id: str) -> list[str]:
        with self._guard() as conn:
            rows = conn.execute(
                "SELECT group_id FROM group_members WHERE agent_id = ? ORDER BY rowid",
                (agent_id,),
            ).fetchall()
            return [row["group_id"] for row in rows]

    def append_message(
        self,
        group_id: str,
        agent_id: str,
        agent_name: str,
        content: str,
        reply_to: int | None,
        timestamp: str,
    ) -> Message:
        with self._guard() as conn:
            cursor = conn.execute(
                """
                INSERT INTO messages (group_id, agent_id, agent_name, content, reply_to, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (group_id, agent_id, agent_name, content, reply_to, timestamp),
            )
            return Message(
                id=cursor.lastrowid,
                group_id=group_id,
                agent_id=agent_id,
                agent_name=agent_name,
                content=content,
                reply_to=reply_to,
                timestamp=timestamp,
            )

    def list_messages(self, group_id: str, since: int, limit: int) -> list[Message]:
        with self._guard() as conn:
            rows = conn.execute(
                f"""
                SELECT * FROM (
                    SELECT {_MESSAGE_COLUMNS} FROM messages
                    WHERE group_id = ? AND id > ?
                    ORDER BY id DESC
                    LIMIT ?
                ) ORDER BY id ASC
                """,
                (group_id, since, limit),
            ).fetchall()
            return [from_row(row, Message) for row in rows]

    def count_messages(self, group_id: str) -> int:
        with self._guard() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM messages WHERE group_id = ?", (group_id,)
            ).fetchone()[0]
