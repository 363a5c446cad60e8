"""SQLite connection management and schema migrations."""

from friends.lib.store.migrations import ensure_schema, migrate
from friends.lib.store.rows import Row, from_row
from friends.lib.store.sqlite import connect

__all__ = [
    "connect",
    "ensure_schema",
    "migrate",
    "from_row",
    "Row",
]
