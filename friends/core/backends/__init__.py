from pathlib import Path

from friends.core.backends.memory import MemoryBackend
from friends.core.backends.sqlite import SqliteBackend
from friends.core.protocols import Backend

__all__ = ["MemoryBackend", "SqliteBackend", "make_backend"]


def make_backend(
    name: str, db_path: Path | str | None = None, timeout: float = 5.0
) -> Backend:
    """Instantiate a backend by name ('memory' or 'sqlite')."""
    if name == "memory":
        return MemoryBackend()
    if name == "sqlite":
        if db_path is None:
            from friends.lib import config, paths

            db_path = paths.db_file(config.get("db_file"))
        return SqliteBackend(db_path, timeout=timeout)
    raise ValueError(f"Unknown backend '{name}'. Use 'memory' or 'sqlite'.")
