import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def connect(db_path: Path | str, timeout: float = 5.0) -> sqlite3.Connection:
    """Connect to SQLite in autocommit mode with a bounded lock wait.

    `timeout` seconds is both the driver connect timeout and the busy
    timeout, so a locked database raises OperationalError instead of hanging.
    """
    start = time.perf_counter()
    last_error: sqlite3.OperationalError | None = None

    for attempt in range(5):
        conn = sqlite3.connect(db_path, timeout=timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.isolation_level = None

        try:
            conn.execute("PRAGMA foreign_keys = ON")
            conn.execute(f"PRAGMA busy_timeout = {int(timeout * 1000)}")
            if str(db_path) != ":memory:":
                conn.execute("PRAGMA journal_mode = WAL")
            break
        except sqlite3.OperationalError as err:
            last_error = err
            conn.close()
            if "locked" in str(err).lower() and attempt < 4:
                time.sleep(0.05 * (attempt + 1))
                continue
            raise
    else:
        raise last_error or sqlite3.OperationalError("Failed to initialize SQLite connection")

    elapsed = time.perf_counter() - start
    if elapsed > 0.1:
        logger.warning(f"SQLite connection took {elapsed:.3f}s (possible lock contention)")

    return conn
