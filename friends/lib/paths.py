import os
from pathlib import Path


def dot_friends() -> Path:
    """Data directory: $FRIENDS_HOME, else ~/.friends."""
    home = os.getenv("FRIENDS_HOME")
    if home:
        return Path(home)
    return Path.home() / ".friends"


def config_file() -> Path:
    return dot_friends() / "config.yaml"


def db_file(name: str) -> Path:
    return dot_friends() / name
