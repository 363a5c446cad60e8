import sqlite3
from dataclasses import fields
from typing import Any, TypeVar

T = TypeVar("T")

Row = sqlite3.Row


def from_row(row: dict[str, Any] | Any, dataclass_type: type[T]) -> T:
    """Convert dict-like row to dataclass instance.

    Matches row keys to dataclass field names; alias columns in SQL
    (`created_at AS registered_at`) where the names differ.
    """
    field_names = {f.name for f in fields(dataclass_type)}
    row_dict = dict(row) if not isinstance(row, dict) else row
    kwargs = {key: row_dict[key] for key in field_names if key in row_dict}
    return dataclass_type(**kwargs)
