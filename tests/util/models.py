from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TypedDict

from memql import AwareDatetime


@dataclass
class User:
    id: int
    name: str
    age: Optional[int] = None
    visits: Optional[int] = None
    created_at: Optional[datetime] = None  # naive, UTC
    updated_at: Optional[AwareDatetime] = None

    @property
    def display_name(self) -> str:
        return self.name.upper()


class UserDict(TypedDict):
    id: int
    name: str
    age: Optional[int]


def users(*names: str, **fields) -> list[User]:
    """ Make users with sequential ids """
    return [
        User(id=i, name=name, **fields)
        for i, name in enumerate(names, start=1)
    ]


def rows(field: str, *values) -> list[dict]:
    """ Make dict rows with one field

    Example:
        rows('a', 1, 2, 3) -> [{'a': 1}, {'a': 2}, {'a': 3}]
    """
    return [{field: value} for value in values]


def values(field: str, rows) -> list:
    """ Get one field from every row """
    return [row[field] if isinstance(row, dict) else getattr(row, field) for row in rows]
