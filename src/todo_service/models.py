from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    The in-memory representation of a Todo item.

    Fields:
    - id: Unique integer identifier, assigned by the store
    - title: Short title, never empty (trimmed by the store)
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp (serialized as 'createdAt')
    """

    id: int
    title: str
    completed: bool
    created_at: datetime


class TodoStats(TypedDict):
    """Counters returned by Store.stats()."""

    total: int
    completed: int
    pending: int
    completionRate: int
