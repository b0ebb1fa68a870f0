from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import ValidationError
from .logging_config import get_logger
from .models import TodoEntity, TodoStats

logger = get_logger(__name__)

SEED_TITLES = (
    "Learn FastAPI middleware",
    "Implement RESTful API",
    "Build frontend interface",
)


def _clean_title(title: Any) -> str:
    """Return the trimmed title, or raise ValidationError if it is unusable."""
    if title is None:
        raise ValidationError("todo title is required", field="title")
    if not isinstance(title, str):
        raise ValidationError("todo title must be a string", field="title")
    s = title.strip()
    if not s:
        raise ValidationError("todo title must not be empty", field="title")
    return s


# PUBLIC_INTERFACE
class Store(ABC):
    """Abstract contract for the owner of the todo collection."""

    @abstractmethod
    def list_all(self) -> List[TodoEntity]:
        """Return copies of all todos in insertion order."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def create(self, title: Any) -> TodoEntity:
        """Create and return a new TodoEntity. Raises ValidationError on a bad title."""

    @abstractmethod
    def update(self, todo_id: int, fields: Mapping[str, Any]) -> Optional[TodoEntity]:
        """
        Apply the supplied fields ('title', 'completed') to an existing todo.
        Return the updated entity, or None if not found.
        Raises ValidationError if a supplied title is unusable.
        """

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def stats(self) -> TodoStats:
        """Return total/completed/pending counts and the completion rate in percent."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every todo and reset id assignment."""

    def seed(self) -> List[TodoEntity]:
        """
        Insert the sample todos and mark the first one completed.
        Meant to be called once by the application at startup.
        """
        logger.info("Seeding sample todos")
        created = [self.create(title) for title in SEED_TITLES]
        first = self.update(created[0]["id"], {"completed": True})
        if first is not None:
            created[0] = first
        return created


class InMemoryStore(Store):
    """
    Thread-safe in-memory store. A single lock guards the collection and the
    id counter, so ids stay unique when handlers run in a thread pool.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        # dicts keep insertion order, which is the listing order
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def list_all(self) -> List[TodoEntity]:
        with self._lock:
            items = [t.copy() for t in self._items.values()]
        logger.debug("Listing %d todos", len(items))
        return items

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            if item is None:
                logger.info("Todo %s not found", todo_id)
                return None
            return item.copy()

    def create(self, title: Any) -> TodoEntity:
        clean = _clean_title(title)
        with self._lock:
            entity: TodoEntity = {
                "id": self._next_id,
                "title": clean,
                "completed": False,
                "created_at": self._now(),
            }
            self._next_id += 1
            self._items[entity["id"]] = entity
            logger.info("Created todo id=%d title=%r", entity["id"], entity["title"])
            return entity.copy()

    def update(self, todo_id: int, fields: Mapping[str, Any]) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                logger.info("Update failed: todo %s not found", todo_id)
                return None

            # A rejected title leaves the record unchanged
            changes: Dict[str, Any] = {}
            if "title" in fields:
                changes["title"] = _clean_title(fields["title"])
            if "completed" in fields:
                changes["completed"] = bool(fields["completed"])

            existing.update(changes)  # type: ignore[typeddict-item]
            logger.info("Updated todo id=%d fields=%s", todo_id, changes)
            return existing.copy()

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            removed = self._items.pop(todo_id, None)
        if removed is None:
            logger.info("Delete failed: todo %s not found", todo_id)
            return False
        logger.info("Deleted todo id=%d title=%r", todo_id, removed["title"])
        return True

    def stats(self) -> TodoStats:
        with self._lock:
            total = len(self._items)
            completed = sum(1 for t in self._items.values() if t["completed"])
        pending = total - completed
        # Half-up rounding: 12.5 -> 13
        rate = math.floor(completed / total * 100 + 0.5) if total > 0 else 0
        logger.debug("Stats total=%d completed=%d pending=%d", total, completed, pending)
        return {
            "total": total,
            "completed": completed,
            "pending": pending,
            "completionRate": rate,
        }

    def clear(self) -> None:
        with self._lock:
            count = len(self._items)
            self._items = {}
            self._next_id = 1
        logger.info("Cleared %d todos", count)
