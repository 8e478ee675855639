"""
Store interfaces and their in-memory implementations.

Every store lives for as long as the application instance that owns it.
Mutations are single synchronous steps (read next id, append / remove), so
they never interleave with another request on the event loop.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from database.models import Task, User

logger = logging.getLogger(__name__)


class TaskNotFound(LookupError):
    """No task with that id belongs to the requesting owner."""

    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


# ── Users ──────────────────────────────────────────────────────────────


class UserStore(ABC):
    """Abstract user collection."""

    @abstractmethod
    def add(self, username: str, password_hash: str) -> User:
        """Append a user with the next sequential id."""
        ...

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        """Return the first user registered under ``username``."""
        ...


class InMemoryUserStore(UserStore):
    def __init__(self):
        self._users: List[User] = []

    def add(self, username: str, password_hash: str) -> User:
        # Usernames are intentionally not unique.
        user = User(
            id=len(self._users) + 1,
            username=username,
            password_hash=password_hash,
        )
        self._users.append(user)
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self._users:
            if user.username == username:
                return user
        return None

    def __len__(self) -> int:
        return len(self._users)


# ── Tasks ──────────────────────────────────────────────────────────────


class TaskStore(ABC):
    """Abstract task collection scoped by owner id."""

    @abstractmethod
    def list(self, owner_id: int) -> List[Task]:
        ...

    @abstractmethod
    def create(self, owner_id: int, text: str) -> Task:
        ...

    @abstractmethod
    def delete(self, owner_id: int, task_id: int) -> None:
        """
        Remove the task ``task_id`` owned by ``owner_id``.

        Raises ``TaskNotFound`` when it does not exist *or* belongs to
        someone else; callers cannot tell the two apart.
        """
        ...


class InMemoryTaskStore(TaskStore):
    def __init__(self):
        self._tasks: List[Task] = []
        self._next_id = 1

    def list(self, owner_id: int) -> List[Task]:
        return [task for task in self._tasks if task.owner_id == owner_id]

    def create(self, owner_id: int, text: str) -> Task:
        # Ids are global across owners, not per owner.
        task = Task(id=self._next_id, text=text, owner_id=owner_id)
        self._next_id += 1
        self._tasks.append(task)
        return task

    def delete(self, owner_id: int, task_id: int) -> None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id and task.owner_id == owner_id:
                del self._tasks[index]
                logger.debug("Deleted task %d for user %d", task_id, owner_id)
                return
        raise TaskNotFound(task_id)
