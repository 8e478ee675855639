"""
Todo routes. Every endpoint here is behind the auth gate and only ever
sees tasks owned by the authenticated user.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_task_store
from api.errors import NotFound
from auth.dependencies import get_current_user_id
from database.models import Task
from database.stores import TaskNotFound, TaskStore
from utils.schemas import MessageResponse, TaskCreateRequest

logger = logging.getLogger(__name__)

_AUTH_ERRORS = {
    401: {"model": MessageResponse, "description": "Invalid token"},
    403: {"model": MessageResponse, "description": "Token required"},
}

router = APIRouter(prefix="/todos", tags=["todos"], responses=_AUTH_ERRORS)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def parse_task_id(raw: str) -> Optional[int]:
    """
    Read the leading integer of a path segment, ignoring whatever follows.

    ``"7"`` and ``"7abc"`` and ``"7.9"`` all give ``7``; ``"abc"`` gives ``None``.
    """
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


@router.get("", response_model=List[Task], summary="List the authenticated user's tasks")
async def list_tasks(
    user_id: int = Depends(get_current_user_id),
    tasks: TaskStore = Depends(get_task_store),
) -> List[Task]:
    return tasks.list(user_id)


@router.post("", response_model=Task, summary="Create a task")
async def create_task(
    req: TaskCreateRequest,
    user_id: int = Depends(get_current_user_id),
    tasks: TaskStore = Depends(get_task_store),
) -> Task:
    task = tasks.create(user_id, req.text)
    logger.debug("Created task %d for user %d", task.id, user_id)
    return task


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task by id",
    responses={404: {"model": MessageResponse}},
)
async def delete_task(
    task_id: str,
    user_id: int = Depends(get_current_user_id),
    tasks: TaskStore = Depends(get_task_store),
) -> Dict[str, Any]:
    parsed = parse_task_id(task_id)
    if parsed is None:
        raise NotFound("Task not found")
    try:
        tasks.delete(user_id, parsed)
    except TaskNotFound:
        raise NotFound("Task not found")
    return {"message": "Task deleted"}
