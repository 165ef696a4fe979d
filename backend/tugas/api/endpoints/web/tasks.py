# backend/tugas/api/endpoints/web/tasks.py
import logging
from typing import Any, Dict

from bson.errors import InvalidId
from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from tugas.api.deps import get_current_user_id, read_payload
from tugas.core.errors import PersistenceError
from tugas.crud import tasks as task_crud
from tugas.db.mongo import get_db
from tugas.schemas.task import TaskCreate, TaskCreatedResponse, TaskListResponse
from tugas.schemas.user import OkResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tugas", tags=["Tasks"])


# READ ALL (split by completion)
@router.get("", response_model=TaskListResponse)
async def list_tasks(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_db),
):
    try:
        pending = await task_crud.get_tasks(db, user_id, completed=False)
        done = await task_crud.get_tasks(db, user_id, completed=True)
    except PyMongoError:
        logger.exception("Listing tasks for %s failed", user_id)
        raise PersistenceError("Cannot load tasks")
    return TaskListResponse(tasks=pending, completed=done)


# CREATE
@router.post("", response_model=TaskCreatedResponse)
async def create_task(
    user_id: str = Depends(get_current_user_id),
    payload: Dict[str, Any] = Depends(read_payload),
    db=Depends(get_db),
):
    """
    A missing name or an uncastable field fails like a rejected write (500),
    not as a 400.
    """
    try:
        data = TaskCreate.model_validate(payload)
        task = await task_crud.create_task(db, user_id, data)
    except (PydanticValidationError, PyMongoError):
        logger.exception("Creating a task for %s failed", user_id)
        raise PersistenceError("Cannot create task")
    return TaskCreatedResponse(task=task)


# UPDATE (incomplete -> completed)
@router.post("/{task_id}/complete", response_model=OkResponse)
async def complete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_db),
):
    """
    Always {"ok": true} for a well-formed id, even when nothing matched
    (unknown id, or a task owned by someone else).
    """
    try:
        await task_crud.complete_task(db, user_id, task_id)
    except (InvalidId, PyMongoError):
        logger.exception("Completing task %r for %s failed", task_id, user_id)
        raise PersistenceError("Cannot complete task")
    return OkResponse()
