# backend/tugas/crud/tasks.py
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from tugas.models.task import TaskInDB
from tugas.schemas.task import TaskCreate, TaskRead


def get_tasks_collection(db):
    return db["tasks"]


def _ensure_aware_utc(dt: datetime) -> datetime:
    """
    pymongo hands stored dates back naive (UTC); freshly built ones are aware.
    Both leave here as aware UTC so the client always gets the same string.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def serialize_task(task) -> TaskRead:
    owner = task.get("owner")
    rating = task.get("rating")
    return TaskRead(
        id=str(task["_id"]),
        name=task["name"],
        mapel=task.get("mapel"),
        deadline=task.get("deadline"),
        rating=rating if rating is not None else 0,
        completed=task.get("completed", False),
        created_at=_ensure_aware_utc(task["createdAt"]),
        owner=str(owner) if owner is not None else None,
    )


def _owner_oid(owner_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(owner_id)
    except (InvalidId, TypeError):
        return None


# CREATE
async def create_task(db, owner_id: str, task_data: TaskCreate) -> TaskRead:
    """
    Raises pydantic.ValidationError when the record is invalid (e.g. no name)
    and PyMongoError when the insert fails.
    """
    fields = task_data.model_dump(exclude_none=True)
    task = TaskInDB(**fields, owner=owner_id)

    new_task = task.model_dump(by_alias=True)
    new_task["owner"] = _owner_oid(owner_id)

    result = await get_tasks_collection(db).insert_one(new_task)
    new_task["_id"] = result.inserted_id
    return serialize_task(new_task)


# READ (owner-scoped, split by completion)
async def get_tasks(db, owner_id: str, *, completed: bool) -> List[TaskRead]:
    owner = _owner_oid(owner_id)
    if owner is None:
        return []

    cursor = get_tasks_collection(db).find(
        {"owner": owner, "completed": completed},
        sort=[("createdAt", 1)],
    )
    docs = await cursor.to_list(length=None)
    return [serialize_task(doc) for doc in docs]


# UPDATE (incomplete -> completed)
async def complete_task(db, owner_id: str, task_id: str) -> int:
    """
    Mark the task completed only if it belongs to owner_id.

    Returns the matched count; a foreign or unknown id is a silent no-op.
    Raises bson.errors.InvalidId for a malformed task_id.
    """
    oid = ObjectId(task_id)
    owner = _owner_oid(owner_id)
    if owner is None:
        return 0

    result = await get_tasks_collection(db).update_one(
        {"_id": oid, "owner": owner},
        {"$set": {"completed": True}},
    )
    return result.matched_count
