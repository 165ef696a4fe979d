# backend/tugas/models/task.py

from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    # BSON dates keep milliseconds only
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class TaskInDB(BaseModel):
    """
    A document in the 'tasks' collection.

    Field names on the wire and in MongoDB stay as the frontend knows them
    (`mapel`, `createdAt`, `owner`). `owner` is the owning user's id; the CRUD
    layer stores it as an ObjectId.
    """
    name: str = Field(..., min_length=1)
    mapel: Optional[str] = None  # subject
    deadline: Optional[str] = None  # free-form, not parsed
    rating: Union[int, float] = 0
    completed: bool = False
    created_at: datetime = Field(default_factory=_now, alias="createdAt")
    owner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
