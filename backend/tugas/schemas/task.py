# backend/tugas/schemas/task.py

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- request ---
class TaskCreate(BaseModel):
    """
    Body of POST /api/tugas.
    The owner comes from the session, never from the body.
    `name` is checked when the record is built (see TaskInDB), so a missing
    name fails the write rather than the request parse.
    """
    name: Optional[str] = None
    mapel: Optional[str] = None
    deadline: Optional[str] = None
    rating: Optional[Union[int, float]] = None

    @field_validator("name", "mapel", "deadline", mode="before")
    @classmethod
    def _scalar_to_str(cls, v):
        # {"mapel": 5} or {"deadline": 20261101} are stored as strings
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("rating", mode="before")
    @classmethod
    def _blank_rating(cls, v):
        # empty form field
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


# --- response ---
class TaskRead(BaseModel):
    """
    A task as the client sees it. `id` mirrors the MongoDB _id.
    """
    id: str
    name: str
    mapel: Optional[str] = None
    deadline: Optional[str] = None
    rating: Union[int, float] = 0
    completed: bool = False
    created_at: datetime = Field(..., alias="createdAt")
    owner: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class TaskListResponse(BaseModel):
    tasks: List[TaskRead]
    completed: List[TaskRead]


class TaskCreatedResponse(BaseModel):
    task: TaskRead
