# backend/tugas/models/user.py
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserInDB(BaseModel):
    """
    A document in the 'users' collection.
    `password` holds the bcrypt hash, never the plain text.
    """
    # MongoDB "_id" exposed as "id"
    id: str = Field(..., alias="_id")
    username: str
    password: str

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("id", mode="before")
    @classmethod
    def _object_id_to_str(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v
