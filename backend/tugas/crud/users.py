# backend/tugas/crud/users.py

from typing import Optional, Union

from bson import ObjectId
from bson.errors import InvalidId

from tugas.models.user import UserInDB


def get_users_collection(db):
    return db["users"]


def _safe_object_id(user_id: Union[str, ObjectId]) -> Optional[ObjectId]:
    """
    str/ObjectId -> ObjectId, or None when the value is not a valid id.
    """
    if isinstance(user_id, ObjectId):
        return user_id

    if isinstance(user_id, str):
        user_id = user_id.strip()

    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


# ---------- READ ----------

async def get_user_by_id(db, user_id: Union[str, ObjectId]) -> Optional[UserInDB]:
    oid = _safe_object_id(user_id)
    if oid is None:
        return None
    user = await get_users_collection(db).find_one({"_id": oid})
    return UserInDB(**user) if user else None


async def get_user_by_username(db, username: str) -> Optional[UserInDB]:
    # exact match; callers decide whether to normalize first
    user = await get_users_collection(db).find_one({"username": username})
    return UserInDB(**user) if user else None


# ---------- CREATE ----------

async def create_user(db, *, username: str, password_hash: str) -> UserInDB:
    """
    Insert a new account. Raises pymongo's DuplicateKeyError when the
    username is taken (unique index, see db.mongo.ensure_indexes).
    """
    user_data = {
        "username": username,
        "password": password_hash,
    }

    result = await get_users_collection(db).insert_one(user_data)
    user_data["_id"] = result.inserted_id
    return UserInDB(**user_data)
