# backend/tugas/crud/sessions.py

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional


def get_sessions_collection(db):
    """
    Server-side session documents: {_id: sid, session: {...}, expires: datetime}.
    """
    return db["sessions"]


def _utcnow() -> datetime:
    # Naive UTC, which is what pymongo hands back for stored datetimes.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def expiry_from_now(max_age: int) -> datetime:
    return _utcnow() + timedelta(seconds=max_age)


# READ
async def get_session(db, sid: str) -> Optional[Dict[str, Any]]:
    """
    Session data for sid, or None when unknown or expired.
    The TTL index removes expired documents eventually; the expiry check here
    covers the window before the reaper runs.
    """
    doc = await get_sessions_collection(db).find_one(
        {"_id": sid, "expires": {"$gt": _utcnow()}}
    )
    if not doc:
        return None
    return dict(doc.get("session") or {})


# CREATE / UPDATE
async def save_session(db, sid: str, data: Dict[str, Any], max_age: int) -> None:
    await get_sessions_collection(db).update_one(
        {"_id": sid},
        {"$set": {"session": data, "expires": expiry_from_now(max_age)}},
        upsert=True,
    )


async def touch_session(db, sid: str, max_age: int) -> None:
    """Push the expiry forward without rewriting the data."""
    await get_sessions_collection(db).update_one(
        {"_id": sid},
        {"$set": {"expires": expiry_from_now(max_age)}},
    )


# DELETE
async def destroy_session(db, sid: str) -> None:
    await get_sessions_collection(db).delete_one({"_id": sid})
