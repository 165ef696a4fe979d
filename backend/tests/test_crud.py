# backend/tests/test_crud.py
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from tugas.crud import sessions as session_crud
from tugas.crud import tasks as task_crud
from tugas.crud import users as users_crud
from tugas.db.mongo import ensure_indexes
from tugas.schemas.task import TaskCreate


@pytest_asyncio.fixture()
async def db(mongo_db):
    await ensure_indexes(mongo_db)
    return mongo_db


class TestUsers:
    @pytest.mark.asyncio
    async def test_create_and_fetch(self, db):
        user = await users_crud.create_user(db, username="siti", password_hash="$2b$10$x")
        assert ObjectId.is_valid(user.id)

        by_id = await users_crud.get_user_by_id(db, user.id)
        by_name = await users_crud.get_user_by_username(db, "siti")
        assert by_id == by_name == user

    @pytest.mark.asyncio
    async def test_lookup_misses(self, db):
        assert await users_crud.get_user_by_id(db, str(ObjectId())) is None
        assert await users_crud.get_user_by_id(db, "not-an-object-id") is None
        assert await users_crud.get_user_by_username(db, "ghost") is None

    @pytest.mark.asyncio
    async def test_username_lookup_is_exact(self, db):
        await users_crud.create_user(db, username="Siti", password_hash="h")
        assert await users_crud.get_user_by_username(db, "siti") is None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, db):
        await users_crud.create_user(db, username="siti", password_hash="h")
        with pytest.raises(DuplicateKeyError):
            await users_crud.create_user(db, username="siti", password_hash="h2")


class TestTasks:
    @pytest.mark.asyncio
    async def test_create_sets_defaults_and_owner(self, db):
        owner = str(ObjectId())
        task = await task_crud.create_task(db, owner, TaskCreate(name="PR"))

        assert task.owner == owner
        assert task.completed is False
        assert task.rating == 0

        stored = await db["tasks"].find_one({"_id": ObjectId(task.id)})
        assert stored["owner"] == ObjectId(owner)
        assert stored["createdAt"] is not None

    def test_serialize_reads_naive_dates_as_utc(self):
        aware = datetime(2026, 10, 18, 23, 9, 37, 874000, tzinfo=timezone.utc)
        doc = {"_id": ObjectId(), "name": "PR", "createdAt": aware.replace(tzinfo=None)}

        from_db = task_crud.serialize_task(doc)
        fresh = task_crud.serialize_task({**doc, "createdAt": aware})
        assert from_db.created_at == fresh.created_at == aware
        assert from_db.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_without_name_is_rejected(self, db):
        with pytest.raises(ValidationError):
            await task_crud.create_task(db, str(ObjectId()), TaskCreate(mapel="IPA"))
        assert await db["tasks"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_get_tasks_filters_owner_and_state(self, db):
        mine, theirs = str(ObjectId()), str(ObjectId())
        a = await task_crud.create_task(db, mine, TaskCreate(name="a"))
        b = await task_crud.create_task(db, mine, TaskCreate(name="b"))
        await task_crud.create_task(db, theirs, TaskCreate(name="c"))
        await task_crud.complete_task(db, mine, b.id)

        pending = await task_crud.get_tasks(db, mine, completed=False)
        done = await task_crud.get_tasks(db, mine, completed=True)
        assert [t.id for t in pending] == [a.id]
        assert [t.id for t in done] == [b.id]

    @pytest.mark.asyncio
    async def test_get_tasks_ignores_ownerless_documents(self, db):
        await db["tasks"].insert_one({"name": "orphan", "completed": False, "owner": None})
        assert await task_crud.get_tasks(db, "garbage", completed=False) == []

    @pytest.mark.asyncio
    async def test_complete_reports_matches(self, db):
        mine, theirs = str(ObjectId()), str(ObjectId())
        task = await task_crud.create_task(db, mine, TaskCreate(name="a"))

        assert await task_crud.complete_task(db, theirs, task.id) == 0
        assert await task_crud.complete_task(db, mine, str(ObjectId())) == 0
        assert await task_crud.complete_task(db, mine, task.id) == 1

    @pytest.mark.asyncio
    async def test_complete_rejects_malformed_id(self, db):
        with pytest.raises(InvalidId):
            await task_crud.complete_task(db, str(ObjectId()), "nope")


class TestSessions:
    @pytest.mark.asyncio
    async def test_save_get_destroy(self, db):
        await session_crud.save_session(db, "sid1", {"userId": "u1"}, max_age=60)
        assert await session_crud.get_session(db, "sid1") == {"userId": "u1"}

        await session_crud.destroy_session(db, "sid1")
        assert await session_crud.get_session(db, "sid1") is None

    @pytest.mark.asyncio
    async def test_expired_session_is_invisible(self, db):
        await session_crud.save_session(db, "sid1", {"userId": "u1"}, max_age=-1)
        assert await session_crud.get_session(db, "sid1") is None

    @pytest.mark.asyncio
    async def test_touch_extends_expiry(self, db):
        await session_crud.save_session(db, "sid1", {"userId": "u1"}, max_age=10)
        before = (await db["sessions"].find_one({"_id": "sid1"}))["expires"]

        await session_crud.touch_session(db, "sid1", max_age=3600)
        after = (await db["sessions"].find_one({"_id": "sid1"}))["expires"]
        assert after - before > timedelta(minutes=30)
        assert await session_crud.get_session(db, "sid1") == {"userId": "u1"}
