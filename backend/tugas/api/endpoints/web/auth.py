# backend/tugas/api/endpoints/web/auth.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from tugas.api.deps import bind_session_user, get_optional_user_id, read_payload
from tugas.core.errors import AuthError, PersistenceError, ValidationError
from tugas.core.security import hash_password, verify_password
from tugas.crud import users as users_crud
from tugas.db.mongo import get_db
from tugas.schemas.user import AuthResponse, Credentials, MeResponse, OkResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def _credentials(payload: Dict[str, Any]) -> Credentials:
    try:
        creds = Credentials.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Missing fields")
    if not creds.is_complete():
        raise ValidationError("Missing fields")
    return creds


def _normalize_username(username: str) -> str:
    return username.lower().strip()


@router.post("/register", response_model=AuthResponse)
async def register(
    request: Request,
    payload: Dict[str, Any] = Depends(read_payload),
    db=Depends(get_db),
):
    """
    Create an account and log it in.
    The username is stored exactly as sent (login is the only place it gets normalized).
    """
    creds = _credentials(payload)
    try:
        password_hash = await hash_password(creds.password)
        user = await users_crud.create_user(
            db, username=creds.username, password_hash=password_hash
        )
    except (PyMongoError, ValueError):
        # duplicate usernames land here too
        logger.exception("Registration failed for username=%r", creds.username)
        raise PersistenceError("Unable to create user")

    bind_session_user(request, user.id)
    logger.info("Registered user %s", user.id)
    return AuthResponse(username=user.username)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    payload: Dict[str, Any] = Depends(read_payload),
    db=Depends(get_db),
):
    creds = _credentials(payload)
    try:
        user = await users_crud.get_user_by_username(db, _normalize_username(creds.username))
    except PyMongoError:
        logger.exception("Login lookup failed")
        raise PersistenceError("Login failed")

    if user is None:
        raise AuthError("Invalid credentials")
    if not await verify_password(creds.password, user.password):
        raise AuthError("Invalid credentials")

    bind_session_user(request, user.id)
    return AuthResponse(username=user.username)


@router.post("/logout", response_model=OkResponse)
async def logout(request: Request):
    # the session middleware drops the stored session and the cookie
    request.session.clear()
    return OkResponse()


@router.get("/me", response_model=MeResponse)
async def me(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db=Depends(get_db),
):
    if user_id is None:
        raise AuthError("Not authenticated")
    try:
        user = await users_crud.get_user_by_id(db, user_id)
    except PyMongoError:
        logger.exception("Loading user %s failed", user_id)
        raise PersistenceError("Unable to load user")

    # the account may have been removed behind the session's back
    if user is None:
        raise AuthError("Not authenticated")
    return MeResponse(username=user.username)
