# backend/tugas/api/deps.py
import json
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from tugas.core.errors import AuthError, ValidationError

SESSION_USER_KEY = "userId"

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_optional_user_id(request: Request) -> Optional[str]:
    """
    The user id bound to this request's session, or None.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    return str(user_id) if user_id else None


async def get_current_user_id(
    user_id: Optional[str] = Depends(get_optional_user_id),
) -> str:
    """
    Same as get_optional_user_id, but a request without a session user is a 401.
    """
    if user_id is None:
        raise AuthError("Not authenticated")
    return user_id


def bind_session_user(request: Request, user_id: str) -> None:
    request.session[SESSION_USER_KEY] = user_id


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Request body as a dict. Accepts JSON and HTML form posts; an empty body
    is an empty dict, a JSON body that does not parse is a 400.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}

    body = await request.body()
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise ValidationError("Malformed JSON body")
    return data if isinstance(data, dict) else {}
