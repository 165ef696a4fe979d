# backend/tugas/schemas/user.py

from typing import Optional

from pydantic import BaseModel


# ---------- request ----------

class Credentials(BaseModel):
    """
    Body of POST /api/register and POST /api/login.
    Both fields are optional here so that a missing one is reported as
    400 "Missing fields" by the handler instead of a schema error.
    """
    username: Optional[str] = None
    password: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


# ---------- response ----------

class AuthResponse(BaseModel):
    ok: bool = True
    username: str


class MeResponse(BaseModel):
    username: str


class OkResponse(BaseModel):
    ok: bool = True
