# backend/tugas/core/session.py
import logging
import typing
import uuid

import itsdangerous
from itsdangerous.exc import BadSignature
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from tugas.crud import sessions as session_crud

logger = logging.getLogger(__name__)


class MongoSessionMiddleware:
    """
    Cookie sessions with server-side storage.

    Works like starlette's SessionMiddleware (request.session is a plain dict),
    except that the cookie only carries a signed, opaque session id and the
    data lives in the 'sessions' collection of app.state.db.

    - an empty session is never stored and never gets a cookie
    - a live session has its expiry pushed forward on every request
    - clearing request.session destroys the stored document and the cookie
    """

    def __init__(
        self,
        app: ASGIApp,
        secret_key: str,
        session_cookie: str = "tugas.sid",
        max_age: int = 60 * 60 * 24,
        path: str = "/",
        same_site: typing.Literal["lax", "strict", "none"] = "lax",
        https_only: bool = False,
        domain: str | None = None,
    ) -> None:
        self.app = app
        self.signer = itsdangerous.TimestampSigner(str(secret_key))
        self.session_cookie = session_cookie
        self.max_age = max_age
        self.path = path
        self.security_flags = "httponly; samesite=" + same_site
        if https_only:
            self.security_flags += "; secure"
        if domain is not None:
            self.security_flags += f"; domain={domain}"

    def _read_sid(self, connection: HTTPConnection) -> str | None:
        raw = connection.cookies.get(self.session_cookie)
        if not raw:
            return None
        try:
            return self.signer.unsign(raw.encode("utf-8"), max_age=self.max_age).decode("utf-8")
        except BadSignature:
            logger.debug("Ignoring session cookie with a bad or expired signature")
            return None

    def _set_cookie(self, headers: MutableHeaders, sid: str) -> None:
        data = self.signer.sign(sid.encode("utf-8")).decode("utf-8")
        headers.append(
            "Set-Cookie",
            f"{self.session_cookie}={data}; path={self.path}; "
            f"Max-Age={self.max_age}; {self.security_flags}",
        )

    def _clear_cookie(self, headers: MutableHeaders) -> None:
        headers.append(
            "Set-Cookie",
            f"{self.session_cookie}=null; path={self.path}; "
            f"expires=Thu, 01 Jan 1970 00:00:00 GMT; {self.security_flags}",
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        db = scope["app"].state.db
        connection = HTTPConnection(scope)

        sid = self._read_sid(connection)
        initial: dict = {}
        if sid is not None:
            stored = await session_crud.get_session(db, sid)
            if stored is None:
                # unknown or expired on the server side
                sid = None
            else:
                initial = stored

        scope["session"] = dict(initial)

        async def send_wrapper(message: Message) -> None:
            nonlocal sid
            if message["type"] == "http.response.start":
                session = scope["session"]
                headers = MutableHeaders(scope=message)
                if session:
                    if sid is None:
                        sid = uuid.uuid4().hex
                        await session_crud.save_session(db, sid, dict(session), self.max_age)
                    elif session != initial:
                        await session_crud.save_session(db, sid, dict(session), self.max_age)
                    else:
                        await session_crud.touch_session(db, sid, self.max_age)
                    self._set_cookie(headers, sid)
                elif sid is not None:
                    await session_crud.destroy_session(db, sid)
                    self._clear_cookie(headers)
            await send(message)

        await self.app(scope, receive, send_wrapper)
