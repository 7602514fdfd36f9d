"""Server-side Flask sessions.

The cookie carries only a signed session id; the data lives in the
`sessions` table. Sessions have an absolute lifetime counted from creation:
saving a session never pushes its expiry forward. Empty sessions are never
written, so a visitor only gets a row (and a cookie) once something is
stored, i.e. after 2FA verification or registration.
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from flask import Flask, Request, Response
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

from ..common.datetime_utils import utc_now
from .model import StoredSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class ServerSession(CallbackDict, SessionMixin):
    def __init__(
        self,
        initial: Optional[dict] = None,
        *,
        sid: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ):
        def on_update(self) -> None:
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.expires_at = expires_at
        self.new = sid is None
        self.modified = False
        self.previous_sid: Optional[str] = None

    def regenerate(self) -> None:
        """Drop the current id; a fresh one (with a fresh lifetime) is issued on save."""
        if self.sid is not None and self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = None
        self.expires_at = None
        self.new = True
        self.modified = True


class ServerSessionInterface(SessionInterface):
    salt = "pts-session"

    def __init__(
        self,
        store: SessionRepository,
        *,
        lifetime: timedelta,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._lifetime = lifetime
        self._clock = clock

    def _signer(self, app: Flask) -> Optional[Signer]:
        if not app.secret_key:
            return None
        return Signer(app.secret_key, salt=self.salt)

    def open_session(self, app: Flask, request: Request) -> Optional[ServerSession]:
        signer = self._signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if not cookie:
            return ServerSession()

        try:
            sid = signer.unsign(cookie).decode("utf-8")
        except BadSignature:
            logger.warning("Rejected session cookie with a bad signature")
            return ServerSession()

        stored = self._store.get(sid)
        if stored is None:
            return ServerSession()
        if stored.expires_at <= self._clock():
            self._store.delete(sid)
            return ServerSession()

        return ServerSession(stored.data, sid=stored.sid, expires_at=stored.expires_at)

    def save_session(self, app: Flask, session: ServerSession, response: Response) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        if session.accessed:
            response.vary.add("Cookie")

        if session.previous_sid is not None:
            self._store.delete(session.previous_sid)
            session.previous_sid = None

        if not session:
            if session.sid is not None:
                self._store.delete(session.sid)
            if session.modified:
                response.delete_cookie(
                    name, domain=domain, path=path, secure=secure, samesite=samesite, httponly=httponly
                )
            return

        if session.sid is None:
            session.sid = secrets.token_urlsafe(32)
            session.expires_at = self._clock() + self._lifetime
        elif not session.modified:
            return

        self._store.save(StoredSession(sid=session.sid, expires_at=session.expires_at, data=dict(session)))

        if session.new:
            signer = self._signer(app)
            response.set_cookie(
                name,
                signer.sign(session.sid.encode("utf-8")).decode("utf-8"),
                expires=session.expires_at,
                httponly=httponly,
                domain=domain,
                path=path,
                secure=secure,
                samesite=samesite,
            )
