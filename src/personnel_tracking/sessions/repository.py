from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import StoredSession


class SessionRepository(Protocol):
    def get(self, sid: str) -> Optional[StoredSession]:
        raise NotImplementedError

    def save(self, session: StoredSession) -> None:
        """Insert or replace the row for `session.sid`."""
        raise NotImplementedError

    def delete(self, sid: str) -> None:
        raise NotImplementedError

    def purge_expired(self, now: datetime) -> int:
        raise NotImplementedError
