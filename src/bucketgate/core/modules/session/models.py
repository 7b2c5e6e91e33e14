"""Session management models."""

from datetime import datetime, timedelta
from typing import NewType

from pydantic import BaseModel, Field

from bucketgate.utils import now

SessionToken = NewType("SessionToken", str)

REMEMBER_ME_TTL = timedelta(days=7)


class Session(BaseModel):
    """Server-side proof of a successful login.

    ``expires_at`` is None for browser-session logins: the session lives
    until the client discards its cookie or logs out, or until it sits idle
    longer than the store's idle timeout when one is configured.
    """

    token: SessionToken
    username: str
    created_at: datetime = Field(default_factory=now)
    expires_at: datetime | None = None
    last_seen_at: datetime = Field(default_factory=now)

    def is_expired(self, at: datetime, idle_timeout: timedelta | None = None) -> bool:
        if self.expires_at is not None and self.expires_at <= at:
            return True
        return idle_timeout is not None and self.last_seen_at + idle_timeout <= at
