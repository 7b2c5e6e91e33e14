from fastapi import Response

from bucketgate.config import Config
from bucketgate.core.modules.session.models import REMEMBER_ME_TTL, Session
from bucketgate.web.deps import SESSION_COOKIE


def set_session_cookie(response: Response, session: Session, config: Config) -> None:
    """Attach the session token cookie.

    Remember-me sessions get a persistent cookie matching the session expiry,
    other sessions a browser-session cookie without max_age.
    """
    max_age = int(REMEMBER_ME_TTL.total_seconds()) if session.expires_at is not None else None
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE)
