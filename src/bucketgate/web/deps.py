from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from bucketgate.app import App
from bucketgate.config import Config
from bucketgate.core.modules.session.models import SessionToken
from bucketgate.errors import AuthenticationError

SESSION_COOKIE = "session_id"

# Security scheme
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_session_token(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> SessionToken | None:
    """Session token carried by the request cookie, if any."""
    return SessionToken(token_cookie) if token_cookie else None


async def require_session(
    app: Annotated[App, Depends(get_app)],
    token: Annotated[SessionToken | None, Depends(get_session_token)],
) -> SessionToken:
    """Get the session token and ensure it refers to a live session."""
    if token is None or not await app.is_authenticated(token):
        raise AuthenticationError
    return token


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
OptionalSessionDep = Annotated[SessionToken | None, Depends(get_session_token)]
SessionDep = Annotated[SessionToken, Depends(require_session)]
