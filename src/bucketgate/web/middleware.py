"""Access gate applied to every inbound request."""

from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import Request, status
from fastapi.responses import Response

from bucketgate.app import App
from bucketgate.core.modules.access.models import GateDecision
from bucketgate.core.modules.session.models import SessionToken
from bucketgate.web.deps import SESSION_COOKIE
from bucketgate.web.error_handlers import create_json_error_response, redirect_to_login


async def access_gate_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Redirect or reject unauthenticated requests before they reach a route."""
    app = cast(App, request.app.state.app)
    cookie = request.cookies.get(SESSION_COOKIE)
    token = SessionToken(cookie) if cookie else None

    decision = await app.check_access(request.url.path, token, request.headers.get("accept"))
    if decision == GateDecision.REDIRECT_LOGIN:
        return redirect_to_login()
    if decision == GateDecision.UNAUTHORIZED:
        return create_json_error_response(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
    return await call_next(request)
