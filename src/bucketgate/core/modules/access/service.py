from bucketgate.core.core import Service
from bucketgate.core.modules.access.models import GateDecision
from bucketgate.core.modules.session.models import Session, SessionToken

LOGIN_PATH = "/login"

# Authentication flow and health endpoints, reachable without a session
PUBLIC_PATHS = frozenset({"/login", "/do-login", "/logout", "/health"})

# Static assets and API routes, which enforce their own rules
PUBLIC_PREFIXES = ("/public/", "/assets/", "/static/", "/api/")

HOME_PATHS = frozenset({"/", "/index.html"})


def accepts_json(accept: str | None) -> bool:
    """Whether an Accept header asks for a machine-readable response."""
    return accept is not None and "application/json" in accept


def classify(path: str, is_authenticated: bool, wants_json: bool = False) -> GateDecision:
    """Decide whether a request may proceed.

    Browser navigation is sent to the login page, while callers that accept
    JSON get a 401 they can handle.
    """
    if path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return GateDecision.ALLOW
    if is_authenticated:
        return GateDecision.ALLOW
    if path in HOME_PATHS:
        return GateDecision.REDIRECT_LOGIN
    if wants_json:
        return GateDecision.UNAUTHORIZED
    return GateDecision.REDIRECT_LOGIN


class AccessService(Service):
    async def check_request(self, path: str, token: SessionToken | None, accept: str | None) -> GateDecision:
        """Classify a request using the session it carries."""
        authenticated = await self.core.services.session.is_authenticated(token)
        return classify(path, authenticated, accepts_json(accept))

    async def ensure_authenticated(self, token: SessionToken | None) -> Session:
        """Ensure the request carries a live session."""
        return await self.core.services.session.get_session(token)
