import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response

from bucketgate.core.modules.access.service import LOGIN_PATH, accepts_json
from bucketgate.errors import AuthenticationError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str) -> JSONResponse:
    """Create JSON error response in the {"error": message} shape clients expect."""
    return JSONResponse(status_code=status_code, content={"error": message})


def redirect_to_login() -> RedirectResponse:
    return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_302_FOUND)


async def user_error_handler(request: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        # Browser navigation goes to the login page, API callers get a 401
        if not accepts_json(request.headers.get("accept")):
            return redirect_to_login()
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, StorageError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        # Default for any other UserError subclass
        status_code = status.HTTP_400_BAD_REQUEST

    return create_json_error_response(status_code=status_code, message=str(exc))


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Handle malformed request bodies and parameters (400) in the {"error": message} shape."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    if not errors:
        return create_json_error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return create_json_error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {location}: {first.get('msg', 'invalid')}")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message="An unexpected error occurred."
    )
