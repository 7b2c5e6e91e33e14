from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from bucketgate.errors import InvalidCredentialsError
from bucketgate.web.cookies import set_session_cookie
from bucketgate.web.deps import AppDep, ConfigDep, OptionalSessionDep

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field("", description="Username for authentication")
    password: str = Field("", description="Password for authentication")
    remember: bool = Field(False, description="Keep the session for 7 days instead of until the browser closes")


class LoginResponse(BaseModel):
    """Authentication result."""

    success: bool = Field(..., description="Whether the login succeeded")
    error: str | None = Field(None, description="Reason for a failed login")


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with username and password. The session is carried by a cookie.",
    operation_id="login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": LoginResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, config: ConfigDep, token: OptionalSessionDep) -> JSONResponse:
    try:
        session = await app.login(login_data.username, login_data.password, login_data.remember, token)
    except InvalidCredentialsError as e:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"success": False, "error": str(e)})

    response = JSONResponse(content={"success": True})
    set_session_cookie(response, session, config)
    return response
