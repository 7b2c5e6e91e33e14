from typing import Annotated

from fastapi import APIRouter, Form, status
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response

from bucketgate.errors import InvalidCredentialsError
from bucketgate.web.cookies import clear_session_cookie, set_session_cookie
from bucketgate.web.deps import AppDep, ConfigDep, OptionalSessionDep, SessionDep
from bucketgate.web.pages import index_page_path, render_login_page

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/login")
async def login_page(app: AppDep, config: ConfigDep, token: OptionalSessionDep) -> Response:
    if await app.is_authenticated(token):
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    return HTMLResponse(render_login_page(config.public_path))


@router.post("/do-login")
async def form_login(
    app: AppDep,
    config: ConfigDep,
    token: OptionalSessionDep,
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """Login from the HTML form: redirect home, or re-render the form with a notice."""
    try:
        session = await app.login(username, password, current_token=token)
    except InvalidCredentialsError as e:
        return HTMLResponse(render_login_page(config.public_path, error=str(e)))

    response = RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    set_session_cookie(response, session, config)
    return response


@router.get("/logout")
async def logout(app: AppDep, token: OptionalSessionDep) -> Response:
    await app.logout(token)
    response = RedirectResponse("/login", status_code=status.HTTP_302_FOUND)
    clear_session_cookie(response)
    return response


@router.get("/")
@router.get("/index.html")
async def index_page(config: ConfigDep, _: SessionDep) -> FileResponse:
    return FileResponse(index_page_path(config.public_path), media_type="text/html")
