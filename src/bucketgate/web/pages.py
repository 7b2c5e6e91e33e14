"""Rendering of the login and main pages from the public directory."""

from pathlib import Path

import structlog
from liquid import Environment

logger = structlog.get_logger(__name__)

LOGIN_PAGE = "login.html"
INDEX_PAGE = "index.html"

_environment = Environment()


def render_login_page(public_path: Path, error: str | None = None) -> str:
    """Render the login page, with an error notice in its error box when given.

    The page is a Liquid template; ``error`` is available to it as a variable.
    """
    source = (public_path / LOGIN_PAGE).read_text(encoding="utf-8")
    try:
        return _environment.from_string(source).render(error=error)
    except Exception as e:
        logger.exception("login_page_render_failed", error=str(e))
        raise ValueError(f"Failed to render login page: {e}") from e


def index_page_path(public_path: Path) -> Path:
    return public_path / INDEX_PAGE
