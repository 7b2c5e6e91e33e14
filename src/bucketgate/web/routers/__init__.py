from bucketgate.web.routers.auth import router as auth_router
from bucketgate.web.routers.files import router as files_router
from bucketgate.web.routers.pages import router as pages_router

__all__ = [
    "auth_router",
    "files_router",
    "pages_router",
]
