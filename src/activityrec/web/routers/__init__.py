from activityrec.web.routers.auth import router as auth_router
from activityrec.web.routers.recordings import router as recordings_router

__all__ = [
    "auth_router",
    "recordings_router",
]
