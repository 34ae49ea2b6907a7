"""API routes module."""

from clanboard.api.routes.metrics import router as metrics_router
from clanboard.api.routes.seasons import router as seasons_router
from clanboard.api.routes.users import router as users_router

__all__ = [
    "metrics_router",
    "seasons_router",
    "users_router",
]
