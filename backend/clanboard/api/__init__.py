"""HTTP layer: FastAPI app factory, auth and routes."""

from clanboard.api.app import create_app

__all__ = ["create_app"]
