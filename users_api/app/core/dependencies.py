"""
FastAPI dependencies shared by the routers.
"""

from fastapi import Request

from ..services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """Return the user store owned by the application serving ``request``."""
    return request.app.state.user_store
