"""
Service information endpoints.

* ``GET /`` returns a welcome message with the main entry points.
* ``GET /health`` reports liveness, uptime, process memory and version.
* ``GET /api/docs`` returns a JSON catalogue of the user endpoints.
  The interactive OpenAPI documentation generated by FastAPI remains
  available under ``/docs``.

These routes are public and are mounted without the ``/api`` prefix.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Request

from ...schemas.envelope import ApiResponse

router = APIRouter()

PAGINATION_QUERY = {
    "page": "number (default: 1)",
    "limit": "number (default: 10, max: 100)",
}

ENDPOINT_CATALOGUE: Dict[str, Dict[str, Any]] = {
    "health": {
        "method": "GET",
        "path": "/health",
        "description": "Health check endpoint",
    },
    "users": {
        "method": "GET",
        "path": "/api/users",
        "description": "Get all users with pagination",
        "query": PAGINATION_QUERY,
    },
    "searchUsers": {
        "method": "GET",
        "path": "/api/users/search",
        "description": "Search users by name or email",
        "query": {"q": "string (required)", **PAGINATION_QUERY},
    },
    "userStats": {
        "method": "GET",
        "path": "/api/users/stats",
        "description": "Get user statistics",
    },
    "getUser": {
        "method": "GET",
        "path": "/api/users/{id}",
        "description": "Get user by ID",
    },
    "createUser": {
        "method": "POST",
        "path": "/api/users",
        "description": "Create a new user",
        "body": {
            "name": "string (required, 1-100 characters)",
            "email": "string (required, valid email)",
            "age": "number (optional, 0-150)",
        },
    },
    "updateUser": {
        "method": "PUT",
        "path": "/api/users/{id}",
        "description": "Update user by ID",
        "body": {
            "name": "string (optional)",
            "email": "string (optional, valid email)",
            "age": "number (optional, 0-150)",
        },
    },
    "deleteUser": {
        "method": "DELETE",
        "path": "/api/users/{id}",
        "description": "Delete user by ID",
    },
}


@router.get("/", response_model=ApiResponse[Dict[str, Any]], response_model_exclude_unset=True)
async def root(request: Request) -> ApiResponse[Dict[str, Any]]:
    settings = request.app.state.settings
    return ApiResponse(
        success=True,
        message=f"Welcome to {settings.project_name}",
        data={
            "version": settings.api_version,
            "endpoints": {
                "health": "/health",
                "users": "/api/users",
                "docs": "/api/docs",
            },
            "environment": settings.environment,
        },
    )


@router.get("/health", response_model=ApiResponse[Dict[str, Any]], response_model_exclude_unset=True)
async def health(request: Request) -> ApiResponse[Dict[str, Any]]:
    """Liveness check used by load balancers and container orchestrators."""
    settings = request.app.state.settings
    uptime = time.monotonic() - request.app.state.started_at
    memory = psutil.Process().memory_info()
    return ApiResponse(
        success=True,
        message="Service is healthy",
        data={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(uptime, 3),
            "memory": {"rss": memory.rss, "vms": memory.vms},
            "version": settings.api_version,
            "environment": settings.environment,
        },
    )


@router.get("/api/docs", response_model=ApiResponse[Dict[str, Any]], response_model_exclude_unset=True)
async def api_docs(request: Request) -> ApiResponse[Dict[str, Any]]:
    settings = request.app.state.settings
    return ApiResponse(
        success=True,
        message="API Documentation",
        data={
            "title": settings.project_name,
            "version": settings.api_version,
            "description": "In-memory user directory with CRUD, pagination, search and statistics",
            "endpoints": ENDPOINT_CATALOGUE,
        },
    )
