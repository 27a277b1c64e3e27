"""
API package containing the routers.

``router`` aggregates the resource routers mounted under ``/api``;
``endpoints.info`` holds the service level routes (welcome page,
health check and endpoint catalogue).
"""
