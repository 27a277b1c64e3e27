"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, middleware and error
handling), ``schemas`` (pydantic payload models), ``services`` (the
in‑memory user store and input validation) and ``api`` (routers).
"""

from .main import app  # noqa: F401
