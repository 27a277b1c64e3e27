"""
Top‑level package for the Users API demo.

The web application lives in ``users_api.app``; the ``client`` and
``demo`` modules talk to a running instance over HTTP.  Importing the
top‑level package has no side effects.
"""

__all__ = []
