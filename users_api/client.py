"""Users API client.

This module defines a small client for a running Users API instance.
It uses the ``requests`` library internally and exposes one method per
endpoint:

* :meth:`health` – service health check.
* :meth:`api_docs` – the JSON endpoint catalogue.
* :meth:`list_users` / :meth:`search_users` – paginated collections.
* :meth:`get_user_stats` – aggregate statistics.
* :meth:`get_user`, :meth:`create_user`, :meth:`update_user`,
  :meth:`delete_user` – single record operations.

Every method returns a tuple ``(envelope, error)``.  On success
``envelope`` is the decoded response body (``{"success": true,
"message": ..., "data": ...}``) and ``error`` is ``None``.  On failure
``envelope`` is ``None`` and ``error`` is a dictionary with the keys
``status_code`` and ``message``; ``status_code`` is ``None`` when the
server could not be reached.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]

USERS_PATH = "/api/users"
DEFAULT_TIMEOUT = 15


class UsersApiClient:
    """Client for interacting with the Users API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/users``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(envelope, error)`` as described in the module
            docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Service operations
    # ------------------------------------------------------------------
    def health(self) -> Result:
        return self._request("GET", "/health")

    def api_docs(self) -> Result:
        return self._request("GET", "/api/docs")

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self, page: int = 1, limit: int = 10) -> Result:
        """Retrieve one page of users.

        Args:
            page: 1‑based page number.
            limit: Page size (1–100).
        """
        return self._request("GET", USERS_PATH, params={"page": page, "limit": limit})

    def search_users(self, query: str, page: int = 1, limit: int = 10) -> Result:
        """Search users whose name or email contains ``query`` (case insensitive)."""
        return self._request(
            "GET", f"{USERS_PATH}/search", params={"q": query, "page": page, "limit": limit}
        )

    def get_user_stats(self) -> Result:
        return self._request("GET", f"{USERS_PATH}/stats")

    def get_user(self, user_id: str) -> Result:
        return self._request("GET", f"{USERS_PATH}/{user_id}")

    def create_user(self, name: str, email: str, age: Optional[int] = None) -> Result:
        """Create a user.

        Args:
            name: Display name (1–100 characters).
            email: E‑mail address.
            age: Optional age (0–150).  Omitted from the request when ``None``.
        """
        payload: Dict[str, Any] = {"name": name, "email": email}
        if age is not None:
            payload["age"] = age
        return self._request("POST", USERS_PATH, json_body=payload)

    def update_user(self, user_id: str, **changes: Any) -> Result:
        """Update the given fields of a user, e.g. ``update_user(uid, age=31)``."""
        return self._request("PUT", f"{USERS_PATH}/{user_id}", json_body=changes)

    def delete_user(self, user_id: str) -> Result:
        return self._request("DELETE", f"{USERS_PATH}/{user_id}")
