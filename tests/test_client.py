"""HTTP client and demo tests against a fake requests session."""

import json
from typing import Any, Dict, List, Optional

import requests

from users_api.client import UsersApiClient
from users_api.demo import run_demo


class FakeResponse:
    def __init__(self, status_code: int, payload: Optional[Dict[str, Any]] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.content = json.dumps(payload).encode() if payload is not None else b""
        self.text = self.content.decode()

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def request(self, **kwargs: Any) -> FakeResponse:
        self.calls.append(kwargs)
        response = self.responses.pop(0) if self.responses else FakeResponse(200, {"success": True})
        if isinstance(response, Exception):
            raise response
        return response


def _ok() -> FakeResponse:
    return FakeResponse(200, {"success": True})


def test_create_user_sends_payload_without_missing_age() -> None:
    session = FakeSession([FakeResponse(201, {"success": True, "data": {"id": "user_1"}})])
    client = UsersApiClient(base_url="http://api.test/", session=session)

    envelope, error = client.create_user("John Doe", "john@example.com")

    assert error is None
    assert envelope["data"]["id"] == "user_1"
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://api.test/api/users"
    assert call["json"] == {"name": "John Doe", "email": "john@example.com"}


def test_search_passes_query_parameters() -> None:
    session = FakeSession()
    client = UsersApiClient(base_url="http://api.test", session=session)

    client.search_users("john", page=2, limit=5)

    assert session.calls[0]["url"] == "http://api.test/api/users/search"
    assert session.calls[0]["params"] == {"q": "john", "page": 2, "limit": 5}


def test_http_error_returns_status_and_error_text() -> None:
    session = FakeSession(
        [
            FakeResponse(
                404,
                {
                    "success": False,
                    "message": "User not found",
                    "error": "User with ID user_9 does not exist",
                },
            )
        ]
    )
    client = UsersApiClient(base_url="http://api.test", session=session)

    envelope, error = client.get_user("user_9")

    assert envelope is None
    assert error == {"status_code": 404, "message": "User with ID user_9 does not exist"}


def test_connection_error_has_no_status() -> None:
    session = FakeSession([requests.ConnectionError("refused")])
    client = UsersApiClient(base_url="http://api.test", session=session)

    envelope, error = client.health()

    assert envelope is None
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_update_user_sends_only_given_fields() -> None:
    session = FakeSession()
    client = UsersApiClient(base_url="http://api.test", session=session)

    client.update_user("user_1", age=31)

    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["url"] == "http://api.test/api/users/user_1"
    assert session.calls[0]["json"] == {"age": 31}


def test_demo_walks_through_every_endpoint() -> None:
    created = [
        FakeResponse(201, {"success": True, "data": {"id": f"user_{index}"}}) for index in (1, 2, 3)
    ]
    session = FakeSession([_ok(), _ok(), _ok(), *created] + [_ok() for _ in range(7)])
    client = UsersApiClient(base_url="http://api.test", session=session)
    lines: List[str] = []

    run_demo(client, out=lines.append)

    requested = [(call["method"], call["url"].replace("http://api.test", "")) for call in session.calls]
    assert requested == [
        ("GET", "/health"),
        ("GET", "/api/docs"),
        ("GET", "/api/users"),
        ("POST", "/api/users"),
        ("POST", "/api/users"),
        ("POST", "/api/users"),
        ("GET", "/api/users"),
        ("GET", "/api/users/search"),
        ("GET", "/api/users/user_1"),
        ("PUT", "/api/users/user_1"),
        ("GET", "/api/users/stats"),
        ("DELETE", "/api/users/user_3"),
        ("GET", "/api/users"),
    ]
    assert lines[-1] == "\nDemo completed!"
