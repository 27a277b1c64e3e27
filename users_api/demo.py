"""Walk through the Users API against a running server.

Usage::

    python -m users_api.demo --base-url http://localhost:3000

The base URL defaults to the ``API_URL`` environment variable, then to
``http://localhost:3000``.  Each step prints the request and the JSON
response (or the error) returned by the server.
"""

import argparse
import json
import os
import sys
from typing import Any, Callable, Dict, Optional

from .client import Result, UsersApiClient

DEFAULT_BASE_URL = "http://localhost:3000"

DEMO_USERS = (
    {"name": "John Doe", "email": "john@example.com", "age": 30},
    {"name": "Jane Smith", "email": "jane@example.com", "age": 25},
    {"name": "Bob Johnson", "email": "bob@example.com", "age": 35},
)


def _show(title: str, result: Result, out: Callable[[str], None]) -> Optional[Dict[str, Any]]:
    envelope, error = result
    out(f"\n{title}")
    if error:
        out(f"Error ({error['status_code']}): {error['message']}")
        return None
    out(json.dumps(envelope, indent=2))
    return envelope


def _created_id(envelope: Optional[Dict[str, Any]]) -> Optional[str]:
    if envelope and envelope.get("data"):
        return envelope["data"].get("id")
    return None


def run_demo(client: UsersApiClient, out: Callable[[str], None] = print) -> None:
    """Exercise every endpoint once, in the order a new user would."""
    out("Users API Demo")
    out("==============")
    out(f"Base URL: {client.base_url}")

    _show("1. Health Check", client.health(), out)
    _show("2. API Documentation", client.api_docs(), out)
    _show("3. Get Initial Users", client.list_users(), out)

    created = [
        _created_id(_show(f"4. Create User {user['name']}", client.create_user(**user), out))
        for user in DEMO_USERS
    ]

    _show("5. Get All Users", client.list_users(page=1, limit=10), out)
    _show("6. Search Users", client.search_users("John"), out)

    first, last = created[0], created[-1]
    if first:
        _show("7. Get User by ID", client.get_user(first), out)
        _show("8. Update User", client.update_user(first, name="John Updated", age=31), out)

    _show("9. User Statistics", client.get_user_stats(), out)

    if last:
        _show("10. Delete User", client.delete_user(last), out)

    _show("11. Final User List", client.list_users(), out)
    out("\nDemo completed!")


def main(argv: Optional[list] = None) -> int:
    ap = argparse.ArgumentParser(description="Run the Users API demo against a live server.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("API_URL", DEFAULT_BASE_URL),
        help="Server base URL (default: $API_URL or %s)" % DEFAULT_BASE_URL,
    )
    args = ap.parse_args(argv)

    client = UsersApiClient(base_url=args.base_url)
    envelope, error = client.health()
    if error:
        print(f"[!] Server not reachable at {args.base_url}: {error['message']}", file=sys.stderr)
        return 1
    run_demo(client)
    return 0


if __name__ == "__main__":
    sys.exit(main())
