"""Input validation tests."""

from users_api.app.services.validation import (
    describe_errors,
    validate_search_query,
    validate_user_create,
    validate_user_update,
)


def test_valid_create_payload() -> None:
    result = validate_user_create({"name": "John Doe", "email": "john@example.com", "age": 30})

    assert result.ok
    assert result.errors == []
    assert result.value.name == "John Doe"
    assert result.value.age == 30


def test_create_ignores_unknown_and_server_fields() -> None:
    result = validate_user_create(
        {"name": "John", "email": "john@example.com", "id": "user_9", "role": "admin"}
    )

    assert result.ok
    assert "id" not in result.value.model_dump()


def test_create_requires_name_and_email() -> None:
    result = validate_user_create({})

    assert not result.ok
    assert any(reason.startswith("name:") for reason in result.errors)
    assert any(reason.startswith("email:") for reason in result.errors)


def test_create_rejects_bad_values() -> None:
    cases = [
        {"name": "", "email": "john@example.com"},
        {"name": "x" * 101, "email": "john@example.com"},
        {"name": "John", "email": "not-an-email"},
        {"name": "John", "email": "john@example.com", "age": -1},
        {"name": "John", "email": "john@example.com", "age": 151},
        {"name": "John", "email": "john@example.com", "age": "30"},
        {"name": "John", "email": "john@example.com", "age": 30.5},
        {"name": "John", "email": "john@example.com", "age": True},
        {"name": "John", "email": "john@example.com", "age": None},
        {"name": 42, "email": "john@example.com"},
    ]
    for payload in cases:
        result = validate_user_create(payload)
        assert not result.ok, payload
        assert result.errors, payload


def test_create_accepts_boundary_values() -> None:
    for age in (0, 150):
        assert validate_user_create({"name": "J", "email": "j@x.io", "age": age}).ok
    assert validate_user_create({"name": "x" * 100, "email": "j@x.io"}).ok


def test_create_rejects_non_object_body() -> None:
    for payload in (None, [], "John"):
        result = validate_user_create(payload)
        assert not result.ok
        assert result.errors[0].startswith("body:")


def test_update_accepts_empty_and_partial_payloads() -> None:
    empty = validate_user_update({})
    partial = validate_user_update({"age": 31})

    assert empty.ok and empty.value.changes() == {}
    assert partial.ok and partial.value.changes() == {"age": 31}


def test_update_rejects_nulls_and_invalid_fields() -> None:
    for payload in ({"name": None}, {"email": "nope"}, {"age": 200}, {"name": ""}):
        assert not validate_user_update(payload).ok, payload


def test_search_query_required() -> None:
    assert not validate_search_query(None).ok
    assert validate_search_query("").errors == ["q: Search query is required"]
    assert validate_search_query("john").value == "john"


def test_describe_errors_strips_request_location() -> None:
    reasons = describe_errors(
        [
            {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 100"},
            {"loc": ("body",), "msg": "Field required"},
        ]
    )

    assert reasons == [
        "limit: Input should be less than or equal to 100",
        "body: Field required",
    ]
