"""
Tests for the profile endpoints.
"""

from types import SimpleNamespace

import pytest

from tests.conftest import TEST_USER


def test_get_profile(client, auth_headers):
    response = client.get("/api/user/profile", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == TEST_USER["username"]
    assert data["email"] == TEST_USER["email"]
    assert data["firstName"] is None
    assert "createdAt" in data
    assert "password" not in data
    assert "hashedPassword" not in data


def test_partial_update_keeps_other_fields(client, auth_headers):
    response = client.put(
        "/api/user/profile",
        headers=auth_headers,
        json={"firstName": "Alice", "jobTitle": "Meteorologist"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["firstName"] == "Alice"
    assert data["jobTitle"] == "Meteorologist"
    assert data["username"] == TEST_USER["username"]

    response = client.put("/api/user/profile", headers=auth_headers, json={"company": "Acme Weather"})
    data = response.json()
    assert data["company"] == "Acme Weather"
    assert data["firstName"] == "Alice"


def test_empty_string_leaves_field_unchanged(client, auth_headers):
    client.put("/api/user/profile", headers=auth_headers, json={"bio": "Storm chaser"})

    response = client.put("/api/user/profile", headers=auth_headers, json={"bio": ""})
    assert response.status_code == 200
    assert response.json()["bio"] == "Storm chaser"

    response = client.put("/api/user/profile", headers=auth_headers, json={"bio": None})
    assert response.json()["bio"] == "Storm chaser"

    response = client.put("/api/user/profile", headers=auth_headers, json={"bio": "new"})
    assert response.json()["bio"] == "new"


def test_empty_update_returns_profile(client, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={})
    assert response.status_code == 200
    assert response.json()["email"] == TEST_USER["email"]


def test_update_email_is_normalized(client, auth_headers, login):
    response = client.put(
        "/api/user/profile",
        headers=auth_headers,
        json={"email": " Alice.New@Example.com "},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "alice.new@example.com"

    assert login(email="alice.new@example.com").status_code == 200


def test_update_invalid_email(client, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={"email": "broken"})
    assert response.status_code == 400
    assert response.json()["details"] == ["Please provide a valid email address"]


def test_update_to_taken_email(client, register_user, auth_headers):
    register_user(username="bob", email="bob@example.com")

    response = client.put("/api/user/profile", headers=auth_headers, json={"email": "bob@example.com"})
    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_update_to_own_email_is_allowed(client, auth_headers):
    response = client.put("/api/user/profile", headers=auth_headers, json={"email": TEST_USER["email"]})
    assert response.status_code == 200


def test_profile_of_deleted_user(client, app):
    token = app.state.token_service.issue(SimpleNamespace(id=9999, email="ghost@example.com"))
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/user/profile", headers=headers).status_code == 404
    response = client.put("/api/user/profile", headers=headers, json={"bio": "x"})
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


@pytest.mark.parametrize("field, size", [
    ("firstName", 100),
    ("username", 100),
    ("phone", 50),
    ("company", 200),
])
def test_update_longer_than_column_is_rejected(client, auth_headers, field, size):
    response = client.put("/api/user/profile", headers=auth_headers, json={field: "x" * (size + 1)})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"

    response = client.put("/api/user/profile", headers=auth_headers, json={field: "7" * size})
    assert response.status_code == 200
