import pytest

from triptech.core.config import Settings, get_settings
from triptech.models.types import UserRole


def _register(client, email="jane.doe@example.com", role="logistics", **overrides):
    payload = {
        "email": email,
        "full_name": "Jane Doe",
        "company_name": "Doe Logistics",
        "role": role,
        "phone": "555-0100",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_creates_pending_account(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Account created successfully"
    data = body["data"]
    assert data["username"] == "jane.doe"
    assert data["status"] == "Pending"
    assert data["role"] == "logistics"
    assert data["company_name"] == "Doe Logistics"


def test_register_in_dev_mode_returns_generated_password(client):
    data = _register(client).json()["data"]

    assert len(data["default_password"]) == 8
    assert data["credentials"] == {"username": "jane.doe", "password": data["default_password"]}
    assert data["notification"] == (
        "Development mode: no email sent to jane.doe@example.com, credentials are in this response"
    )


def test_register_outside_dev_mode_emails_password(app, client, email_service):
    app.dependency_overrides[get_settings] = lambda: Settings(DEV_MODE=False)

    data = _register(client).json()["data"]

    assert data["default_password"] is None
    assert data["credentials"] is None
    assert data["notification"] == "Credentials email sent to jane.doe@example.com"
    assert len(email_service.sent) == 1
    sent = email_service.sent[0]
    assert sent["to_email"] == "jane.doe@example.com"
    assert sent["username"] == "jane.doe"
    assert len(sent["password"]) == 8


def test_register_twice_with_same_email_conflicts(client):
    assert _register(client).status_code == 201

    response = _register(client)

    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Email already registered", "statusCode": 409}


def test_register_derives_unique_usernames_from_local_part(client):
    first = _register(client, email="sam@one.com").json()["data"]
    second = _register(client, email="sam@two.com").json()["data"]
    third = _register(client, email="sam@three.com").json()["data"]

    assert [first["username"], second["username"], third["username"]] == ["sam", "sam1", "sam2"]


@pytest.mark.parametrize("missing", ["email", "full_name", "company_name", "role"])
def test_register_requires_fields(client, missing):
    payload = {
        "email": "x@example.com",
        "full_name": "X",
        "company_name": "X Co",
        "role": "owner",
    }
    del payload[missing]

    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert missing in response.json()["error"]


def test_login_with_generated_credentials(client):
    registered = _register(client).json()["data"]

    response = client.post("/api/auth/login", json={
        "username": registered["username"],
        "password": registered["default_password"],
        "role": "logistics",
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "jane.doe@example.com"
    assert data["user"]["password_changed"] is False
    assert "password_hash" not in data["user"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {data['token']}"})
    assert profile.status_code == 200
    assert profile.json()["data"]["username"] == "jane.doe"


@pytest.mark.parametrize("field, value", [
    ("username", "someone.else"),
    ("password", "wrong-password"),
    ("role", "owner"),
    ("role", "not-a-role"),
])
def test_login_mismatch_gives_identical_error(client, field, value):
    registered = _register(client).json()["data"]
    credentials = {
        "username": registered["username"],
        "password": registered["default_password"],
        "role": "logistics",
    }
    credentials[field] = value

    response = client.post("/api/auth/login", json=credentials)

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid username or password", "statusCode": 401}


def test_login_requires_all_fields(client):
    response = client.post("/api/auth/login", json={"username": "jane", "password": "x"})
    assert response.status_code == 400


def test_update_profile_changes_only_profile_fields(client, create_user, auth_headers):
    user = create_user(UserRole.VENDOR, "vendor@example.com", full_name="Old Name")

    response = client.put(
        "/api/auth/profile",
        json={"full_name": "New Name", "address": "1 Depot Road", "role": "admin"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["full_name"] == "New Name"
    assert data["address"] == "1 Depot Road"
    assert data["role"] == "vendor"


def test_update_profile_rejects_null_full_name(client, create_user, auth_headers):
    user = create_user(UserRole.VENDOR, "vendor@example.com", full_name="Old Name")
    headers = auth_headers(user)

    response = client.put("/api/auth/profile", json={"full_name": None}, headers=headers)

    assert response.status_code == 400
    assert response.json()["success"] is False
    profile = client.get("/api/auth/profile", headers=headers).json()["data"]
    assert profile["full_name"] == "Old Name"


def test_update_profile_without_full_name_keeps_it(client, create_user, auth_headers):
    user = create_user(UserRole.VENDOR, "vendor@example.com", full_name="Old Name")

    response = client.put("/api/auth/profile", json={"phone": "555-0199"}, headers=auth_headers(user))

    assert response.status_code == 200
    assert response.json()["data"]["full_name"] == "Old Name"
    assert response.json()["data"]["phone"] == "555-0199"


def test_register_follows_process_dev_mode(client, email_service, process_settings):
    process_settings(DEV_MODE="false")

    data = _register(client).json()["data"]

    assert data["default_password"] is None
    assert len(email_service.sent) == 1


def test_profile_of_deleted_user_is_not_found(client, session, create_user, auth_headers):
    user = create_user(UserRole.OWNER, "gone@example.com")
    headers = auth_headers(user)
    session.delete(user)
    session.commit()

    response = client.get("/api/auth/profile", headers=headers)

    assert response.status_code == 404


def test_logout_always_succeeds(client):
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


def test_unfinished_endpoints_return_501(client, create_user, auth_headers):
    user = create_user(UserRole.OWNER, "owner@example.com")

    verify = client.post("/api/auth/verify-email")
    change = client.post("/api/auth/change-password", headers=auth_headers(user))

    assert verify.status_code == 501
    assert change.status_code == 501
    assert change.json()["error"] == "Not implemented"


def test_change_password_still_requires_token(client):
    assert client.post("/api/auth/change-password").status_code == 401
