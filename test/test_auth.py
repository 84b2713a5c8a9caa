from unittest.mock import patch


def _signup(client, email="new@example.com", password="secret123", confirm=None):
    return client.post("/auth/signup", json={
        "email": email,
        "password": password,
        "confirm_password": confirm or password,
        "full_name": "New Person",
    })


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Process-Time" in response.headers


def test_sign_up_and_sign_in(client):
    response = _signup(client, email="New@Example.com")
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new@example.com"
    assert data["is_active"] is True
    assert "hashed_password" not in data

    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "new@example.com"


def test_token_endpoint_uses_form_login(client):
    _signup(client)
    response = client.post("/token", data={"username": "new@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["access_token"]


def test_inactive_user_cannot_get_token(client, deactivate_user):
    """Both login routes refuse an inactive account the same way"""
    _signup(client)
    deactivate_user("new@example.com")

    response = client.post("/token", data={"username": "new@example.com", "password": "secret123"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Inactive user"

    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "secret123"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Inactive user"


def test_sign_up_duplicate_email(client):
    assert _signup(client).status_code == 201
    response = _signup(client)
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"].lower()


def test_sign_up_password_mismatch(client):
    response = _signup(client, confirm="different123")
    assert response.status_code == 422


def test_sign_up_short_password(client):
    response = _signup(client, password="abc")
    assert response.status_code == 422


def test_sign_in_wrong_password(client):
    _signup(client)
    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "wrong-pass"})
    assert response.status_code == 401

    response = client.post("/auth/signin", json={"email": "nobody@example.com", "password": "secret123"})
    assert response.status_code == 401


def test_authentication_required(client):
    """Test that authentication is required"""
    response = client.get("/api/employees/")
    assert response.status_code == 401

    response = client.get(
        "/api/employees/",
        headers={"Authorization": "Bearer invalid_token"}
    )
    assert response.status_code == 401


def test_forgot_password_does_not_reveal_accounts(client):
    _signup(client)

    with patch("hrportal.api.auth.send_reset_link") as send_reset_link:
        known = client.post("/auth/forgot-password", json={"email": "new@example.com"})
        unknown = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == 200
    assert unknown.status_code == 200
    assert known.json() == unknown.json()
    send_reset_link.assert_called_once()

    email, link = send_reset_link.call_args[0]
    assert email == "new@example.com"
    assert "mode=reset" in link
    assert "&token=" in link


def test_reset_password_flow(client):
    _signup(client)

    with patch("hrportal.api.auth.send_reset_link") as send_reset_link:
        client.post("/auth/forgot-password", json={"email": "new@example.com"})
    token = send_reset_link.call_args[0][1].split("&token=", 1)[1]

    response = client.post("/auth/reset-password", json={
        "token": token,
        "password": "brand-new-pass",
        "confirm_password": "brand-new-pass",
    })
    assert response.status_code == 200
    assert response.json()["message"] == "Password updated"

    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "secret123"})
    assert response.status_code == 401
    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "brand-new-pass"})
    assert response.status_code == 200


def test_reset_link_works_once(client):
    _signup(client)

    with patch("hrportal.api.auth.send_reset_link") as send_reset_link:
        client.post("/auth/forgot-password", json={"email": "new@example.com"})
    token = send_reset_link.call_args[0][1].split("&token=", 1)[1]

    response = client.post("/auth/reset-password", json={
        "token": token,
        "password": "brand-new-pass",
        "confirm_password": "brand-new-pass",
    })
    assert response.status_code == 200

    response = client.post("/auth/reset-password", json={
        "token": token,
        "password": "hijacked-pass",
        "confirm_password": "hijacked-pass",
    })
    assert response.status_code == 400

    response = client.post("/auth/signin", json={"email": "new@example.com", "password": "brand-new-pass"})
    assert response.status_code == 200


def test_reset_password_rejects_access_token(client, auth_headers):
    access_token = auth_headers["Authorization"].split(" ", 1)[1]
    response = client.post("/auth/reset-password", json={
        "token": access_token,
        "password": "brand-new-pass",
        "confirm_password": "brand-new-pass",
    })
    assert response.status_code == 400


def test_update_password(client, auth_headers):
    response = client.post("/auth/update-password", headers=auth_headers, json={
        "current_password": "wrong-one",
        "password": "another-pass",
        "confirm_password": "another-pass",
    })
    assert response.status_code == 400

    response = client.post("/auth/update-password", headers=auth_headers, json={
        "current_password": "secret123",
        "password": "another-pass",
        "confirm_password": "another-pass",
    })
    assert response.status_code == 200

    response = client.post("/auth/signin", json={"email": "hr@example.com", "password": "another-pass"})
    assert response.status_code == 200
