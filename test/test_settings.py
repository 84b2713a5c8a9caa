def test_settings_created_on_sign_up(client, auth_headers):
    response = client.get("/api/settings/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "hr@example.com"
    assert data["first_name"] == "Hannah"
    assert data["last_name"] == "Reyes"
    assert data["role"] == "HR Manager"
    assert data["theme_color"] == "blue"
    assert data["dark_mode"] is False
    assert data["email_notifications"] is True


def test_update_settings(client, auth_headers):
    response = client.put("/api/settings/", headers=auth_headers, json={
        "company_name": "Acme Corp",
        "company_email": "people@acme.example.com",
        "dark_mode": True,
        "theme_color": "green",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["company_name"] == "Acme Corp"
    assert data["dark_mode"] is True

    response = client.get("/api/settings/", headers=auth_headers)
    assert response.json()["theme_color"] == "green"
    assert response.json()["email"] == "hr@example.com"


def test_update_settings_requires_fields(client, auth_headers):
    response = client.put("/api/settings/", headers=auth_headers, json={})
    assert response.status_code == 400


def test_settings_are_per_account(client, auth_headers, other_headers):
    client.put("/api/settings/", headers=auth_headers, json={"company_name": "Acme Corp"})

    response = client.get("/api/settings/", headers=other_headers)
    assert response.json()["company_name"] is None
    assert response.json()["email"] == "other@example.com"
