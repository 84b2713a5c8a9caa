from datetime import datetime


def _create(client, headers, title="Office closed", **extra):
    response = client.post("/api/notifications/", headers=headers, json={
        "title": title,
        "message": "The office is closed on Friday",
        **extra,
    })
    assert response.status_code == 201, response.text
    return response.json()


def test_create_notification(client, auth_headers):
    data = _create(client, auth_headers, notification_date="2026-03-06")

    assert data["is_active"] is True
    assert data["notification_date"] == "2026-03-06"


def test_notification_date_defaults_to_today(client, auth_headers, freeze_time):
    freeze_time(datetime(2026, 3, 9, 8, 30))
    data = _create(client, auth_headers)
    assert data["notification_date"] == "2026-03-09"


def test_toggle_and_filter_notifications(client, auth_headers):
    first = _create(client, auth_headers, title="First", notification_date="2026-03-01")
    _create(client, auth_headers, title="Second", notification_date="2026-03-05")

    response = client.post(f"/api/notifications/{first['id']}/toggle", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = client.get("/api/notifications/", headers=auth_headers)
    assert [item["title"] for item in response.json()] == ["Second", "First"]

    response = client.get("/api/notifications/?active_only=true", headers=auth_headers)
    assert [item["title"] for item in response.json()] == ["Second"]

    response = client.post(f"/api/notifications/{first['id']}/toggle", headers=auth_headers)
    assert response.json()["is_active"] is True


def test_update_notification(client, auth_headers):
    notification = _create(client, auth_headers)

    response = client.put(
        f"/api/notifications/{notification['id']}",
        json={"message": "Reopening Monday"},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Reopening Monday"
    assert response.json()["title"] == "Office closed"


def test_notifications_scoped_to_owner(client, auth_headers, other_headers):
    notification = _create(client, auth_headers)

    assert client.get("/api/notifications/", headers=other_headers).json() == []
    response = client.post(f"/api/notifications/{notification['id']}/toggle", headers=other_headers)
    assert response.status_code == 404


def test_delete_notification(client, auth_headers):
    notification = _create(client, auth_headers)

    assert client.get(f"/api/notifications/{notification['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"/api/notifications/{notification['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/notifications/{notification['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/notifications/{notification['id']}", headers=auth_headers).status_code == 404
