from datetime import datetime

import pytest


@pytest.fixture
def log_data(employee):
    return {
        "employee_id": employee["id"],
        "date": "2026-03-02",
        "task": "Payroll export",
        "description": "Monthly export for finance",
        "hours_spent": 2.5,
        "priority": "high",
    }


def test_create_work_log(client, auth_headers, log_data):
    response = client.post("/api/work-logs/", json=log_data, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "in-progress"
    assert data["hours_spent"] == 2.5
    assert data["employee_name"] == "John Doe"


def test_work_log_defaults_to_today(client, auth_headers, log_data, freeze_time):
    freeze_time(datetime(2026, 3, 9, 10, 0))
    payload = {key: value for key, value in log_data.items() if key != "date"}

    response = client.post("/api/work-logs/", json=payload, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["date"] == "2026-03-09"


@pytest.mark.parametrize("hours", [0, -1, 24.5])
def test_work_log_hours_bounds(client, auth_headers, log_data, hours):
    response = client.post("/api/work-logs/", json={**log_data, "hours_spent": hours}, headers=auth_headers)
    assert response.status_code == 422


def test_work_log_requires_owned_employee(client, other_headers, log_data):
    response = client.post("/api/work-logs/", json=log_data, headers=other_headers)
    assert response.status_code == 404


def test_filter_and_summarize_work_logs(client, auth_headers, log_data):
    client.post("/api/work-logs/", json=log_data, headers=auth_headers)
    client.post(
        "/api/work-logs/",
        json={**log_data, "task": "Interviews", "hours_spent": 3, "status": "completed"},
        headers=auth_headers
    )
    client.post(
        "/api/work-logs/",
        json={**log_data, "date": "2026-03-03", "task": "Audit", "hours_spent": 1.25, "status": "on-hold"},
        headers=auth_headers
    )

    response = client.get("/api/work-logs/?status=completed", headers=auth_headers)
    assert [item["task"] for item in response.json()] == ["Interviews"]

    response = client.get("/api/work-logs/?date=2026-03-02", headers=auth_headers)
    assert len(response.json()) == 2

    response = client.get("/api/work-logs/summary", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "total_logs": 3,
        "total_hours": 6.8,
        "completed": 1,
        "in_progress": 1,
        "on_hold": 1,
        "average_hours": 2.3,
    }


def test_summary_without_logs(client, auth_headers):
    response = client.get("/api/work-logs/summary", headers=auth_headers)
    assert response.json()["total_logs"] == 0
    assert response.json()["average_hours"] == 0


def test_update_and_delete_work_log(client, auth_headers, log_data):
    log = client.post("/api/work-logs/", json=log_data, headers=auth_headers).json()

    response = client.put(f"/api/work-logs/{log['id']}", json={"status": "completed"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["task"] == "Payroll export"

    assert client.delete(f"/api/work-logs/{log['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/work-logs/{log['id']}", headers=auth_headers).status_code == 404
