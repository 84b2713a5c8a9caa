from datetime import datetime


def test_empty_dashboard(client, auth_headers):
    response = client.get("/api/dashboard/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_employees"] == 0
    assert data["attendance_rate"] == 0
    assert data["hours_logged_today"] == 0
    assert data["upcoming_holidays"] == []


def test_dashboard_stats(client, auth_headers, employee_data, employee, freeze_time):
    freeze_time(datetime(2026, 3, 2, 9, 0))
    client.post(
        "/api/employees/",
        json={**employee_data, "first_name": "Alice", "email": "alice@example.com"},
        headers=auth_headers
    )

    client.post("/api/attendance/check-in", json={"employee_id": employee["id"]}, headers=auth_headers)
    client.post("/api/work-logs/", headers=auth_headers, json={
        "employee_id": employee["id"], "date": "2026-03-02", "task": "Reviews", "hours_spent": 1.5,
    })
    client.post("/api/work-logs/", headers=auth_headers, json={
        "employee_id": employee["id"], "date": "2026-03-02", "task": "Hiring", "hours_spent": 2,
        "status": "completed",
    })
    client.post("/api/work-logs/", headers=auth_headers, json={
        "employee_id": employee["id"], "date": "2026-02-27", "task": "Old", "hours_spent": 4,
    })
    client.post("/api/leaves/", headers=auth_headers, json={
        "employee_id": employee["id"], "leave_type": "sick",
        "start_date": "2026-03-03", "end_date": "2026-03-03", "reason": "Flu",
    })
    client.post("/api/holidays/", headers=auth_headers, json={"name": "Founders Day", "date": "2026-03-04"})

    response = client.get("/api/dashboard/", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_employees"] == 2
    assert data["active_employees"] == 2
    assert data["present_today"] == 1
    assert data["attendance_rate"] == 50
    assert data["hours_logged_today"] == 3.5
    assert data["active_tasks"] == 2
    assert data["pending_leaves"] == 1
    assert [item["name"] for item in data["upcoming_holidays"]] == ["Founders Day"]
    assert len(data["todays_attendance"]) == 1
    assert len(data["recent_work_logs"]) == 3
