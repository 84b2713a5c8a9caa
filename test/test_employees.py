def test_create_employee(client, auth_headers, employee_data):
    """Test creating a new employee"""
    response = client.post("/api/employees/", json=employee_data, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["full_name"] == "John Doe"
    assert data["email"] == employee_data["email"]
    assert data["status"] == "active"
    assert data["emergency_contact"]["relationship"] == "Spouse"


def test_create_duplicate_employee(client, auth_headers, employee_data, employee):
    """Test creating a duplicate employee"""
    response = client.post("/api/employees/", json=employee_data, headers=auth_headers)

    assert response.status_code == 409
    assert "already exists" in response.json()["detail"].lower()


def test_same_email_allowed_for_different_accounts(client, other_headers, employee_data, employee):
    response = client.post("/api/employees/", json=employee_data, headers=other_headers)
    assert response.status_code == 201


def test_create_employee_validation(client, auth_headers, employee_data):
    response = client.post(
        "/api/employees/",
        json={**employee_data, "email": "not-an-email"},
        headers=auth_headers
    )
    assert response.status_code == 422

    response = client.post(
        "/api/employees/",
        json={**employee_data, "status": "retired"},
        headers=auth_headers
    )
    assert response.status_code == 422


def test_get_employees(client, auth_headers, employee_data, employee):
    """Test getting all employees"""
    client.post(
        "/api/employees/",
        json={**employee_data, "first_name": "Alice", "last_name": "Smith",
              "email": "alice@example.com", "department": "Marketing", "status": "inactive"},
        headers=auth_headers
    )

    response = client.get("/api/employees/", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert [item["first_name"] for item in data] == ["Alice", "John"]

    response = client.get("/api/employees/?department=Engineering", headers=auth_headers)
    assert [item["first_name"] for item in response.json()] == ["John"]

    response = client.get("/api/employees/?status=inactive", headers=auth_headers)
    assert [item["first_name"] for item in response.json()] == ["Alice"]

    response = client.get("/api/employees/?search=smi", headers=auth_headers)
    assert [item["first_name"] for item in response.json()] == ["Alice"]


def test_get_employee(client, auth_headers, employee):
    """Test getting a specific employee"""
    response = client.get(f"/api/employees/{employee['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "john.doe@example.com"


def test_get_nonexistent_employee(client, auth_headers):
    response = client.get("/api/employees/9999", headers=auth_headers)

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


def test_employee_hidden_from_other_accounts(client, other_headers, employee):
    """Rows of another account behave as missing"""
    response = client.get(f"/api/employees/{employee['id']}", headers=other_headers)
    assert response.status_code == 404

    response = client.get("/api/employees/", headers=other_headers)
    assert response.json() == []

    response = client.delete(f"/api/employees/{employee['id']}", headers=other_headers)
    assert response.status_code == 404


def test_update_employee(client, auth_headers, employee):
    """Test updating an employee"""
    response = client.put(
        f"/api/employees/{employee['id']}",
        json={"position": "Lead Engineer", "salary": 90000},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["position"] == "Lead Engineer"
    assert data["salary"] == 90000
    assert data["first_name"] == "John"


def test_update_employee_without_fields(client, auth_headers, employee):
    response = client.put(f"/api/employees/{employee['id']}", json={}, headers=auth_headers)
    assert response.status_code == 400


def test_update_employee_email_conflict(client, auth_headers, employee_data, employee):
    client.post(
        "/api/employees/",
        json={**employee_data, "email": "second@example.com"},
        headers=auth_headers
    )
    response = client.put(
        f"/api/employees/{employee['id']}",
        json={"email": "second@example.com"},
        headers=auth_headers
    )
    assert response.status_code == 409


def test_update_nonexistent_employee(client, auth_headers):
    response = client.put("/api/employees/9999", json={"position": "X"}, headers=auth_headers)

    assert response.status_code == 404


def test_delete_employee(client, auth_headers, employee):
    """Test deleting an employee"""
    response = client.delete(f"/api/employees/{employee['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert "deleted successfully" in response.json()["message"].lower()

    response = client.get(f"/api/employees/{employee['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_employee_removes_attendance(client, auth_headers, employee):
    client.post("/api/attendance/", headers=auth_headers, json={
        "employee_id": employee["id"],
        "date": "2026-03-02",
        "check_in": "09:00",
    })

    client.delete(f"/api/employees/{employee['id']}", headers=auth_headers)

    response = client.get("/api/attendance/", headers=auth_headers)
    assert response.json() == []


def test_employee_department_stats(client, auth_headers, employee_data, employee):
    """Test getting employee counts by department"""
    client.post(
        "/api/employees/",
        json={**employee_data, "email": "second@example.com"},
        headers=auth_headers
    )
    client.post(
        "/api/employees/",
        json={**employee_data, "email": "third@example.com", "department": "Marketing"},
        headers=auth_headers
    )

    response = client.get("/api/employees/stats/department", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == [
        {"department": "Engineering", "count": 2},
        {"department": "Marketing", "count": 1},
    ]
