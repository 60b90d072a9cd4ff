import pytest

from triptech.models.types import UserRole


@pytest.fixture
def headers(create_user, auth_headers):
    return auth_headers(create_user(UserRole.ADMIN, "admin@example.com"))


def _vendor_payload(company="Acme Transport", vehicles=None):
    return {
        "company": company,
        "contact_person": "Ada",
        "email": "ops@acme.example",
        "phone": "555-0101",
        "city": "Lagos",
        "vehicles": vehicles if vehicles is not None else [
            {"vehicle_class": "van", "brand": "Ford", "model": "Transit", "year": 2021,
             "license_plate": "ABC-123", "seating_capacity": 12},
            {"vehicle_class": "bus", "brand": "Volvo", "model": "9700", "year": 2019,
             "license_plate": "XYZ-789", "seating_capacity": 50},
        ],
    }


def test_create_vendor_with_vehicles(client, headers):
    response = client.post("/api/vendors", json=_vendor_payload(), headers=headers)

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["status"] == "Inactive"
    assert created["company"] == "Acme Transport"

    detail = client.get(f"/api/vendors/{created['id']}", headers=headers).json()["data"]
    assert sorted(v["license_plate"] for v in detail["vehicles"]) == ["ABC-123", "XYZ-789"]
    assert all(v["status"] == "Available" for v in detail["vehicles"])


def test_create_vendor_rolls_back_when_a_vehicle_fails(client, headers):
    payload = _vendor_payload(vehicles=[
        {"license_plate": "DUP-1", "brand": "Ford"},
        {"license_plate": "DUP-1", "brand": "Ford"},
    ])

    response = client.post("/api/vendors", json=payload, headers=headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Server error", "statusCode": 500}
    listing = client.get("/api/vendors", headers=headers).json()
    assert listing["total"] == 0
    assert listing["data"] == []


def test_list_vendors_counts_vehicles_and_filters(client, headers):
    client.post("/api/vendors", json=_vendor_payload(), headers=headers)
    client.post("/api/vendors", json=_vendor_payload(company="Blue Buses", vehicles=[]), headers=headers)

    everything = client.get("/api/vendors", headers=headers).json()
    searched = client.get("/api/vendors", params={"search": "Blue"}, headers=headers).json()

    assert everything["total"] == 2
    counts = {v["company"]: v["total_vehicles"] for v in everything["data"]}
    assert counts == {"Acme Transport": 2, "Blue Buses": 0}
    assert [v["company"] for v in searched["data"]] == ["Blue Buses"]


def test_list_vendors_total_ignores_page_size(client, headers):
    for n in range(3):
        client.post("/api/vendors", json=_vendor_payload(company=f"Vendor {n}", vehicles=[]), headers=headers)

    page = client.get("/api/vendors", params={"page": 2, "limit": 2}, headers=headers).json()

    assert page["total"] == 3
    assert page["page"] == 2
    assert [v["company"] for v in page["data"]] == ["Vendor 2"]


def test_update_vendor_and_status(client, headers):
    vendor_id = client.post("/api/vendors", json=_vendor_payload(), headers=headers).json()["data"]["id"]

    updated = client.put(f"/api/vendors/{vendor_id}", json={"contact_person": "Bea"}, headers=headers)
    activated = client.patch(f"/api/vendors/{vendor_id}/status", json={"status": "Active"}, headers=headers)

    assert updated.status_code == 200
    assert updated.json()["data"]["contact_person"] == "Bea"
    assert updated.json()["data"]["email"] == "ops@acme.example"
    assert activated.json()["data"]["status"] == "Active"
    filtered = client.get("/api/vendors", params={"status": "Active"}, headers=headers).json()
    assert filtered["total"] == 1


def test_delete_vendor_removes_vehicles(client, headers):
    vendor_id = client.post("/api/vendors", json=_vendor_payload(), headers=headers).json()["data"]["id"]

    response = client.delete(f"/api/vendors/{vendor_id}", headers=headers)

    assert response.status_code == 200
    assert client.get(f"/api/vendors/{vendor_id}", headers=headers).status_code == 404
    # the licence plates are free again
    recreated = client.post("/api/vendors", json=_vendor_payload(), headers=headers)
    assert recreated.status_code == 201


@pytest.mark.parametrize("method, path, body", [
    ("get", "/api/vendors/999", None),
    ("put", "/api/vendors/999", {"phone": "1"}),
    ("patch", "/api/vendors/999/status", {"status": "Active"}),
    ("delete", "/api/vendors/999", None),
])
def test_unknown_vendor_is_not_found(client, headers, method, path, body):
    kwargs = {"headers": headers}
    if body is not None:
        kwargs["json"] = body

    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 404
    assert response.json()["error"] == "Vendor not found"


def test_vendor_routes_require_token(client):
    assert client.get("/api/vendors").status_code == 401
    assert client.post("/api/vendors", json=_vendor_payload()).status_code == 401
