"""HTTP tests for the BloodConnect API."""
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from bloodconnect.models.user import User

API = "/api/v1"

DONOR = {
    "name": "Usman Tariq",
    "email": "usman@gmail.com",
    "phone": "03001234567",
    "blood_group": "O+",
    "city": "Islamabad",
    "batch": "2019",
}

REQUEST = {
    "patient_name": "Fatima",
    "blood_group": "O+",
    "units_needed": 2,
    "urgency_level": "emergency",
    "location": "Islamabad",
    "hospital_name": "Shifa International",
    "contact_person": "Dr. Ali",
    "contact_phone": "03111234567",
}


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


# ------------------------------------------------------------------ auth

def test_register_login_me(client):
    response = client.post(f"{API}/auth/register", json={
        "email": "hospital@pims.org",
        "password": "secret123",
        "name": "PIMS Desk",
        "role": "hospital",
    })
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "hospital"

    response = client.post(f"{API}/auth/login", json={"email": "hospital@pims.org", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "hospital@pims.org"


def test_wrong_password(client, admin_user):
    response = client.post(f"{API}/auth/login", json={"email": admin_user.email, "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_admin_cannot_self_register(client):
    response = client.post(f"{API}/auth/register", json={
        "email": "boss@gmail.com",
        "password": "secret123",
        "name": "Boss",
        "role": "admin",
    })

    assert response.status_code == 403


def test_register_race_on_email(client, db, monkeypatch):
    """The unique index still wins when two registrations pass the email check together."""
    def conflicting_commit():
        raise IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email"))

    monkeypatch.setattr(db, "commit", conflicting_commit)
    response = client.post(f"{API}/auth/register", json={
        "email": "twice@gmail.com",
        "password": "secret123",
        "name": "Twice",
    })
    monkeypatch.undo()

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"
    assert db.query(User).filter(User.email == "twice@gmail.com").count() == 0


def test_bad_token(client):
    response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_admin_routes_need_admin(client, hospital_headers):
    assert client.get(f"{API}/donors/").status_code == 401
    assert client.get(f"{API}/donors/", headers=hospital_headers).status_code == 403
    assert client.get(f"{API}/stats/admin", headers=hospital_headers).status_code == 403


# ---------------------------------------------------------------- donors

def test_register_donor(client, admin_headers):
    response = client.post(f"{API}/donors/", json=DONOR)

    assert response.status_code == 201
    data = response.json()
    assert data["approval_status"] == "pending"
    assert data["blood_group"] == "O+"
    assert data["eligibility"]["band"] == "eligible"
    assert data["eligibility"]["label"] == "Eligible"

    listed = client.get(f"{API}/donors/", headers=admin_headers).json()
    assert [d["id"] for d in listed] == [data["id"]]


def test_register_donor_with_recent_donation(client):
    recent = (datetime.utcnow() - timedelta(days=10)).isoformat()

    response = client.post(f"{API}/donors/", json={**DONOR, "last_donation_date": recent})

    assert response.status_code == 201
    assert response.json()["eligibility"]["band"] == "not_eligible"


def test_register_donor_with_future_donation(client):
    future = (datetime.utcnow() + timedelta(days=400)).isoformat()

    response = client.post(f"{API}/donors/", json={**DONOR, "last_donation_date": future})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("last_donation_date")


def test_duplicate_donor_email(client):
    client.post(f"{API}/donors/", json=DONOR)

    response = client.post(f"{API}/donors/", json={**DONOR, "name": "Someone Else"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"
    assert response.json()["error_type"] == "DuplicateError"


def test_invalid_donor_payload(client):
    response = client.post(f"{API}/donors/", json={**DONOR, "phone": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["error_type"] == "ValidationError"
    assert body["detail"].startswith("phone")
    assert body["errors"]


def test_donor_approval_flow(client, admin_headers):
    donor_id = client.post(f"{API}/donors/", json=DONOR).json()["id"]

    response = client.patch(f"{API}/donors/{donor_id}/approval", json={"approval_status": "approved"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["approval_status"] == "approved"

    response = client.patch(f"{API}/donors/{donor_id}/approval", json={"approval_status": "rejected"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error_type"] == "InvalidStateError"

    response = client.get(f"{API}/donors/{donor_id}", headers=admin_headers)
    assert response.json()["approval_status"] == "approved"


def test_donor_approval_unknown_donor(client, admin_headers):
    response = client.patch(f"{API}/donors/999/approval", json={"approval_status": "approved"}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Donor not found"


def test_match_donors(client, admin_headers, make_donor):
    match = make_donor(approval="approved", blood_group="O+", city="Islamabad")
    make_donor(approval="approved", blood_group="A+", city="Islamabad")
    make_donor(blood_group="O+", city="Islamabad")

    response = client.get(
        f"{API}/donors/match", params={"blood_group": "O+", "city": "islamabad"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert [d["id"] for d in response.json()] == [match.id]


def test_match_donors_bad_group(client, admin_headers):
    response = client.get(f"{API}/donors/match", params={"blood_group": "X"}, headers=admin_headers)

    assert response.status_code == 400


def test_matching_donors_for_request(client, admin_headers, make_donor, make_request):
    match = make_donor(approval="approved", blood_group="B+", city="Rawalpindi")
    request = make_request(blood_group="B+", location="rawalpindi")

    response = client.get(f"{API}/donors/matching/{request.id}", headers=admin_headers)

    assert [d["id"] for d in response.json()] == [match.id]


# -------------------------------------------------------- blood requests

def test_blood_request_lifecycle(client, admin_headers):
    response = client.post(f"{API}/blood-requests/", json=REQUEST)
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "pending"
    assert created["approval_status"] == "pending"
    assert created["response_time"] == "Immediate"
    assert created["is_active"] is False

    assert client.get(f"{API}/blood-requests/active").json() == []

    url = f"{API}/blood-requests/{created['id']}"
    client.patch(f"{url}/approval", json={"approval_status": "approved"}, headers=admin_headers)
    active = client.get(f"{API}/blood-requests/active").json()
    assert [r["id"] for r in active] == [created["id"]]

    response = client.patch(f"{url}/status", json={"status": "completed"}, headers=admin_headers)
    assert response.status_code == 400

    client.patch(f"{url}/status", json={"status": "in_progress"}, headers=admin_headers)
    response = client.patch(f"{url}/status", json={"status": "completed"}, headers=admin_headers)
    assert response.json()["status"] == "completed"
    assert client.get(f"{API}/blood-requests/active").json() == []


def test_blood_request_validation(client):
    response = client.post(f"{API}/blood-requests/", json={**REQUEST, "units_needed": 0})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("units_needed")


def test_active_requests_limit(client, make_request):
    for _ in range(3):
        make_request(approval="approved")

    assert len(client.get(f"{API}/blood-requests/active", params={"limit": 2}).json()) == 2


def test_unknown_request(client, admin_headers):
    response = client.patch(
        f"{API}/blood-requests/999/status", json={"status": "in_progress"}, headers=admin_headers
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Request not found"


# ------------------------------------------------------------- donations

def test_record_and_list_donations(client, admin_headers, make_donor, make_request):
    donor = make_donor(approval="approved")
    request = make_request(approval="approved")

    response = client.post(
        f"{API}/donations/",
        json={"donor_id": donor.id, "request_id": request.id, "units_contributed": 2, "remarks": "Smooth"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["units_contributed"] == 2

    donor_view = client.get(f"{API}/donors/{donor.id}", headers=admin_headers).json()
    assert donor_view["last_donation_date"] is not None
    assert donor_view["eligibility"]["band"] == "not_eligible"

    donations = client.get(f"{API}/donations/", headers=admin_headers).json()
    assert len(donations) == 1
    assert donations[0]["donor"]["id"] == donor.id
    assert donations[0]["request"]["id"] == request.id


def test_record_donation_unknown_donor(client, admin_headers, make_request):
    request = make_request()

    response = client.post(
        f"{API}/donations/", json={"donor_id": 999, "request_id": request.id}, headers=admin_headers
    )

    assert response.status_code == 404


# ------------------------------------------------------------- inventory

def test_inventory_upsert(client, admin_headers, store, db):
    response = client.patch(f"{API}/blood-inventory/B-", json={"units_available": 4}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "available"

    stale = datetime(2026, 1, 1)
    store.get_inventory_by_group("B-").last_updated = stale
    db.commit()

    response = client.patch(f"{API}/blood-inventory/B-", json={"status": "low"}, headers=admin_headers)
    assert datetime.fromisoformat(response.json()["last_updated"]) > stale
    assert response.json()["units_available"] == 4
    assert response.json()["status"] == "low"

    inventory = client.get(f"{API}/blood-inventory/").json()
    assert [row["blood_group"] for row in inventory] == ["B-"]


def test_inventory_rejects_bad_input(client, admin_headers):
    assert client.patch(
        f"{API}/blood-inventory/B-", json={"units_available": -2}, headers=admin_headers
    ).status_code == 400
    assert client.patch(
        f"{API}/blood-inventory/B-", json={"status": "plenty"}, headers=admin_headers
    ).status_code == 400
    assert client.patch(
        f"{API}/blood-inventory/Q-", json={"units_available": 1}, headers=admin_headers
    ).status_code == 400


def test_inventory_requires_admin(client):
    assert client.patch(f"{API}/blood-inventory/B-", json={"units_available": 1}).status_code == 401


# ----------------------------------------------------------------- stats

def test_stats(client, admin_headers, make_donor, make_request):
    make_donor(approval="approved")
    make_donor()
    make_request(approval="approved")

    public = client.get(f"{API}/stats/public").json()
    assert public == {"total_donors": 1, "total_donations": 0, "active_requests": 1, "completed_requests": 0}

    admin = client.get(f"{API}/stats/admin", headers=admin_headers).json()
    assert admin["total_donors"] == 2
    assert admin["pending_donors"] == 1
    assert admin["today_donations"] == 0
