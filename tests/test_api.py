"""
HTTP surface: login, role guards, the error envelope, and a full
one-slot placement driven only through the API.
"""

from datetime import timedelta

from conftest import TODAY


def _login(client, login_id):
    response = client.post("/api/auth/login", json={"login_id": login_id})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _posting(**overrides):
    body = {
        "title": "Backend Intern",
        "description": "Build APIs",
        "level": "BASIC",
        "preferred_major": "CSC",
        "open_date": (TODAY - timedelta(days=1)).isoformat(),
        "close_date": (TODAY + timedelta(days=30)).isoformat(),
        "max_slots": 1,
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["students"] == 3


def test_login_resolves_each_role(client):
    for login_id, role in [("U2310002B", "STUDENT"), ("sng001", "STAFF"), ("ALICE@techcorp.com", "COMPANY_REP")]:
        response = client.post("/api/auth/login", json={"login_id": login_id})
        assert response.status_code == 200
        assert response.json()["role"] == role

    me = client.get("/api/auth/me", headers=_login(client, "sng001"))
    assert me.json() == {"user_id": "sng001", "role": "STAFF"}


def test_errors_use_the_portal_envelope(client):
    unknown = client.post("/api/auth/login", json={"login_id": "nobody"})
    assert unknown.status_code == 404
    assert unknown.json()["error"] == "NotFoundError"

    pending_rep = client.post("/api/auth/login", json={"login_id": "ben@dataworks.io"})
    assert pending_rep.status_code == 403
    assert pending_rep.json()["error"] == "AuthorizationError"


def test_role_guards(client):
    student = _login(client, "U2310002B")
    assert client.get("/api/staff/internships", headers=student).status_code == 403
    assert client.get("/api/students/me").status_code in (401, 403)
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/students/me", headers=bad).status_code == 401


def test_request_validation(client):
    rep = _login(client, "alice@techcorp.com")
    too_many = client.post("/api/company/internships", json=_posting(max_slots=11), headers=rep)
    assert too_many.status_code == 422
    backwards = _posting(close_date=(TODAY - timedelta(days=5)).isoformat())
    assert client.post("/api/company/internships", json=backwards, headers=rep).status_code == 422


def test_registration_then_approval(client):
    response = client.post(
        "/api/registrations/company-reps",
        json={"name": "Cara", "company_name": "Cloudy", "department": "Ops", "position": "Lead",
              "email": "cara@cloudy.io"},
    )
    assert response.status_code == 201
    assert response.json()["approved"] is False

    duplicate = client.post(
        "/api/registrations/company-reps",
        json={"name": "Cara", "company_name": "Cloudy", "department": "Ops", "position": "Lead",
              "email": "cara@cloudy.io"},
    )
    assert duplicate.status_code == 409

    staff = _login(client, "sng001")
    pending = client.get("/api/staff/company-reps", params={"pending_only": True}, headers=staff)
    assert "cara@cloudy.io" in [r["email"] for r in pending.json()]
    approved = client.post("/api/staff/company-reps/cara@cloudy.io/approve", headers=staff)
    assert approved.json()["approved"] is True
    _login(client, "cara@cloudy.io")


def test_one_slot_placement_end_to_end(client):
    rep = _login(client, "alice@techcorp.com")
    staff = _login(client, "sng001")
    first = _login(client, "U2310002B")
    second = _login(client, "U2310003C")

    created = client.post("/api/company/internships", json=_posting(), headers=rep)
    assert created.status_code == 201
    internship_id = created.json()["internship_id"]
    assert created.json()["status"] == "PENDING"

    # Not yet approved: students cannot see it
    assert client.get("/api/students/internships", headers=first).json() == []

    approved = client.post(f"/api/staff/internships/{internship_id}/approve", headers=staff)
    assert approved.json()["status"] == "APPROVED"
    assert approved.json()["visible"] is True

    app_id = client.post("/api/students/applications", json={"internship_id": internship_id}, headers=first).json()["application_id"]
    duplicate = client.post("/api/students/applications", json={"internship_id": internship_id}, headers=first)
    assert duplicate.status_code == 409

    marked = client.post(f"/api/company/applications/{app_id}/successful", headers=rep)
    assert marked.json()["status"] == "SUCCESSFUL"

    accepted = client.post(f"/api/students/applications/{app_id}/accept", headers=first)
    assert accepted.status_code == 200
    assert accepted.json()["student_accepted"] is True

    listing = client.get(f"/api/company/internships/{internship_id}", headers=rep).json()
    assert listing["status"] == "FILLED"
    assert listing["confirmed_slots"] == 1
    assert listing["remaining_slots"] == 0
    assert listing["visible"] is False

    full = client.post("/api/students/applications", json={"internship_id": internship_id}, headers=second)
    assert full.status_code == 409
    assert full.json()["error"] == "CapacityExceededError"

    # Withdrawal approved by staff frees the slot again
    request = client.post(
        f"/api/students/applications/{app_id}/withdrawals", json={"reason": "Relocating"}, headers=first
    )
    assert request.status_code == 201
    request_id = request.json()["request_id"]

    decided = client.post(f"/api/staff/withdrawals/{request_id}/approve", json={"note": "ok"}, headers=staff)
    assert decided.json()["status"] == "APPROVED"
    assert decided.json()["processed_by"] == "sng001"
    assert decided.json()["processed_on"] == TODAY.isoformat()

    listing = client.get(f"/api/company/internships/{internship_id}", headers=rep).json()
    assert listing["status"] == "APPROVED"
    assert listing["confirmed_slots"] == 0
    assert listing["remaining_slots"] == 1
    assert listing["visible"] is True

    retry = client.post("/api/students/applications", json={"internship_id": internship_id}, headers=second)
    assert retry.status_code == 201


def test_junior_cannot_apply_to_advanced(client):
    rep = _login(client, "alice@techcorp.com")
    staff = _login(client, "sng001")
    junior = _login(client, "U2310001A")

    internship_id = client.post(
        "/api/company/internships", json=_posting(level="ADVANCED"), headers=rep
    ).json()["internship_id"]
    client.post(f"/api/staff/internships/{internship_id}/approve", headers=staff)

    response = client.post("/api/students/applications", json={"internship_id": internship_id}, headers=junior)
    assert response.status_code == 422
    assert response.json()["error"] == "NotEligibleError"


def test_rep_cannot_delete_approved_posting(client):
    rep = _login(client, "alice@techcorp.com")
    staff = _login(client, "sng001")
    internship_id = client.post("/api/company/internships", json=_posting(), headers=rep).json()["internship_id"]
    client.post(f"/api/staff/internships/{internship_id}/approve", headers=staff)

    response = client.delete(f"/api/company/internships/{internship_id}", headers=rep)
    assert response.status_code == 409
    assert response.json()["error"] == "InvalidStateError"
