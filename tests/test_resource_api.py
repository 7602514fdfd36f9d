import pytest

from personnel_tracking.core.enums import UserRole
from tests.fakes import make_person


@pytest.fixture
def person(repos):
    p = make_person(branch_id="branch-a", first_name="Deniz", last_name="Aydın")
    repos.personnel.people[p.id] = p
    return p


@pytest.mark.parametrize("method,path", [
    ("get", "/api/branches"),
    ("get", "/api/personnel"),
    ("get", "/api/shifts"),
    ("get", "/api/attendance/today"),
    ("post", "/api/qr-scan"),
    ("get", "/api/leave-requests"),
    ("get", "/api/stats"),
    ("get", "/api/settings"),
])
def test_resources_require_a_session(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Oturum açmanız gerekiyor"}


def test_branch_admin_cannot_manage_branches(client, sign_in):
    sign_in(role=UserRole.BRANCH_ADMIN, branch_id="branch-a")
    assert client.get("/api/branches").status_code == 200
    assert client.post("/api/branches", json={"name": "Yeni"}).status_code == 403


def test_settings_are_super_admin_only(client, sign_in):
    sign_in(role=UserRole.ADMIN)
    assert client.get("/api/settings").status_code == 403

    sign_in(role=UserRole.SUPER_ADMIN)
    resp = client.put("/api/settings", json={"companyName": "Acme"})
    assert resp.status_code == 200
    assert client.get("/api/settings").get_json()["companyName"] == "Acme"


def test_branch_crud(client, sign_in):
    sign_in(role=UserRole.ADMIN)
    resp = client.post("/api/branches", json={"name": "Kadıköy"})
    assert resp.status_code == 201
    branch_id = resp.get_json()["id"]

    resp = client.put(f"/api/branches/{branch_id}", json={"address": "Moda"})
    assert resp.get_json()["address"] == "Moda"
    assert client.put("/api/branches/nope", json={"name": "x"}).status_code == 404


def test_qr_scan_round_trip(client, sign_in, person, repos):
    sign_in(role=UserRole.BRANCH_ADMIN, branch_id="branch-a")

    resp = client.post("/api/qr-scan", json={"qrCode": person.id})
    assert resp.status_code == 200
    assert resp.get_json()["action"] == "check-in"
    assert resp.get_json()["message"] == "Deniz Aydın başarıyla giriş yaptı"

    assert client.post("/api/qr-scan", json={"qrCode": person.id}).get_json()["action"] == "check-out"
    assert client.post("/api/qr-scan", json={"qrCode": person.id}).status_code == 400
    assert client.post("/api/qr-scan", json={"qrCode": "ghost"}).status_code == 404

    today = client.get("/api/attendance/today").get_json()
    assert len(today) == 1
    assert today[0]["personnelId"] == person.id
    assert client.get("/api/attendance/summary").get_json()["completed"] == 1


def test_personnel_endpoints(client, sign_in, person):
    sign_in(role=UserRole.ADMIN)

    listed = client.get("/api/personnel").get_json()
    assert [p["id"] for p in listed] == [person.id]
    assert client.get(f"/api/personnel/{person.id}").get_json()["lastName"] == "Aydın"
    assert client.get("/api/personnel/missing").status_code == 404

    resp = client.get(f"/api/personnel/{person.id}/qr")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.data.startswith(b"\x89PNG")


def test_invalid_json_body_is_400(client, sign_in):
    sign_in(role=UserRole.ADMIN)
    resp = client.post("/api/personnel", data="not json", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Geçersiz istek gövdesi"


def test_leave_flow_and_stats(client, sign_in, person):
    sign_in(role=UserRole.ADMIN)
    resp = client.post(
        "/api/leave-requests",
        json={"personnelId": person.id, "type": "hastalik", "startDate": "2030-03-04", "endDate": "2030-03-05"},
    )
    assert resp.status_code == 201
    leave = resp.get_json()
    assert leave["days"] == 2

    resp = client.put(f"/api/leave-requests/{leave['id']}", json={"status": "approved"})
    assert resp.get_json()["status"] == "approved"

    assert client.get("/api/stats").get_json() == {
        "totalPersonnel": 1,
        "todayAttendance": 0,
        "onLeave": 1,
        "activeShifts": 0,
    }


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert "message" in resp.get_json()
