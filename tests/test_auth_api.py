from dataclasses import replace

from personnel_tracking.core.enums import UserRole
from personnel_tracking.users.passwords import hash_password
from tests.fakes import make_user

COOKIE = "pts.sid"


def _login(client, phone, password):
    return client.post("/api/login", json={"phone": phone, "password": password})


def test_register_login_verify_flow(client, sms):
    resp = client.post(
        "/api/register",
        json={"phone": "05551112233", "password": "Secret123!", "name": "Test User"},
    )
    assert resp.status_code == 201
    user_id = resp.get_json()["id"]
    assert resp.get_json()["role"] == "branch_admin"
    assert "password" not in resp.get_json()

    resp = _login(client, "05551112233", "Secret123!")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["requiresTwoFactor"] is True
    assert body["userId"] == user_id

    code = sms.last_code()
    wrong = "100000" if code != "100000" else "100001"
    resp = client.post("/api/verify-2fa", json={"userId": user_id, "code": wrong})
    assert resp.status_code == 400

    resp = client.post("/api/verify-2fa", json={"userId": user_id, "code": code})
    assert resp.status_code == 200
    assert resp.get_json()["id"] == user_id

    resp = client.get("/api/user")
    assert resp.status_code == 200
    assert resp.get_json()["id"] == user_id


def test_login_alone_does_not_authenticate(client, repos):
    repos.users.add(make_user(phone="05550000001", password_hash=hash_password("pw")))

    assert _login(client, "05550000001", "pw").status_code == 200
    assert client.get_cookie(COOKIE) is None
    assert client.get("/api/user").status_code == 401
    assert repos.sessions.rows == {}


def test_bad_credentials_return_401_with_message(client, repos):
    repos.users.add(make_user(phone="05550000002", password_hash=hash_password("pw")))
    repos.users.add(make_user(phone="05550000003", password_hash=hash_password("pw"), is_active=False))

    for phone, password in [("05550000002", "nope"), ("05550000003", "pw"), ("05559999999", "pw")]:
        resp = _login(client, phone, password)
        assert resp.status_code == 401
        assert resp.get_json()["message"]


def test_verify_unknown_user_is_404(client):
    resp = client.post("/api/verify-2fa", json={"userId": "user-nobody", "code": "123456"})
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Kullanıcı bulunamadı"


def test_expired_code_is_400(client, repos, sms, clock):
    user = repos.users.add(make_user(phone="05550000004", password_hash=hash_password("pw")))
    _login(client, user.phone, "pw")
    clock.advance(minutes=6)

    resp = client.post("/api/verify-2fa", json={"userId": user.id, "code": sms.last_code()})
    assert resp.status_code == 400
    assert "süresi" in resp.get_json()["message"]


def test_register_with_missing_fields_is_400(client):
    resp = client.post("/api/register", json={"phone": "05551112233"})
    assert resp.status_code == 400


def test_register_duplicate_phone_is_400(client, repos):
    repos.users.add(make_user(phone="05551112233"))
    resp = client.post(
        "/api/register",
        json={"phone": "05551112233", "password": "x", "name": "Dup"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Bu telefon numarası zaten kullanılıyor"


def test_logout_ends_the_session(client, sign_in, repos):
    sign_in()
    assert client.get("/api/user").status_code == 200
    assert len(repos.sessions.rows) == 1

    resp = client.post("/api/logout")
    assert resp.status_code == 200
    assert repos.sessions.rows == {}
    assert client.get("/api/user").status_code == 401

    # Logging out again is harmless.
    assert client.post("/api/logout").status_code == 200


def test_sign_in_replaces_the_previous_session_id(client, sign_in, repos):
    first = sign_in(role=UserRole.ADMIN)
    old_sid = set(repos.sessions.rows)

    second = sign_in(role=UserRole.SUPER_ADMIN)
    assert set(repos.sessions.rows).isdisjoint(old_sid)
    assert len(repos.sessions.rows) == 1
    assert client.get("/api/user").get_json()["id"] == second.id != first.id


def test_session_cookie_is_http_only(client, sms, repos):
    user = repos.users.add(make_user(phone="05550000005", password_hash=hash_password("pw")))
    _login(client, user.phone, "pw")
    resp = client.post("/api/verify-2fa", json={"userId": user.id, "code": sms.last_code()})

    header = resp.headers["Set-Cookie"]
    assert header.startswith(f"{COOKIE}=")
    assert "HttpOnly" in header
    assert "SameSite=Lax" in header


def test_session_expires_after_a_day(client, sign_in, clock):
    sign_in()
    clock.advance(hours=23, minutes=59)
    assert client.get("/api/user").status_code == 200

    clock.advance(minutes=1)
    assert client.get("/api/user").status_code == 401


def test_deactivated_user_loses_access(client, sign_in, repos):
    user = sign_in()
    repos.users.add(replace(repos.users.get_by_id(user.id), is_active=False))
    assert client.get("/api/user").status_code == 401


def test_admin_registers_other_accounts_without_losing_own_session(client, sign_in):
    boss = sign_in(role=UserRole.SUPER_ADMIN)
    resp = client.post(
        "/api/register",
        json={"phone": "05557770000", "password": "pw", "name": "Yeni Yönetici", "role": "admin"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["role"] == "admin"
    assert client.get("/api/user").get_json()["id"] == boss.id


def test_anonymous_cannot_register_an_admin(client):
    resp = client.post(
        "/api/register",
        json={"phone": "05557770001", "password": "pw", "name": "X", "role": "super_admin"},
    )
    assert resp.status_code == 403


def test_padded_code_is_rejected_over_http(client, repos, sms):
    user = repos.users.add(make_user(phone="05550000006", password_hash=hash_password("pw")))
    _login(client, user.phone, "pw")

    resp = client.post("/api/verify-2fa", json={"userId": user.id, "code": f"  {sms.last_code()} "})
    assert resp.status_code == 400
    assert client.get("/api/user").status_code == 401
