"""Registration, login and the authentication boundary."""

from repositories.verification_code_repo import VerificationCodeRepository
from tests.conftest import DEFAULT_PASSWORD, auth_headers, create_user


def _register(client, email="new@example.com", code="ABC123", password="Secret123", confirm=None):
    return client.post("/api/user/register", json={
        "email": email,
        "password": password,
        "confirmPassword": confirm or password,
        "verificationCode": code,
    })


def test_register_with_valid_code(client, db):
    VerificationCodeRepository(db).add("ABC123")

    resp = _register(client)

    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 200
    assert body["success"] is True
    assert body["data"]["user"]["email"] == "new@example.com"
    assert body["data"]["token"]
    assert "token" in resp.cookies


def test_register_marks_code_used(client, db):
    VerificationCodeRepository(db).add("ABC123")
    assert _register(client).json()["code"] == 200

    body = _register(client, email="other@example.com").json()

    assert body["code"] == 400
    assert "already been used" in body["message"]


def test_register_unknown_code(client):
    body = _register(client, code="ZZZ999").json()
    assert body["code"] == 400
    assert body["success"] is False


def test_register_rejects_duplicate_email(client, db):
    create_user(db, "new@example.com")
    VerificationCodeRepository(db).add("ABC123")

    body = _register(client).json()

    assert body["code"] == 400
    assert body["message"] == "Email already registered"


def test_register_rejects_weak_password(client, db):
    VerificationCodeRepository(db).add("ABC123")
    body = _register(client, password="alllowercase1").json()
    assert body["code"] == 400


def test_register_rejects_mismatched_confirmation(client, db):
    VerificationCodeRepository(db).add("ABC123")
    body = _register(client, confirm="Secret1234").json()
    assert body["code"] == 400


def test_login_and_current_user_via_cookie(client, db):
    create_user(db)

    resp = client.post("/api/user/login", json={"email": "test@example.com", "password": DEFAULT_PASSWORD})
    assert resp.json()["code"] == 200

    current = client.get("/api/user/current").json()
    assert current["code"] == 200
    assert current["data"]["user"] == {"email": "test@example.com"}


def test_login_errors_are_bad_requests(client, db):
    create_user(db)

    unknown = client.post("/api/user/login", json={"email": "nobody@example.com", "password": "Secret123"}).json()
    wrong = client.post("/api/user/login", json={"email": "test@example.com", "password": "Wrong1234"}).json()

    assert unknown["code"] == 400
    assert wrong["code"] == 400


def test_missing_token_is_not_authenticated(client):
    resp = client.post("/api/userWords/total/get")
    assert resp.status_code == 200
    assert resp.json() == {"code": 301, "success": False, "message": "User is not logged in"}


def test_garbage_token_is_not_authenticated(client):
    resp = client.get("/api/user/current", headers={"Authorization": "Bearer not-a-token"})
    assert resp.json()["code"] == 301


def test_change_password(client, db):
    user = create_user(db)
    headers = auth_headers(user.id)

    body = client.post("/api/user/changePwd", headers=headers, json={
        "currentPassword": DEFAULT_PASSWORD,
        "newPassword": "Better456",
        "confirmNewPassword": "Better456",
    }).json()
    assert body["code"] == 200

    relogin = client.post("/api/user/login", json={"email": "test@example.com", "password": "Better456"})
    assert relogin.json()["code"] == 200


def test_change_password_requires_current(client, db):
    user = create_user(db)
    body = client.post("/api/user/changePwd", headers=auth_headers(user.id), json={
        "currentPassword": "Wrong1234",
        "newPassword": "Better456",
        "confirmNewPassword": "Better456",
    }).json()
    assert body["code"] == 400


def test_logout(client, db):
    create_user(db)
    client.post("/api/user/login", json={"email": "test@example.com", "password": DEFAULT_PASSWORD})
    body = client.post("/api/user/logout").json()
    assert body["code"] == 200
