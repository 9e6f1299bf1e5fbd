import re
from datetime import date, datetime, timedelta

from bodytrack.extensions import db
from bodytrack.external import email_service
from bodytrack.models import User
from bodytrack.services.auth_service import hash_reset_token


def _register(client, email="sam@example.com", password="pa55word"):
    return client.post("/api/auth/register", json={"name": "Sam", "email": email, "password": password})


def test_register_returns_token_and_profile(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "sam@example.com"
    assert body["user"]["primary_goal"] == "fat_loss"
    assert body["user"]["last_weekly_update"] is None
    assert "password_hash" not in body["user"]


def test_register_rejects_duplicates_and_missing_fields(client):
    _register(client)

    assert _register(client, email="SAM@example.com").status_code == 400
    assert client.post("/api/auth/register", json={"email": "x@example.com"}).status_code == 400


def test_login_and_fetch_current_user(client):
    _register(client)

    response = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "pa55word"})
    assert response.status_code == 200
    token = response.get_json()["token"]

    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["name"] == "Sam"


def test_login_sets_cookie_usable_without_header(client):
    _register(client)
    client.post("/api/auth/login", json={"email": "sam@example.com", "password": "pa55word"})

    assert client.get("/api/auth/user").status_code == 200

    client.post("/api/auth/logout")
    assert client.get("/api/auth/user").status_code == 401


def test_login_with_wrong_password(client):
    _register(client)

    response = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "nope"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid Credentials"


def test_invalid_token_rejected(client):
    response = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Token is not valid"


def test_current_user_weight_comes_from_latest_weighed_log(client, make_user, make_log, auth_headers):
    user_id = make_user(weight_kg=85)
    make_log(user_id, date(2024, 6, 1), weight=83)
    make_log(user_id, date(2024, 6, 2), weight=82.4)
    make_log(user_id, date(2024, 6, 3), weight=None)

    response = client.get("/api/auth/user", headers=auth_headers(user_id))

    assert response.get_json()["weight_kg"] == 82.4


def test_forgot_password_unknown_email_still_succeeds(client, monkeypatch):
    sent = []
    monkeypatch.setattr(email_service, "send_email", lambda *args: sent.append(args))

    response = client.post("/api/auth/forgotpassword", json={"email": "ghost@example.com"})

    assert response.status_code == 200
    assert sent == []


def test_password_reset_flow(app, client, monkeypatch):
    _register(client)
    sent = []
    monkeypatch.setattr(email_service, "send_email", lambda to, subject, html: sent.append((to, html)))

    response = client.post("/api/auth/forgotpassword", json={"email": "sam@example.com"})

    assert response.status_code == 200
    assert len(sent) == 1
    to, html = sent[0]
    assert to == "sam@example.com"
    token = re.search(r"http://frontend\.test/resetpassword/([0-9a-f]+)", html).group(1)

    with app.app_context():
        user = User.query.filter_by(email="sam@example.com").first()
        assert user.reset_password_token == hash_reset_token(token)

    reset = client.put(f"/api/auth/resetpassword/{token}", json={"password": "n3w-pass"})
    assert reset.status_code == 200

    assert client.post(
        "/api/auth/login", json={"email": "sam@example.com", "password": "n3w-pass"}
    ).status_code == 200
    # token is single use
    assert client.put(f"/api/auth/resetpassword/{token}", json={"password": "again"}).status_code == 400


def test_expired_reset_token_rejected(app, client):
    _register(client)
    with app.app_context():
        user = User.query.filter_by(email="sam@example.com").first()
        user.reset_password_token = hash_reset_token("abc123")
        user.reset_password_expire = datetime.utcnow() - timedelta(minutes=1)
        db.session.commit()

    response = client.put("/api/auth/resetpassword/abc123", json={"password": "whatever"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid or expired token"


def test_email_failure_clears_reset_token(app, client, monkeypatch):
    _register(client)

    def broken_send(*args):
        raise OSError("smtp down")

    monkeypatch.setattr(email_service, "send_email", broken_send)

    response = client.post("/api/auth/forgotpassword", json={"email": "sam@example.com"})

    assert response.status_code == 500
    with app.app_context():
        user = User.query.filter_by(email="sam@example.com").first()
        assert user.reset_password_token is None
        assert user.reset_password_expire is None
