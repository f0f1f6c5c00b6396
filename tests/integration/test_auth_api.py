from datetime import datetime, timedelta, timezone

from expensync.db import models
from expensync.utils.access_tokens import create_access_token
from expensync.utils.settings import AuthSettings

API = "/api/v1"


def _signup(client, email="ana@example.com", password="secret123", name="Ana"):
    return client.post(f"{API}/auth/signup", json={"name": name, "email": email, "password": password})


def test_signup_creates_user_without_exposing_hash(client, db):
    r = _signup(client, email="  Ana@Example.COM ")
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "ana@example.com"
    assert "password" not in r.text.lower()

    stored = db.query(models.User).filter(models.User.email == "ana@example.com").one()
    assert stored.password_hash.startswith("$argon2id$")


def test_signup_duplicate_email_conflicts(client):
    assert _signup(client).status_code == 201
    r = _signup(client, email="ANA@example.com")
    assert r.status_code == 409
    assert r.json()["detail"] == "User already exists"


def test_signup_validation(client):
    assert _signup(client, password="123").status_code == 422
    assert _signup(client, email="not-an-email").status_code == 422
    assert _signup(client, name="   ").status_code == 422


def test_login_returns_token_pair(client):
    _signup(client)
    r = client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": "secret123"})
    assert r.status_code == 200
    body = r.json()
    assert body["accessToken"]
    assert body["refreshToken"].startswith("es_rt_")
    assert body["tokenType"] == "bearer"
    assert body["user"]["name"] == "Ana"


def test_login_rejects_bad_credentials(client):
    _signup(client)
    wrong = client.post(f"{API}/auth/login", json={"email": "ana@example.com", "password": "nope-nope"})
    unknown = client.post(f"{API}/auth/login", json={"email": "bob@example.com", "password": "secret123"})
    assert wrong.status_code == 400
    assert unknown.status_code == 400
    assert wrong.json()["detail"] == "Invalid credentials"


def test_me_requires_valid_access_token(client, user):
    r = client.get(f"{API}/auth/me", headers=user["headers"])
    assert r.status_code == 200
    assert r.json()["email"] == user["email"]

    assert client.get(f"{API}/auth/me").status_code == 401
    bad = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})
    assert bad.status_code == 401
    assert bad.headers.get("www-authenticate") == "Bearer"


def test_expired_access_token_is_rejected(client, user):
    settings = AuthSettings(jwt_secret="test-secret")
    stale = create_access_token(
        user["user"]["id"],
        settings=settings,
        now=datetime.now(timezone.utc) - timedelta(hours=1),
    )
    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {stale}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"


def test_refresh_token_mints_new_access_token(client, user, db):
    r = client.post(f"{API}/auth/refresh-token", json={"refreshToken": user["refreshToken"]})
    assert r.status_code == 200
    access = r.json()["accessToken"]
    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {access}"})
    assert me.status_code == 200

    token_id = user["refreshToken"][len("es_rt_"):].split("_", 1)[0]
    rt = db.query(models.RefreshToken).filter(models.RefreshToken.token_id == token_id).one()
    assert rt.last_used_at is not None


def test_refresh_token_errors(client, user):
    missing = client.post(f"{API}/auth/refresh-token", json={})
    assert missing.status_code == 400

    bogus = client.post(f"{API}/auth/refresh-token", json={"refreshToken": "es_rt_abc_def"})
    assert bogus.status_code == 401
    assert bogus.json()["detail"] == "Invalid or expired refresh token"

    # An access token is not a refresh token
    wrong_kind = client.post(f"{API}/auth/refresh-token", json={"refreshToken": user["accessToken"]})
    assert wrong_kind.status_code == 401


def test_expired_refresh_token_is_rejected(client, user, db):
    token_id = user["refreshToken"][len("es_rt_"):].split("_", 1)[0]
    rt = db.query(models.RefreshToken).filter(models.RefreshToken.token_id == token_id).one()
    rt.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    db.commit()

    r = client.post(f"{API}/auth/refresh-token", json={"refreshToken": user["refreshToken"]})
    assert r.status_code == 401


def test_logout_revokes_refresh_token(client, user):
    r = client.post(f"{API}/auth/logout", json={"refreshToken": user["refreshToken"]})
    assert r.status_code == 200
    assert r.json()["message"] == "Logged out successfully"

    again = client.post(f"{API}/auth/refresh-token", json={"refreshToken": user["refreshToken"]})
    assert again.status_code == 401


def test_logout_without_token_still_succeeds(client):
    r = client.post(f"{API}/auth/logout", json={})
    assert r.status_code == 200
    assert r.json()["message"] == "Logged out successfully"
