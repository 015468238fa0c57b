import pytest
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_api.config import get_settings
from recipe_api.database import get_db
from recipe_api.dependencies import get_auth_service
from recipe_api.main import app
from recipe_api.models import Token, TokenType, User
from recipe_api.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    hash_token,
    verify_password,
)
from recipe_api.services.auth_service import AuthService

PASSWORD = "Secret123!"
NEW_PASSWORD = "Fresh456?"


def bearer(tokens):
    return {"Authorization": f"Bearer {tokens['token']}"}


def login(client, email="cook@example.com", password=PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


@pytest.fixture
def outbox(client):
    """Capture the tokens the auth service would send to users."""
    sent = []

    def capture(user, token_type, raw_token):
        sent.append((user.email, token_type, raw_token))

    def auth_service_with_outbox(db: Session = Depends(get_db)):
        return AuthService(db, get_settings(), notifier=capture)

    app.dependency_overrides[get_auth_service] = auth_service_with_outbox
    return sent


# Security primitives

def test_password_hash_roundtrip():
    hashed = hash_password(PASSWORD)
    assert hashed != PASSWORD
    assert verify_password(PASSWORD, hashed)
    assert not verify_password("Wrong123!", hashed)
    assert not verify_password(PASSWORD, "not-a-bcrypt-hash")


def test_access_token_expiry():
    token = create_access_token(7, "secret", expires_minutes=5)
    assert decode_access_token(token, "secret") == 7
    assert decode_access_token(token, "other-secret") is None
    expired = create_access_token(7, "secret", expires_minutes=-1)
    assert decode_access_token(expired, "secret") is None


# Registration and login

def test_register_stores_hash_and_returns_tokens(client, register_user, db_session):
    tokens = register_user()
    assert tokens["token"]
    assert tokens["refreshToken"]

    user = db_session.scalar(select(User).where(User.email == "cook@example.com"))
    assert user.password != PASSWORD
    assert verify_password(PASSWORD, user.password)

    # Only the digest of the refresh token is persisted
    stored = db_session.scalars(select(Token.token)).all()
    assert stored == [hash_token(tokens["refreshToken"])]


def test_register_duplicate_email_conflicts(client, register_user):
    register_user()
    res = client.post(
        "/auth/register",
        json={"name": "Again", "email": "cook@example.com", "password": PASSWORD},
    )
    assert res.status_code == 409


def test_register_rejects_weak_password(client):
    res = client.post(
        "/auth/register",
        json={"name": "Weak", "email": "weak@example.com", "password": "abc"},
    )
    assert res.status_code == 400


def test_login_verifies_hash(client, register_user):
    register_user()
    res = login(client)
    assert res.status_code == 200
    assert res.json()["token"]

    res = login(client, password="Wrong123!")
    assert res.status_code == 401
    assert res.json() == {
        "statusCode": 401,
        "message": "Invalid credentials",
        "error": "Unauthorized",
    }
    assert login(client, email="nobody@example.com").status_code == 401


def test_me(client, register_user):
    tokens = register_user()
    res = client.post("/auth/me", headers=bearer(tokens))
    assert res.status_code == 200
    data = res.json()
    assert data["email"] == "cook@example.com"
    assert data["role"] == "USER"
    assert data["emailVerified"] is False

    assert client.post("/auth/me").status_code == 401
    assert client.post("/auth/me", headers={"Authorization": "Bearer junk"}).status_code == 401
    # A refresh token is not an access token
    refresh_as_bearer = {"Authorization": f"Bearer {tokens['refreshToken']}"}
    assert client.post("/auth/me", headers=refresh_as_bearer).status_code == 401


# Refresh and logout

def test_refresh_rotates_token(client, register_user):
    tokens = register_user()
    res = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 200
    rotated = res.json()
    assert rotated["refreshToken"] != tokens["refreshToken"]

    res = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 401

    res = client.post("/auth/refresh", json={"refreshToken": rotated["refreshToken"]})
    assert res.status_code == 200


def test_logout_revokes_refresh_token(client, register_user):
    tokens = register_user()
    res = client.post("/auth/logout", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 200
    assert res.json() == {"message": "Logout successful"}

    res = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 401
    res = client.post("/auth/logout", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 401


# Password management

def test_change_password(client, register_user):
    tokens = register_user()
    res = client.post(
        "/auth/change-password",
        json={"oldPassword": "Wrong123!", "newPassword": NEW_PASSWORD},
        headers=bearer(tokens),
    )
    assert res.status_code == 401

    res = client.post(
        "/auth/change-password",
        json={"oldPassword": PASSWORD, "newPassword": NEW_PASSWORD},
        headers=bearer(tokens),
    )
    assert res.status_code == 200

    assert login(client).status_code == 401
    assert login(client, password=NEW_PASSWORD).status_code == 200
    # Existing sessions are signed out
    res = client.post("/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert res.status_code == 401


def test_forgot_and_reset_password(client, register_user, outbox):
    register_user()

    res = client.post("/auth/forgot-password", json={"email": "nobody@example.com"})
    unknown_message = res.json()["message"]
    assert outbox == []

    res = client.post("/auth/forgot-password", json={"email": "cook@example.com"})
    assert res.status_code == 200
    assert res.json()["message"] == unknown_message

    email, token_type, reset_token = outbox[0]
    assert email == "cook@example.com"
    assert token_type == TokenType.PASSWORD_RESET

    res = client.post(
        "/auth/reset-password", json={"token": reset_token, "password": NEW_PASSWORD}
    )
    assert res.status_code == 200
    assert login(client, password=NEW_PASSWORD).status_code == 200

    # Reset tokens are single use
    res = client.post(
        "/auth/reset-password", json={"token": reset_token, "password": PASSWORD}
    )
    assert res.status_code == 401


# Email verification

def test_verify_email(client, register_user, outbox):
    tokens = register_user()

    res = client.post("/auth/send-verification-email", json={"email": "cook@example.com"})
    assert res.status_code == 200
    _, token_type, code = outbox[0]
    assert token_type == TokenType.EMAIL_VERIFICATION

    assert client.post("/auth/verify-email", json={"code": "wrong"}).status_code == 401
    assert client.post("/auth/verify-email", json={"code": code}).status_code == 200

    me = client.post("/auth/me", headers=bearer(tokens)).json()
    assert me["emailVerified"] is True

    # Already verified accounts are not sent another code
    client.post("/auth/send-verification-email", json={"email": "cook@example.com"})
    assert len(outbox) == 1
