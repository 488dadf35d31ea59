"""Tests for profile updates, password changes and password resets."""

from datetime import UTC, datetime, timedelta

import pytest

from src.errors import EmailDeliveryError, UnauthorizedError
from src.models.user import User
from src.services.auth import (
    create_access_token,
    hash_reset_token,
    verify_password,
    verify_token,
)


def test_update_profile(client, auth_headers):
    response = client.put(
        "/api/auth/profile",
        headers=auth_headers,
        json={"first_name": "Jane", "profile_picture": "https://cdn.test/jane.png"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["first_name"] == "Jane"
    assert user["last_name"] == "User"
    assert user["profile_picture"] == "https://cdn.test/jane.png"


def test_update_profile_email_taken(client, auth_headers, register_user):
    other = register_user("other@example.com")
    response = client.put(
        "/api/auth/profile", headers=auth_headers, json={"email": other.email}
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use"


def test_profile_update_does_not_rehash_password(client, auth_headers, db):
    before = db.query(User).filter(User.id == auth_headers.user_id).one().password_hash

    client.put("/api/auth/profile", headers=auth_headers, json={"last_name": "Changed"})

    db.expire_all()
    after = db.query(User).filter(User.id == auth_headers.user_id).one().password_hash
    assert after == before


def test_change_password(client, auth_headers):
    response = client.put(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": "testpass123", "new_password": "newpass456"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Password updated successfully"

    old_login = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "testpass123"}
    )
    assert old_login.status_code == 401
    new_login = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "newpass456"}
    )
    assert new_login.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    response = client.put(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": "not-my-password", "new_password": "newpass456"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Current password is incorrect"


def test_password_is_stored_hashed(auth_headers, db):
    user = db.query(User).filter(User.id == auth_headers.user_id).one()
    assert user.password_hash != "testpass123"
    assert verify_password("testpass123", user.password_hash)


def test_request_password_reset_stores_only_hash(client, auth_headers, db, sent_emails):
    response = client.post("/api/auth/reset-password", json={"email": auth_headers.email})
    assert response.status_code == 200

    sent_emails.assert_called_once()
    to_email, subject, body = sent_emails.call_args.args
    assert to_email == auth_headers.email
    assert subject == "Password Reset Request"
    raw_token = body.split("/reset-password/")[1].split()[0]

    user = db.query(User).filter(User.id == auth_headers.user_id).one()
    assert user.reset_password_token == hash_reset_token(raw_token)
    assert user.reset_password_token != raw_token
    assert user.reset_password_expires is not None


def test_request_password_reset_unknown_email(client, sent_emails):
    response = client.post("/api/auth/reset-password", json={"email": "ghost@example.com"})
    assert response.status_code == 404
    sent_emails.assert_not_called()


def test_request_password_reset_clears_token_when_email_fails(
    client, auth_headers, db, sent_emails
):
    sent_emails.side_effect = EmailDeliveryError()

    response = client.post("/api/auth/reset-password", json={"email": auth_headers.email})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Email could not be sent"}
    db.expire_all()
    user = db.query(User).filter(User.id == auth_headers.user_id).one()
    assert user.reset_password_token is None
    assert user.reset_password_expires is None


def test_reset_password_flow(client, auth_headers, db, sent_emails):
    client.post("/api/auth/reset-password", json={"email": auth_headers.email})
    body = sent_emails.call_args.args[2]
    raw_token = body.split("/reset-password/")[1].split()[0]

    response = client.put(
        f"/api/auth/reset-password/{raw_token}", json={"password": "brandnew789"}
    )
    assert response.status_code == 200
    assert response.json()["token"]

    login = client.post(
        "/api/auth/login", json={"email": auth_headers.email, "password": "brandnew789"}
    )
    assert login.status_code == 200

    # Single use
    again = client.put(f"/api/auth/reset-password/{raw_token}", json={"password": "another123"})
    assert again.status_code == 400


def test_reset_password_invalid_token(client):
    response = client.put("/api/auth/reset-password/deadbeef", json={"password": "brandnew789"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired token"


def test_reset_password_expired_token(client, auth_headers, db):
    user = db.query(User).filter(User.id == auth_headers.user_id).one()
    user.reset_password_token = hash_reset_token("expired-token")
    user.reset_password_expires = datetime.now(UTC) - timedelta(minutes=1)
    db.commit()

    response = client.put(
        "/api/auth/reset-password/expired-token", json={"password": "brandnew789"}
    )
    assert response.status_code == 400


def test_verify_token_round_trip():
    assert verify_token(create_access_token(42)) == 42


def test_verify_token_rejects_garbage():
    with pytest.raises(UnauthorizedError):
        verify_token("garbage")
