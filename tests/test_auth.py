"""Tests for auth endpoints and request authentication."""

from tests.supabase_double import make_access_token

CREDENTIALS = {"email": "alex@example.com", "password": "TestPassword123!"}


def test_signup_success(client, api_base, supabase):
    """Signup creates the account and opens a session."""
    r = client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    assert r.status_code == 201
    data = r.json()
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["user"]["email"] == CREDENTIALS["email"]


def test_signup_pending_confirmation(client, api_base, supabase):
    supabase.auth.require_confirmation = True
    r = client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    assert r.status_code == 201
    assert r.json()["requires_confirmation"] is True


def test_signup_duplicate_email(client, api_base, supabase):
    """Signup with existing email returns 400."""
    client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    r = client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    assert r.status_code == 400


def test_signup_validation_error(client, api_base):
    """Signup with invalid payload returns 422."""
    r = client.post(
        f"{api_base}/auth/signup",
        json={"email": "invalid-email", "password": "short"},
    )
    assert r.status_code == 422


def test_login_success(client, api_base, supabase):
    client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    r = client.post(f"{api_base}/auth/login", json=CREDENTIALS)
    assert r.status_code == 200
    data = r.json()
    assert "access_token" in data
    assert "refresh_token" in data


def test_login_invalid_credentials(client, api_base, supabase):
    client.post(f"{api_base}/auth/signup", json=CREDENTIALS)
    r = client.post(
        f"{api_base}/auth/login",
        json={"email": CREDENTIALS["email"], "password": "WrongPassword1!"},
    )
    assert r.status_code == 401


def test_refresh_rotates_session(client, api_base, supabase):
    signup = client.post(f"{api_base}/auth/signup", json=CREDENTIALS).json()
    r = client.post(
        f"{api_base}/auth/refresh", json={"refresh_token": signup["refresh_token"]}
    )
    assert r.status_code == 200
    assert r.json()["user"]["id"] == signup["user"]["id"]


def test_refresh_invalid_token(client, api_base, supabase):
    r = client.post(f"{api_base}/auth/refresh", json={"refresh_token": "nope"})
    assert r.status_code == 401


def test_logout_revokes_session(client, api_base, supabase):
    signup = client.post(f"{api_base}/auth/signup", json=CREDENTIALS).json()
    token = signup["access_token"]
    r = client.post(
        f"{api_base}/auth/logout", headers={"Authorization": f"Bearer {token}"}
    )
    assert r.status_code == 200
    assert supabase.auth.admin.signed_out == [token]


def test_forgot_password_always_succeeds(client, api_base, supabase):
    r = client.post(
        f"{api_base}/auth/forgot-password", json={"email": "nobody@example.com"}
    )
    assert r.status_code == 200
    assert supabase.auth.password_resets == ["nobody@example.com"]


def test_missing_authorization_header(client, api_base):
    r = client.get(f"{api_base}/events/")
    assert r.status_code == 401


def test_wrong_authorization_scheme(client, api_base):
    r = client.get(f"{api_base}/events/", headers={"Authorization": "Token abc"})
    assert r.status_code == 401


def test_garbage_token(client, api_base):
    r = client.get(f"{api_base}/events/", headers={"Authorization": "Bearer abc.def"})
    assert r.status_code == 401


def test_expired_token(client, api_base):
    token = make_access_token("u1", expires_in=-60)
    r = client.get(f"{api_base}/events/", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_anon_key_is_not_a_session(client, api_base):
    token = make_access_token("u1", role="anon")
    r = client.get(f"{api_base}/events/", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_me_returns_session_user(client, api_base, auth_headers, user_id):
    r = client.get(f"{api_base}/users/me", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"id": user_id, "email": "owner@example.com"}
