# tests/test_auth.py
from jose import jwt

from app.core.auth import ClerkTokenVerifier

ROLE_URL = "/api/users/role"


def test_missing_credentials_is_unauthorized(client):
    res = client.get(ROLE_URL)
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}


def test_bearer_token_resolves_identity(client, headers_for):
    res = client.get(ROLE_URL, headers=headers_for("user_bearer"))
    assert res.status_code == 200
    assert res.json()["hasRole"] is False


def test_expired_token_is_rejected(client, make_token):
    token = make_token("user_expired", expires_in=-60)
    res = client.get(ROLE_URL, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_token_signed_with_other_key_is_rejected(client, make_token):
    token = make_token("user_forged", key="not-the-key")
    res = client.get(ROLE_URL, headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_garbage_token_is_rejected(client):
    res = client.get(ROLE_URL, headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_session_cookie_is_accepted(client, make_token):
    client.cookies.set("__session", make_token("user_cookie"))
    res = client.get(ROLE_URL)
    assert res.status_code == 200


def test_invalid_cookie_falls_back_to_bearer(client, headers_for):
    client.cookies.set("__session", "stale")
    client.post(ROLE_URL, json={"role": "user"}, headers=headers_for("user_fallback"))

    res = client.get(ROLE_URL, headers=headers_for("user_fallback"))
    assert res.status_code == 200
    assert res.json()["role"] == "user"


def test_authorized_party_allow_list():
    verifier = ClerkTokenVerifier(
        key="k",
        algorithm="HS256",
        authorized_parties=["https://app.example.com"],
    )
    good = jwt.encode({"sub": "u1", "azp": "https://app.example.com"}, "k", algorithm="HS256")
    bad = jwt.encode({"sub": "u1", "azp": "https://evil.example.com"}, "k", algorithm="HS256")

    assert verifier.verify(good) == "u1"
    assert verifier.verify(bad) is None


def test_token_without_subject_yields_no_identity():
    verifier = ClerkTokenVerifier(key="k", algorithm="HS256")
    token = jwt.encode({"azp": "x"}, "k", algorithm="HS256")
    assert verifier.verify(token) is None


def test_business_routes_hide_non_business_users(client, headers_for):
    headers = headers_for("user_plain")
    client.post(ROLE_URL, json={"role": "user"}, headers=headers)

    res = client.post(
        "/api/business/appointments",
        json={"client_name": "A"},
        headers=headers,
    )
    assert res.status_code == 404
    assert res.json() == {"error": "Business not found"}
