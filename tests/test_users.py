# tests/test_users.py
ROLE_URL = "/api/users/role"


def test_role_is_null_before_assignment(client, headers_for):
    res = client.get(ROLE_URL, headers=headers_for("user_new"))
    assert res.status_code == 200
    assert res.json() == {
        "role": None,
        "hasRole": False,
        "userId": None,
        "onboardingCompleted": False,
    }


def test_assign_business_role(client, headers_for):
    headers = headers_for("user_biz")
    res = client.post(ROLE_URL, json={"role": "Business", "email": "a@b.com"}, headers=headers)

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["role"] == "business"

    res = client.get(ROLE_URL, headers=headers)
    assert res.json()["role"] == "business"
    # onboarding not done yet
    assert res.json()["onboardingCompleted"] is False


def test_plain_user_needs_no_onboarding(client, headers_for):
    headers = headers_for("user_client")
    client.post(ROLE_URL, json={"role": "user"}, headers=headers)

    res = client.get(ROLE_URL, headers=headers)
    assert res.json()["onboardingCompleted"] is True


def test_role_cannot_be_changed(client, headers_for):
    headers = headers_for("user_switch")
    client.post(ROLE_URL, json={"role": "user"}, headers=headers)

    res = client.post(ROLE_URL, json={"role": "business"}, headers=headers)
    assert res.status_code == 403
    assert res.json()["role"] == "user"


def test_invalid_role(client, headers_for):
    res = client.post(ROLE_URL, json={"role": "admin"}, headers=headers_for("user_x"))
    assert res.status_code == 400
    assert res.json()["validRoles"] == ["business", "user"]


def test_unknown_payload_key_is_rejected(client, headers_for):
    res = client.post(
        ROLE_URL,
        json={"role": "user", "isAdmin": True},
        headers=headers_for("user_y"),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request payload"
