def _register(client, **overrides):
    body = {"email": "Coach@Example.com", "password": "secret123", "name": "Coach", "role": "TRAINER"}
    body.update(overrides)
    return client.post("/auth/register", json=body)


def test_register_login_me(client):
    resp = _register(client, certification="ACE")
    assert resp.status_code == 201
    user = resp.json()
    assert user["email"] == "coach@example.com"
    assert user["role"] == "TRAINER"
    assert user["certification"] == "ACE"
    assert "password_hash" not in user

    login = client.post("/auth/login", data={"username": "COACH@example.com", "password": "secret123"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


def test_register_defaults_to_user_role(client):
    resp = _register(client, role=None, email="plain@example.com")
    assert resp.status_code == 400

    body = {"email": "plain@example.com", "password": "secret123", "name": "Plain"}
    resp = client.post("/auth/register", json=body)
    assert resp.status_code == 201
    assert resp.json()["role"] == "USER"


def test_duplicate_email_is_case_insensitive(client):
    assert _register(client).status_code == 201

    dup = _register(client, email="COACH@example.com")
    assert dup.status_code == 400
    assert dup.json()["detail"] == "Email already registered"


def test_register_rejects_unknown_role(client):
    assert _register(client, role="ADMIN").status_code == 400


def test_login_wrong_password(client):
    _register(client)
    resp = client.post("/auth/login", data={"username": "coach@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
