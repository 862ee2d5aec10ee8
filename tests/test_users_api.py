"""API tests for /api/users."""


def _register(client, email="budi@example.com", password="secret123", name="Budi"):
    return client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password},
    )


def test_register_returns_public_user(client):
    resp = _register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "budi@example.com"
    assert body["name"] == "Budi"
    assert "passwordHash" not in body


def test_register_requires_fields(client):
    resp = client.post("/api/users/register", json={"email": "x@example.com"})
    assert resp.status_code == 400


def test_register_duplicate_email(client):
    _register(client)
    resp = _register(client, email="BUDI@example.com")
    assert resp.status_code == 409


def test_login_and_me(client):
    _register(client)
    resp = client.post("/api/users/login", json={"email": "budi@example.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful"
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "budi@example.com"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Budi"


def test_login_wrong_password(client):
    _register(client)
    resp = client.post("/api/users/login", json={"email": "budi@example.com", "password": "nope"})
    assert resp.status_code == 401


def test_login_requires_fields(client):
    assert client.post("/api/users/login", json={"email": "budi@example.com"}).status_code == 400


def test_me_rejects_bad_token(client):
    resp = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_list_users(client):
    _register(client)
    _register(client, email="sari@example.com", name="Sari")
    resp = client.get("/api/users")
    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()] == ["Budi", "Sari"]


def test_root(client):
    assert client.get("/").json() == {"message": "Meeting room booking backend is running!"}
