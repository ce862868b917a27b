from sqlalchemy import func, select

from accounthub.auth.models import PasswordResetToken


def _create(client, **overrides):
    body = {"fullName": "Grace Hopper", "email": "grace@example.com", "password": "cobol1"}
    body.update(overrides)
    return client.post("/api/users", json=body)


def test_create_and_get(client):
    r = _create(client)
    assert r.status_code == 201
    user = r.json()
    assert user["role"] == "USER"
    assert "password" not in user and "passwordHash" not in user

    got = client.get(f"/api/users/{user['id']}")
    assert got.status_code == 200 and got.json()["email"] == "grace@example.com"


def test_create_duplicate(client):
    _create(client)
    r = _create(client, fullName="Other")
    assert r.status_code == 409


def test_list(client):
    _create(client)
    _create(client, email="alan@example.com", fullName="Alan Turing")
    emails = [u["email"] for u in client.get("/api/users").json()]
    assert emails == ["grace@example.com", "alan@example.com"]


def test_missing_user_is_404(client):
    r = client.get("/api/users/999")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "User not found with id: 999"}
    assert client.put("/api/users/999", json={"fullName": "X", "email": "x@example.com"}).status_code == 404
    assert client.delete("/api/users/999").status_code == 404


def test_update_keeps_password_unless_given(client):
    uid = _create(client).json()["id"]
    r = client.put(f"/api/users/{uid}", json={"fullName": "Rear Admiral Hopper", "email": "grace@example.com"})
    assert r.status_code == 200 and r.json()["fullName"] == "Rear Admiral Hopper"
    assert client.post("/auth/signin", json={"email": "grace@example.com", "password": "cobol1"}).status_code == 200

    client.put(f"/api/users/{uid}", json={"fullName": "G", "email": "grace@example.com", "password": "newpass"})
    assert client.post("/auth/signin", json={"email": "grace@example.com", "password": "cobol1"}).status_code == 401
    assert client.post("/auth/signin", json={"email": "grace@example.com", "password": "newpass"}).status_code == 200


def test_update_to_taken_email(client):
    _create(client)
    uid = _create(client, email="alan@example.com").json()["id"]
    r = client.put(f"/api/users/{uid}", json={"fullName": "Alan", "email": "grace@example.com"})
    assert r.status_code == 409


def test_delete(client):
    uid = _create(client).json()["id"]
    assert client.delete(f"/api/users/{uid}").status_code == 204
    assert client.get(f"/api/users/{uid}").status_code == 404


def test_delete_takes_pending_reset_token_with_it(client, make_signup, db):
    ada = client.post("/auth/signup", json=make_signup()).json()["user"]
    client.post("/auth/forgot-password", json={"email": "ada@example.com"})
    old_token = db.scalars(select(PasswordResetToken)).one().token

    assert client.delete(f"/api/users/{ada['id']}").status_code == 204
    assert db.scalar(select(func.count()).select_from(PasswordResetToken)) == 0

    # the next account may be handed the same id
    client.post("/auth/signup", json=make_signup(fullName="Eve", email="eve@example.com", password="evepass"))
    r = client.post("/auth/reset-password", json={"token": old_token, "newPassword": "hijacked"})
    assert r.status_code == 401
    assert client.post("/auth/signin", json={"email": "eve@example.com", "password": "evepass"}).status_code == 200
    assert client.post("/auth/signin", json={"email": "eve@example.com", "password": "hijacked"}).status_code == 401


def test_email_is_kept_as_sent(client):
    r = _create(client, email="Grace@Navy.MIL")
    assert r.status_code == 201 and r.json()["email"] == "Grace@Navy.MIL"
    assert _create(client, email="not-an-email").status_code == 400
