"""Tests for users router."""

from uuid import uuid4

from neuron.auth.passwords import verify_password
from neuron.models.user import User


def test_list_users_as_admin(client, admin_headers, setup_user):
    r = client.get("/users", headers=admin_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 2
    for item in data["items"]:
        assert "password" not in item
        assert "password_hash" not in item


def test_create_user_without_users_create_is_403(client, user_headers):
    """A USER-role caller cannot create users."""
    payload = {"name": "Novo", "email": "novo@neuron.dev", "password": "Senha@123"}
    r = client.post("/users", json=payload, headers=user_headers)
    assert r.status_code == 403


def test_create_user_defaults_to_user_role(
    client, db, admin_headers, setup_user_role
):
    payload = {"name": "Novo Usuário", "email": "Novo@Neuron.dev", "password": "Senha@123"}
    r = client.post("/users", json=payload, headers=admin_headers)
    assert r.status_code == 201
    data = r.json()
    assert data["email"] == "novo@neuron.dev"
    assert data["role_id"] == str(setup_user_role.id)
    assert "password" not in data

    user = db.query(User).filter(User.email == "novo@neuron.dev").one()
    assert user.password_hash != "Senha@123"
    assert verify_password("Senha@123", user.password_hash)


def test_create_user_duplicate_email_is_409(client, admin_headers, setup_user):
    payload = {"name": "Outro", "email": setup_user.email, "password": "Senha@123"}
    r = client.post("/users", json=payload, headers=admin_headers)
    assert r.status_code == 409


def test_create_user_unknown_role_is_404(client, admin_headers):
    payload = {
        "name": "Outro",
        "email": "outro@neuron.dev",
        "password": "Senha@123",
        "role_id": str(uuid4()),
    }
    r = client.post("/users", json=payload, headers=admin_headers)
    assert r.status_code == 404


def test_create_user_short_password_is_400(client, admin_headers):
    payload = {"name": "Outro", "email": "outro@neuron.dev", "password": "123"}
    r = client.post("/users", json=payload, headers=admin_headers)
    assert r.status_code == 400


def test_update_user_password_and_status(client, db, admin_headers, setup_user):
    r = client.patch(
        f"/users/{setup_user.id}",
        json={"password": "Trocada@99", "is_active": False},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["is_active"] is False
    db.refresh(setup_user)
    assert verify_password("Trocada@99", setup_user.password_hash)


def test_update_user_email_taken_is_409(
    client, admin_headers, setup_user, setup_other_user
):
    r = client.patch(
        f"/users/{setup_user.id}",
        json={"email": setup_other_user.email},
        headers=admin_headers,
    )
    assert r.status_code == 409


def test_get_and_delete_user(client, admin_headers, setup_user):
    r = client.get(f"/users/{setup_user.id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["role"]["name"] == "USER"

    assert client.delete(f"/users/{setup_user.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/users/{setup_user.id}", headers=admin_headers).status_code == 404
