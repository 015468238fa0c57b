import pytest
from sqlalchemy import func, select

from recipe_api.models import Ingredient, Order, OrderItem, Role, Token, User
from recipe_api.security import hash_password

PASSWORD = "Secret123!"


def create_user(client, n):
    res = client.post(
        "/users",
        json={"name": f"User {n}", "email": f"user{n}@example.com", "password": PASSWORD},
    )
    assert res.status_code == 201, res.text
    return res.json()


def test_create_user_hides_password(client):
    data = create_user(client, 1)
    assert data["email"] == "user1@example.com"
    assert data["role"] == "USER"
    assert "password" not in data


def test_duplicate_email_rejected(client):
    create_user(client, 1)
    res = client.post(
        "/users",
        json={"name": "Again", "email": "USER1@example.com", "password": PASSWORD},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "User already exists"


def test_weak_password_rejected(client):
    res = client.post(
        "/users", json={"name": "Weak", "email": "weak@example.com", "password": "password"}
    )
    assert res.status_code == 400


def test_users_second_page(client):
    for n in range(15):
        create_user(client, n)

    res = client.get("/users?page=2&pageSize=10")
    assert res.status_code == 200
    data = res.json()
    assert len(data["items"]) == 5
    assert data["total"] == 15
    assert data["page"] == 2
    assert data["pageSize"] == 10
    assert data["totalPages"] == 2


def test_users_are_listed_newest_first(client):
    for n in range(3):
        create_user(client, n)
    emails = [u["email"] for u in client.get("/users").json()["items"]]
    assert emails == ["user2@example.com", "user1@example.com", "user0@example.com"]


def test_update_and_delete_user(client):
    user = create_user(client, 1)

    res = client.patch(f"/users/{user['id']}", json={"name": "Renamed"})
    assert res.status_code == 200
    assert res.json()["name"] == "Renamed"
    assert res.json()["email"] == "user1@example.com"

    other = create_user(client, 2)
    res = client.patch(f"/users/{user['id']}", json={"email": other["email"]})
    assert res.status_code == 400

    assert client.delete(f"/users/{user['id']}").status_code == 200
    res = client.get(f"/users/{user['id']}")
    assert res.status_code == 404
    assert res.json() == {"statusCode": 404, "message": "User not found", "error": "Not Found"}


@pytest.fixture
def admin_headers(client, db_session):
    db_session.add(User(
        name="Admin",
        email="admin@example.com",
        password=hash_password(PASSWORD),
        role=Role.ADMIN,
    ))
    db_session.commit()
    res = client.post("/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    return {"Authorization": f"Bearer {res.json()['token']}"}


def test_anonymous_caller_cannot_assign_admin_role(client):
    res = client.post(
        "/users",
        json={"name": "Sneaky", "email": "sneaky@example.com", "password": PASSWORD,
              "role": "ADMIN"},
    )
    assert res.status_code == 403
    assert client.get("/users").json()["total"] == 0

    user = create_user(client, 1)
    res = client.patch(f"/users/{user['id']}", json={"role": "ADMIN"})
    assert res.status_code == 403
    assert client.get(f"/users/{user['id']}").json()["role"] == "USER"


def test_regular_user_cannot_promote_themselves(client, register_user):
    tokens = register_user()
    headers = {"Authorization": f"Bearer {tokens['token']}"}
    me = client.post("/auth/me", headers=headers).json()

    res = client.patch(f"/users/{me['id']}", json={"role": "ADMIN"}, headers=headers)
    assert res.status_code == 403
    assert res.json()["message"] == "Only admins can assign roles"


def test_admin_can_assign_roles(client, admin_headers):
    res = client.post(
        "/users",
        json={"name": "Second", "email": "second@example.com", "password": PASSWORD,
              "role": "ADMIN"},
        headers=admin_headers,
    )
    assert res.status_code == 201
    assert res.json()["role"] == "ADMIN"

    res = client.patch(f"/users/{res.json()['id']}", json={"role": "USER"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["role"] == "USER"


def test_delete_user_removes_owned_recipes_and_orders(client, register_user, db_session):
    tokens = register_user()
    headers = {"Authorization": f"Bearer {tokens['token']}"}
    me = client.post("/auth/me", headers=headers).json()

    client.post(
        "/recipes",
        json={
            "name": "Toast",
            "difficulty": "EASY",
            "ingredients": [{"name": "Bread", "quantity": 1, "unit": "slice"}],
            "instructions": [{"step": 1, "instruction": "Toast it"}],
        },
        headers=headers,
    )
    product = client.post(
        "/products", json={"name": "Toaster", "price": 30, "stock": 2, "category": "HOME"}
    ).json()
    client.post("/orders", json={"items": [{"productId": product["id"]}]}, headers=headers)

    res = client.delete(f"/users/{me['id']}")
    assert res.status_code == 200, res.text

    assert client.get("/recipes").json()["total"] == 0
    assert db_session.scalar(select(func.count()).select_from(Order)) == 0
    assert db_session.scalar(select(func.count()).select_from(OrderItem)) == 0
    assert db_session.scalar(select(func.count()).select_from(Token)) == 0
    # Shared ingredient rows and the catalogue are untouched
    assert db_session.scalars(select(Ingredient.name)).all() == ["bread"]
    assert client.get(f"/products/{product['id']}").status_code == 200
