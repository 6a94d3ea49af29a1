"""Integration tests for the storefront API via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

from sickfits.api import (
    auth_router,
    cart_router,
    item_router,
    order_router,
    register_exception_handlers,
    user_router,
)
from sickfits.order.order import Order
from sickfits.user.user import User


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(auth_router)
    app.include_router(item_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(user_router)
    register_exception_handlers(app)
    return TestClient(app)


def _sign_up(client, email="wes@example.com", password="secret123", name="Wes"):
    response = client.post("/auth/signup", json={"email": email, "password": password, "name": name})
    assert response.status_code == 201
    return response.json()


def _create_item(client, title="Fancy Hat", price=1000):
    response = client.post(
        "/items",
        json={"title": title, "description": f"{title} description", "price": price},
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestAuthEndpoints:
    def test_signup_sets_httponly_cookie(self, client):
        response = client.post("/auth/signup", json={"email": "Wes@Example.com", "password": "secret123"})

        assert response.status_code == 201
        assert response.json()["email"] == "wes@example.com"
        assert response.json()["permissions"] == ["USER"]
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("token=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=31536000" in set_cookie

    def test_me_with_session(self, client):
        user = _sign_up(client)
        response = client.get("/auth/me")
        assert response.status_code == 200
        assert response.json()["id"] == user["id"]

    def test_me_anonymous(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 200
        assert response.json() is None

    def test_me_with_bad_cookie_is_anonymous(self, client):
        client.cookies.set("token", "garbage")
        assert client.get("/auth/me").json() is None

    def test_signout_clears_session(self, client):
        _sign_up(client)
        response = client.post("/auth/signout")
        assert response.json() == {"message": "Goodbye!"}
        assert client.get("/auth/me").json() is None

    def test_signin(self, client):
        _sign_up(client)
        client.cookies.clear()

        response = client.post("/auth/signin", json={"email": "wes@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert client.get("/auth/me").json()["email"] == "wes@example.com"

    def test_signin_wrong_password(self, client):
        _sign_up(client)
        response = client.post("/auth/signin", json={"email": "wes@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid Password!"

    def test_duplicate_signup(self, client):
        _sign_up(client)
        response = client.post("/auth/signup", json={"email": "wes@example.com", "password": "secret123"})
        assert response.status_code == 400


class TestPasswordResetEndpoints:
    def test_reset_flow(self, client, mailbox):
        user = _sign_up(client)
        client.cookies.clear()

        response = client.post("/auth/request-reset", json={"email": "wes@example.com"})
        assert response.json() == {"message": "Thanks!"}
        assert mailbox.last_email_to("wes@example.com") is not None

        token = current_domain.repository_for(User).get(user["id"]).reset_token
        response = client.post(
            "/auth/reset-password",
            json={"reset_token": token, "password": "new-secret", "confirm_password": "new-secret"},
        )
        assert response.status_code == 200
        assert client.get("/auth/me").json()["id"] == user["id"]

    def test_request_reset_unknown_email(self, client):
        response = client.post("/auth/request-reset", json={"email": "ghost@example.com"})
        assert response.status_code == 404

    def test_reset_with_bad_token(self, client):
        response = client.post(
            "/auth/reset-password",
            json={"reset_token": "bogus", "password": "a", "confirm_password": "a"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "This token is either invalid or expired"

    def test_reset_with_mismatched_passwords(self, client):
        response = client.post(
            "/auth/reset-password",
            json={"reset_token": "bogus", "password": "a", "confirm_password": "b"},
        )
        assert response.status_code == 400


class TestItemEndpoints:
    def test_create_requires_session(self, client):
        response = client.post("/items", json={"title": "Hat", "description": "A hat", "price": 100})
        assert response.status_code == 401

    def test_create_and_fetch(self, client):
        user = _sign_up(client)
        item_id = _create_item(client)

        response = client.get(f"/items/{item_id}")
        assert response.status_code == 200
        assert response.json()["user_id"] == user["id"]
        assert [i["id"] for i in client.get("/items").json()] == [item_id]

    def test_update_by_stranger_forbidden(self, client):
        _sign_up(client)
        item_id = _create_item(client)
        client.cookies.clear()
        _sign_up(client, email="stranger@example.com")

        response = client.put(f"/items/{item_id}", json={"title": "Stolen"})
        assert response.status_code == 403

    def test_delete_missing_item(self, client):
        _sign_up(client)
        assert client.delete("/items/no-such-item").status_code == 404


class TestCartAndCheckoutEndpoints:
    def test_full_purchase(self, client, gateway):
        _sign_up(client)
        hat = _create_item(client, title="Fancy Hat", price=1000)
        belt = _create_item(client, title="Belt", price=500)
        client.post("/cart", json={"item_id": hat})
        client.post("/cart", json={"item_id": hat})
        client.post("/cart", json={"item_id": belt})

        cart = client.get("/cart").json()
        assert sorted(row["quantity"] for row in cart) == [1, 2]

        response = client.post("/orders", json={"token": "tok_visa"})
        assert response.status_code == 201
        order = response.json()
        assert order["total"] == 2500
        assert sorted(i["quantity"] for i in order["items"]) == [1, 2]
        assert client.get("/cart").json() == []
        assert [o["id"] for o in client.get("/orders").json()] == [order["id"]]

    def test_declined_payment(self, client, gateway):
        _sign_up(client)
        client.post("/cart", json={"item_id": _create_item(client)})
        gateway.configure(should_succeed=False, failure_reason="Your card was declined.")

        response = client.post("/orders", json={"token": "tok_bad"})
        assert response.status_code == 402
        assert response.json()["error"] == "Your card was declined."
        assert len(client.get("/cart").json()) == 1

    def test_empty_cart_checkout(self, client):
        _sign_up(client)
        assert client.post("/orders", json={"token": "tok_visa"}).status_code == 400

    def test_remove_from_someone_elses_cart(self, client):
        _sign_up(client)
        row = client.post("/cart", json={"item_id": _create_item(client)}).json()
        client.cookies.clear()
        _sign_up(client, email="stranger@example.com")

        assert client.delete(f"/cart/{row['id']}").status_code == 403

    def test_order_visible_to_owner_only(self, client):
        _sign_up(client)
        client.post("/cart", json={"item_id": _create_item(client)})
        order_id = client.post("/orders", json={"token": "tok_visa"}).json()["id"]
        client.cookies.clear()
        _sign_up(client, email="stranger@example.com")

        assert client.get(f"/orders/{order_id}").status_code == 403
        assert current_domain.repository_for(Order).get(order_id) is not None

    def test_checkout_anonymous(self, client):
        assert client.post("/orders", json={"token": "tok_visa"}).status_code == 401


class TestPermissionEndpoints:
    def test_plain_user_cannot_update_permissions(self, client):
        target = _sign_up(client)
        response = client.put(f"/users/{target['id']}/permissions", json={"permissions": ["ADMIN"]})
        assert response.status_code == 403

    def test_admin_updates_permissions(self, client, admin, token_issuer):
        target = _sign_up(client)
        client.cookies.clear()
        client.cookies.set("token", token_issuer.issue(admin.id))

        response = client.put(f"/users/{target['id']}/permissions", json={"permissions": ["USER", "ITEMCREATE"]})
        assert response.status_code == 200
        assert response.json()["permissions"] == ["ITEMCREATE", "USER"]
