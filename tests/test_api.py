import time

import pytest
from fastapi.testclient import TestClient

from shopperz.core.storage import MemoryStorage
from shopperz.main import create_app
from shopperz.services.assistant import CHAT_NO_KEY, DESCRIPTION_NO_KEY, ShoppingAssistant
from shopperz.services.context import build_context

API = "/api/v1"


def wait_for_checkout(client, session_id, attempts=50):
    for _ in range(attempts):
        body = client.get(f"{API}/checkout/{session_id}").json()
        if body["status"] != "processing":
            return body
        time.sleep(0.02)
    raise AssertionError("checkout never finished")


def place_order(client, payload, product_ids=("1",)):
    for product_id in product_ids:
        client.post(f"{API}/cart/items", json={"productId": product_id})
    response = client.post(f"{API}/checkout/", json=payload)
    assert response.status_code == 202
    return wait_for_checkout(client, response.json()["id"])["order"]


def test_health_and_root(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["docs"] == "/api/docs"


def test_metrics_endpoint(client):
    client.post(f"{API}/cart/items", json={"productId": "1"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "store_mutations_total" in response.text


def test_list_and_filter_products(client):
    assert len(client.get(f"{API}/products/").json()) == 5

    body = client.get(f"{API}/products/", params={"category": "Electronics", "search": "WATCH"}).json()

    assert [p["id"] for p in body] == ["2"]
    assert body[0]["isOnSale"] is False


def test_unknown_product_is_404(client):
    response = client.get(f"{API}/products/nope")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_categories(client):
    assert client.get(f"{API}/categories/").json()[0] == "Electronics"


def test_cart_flow(client):
    client.post(f"{API}/cart/items", json={"productId": "1"})
    response = client.post(f"{API}/cart/items", json={"productId": "1"})
    assert response.status_code == 201
    assert response.json()["totalItems"] == 2

    body = client.patch(f"{API}/cart/items/1", json={"delta": -5}).json()
    assert body["items"][0]["quantity"] == 1
    assert body["total"] == pytest.approx(299.99)

    client.post(f"{API}/cart/items", json={"productId": "5"})
    body = client.delete(f"{API}/cart/items/1").json()
    assert [item["id"] for item in body["items"]] == ["5"]

    assert client.delete(f"{API}/cart/").json()["totalItems"] == 0


def test_cart_errors(client):
    assert client.post(f"{API}/cart/items", json={"productId": "ghost"}).status_code == 404
    assert client.delete(f"{API}/cart/items/1").status_code == 404
    assert client.patch(f"{API}/cart/items/1", json={"delta": 0}).status_code == 422


def test_wishlist_toggle(client):
    first = client.post(f"{API}/wishlist/3/toggle").json()
    assert first == {"productId": "3", "wishlisted": True}

    body = client.get(f"{API}/wishlist/").json()
    assert body["productIds"] == ["3"]
    assert body["products"][0]["name"] == "NeoComfort Running Shoes"

    assert client.post(f"{API}/wishlist/3/toggle").json()["wishlisted"] is False


def test_checkout_places_order(client, checkout_payload):
    order = place_order(client, checkout_payload, ("1", "1", "5"))

    assert order["total"] == pytest.approx(644.98)
    assert order["status"] == "Processing"
    assert [h["status"] for h in order["statusHistory"]] == ["Placed", "Processing"]
    assert client.get(f"{API}/cart/").json()["items"] == []
    assert client.get(f"{API}/orders/").json()[0]["id"] == order["id"]


def test_checkout_empty_cart(client, checkout_payload):
    response = client.post(f"{API}/checkout/", json=checkout_payload)

    assert response.status_code == 400
    assert response.json()["error_code"] == "EMPTY_CART"


def test_checkout_rejects_invalid_form(client, checkout_payload):
    client.post(f"{API}/cart/items", json={"productId": "1"})

    response = client.post(f"{API}/checkout/", json={**checkout_payload, "email": "nope"})

    assert response.status_code == 422


def test_unknown_checkout_session(client):
    assert client.get(f"{API}/checkout/missing").status_code == 404
    assert client.delete(f"{API}/checkout/missing").json()["error_code"] == "CHECKOUT_NOT_FOUND"


def test_dismiss_checkout_before_commit(settings, checkout_payload):
    slow = settings.model_copy(update={"CHECKOUT_DELAY_SECONDS": 30})
    context = build_context(slow, storage=MemoryStorage(), assistant=ShoppingAssistant(api_key=None))

    with TestClient(create_app(context=context)) as client:
        client.post(f"{API}/cart/items", json={"productId": "2"})
        session = client.post(f"{API}/checkout/", json=checkout_payload).json()

        response = client.delete(f"{API}/checkout/{session['id']}")

        assert response.json()["status"] == "cancelled"
        assert client.get(f"{API}/orders/").json() == []
        assert client.get(f"{API}/cart/").json()["totalItems"] == 1
        assert client.delete(f"{API}/checkout/{session['id']}").json()["error_code"] == "CHECKOUT_NOT_PENDING"


def test_order_tracking_and_customer_cancel(client, checkout_payload):
    order = place_order(client, checkout_payload)

    timeline = client.get(f"{API}/orders/{order['id']}/tracking").json()
    assert timeline[-1]["status"] == "Order Placed"
    assert timeline[-1]["completed"] is True

    cancelled = client.post(f"{API}/orders/{order['id']}/cancel").json()
    assert cancelled["status"] == "Cancelled"
    assert cancelled["statusHistory"][-1]["note"] == "Order cancelled by customer."

    again = client.post(f"{API}/orders/{order['id']}/cancel")
    assert again.status_code == 400
    assert again.json()["error_code"] == "ORDER_NOT_CANCELLABLE"


def test_unknown_order_is_404(client):
    assert client.get(f"{API}/orders/NOPE").status_code == 404


def test_assistant_chat_without_key(client):
    response = client.post(f"{API}/assistant/chat", json={"history": [], "message": "Any headphones?"})

    reply = response.json()["reply"]
    assert reply["role"] == "model"
    assert reply["text"] == CHAT_NO_KEY


def test_admin_login_rejects_bad_credentials(client):
    response = client.post(f"{API}/admin/login", json={"username": "xrrahul", "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["error_code"] == "INVALID_CREDENTIALS"


def test_admin_routes_require_token(client):
    assert client.get(f"{API}/admin/orders").status_code == 401

    response = client.get(f"{API}/admin/orders", headers={"Authorization": "Bearer junk"})
    assert response.status_code == 401


def test_admin_product_lifecycle(client, admin_headers):
    draft = {
        "name": "Trail Bottle",
        "price": 25,
        "description": "Keeps water cold",
        "category": "Sports",
        "image": "https://example.com/bottle.png",
    }
    created = client.post(f"{API}/admin/products", json=draft, headers=admin_headers)
    assert created.status_code == 201
    product = created.json()
    assert client.get(f"{API}/products/").json()[0]["id"] == product["id"]

    client.post(f"{API}/cart/items", json={"productId": product["id"]})
    updated = client.put(
        f"{API}/admin/products/{product['id']}",
        json={**{k: v for k, v in draft.items() if k != "image"}, "isOnSale": True, "salePrice": 20},
        headers=admin_headers
    ).json()
    assert updated["image"] == "https://example.com/bottle.png"
    assert client.get(f"{API}/cart/").json()["total"] == pytest.approx(20.0)

    deleted = client.delete(f"{API}/admin/products/{product['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    assert client.get(f"{API}/cart/").json()["items"] == []


def test_admin_product_validation(client, admin_headers):
    base = {"name": "Lamp", "price": 50, "description": "Bright", "category": "Home & Living"}

    bad_sale = client.post(
        f"{API}/admin/products",
        json={**base, "isOnSale": True, "salePrice": 80},
        headers=admin_headers
    )
    missing_sale = client.post(f"{API}/admin/products", json={**base, "isOnSale": True}, headers=admin_headers)
    unknown_category = client.post(
        f"{API}/admin/products",
        json={**base, "category": "Garden"},
        headers=admin_headers
    )

    assert bad_sale.status_code == 422
    assert missing_sale.status_code == 422
    assert unknown_category.json()["error_code"] == "UNKNOWN_CATEGORY"


def test_admin_categories(client, admin_headers):
    body = client.post(f"{API}/admin/categories", json={"name": " Garden "}, headers=admin_headers).json()

    assert body[-1] == "Garden"
    assert client.get(f"{API}/categories/").json().count("Garden") == 1


def test_admin_generate_description_without_key(client, admin_headers):
    response = client.post(
        f"{API}/admin/products/generate-description",
        json={"name": "Lamp", "category": "Home & Living", "features": "brass, dimmable"},
        headers=admin_headers
    )

    assert response.json()["description"] == DESCRIPTION_NO_KEY


def test_admin_order_fulfilment(client, admin_headers, checkout_payload):
    order = place_order(client, checkout_payload)
    order_id = order["id"]

    transitions = client.get(f"{API}/admin/orders/{order_id}/transitions", headers=admin_headers).json()
    assert "Delivered" in transitions

    delivered = client.patch(
        f"{API}/admin/orders/{order_id}/status",
        json={"status": "Delivered"},
        headers=admin_headers
    ).json()
    assert delivered["status"] == "Delivered"
    assert delivered["statusHistory"][-1]["note"] == "Package delivered."

    tracked = client.put(
        f"{API}/admin/orders/{order_id}/tracking",
        json={"trackingId": " 1Z999 ", "trackingUrl": ""},
        headers=admin_headers
    ).json()
    assert tracked["trackingId"] == "1Z999"
    assert "trackingUrl" not in tracked or tracked["trackingUrl"] is None

    filtered = client.get(f"{API}/admin/orders", params={"status": "Delivered"}, headers=admin_headers).json()
    assert [o["id"] for o in filtered] == [order_id]
    assert client.get(f"{API}/admin/orders", params={"status": "Shipped"}, headers=admin_headers).json() == []


def test_admin_invalid_status_value(client, admin_headers, checkout_payload):
    order = place_order(client, checkout_payload)

    response = client.patch(
        f"{API}/admin/orders/{order['id']}/status",
        json={"status": "Lost"},
        headers=admin_headers
    )

    assert response.status_code == 422


def test_views(client, admin_headers):
    client.post(f"{API}/cart/items", json={"productId": "4"})

    shop = client.get(f"{API}/views/shop").json()
    cart = client.get(f"{API}/views/cart").json()

    assert shop["view"] == "shop"
    assert shop["cartCount"] == 1
    assert len(shop["products"]) == 5
    assert cart["total"] == pytest.approx(450.0)
    assert client.get(f"{API}/views/admin").status_code == 401
    assert client.get(f"{API}/views/admin", headers=admin_headers).json()["orders"] == []
    assert client.get(f"{API}/views/checkout").status_code == 422


def test_websocket_relays_changes_and_notices(client):
    with client.websocket_connect("/ws/notifications") as websocket:
        assert websocket.receive_json()["type"] == "connection"

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        client.post(f"{API}/cart/items", json={"productId": "5"})

        assert websocket.receive_json() == {"type": "store_changed"}
        notice = websocket.receive_json()
        assert notice["type"] == "notification"
        assert notice["data"] == {"message": "Added Pro-Grip Yoga Mat to cart", "kind": "info"}


def test_admin_tokens_use_context_secret(settings):
    def client_for(secret):
        custom = settings.model_copy(update={"SECRET_KEY": secret})
        context = build_context(custom, storage=MemoryStorage(), assistant=ShoppingAssistant(api_key=None))
        return TestClient(create_app(context=context))

    with client_for("shop-one") as first, client_for("shop-two") as second:
        token = first.post(
            f"{API}/admin/login",
            json={"username": "xrrahul", "password": "xr123"}
        ).json()["accessToken"]
        headers = {"Authorization": f"Bearer {token}"}

        assert first.get(f"{API}/admin/orders", headers=headers).status_code == 200
        assert second.get(f"{API}/admin/orders", headers=headers).status_code == 401


def test_checkout_session_hides_card_details(client, context, checkout_payload):
    place_order(client, checkout_payload)

    for session in context.checkout._sessions.values():
        assert session.details.zip == "03801"
        assert not hasattr(session.details, "card_number")
