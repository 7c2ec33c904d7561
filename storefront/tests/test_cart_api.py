from decimal import Decimal

import pytest

from conftest import API, unique

CARTS = f"{API}/carts"


@pytest.fixture()
def guest_cart(client):
    response = client.get(f"{CARTS}/")
    assert response.status_code == 200
    cart = response.json()
    return {"X-Cart-Id": cart["id"]}


def add(client, headers, product, quantity=1, variant=None):
    payload = {"product_id": product["id"], "quantity": quantity}
    if variant is not None:
        payload["variant_id"] = variant["id"]
    return client.post(f"{CARTS}/items", json=payload, headers=headers)


def test_new_guest_cart_is_empty(client):
    cart = client.get(f"{CARTS}/").json()

    assert cart["user_id"] is None
    assert cart["items"] == []
    assert cart["total_items"] == 0
    assert Decimal(cart["total_price"]) == Decimal("0")


def test_add_same_product_raises_quantity(client, guest_cart, create_product):
    product = create_product(price="10.00", discount_price="8.00", quantity=10)

    assert add(client, guest_cart, product, 2).status_code == 200
    response = add(client, guest_cart, product, 3)
    assert response.status_code == 200

    cart = response.json()
    assert len(cart["items"]) == 1
    line = cart["items"][0]
    assert line["quantity"] == 5
    assert Decimal(line["unit_price"]) == Decimal("8.00")
    assert Decimal(line["subtotal"]) == Decimal("40.00")
    assert cart["total_items"] == 5
    assert Decimal(cart["total_price"]) == Decimal("40.00")


def test_stock_is_checked_on_resulting_quantity(client, guest_cart, create_product):
    product = create_product(quantity=3)

    assert add(client, guest_cart, product, 2).status_code == 200
    response = add(client, guest_cart, product, 2)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"

    item = client.get(f"{CARTS}/", headers=guest_cart).json()["items"][0]
    response = client.patch(f"{CARTS}/items/{item['id']}", json={"quantity": 4}, headers=guest_cart)
    assert response.status_code == 400


def test_variant_lines_are_priced_from_variant(client, admin_headers, guest_cart, create_product):
    product = create_product(price="10.00", quantity=10)
    other = create_product()
    variant = client.post(
        f"{API}/products/{product['id']}/variants",
        json={"sku": unique("SKU"), "price": "12.50", "quantity": 1},
        headers=admin_headers,
    ).json()

    add(client, guest_cart, product, 1)
    cart = add(client, guest_cart, product, 1, variant=variant).json()
    assert len(cart["items"]) == 2
    variant_line = next(i for i in cart["items"] if i["variant_id"] == variant["id"])
    assert Decimal(variant_line["unit_price"]) == Decimal("12.50")
    assert variant_line["variant"]["sku"] == variant["sku"]
    assert Decimal(cart["total_price"]) == Decimal("22.50")

    # variant stock, not product stock, applies
    assert add(client, guest_cart, product, 1, variant=variant).status_code == 400
    # variant of another product
    assert add(client, guest_cart, other, 1, variant=variant).status_code == 404


def test_unknown_product(client, guest_cart):
    response = add(client, guest_cart, {"id": "00000000-0000-0000-0000-000000000000"})
    assert response.status_code == 404


def test_update_remove_and_clear(client, guest_cart, create_product):
    first = create_product(quantity=5)
    second = create_product(quantity=5)
    add(client, guest_cart, first)
    cart = add(client, guest_cart, second).json()
    first_line, second_line = cart["items"]

    response = client.patch(f"{CARTS}/items/{first_line['id']}", json={"quantity": 4}, headers=guest_cart)
    assert response.status_code == 200
    assert response.json()["total_items"] == 5

    assert client.patch(
        f"{CARTS}/items/{first_line['id']}", json={"quantity": 0}, headers=guest_cart
    ).status_code == 422

    response = client.delete(f"{CARTS}/items/{second_line['id']}", headers=guest_cart)
    assert response.status_code == 200
    assert [i["id"] for i in response.json()["items"]] == [first_line["id"]]

    response = client.delete(f"{CARTS}/", headers=guest_cart)
    assert response.status_code == 200
    assert response.json()["items"] == []
    assert response.json()["id"] == guest_cart["X-Cart-Id"]


def test_line_of_another_cart_is_not_found(client, guest_cart, create_product):
    other_cart = client.get(f"{CARTS}/").json()
    line = add(client, {"X-Cart-Id": other_cart["id"]}, create_product(quantity=1)).json()["items"][0]

    response = client.delete(f"{CARTS}/items/{line['id']}", headers=guest_cart)
    assert response.status_code == 404


def test_guest_needs_cart_id_for_changes(client):
    response = client.delete(f"{CARTS}/")
    assert response.status_code == 404

    response = client.get(f"{CARTS}/", headers={"X-Cart-Id": "00000000-0000-0000-0000-000000000000"})
    assert response.status_code == 404


def test_add_without_cart_starts_guest_cart(client, create_product):
    response = add(client, {}, create_product(quantity=1))
    assert response.status_code == 200
    cart = response.json()
    assert cart["user_id"] is None
    assert cart["total_items"] == 1

    assert client.get(f"{CARTS}/", headers={"X-Cart-Id": cart["id"]}).json()["total_items"] == 1


def test_user_cart_is_persistent(client, user_headers, create_product):
    first = client.get(f"{CARTS}/", headers=user_headers).json()
    assert first["user_id"] is not None

    add(client, user_headers, create_product(quantity=2))
    again = client.get(f"{CARTS}/", headers=user_headers).json()
    assert again["id"] == first["id"]
    assert again["total_items"] == 1

    # a user's cart cannot be used as a guest cart
    response = client.get(f"{CARTS}/", headers={"X-Cart-Id": first["id"]})
    assert response.status_code == 404


def test_merge_guest_cart(client, user_headers, guest_cart, create_product):
    shared = create_product(quantity=10)
    guest_only = create_product(quantity=10)

    add(client, user_headers, shared, 2)
    add(client, guest_cart, shared, 1)
    add(client, guest_cart, guest_only, 3)

    response = client.post(
        f"{CARTS}/merge", json={"guest_cart_id": guest_cart["X-Cart-Id"]}, headers=user_headers
    )
    assert response.status_code == 200
    quantities = {i["product_id"]: i["quantity"] for i in response.json()["items"]}
    assert quantities == {shared["id"]: 3, guest_only["id"]: 3}

    assert client.get(f"{CARTS}/", headers=guest_cart).status_code == 404


def test_merge_requires_login(client, guest_cart):
    response = client.post(f"{CARTS}/merge", json={"guest_cart_id": guest_cart["X-Cart-Id"]})
    assert response.status_code == 401
