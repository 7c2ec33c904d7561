from decimal import Decimal

import pytest

from conftest import API, unique

WISHLISTS = f"{API}/wishlists"


@pytest.fixture()
def create_wishlist(client, user_headers):
    def _create(name=None):
        payload = {} if name is None else {"name": name}
        response = client.post(f"{WISHLISTS}/", json=payload, headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def add_item(client, headers, wishlist, product, variant=None):
    payload = {"product_id": product["id"]}
    if variant is not None:
        payload["variant_id"] = variant["id"]
    return client.post(f"{WISHLISTS}/{wishlist['id']}/items", json=payload, headers=headers)


def test_wishlists_require_login(client):
    assert client.get(f"{WISHLISTS}/").status_code == 401
    assert client.post(f"{WISHLISTS}/", json={}).status_code == 401


def test_default_wishlist_is_created_once(client, user_headers):
    first = client.get(f"{WISHLISTS}/default", headers=user_headers)
    assert first.status_code == 200
    assert first.json()["name"] == "My Wishlist"
    assert first.json()["total_items"] == 0

    again = client.get(f"{WISHLISTS}/default", headers=user_headers).json()
    assert again["id"] == first.json()["id"]


def test_wishlist_crud(client, user_headers, create_wishlist):
    older = create_wishlist("Birthday")
    newer = create_wishlist()
    assert newer["name"] == "My Wishlist"

    listed = client.get(f"{WISHLISTS}/", headers=user_headers).json()
    assert [w["id"] for w in listed] == [newer["id"], older["id"]]

    response = client.patch(f"{WISHLISTS}/{older['id']}", json={"name": "Holidays"}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Holidays"

    assert client.patch(f"{WISHLISTS}/{older['id']}", json={"name": "  "}, headers=user_headers).status_code == 422

    assert client.delete(f"{WISHLISTS}/{older['id']}", headers=user_headers).status_code == 204
    assert client.get(f"{WISHLISTS}/{older['id']}", headers=user_headers).status_code == 404


def test_wishlists_are_private(client, create_wishlist):
    wishlist = create_wishlist()

    name = unique("other").replace("-", "_")
    other = client.post(
        f"{API}/auth/register",
        json={"email": f"{name}@example.com", "username": name, "full_name": "Other", "password": "secret123"},
    ).json()
    other_headers = {"Authorization": f"Bearer {other['access_token']}"}

    assert client.get(f"{WISHLISTS}/{wishlist['id']}", headers=other_headers).status_code == 404
    assert client.delete(f"{WISHLISTS}/{wishlist['id']}", headers=other_headers).status_code == 404
    assert client.get(f"{WISHLISTS}/", headers=other_headers).json() == []


def test_items(client, user_headers, create_wishlist, create_product):
    wishlist = create_wishlist()
    stocked = create_product(price="15.00", discount_price="12.00", quantity=3)
    sold_out = create_product(quantity=0)

    assert add_item(client, user_headers, wishlist, stocked).status_code == 201
    response = add_item(client, user_headers, wishlist, sold_out)
    assert response.status_code == 201

    body = response.json()
    assert body["total_items"] == 2
    by_product = {i["product_id"]: i for i in body["items"]}
    assert Decimal(by_product[stocked["id"]]["price"]) == Decimal("12.00")
    assert by_product[stocked["id"]]["in_stock"] is True
    assert by_product[sold_out["id"]]["in_stock"] is False

    response = add_item(client, user_headers, wishlist, stocked)
    assert response.status_code == 409

    item = by_product[sold_out["id"]]
    response = client.delete(f"{WISHLISTS}/{wishlist['id']}/items/{item['id']}", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["total_items"] == 1

    response = client.delete(f"{WISHLISTS}/{wishlist['id']}/items", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["items"] == []


def test_variant_items(client, admin_headers, user_headers, create_wishlist, create_product):
    wishlist = create_wishlist()
    product = create_product(quantity=5)
    variant = client.post(
        f"{API}/products/{product['id']}/variants",
        json={"sku": unique("SKU"), "price": "40.00", "quantity": 0},
        headers=admin_headers,
    ).json()

    add_item(client, user_headers, wishlist, product)
    response = add_item(client, user_headers, wishlist, product, variant=variant)
    assert response.status_code == 201

    line = next(i for i in response.json()["items"] if i["variant_id"] == variant["id"])
    assert Decimal(line["price"]) == Decimal("40.00")
    assert line["in_stock"] is False

    other = create_product()
    assert add_item(client, user_headers, wishlist, other, variant=variant).status_code == 404


def test_move_item(client, user_headers, create_wishlist, create_product):
    source = create_wishlist("Source")
    target = create_wishlist("Target")
    product = create_product()
    duplicate = create_product()

    items = add_item(client, user_headers, source, product).json()["items"]
    moved = items[0]

    url = f"{WISHLISTS}/{source['id']}/items/{moved['id']}/move/{target['id']}"
    response = client.post(url, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["id"] == target["id"]
    assert [i["id"] for i in response.json()["items"]] == [moved["id"]]
    assert client.get(f"{WISHLISTS}/{source['id']}", headers=user_headers).json()["items"] == []

    # already in the target: only one copy survives
    add_item(client, user_headers, target, duplicate)
    copy = add_item(client, user_headers, source, duplicate).json()["items"][0]
    url = f"{WISHLISTS}/{source['id']}/items/{copy['id']}/move/{target['id']}"
    response = client.post(url, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["total_items"] == 2
    assert client.get(f"{WISHLISTS}/{source['id']}", headers=user_headers).json()["total_items"] == 0

    url = f"{WISHLISTS}/{target['id']}/items/{moved['id']}/move/{target['id']}"
    response = client.post(url, headers=user_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_OPERATION"
