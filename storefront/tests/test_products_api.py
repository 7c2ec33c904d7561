from decimal import Decimal

import pytest

from conftest import API, unique


@pytest.fixture()
def brand(client, admin_headers):
    return client.post(f"{API}/brands/", json={"name": unique("Brand")}, headers=admin_headers).json()


@pytest.fixture()
def category(client, admin_headers):
    return client.post(f"{API}/categories/", json={"name": unique("Cat")}, headers=admin_headers).json()


def test_create_product_with_relations(create_product, brand, category):
    product = create_product(brand_id=brand["id"], category_ids=[category["id"]], quantity=5)

    assert Decimal(product["price"]) == Decimal("19.99")
    assert product["status"] == "draft"
    assert product["brand"]["id"] == brand["id"]
    assert [c["id"] for c in product["categories"]] == [category["id"]]


def test_create_product_validation(client, admin_headers, create_product):
    response = client.post(
        f"{API}/products/",
        json={"name": unique("Product"), "price": "10.00", "discount_price": "12.00"},
        headers=admin_headers,
    )
    assert response.status_code == 422

    response = client.post(
        f"{API}/products/",
        json={"name": unique("Product"), "price": "10.00", "brand_id": "00000000-0000-0000-0000-000000000000"},
        headers=admin_headers,
    )
    assert response.status_code == 400

    existing = create_product()
    response = client.post(
        f"{API}/products/", json={"name": existing["name"], "price": "1.00"}, headers=admin_headers
    )
    assert response.status_code == 409


def test_paginated_listing(client, create_product, brand):
    for _ in range(3):
        create_product(brand_id=brand["id"])

    response = client.get(f"{API}/products/", params={"brand_id": brand["id"], "size": 2})
    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 3
    assert page["page"] == 1
    assert page["size"] == 2
    assert page["pages"] == 2
    assert len(page["items"]) == 2

    second = client.get(f"{API}/products/", params={"brand_id": brand["id"], "size": 2, "page": 2}).json()
    assert len(second["items"]) == 1
    ids = {p["id"] for p in page["items"]} | {p["id"] for p in second["items"]}
    assert len(ids) == 3


def test_listing_filters(client, create_product, category):
    tagged = create_product(category_ids=[category["id"]], status="published", description="Waterproof jacket")
    create_product()

    items = client.get(f"{API}/products/", params={"category_id": category["id"]}).json()["items"]
    assert [p["id"] for p in items] == [tagged["id"]]

    items = client.get(
        f"{API}/products/", params={"category_id": category["id"], "status": "draft"}
    ).json()["items"]
    assert items == []

    items = client.get(f"{API}/products/", params={"q": "WATERPROOF"}).json()["items"]
    assert tagged["id"] in [p["id"] for p in items]


def test_page_size_limit(client):
    assert client.get(f"{API}/products/", params={"size": 500}).status_code == 422


def test_update_and_delete_product(client, admin_headers, create_product, category):
    product = create_product(category_ids=[category["id"]])

    response = client.patch(
        f"{API}/products/{product['id']}",
        json={"price": "5.00", "category_ids": []},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert Decimal(response.json()["price"]) == Decimal("5.00")
    assert response.json()["categories"] == []

    response = client.patch(
        f"{API}/products/{product['id']}", json={"discount_price": "9.00"}, headers=admin_headers
    )
    assert response.status_code == 400

    assert client.delete(f"{API}/products/{product['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/products/{product['id']}").status_code == 404


def test_category_with_products_cannot_be_deleted(client, admin_headers, create_product, category):
    create_product(category_ids=[category["id"]])

    listed = client.get(f"{API}/categories/with-products").json()
    assert category["id"] in [c["id"] for c in listed]

    response = client.delete(f"{API}/categories/{category['id']}", headers=admin_headers)
    assert response.status_code == 400
