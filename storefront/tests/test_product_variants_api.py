from decimal import Decimal

import pytest

from conftest import API, unique


@pytest.fixture()
def attribute(client, admin_headers):
    response = client.post(f"{API}/product-attributes/", json={"name": unique("Color")}, headers=admin_headers)
    assert response.status_code == 201
    return response.json()


def variants_url(product):
    return f"{API}/products/{product['id']}/variants"


def images_url(product):
    return f"{API}/products/{product['id']}/images"


def test_attribute_crud(client, admin_headers, user_headers, attribute):
    url = f"{API}/product-attributes/{attribute['id']}"
    assert attribute["values"] == []

    response = client.post(
        f"{url}/values", json={"value": "Red", "color_code": "#FF0000"}, headers=admin_headers
    )
    assert response.status_code == 201
    values = response.json()["values"]
    assert [(v["value"], v["color_code"]) for v in values] == [("Red", "#FF0000")]

    assert client.post(f"{url}/values", json={"value": "Red"}, headers=admin_headers).status_code == 409
    assert client.post(f"{url}/values", json={"value": "Blue"}, headers=user_headers).status_code == 403

    listed = client.get(f"{API}/product-attributes/").json()
    assert attribute["id"] in [a["id"] for a in listed]

    response = client.delete(f"{url}/values/{values[0]['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["values"] == []

    response = client.patch(url, json={"description": "Main color", "display_order": 2}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["display_order"] == 2

    assert client.delete(url, headers=admin_headers).status_code == 204
    assert client.get(url).status_code == 404


def test_attribute_duplicate_name(client, admin_headers, attribute):
    response = client.post(f"{API}/product-attributes/", json={"name": attribute["name"]}, headers=admin_headers)
    assert response.status_code == 409


def test_create_variant_with_attributes_and_images(client, admin_headers, create_product, attribute):
    product = create_product(price="30.00")
    payload = {
        "sku": unique("SKU"),
        "name": "Red edition",
        "quantity": 4,
        "attribute_values": [{"attribute_id": attribute["id"], "value": "Red"}],
        "images": [
            {"url": "https://cdn.example.com/red-front.jpg"},
            {"url": "https://cdn.example.com/red-back.jpg"},
        ],
    }
    response = client.post(variants_url(product), json=payload, headers=admin_headers)
    assert response.status_code == 201, response.text
    variant = response.json()

    assert Decimal(variant["price"]) == Decimal("30.00")
    assert variant["attribute_display"] == f"{attribute['name']}: Red"
    assert [i["is_default"] for i in variant["images"]] == [True, False]
    assert variant["images"][0]["alt"] == "Red edition"

    # the value was created under the attribute
    values = client.get(f"{API}/product-attributes/{attribute['id']}").json()["values"]
    assert [v["value"] for v in values] == ["Red"]

    listed = client.get(variants_url(product)).json()
    assert [v["id"] for v in listed] == [variant["id"]]

    response = client.post(variants_url(product), json={"sku": payload["sku"]}, headers=admin_headers)
    assert response.status_code == 409


def test_variant_validation(client, admin_headers, create_product):
    product = create_product(price="10.00")

    response = client.post(
        variants_url(product),
        json={
            "sku": unique("SKU"),
            "attribute_values": [{"attribute_id": "00000000-0000-0000-0000-000000000000", "value": "XL"}],
        },
        headers=admin_headers,
    )
    assert response.status_code == 400

    # discount checked against the inherited product price
    response = client.post(
        variants_url(product), json={"sku": unique("SKU"), "discount_price": "12.00"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_update_variant_replaces_attribute_values(client, admin_headers, create_product, attribute):
    product = create_product()
    variant = client.post(
        variants_url(product),
        json={"sku": unique("SKU"), "attribute_values": [{"attribute_id": attribute["id"], "value": "Red"}]},
        headers=admin_headers,
    ).json()
    url = f"{variants_url(product)}/{variant['id']}"

    response = client.patch(
        url,
        json={"quantity": 9, "attribute_values": [{"attribute_id": attribute["id"], "value": "Blue"}]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 9
    assert [v["value"] for v in response.json()["attribute_values"]] == ["Blue"]

    response = client.patch(url, json={"price": "5.00", "discount_price": "6.00"}, headers=admin_headers)
    assert response.status_code == 400


def test_variant_scoped_to_product(client, admin_headers, create_product):
    product = create_product()
    other = create_product()
    variant = client.post(variants_url(product), json={"sku": unique("SKU")}, headers=admin_headers).json()

    assert client.get(f"{variants_url(other)}/{variant['id']}").status_code == 404
    assert client.delete(f"{variants_url(other)}/{variant['id']}", headers=admin_headers).status_code == 404

    assert client.delete(f"{variants_url(product)}/{variant['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{variants_url(product)}/{variant['id']}").status_code == 404


def test_product_images_keep_one_default(client, admin_headers, create_product):
    product = create_product()

    def add(**fields):
        response = client.post(images_url(product), json=fields, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    first = add(url="https://cdn.example.com/1.jpg")
    second = add(url="https://cdn.example.com/2.jpg")
    assert first["is_default"] is True
    assert second["is_default"] is False
    assert second["alt"] == product["name"]

    third = add(url="https://cdn.example.com/3.jpg", is_default=True)
    images = client.get(images_url(product)).json()
    assert [(i["id"], i["is_default"]) for i in images] == [
        (first["id"], False),
        (second["id"], False),
        (third["id"], True),
    ]

    assert client.delete(f"{images_url(product)}/{third['id']}", headers=admin_headers).status_code == 204
    images = client.get(images_url(product)).json()
    assert [(i["id"], i["is_default"]) for i in images] == [(first["id"], True), (second["id"], False)]

    response = client.patch(
        f"{images_url(product)}/{second['id']}", json={"is_default": True}, headers=admin_headers
    )
    assert response.status_code == 200
    assert [i["is_default"] for i in client.get(images_url(product)).json()] == [False, True]


def test_variant_images(client, admin_headers, create_product):
    product = create_product()
    other = create_product()
    variant = client.post(variants_url(product), json={"sku": unique("SKU")}, headers=admin_headers).json()

    response = client.post(
        f"{variants_url(product)}/{variant['id']}/images",
        json={"url": "https://cdn.example.com/v.jpg"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    image = response.json()
    assert image["variant_id"] == variant["id"]
    assert image["product_id"] is None
    assert image["is_default"] is True

    # product level listing leaves variant images out
    assert client.get(images_url(product)).json() == []
    fetched = client.get(f"{variants_url(product)}/{variant['id']}").json()
    assert [i["id"] for i in fetched["images"]] == [image["id"]]

    assert client.delete(f"{images_url(other)}/{image['id']}", headers=admin_headers).status_code == 404
    assert client.delete(f"{images_url(product)}/{image['id']}", headers=admin_headers).status_code == 204


def test_deleting_product_removes_variants(client, admin_headers, create_product):
    product = create_product()
    variant = client.post(variants_url(product), json={"sku": unique("SKU")}, headers=admin_headers).json()

    assert client.delete(f"{API}/products/{product['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{variants_url(product)}/{variant['id']}").status_code == 404
    assert client.get(variants_url(product)).status_code == 404
