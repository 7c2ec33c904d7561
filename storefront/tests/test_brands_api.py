from conftest import API, unique


def test_brand_crud(client, admin_headers):
    name = unique("Brand")
    response = client.post(
        f"{API}/brands/",
        json={"name": name, "website": "https://brand.example.com"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    brand = response.json()
    assert brand["is_active"] is True

    assert client.get(f"{API}/brands/{brand['id']}").json()["name"] == name
    assert brand["id"] in [b["id"] for b in client.get(f"{API}/brands/").json()]

    response = client.patch(
        f"{API}/brands/{brand['id']}", json={"description": "Updated"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["description"] == "Updated"
    assert response.json()["name"] == name

    assert client.delete(f"{API}/brands/{brand['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/brands/{brand['id']}").status_code == 404


def test_brand_duplicate_name(client, admin_headers):
    name = unique("Brand")
    assert client.post(f"{API}/brands/", json={"name": name}, headers=admin_headers).status_code == 201

    response = client.post(f"{API}/brands/", json={"name": name}, headers=admin_headers)
    assert response.status_code == 409


def test_brand_invalid_url(client, admin_headers):
    response = client.post(
        f"{API}/brands/", json={"name": unique("Brand"), "website": "not a url"}, headers=admin_headers
    )
    assert response.status_code == 422


def test_inactive_brand_hidden_by_default(client, admin_headers):
    response = client.post(
        f"{API}/brands/", json={"name": unique("Brand"), "is_active": False}, headers=admin_headers
    )
    brand_id = response.json()["id"]

    assert brand_id not in [b["id"] for b in client.get(f"{API}/brands/").json()]
    listed = client.get(f"{API}/brands/", params={"include_inactive": True}).json()
    assert brand_id in [b["id"] for b in listed]


def test_brand_with_products_cannot_be_deleted(client, admin_headers):
    brand = client.post(f"{API}/brands/", json={"name": unique("Brand")}, headers=admin_headers).json()
    response = client.post(
        f"{API}/products/",
        json={"name": unique("Product"), "price": "10.00", "brand_id": brand["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 201

    assert brand["id"] in [b["id"] for b in client.get(f"{API}/brands/with-products").json()]

    response = client.delete(f"{API}/brands/{brand['id']}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "RESOURCE_IN_USE"
