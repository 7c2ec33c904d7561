import pytest

from conftest import API, unique


@pytest.fixture()
def create_category(client, admin_headers):
    def _create(parent_id=None, **fields):
        payload = {"name": unique("Cat"), "parent_id": parent_id, **fields}
        response = client.post(f"{API}/categories/", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture()
def electronics_tree(create_category):
    electronics = create_category()
    laptops = create_category(electronics["id"])
    gaming = create_category(laptops["id"])
    return electronics, laptops, gaming


def test_create_requires_admin(client, user_headers):
    response = client.post(f"{API}/categories/", json={"name": unique("Cat")}, headers=user_headers)
    assert response.status_code == 403

    response = client.post(f"{API}/categories/", json={"name": unique("Cat")})
    assert response.status_code == 401


def test_create_duplicate_name(client, admin_headers, create_category):
    category = create_category()

    response = client.post(f"{API}/categories/", json={"name": category["name"]}, headers=admin_headers)
    assert response.status_code == 409


def test_create_with_unknown_parent(client, admin_headers):
    response = client.post(
        f"{API}/categories/",
        json={"name": unique("Cat"), "parent_id": "00000000-0000-0000-0000-000000000000"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_get_category_with_children(client, electronics_tree):
    electronics, laptops, _ = electronics_tree

    response = client.get(f"{API}/categories/{electronics['id']}", params={"include_children": True})
    assert response.status_code == 200
    assert [c["id"] for c in response.json()["children"]] == [laptops["id"]]

    response = client.get(f"{API}/categories/{electronics['id']}")
    assert "children" not in response.json()


def test_children_and_roots(client, electronics_tree):
    electronics, laptops, gaming = electronics_tree

    children = client.get(f"{API}/categories/{laptops['id']}/children").json()
    assert [c["id"] for c in children] == [gaming["id"]]

    for path in ("root", "without-parent"):
        root_ids = [c["id"] for c in client.get(f"{API}/categories/{path}").json()]
        assert electronics["id"] in root_ids
        assert laptops["id"] not in root_ids

    with_parent = client.get(f"{API}/categories/with-parent").json()
    gaming_row = next(c for c in with_parent if c["id"] == gaming["id"])
    assert gaming_row["parent"]["id"] == laptops["id"]


def test_children_of_unknown_category(client):
    response = client.get(f"{API}/categories/00000000-0000-0000-0000-000000000000/children")
    assert response.status_code == 404


def test_list_filters(client, admin_headers, create_category, electronics_tree):
    electronics, laptops, _ = electronics_tree
    hidden = create_category(electronics["id"], is_active=False)

    listed = client.get(f"{API}/categories/", params={"parent_id": electronics["id"]}).json()
    assert [c["id"] for c in listed] == [laptops["id"]]

    listed = client.get(
        f"{API}/categories/", params={"parent_id": electronics["id"], "include_inactive": True}
    ).json()
    assert {c["id"] for c in listed} == {laptops["id"], hidden["id"]}

    listed = client.get(f"{API}/categories/", params={"name": laptops["name"]}).json()
    assert [c["id"] for c in listed] == [laptops["id"]]

    roots = client.get(f"{API}/categories/", params={"only_root": True}).json()
    assert all(c["parent_id"] is None for c in roots)


def test_tree(client, electronics_tree):
    electronics, laptops, gaming = electronics_tree

    tree = client.get(f"{API}/categories/tree").json()
    node = next(n for n in tree if n["id"] == electronics["id"])
    assert node["children"][0]["id"] == laptops["id"]
    assert node["children"][0]["children"][0]["id"] == gaming["id"]


def test_reparent_into_descendant_is_rejected(client, admin_headers, electronics_tree):
    electronics, _, gaming = electronics_tree

    response = client.patch(
        f"{API}/categories/{electronics['id']}",
        json={"parent_id": gaming["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "CYCLE_DETECTED"

    # Nothing was written
    assert client.get(f"{API}/categories/{electronics['id']}").json()["parent_id"] is None


def test_self_parent_is_rejected(client, admin_headers, electronics_tree):
    _, laptops, _ = electronics_tree

    response = client.patch(
        f"{API}/categories/{laptops['id']}",
        json={"parent_id": laptops["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_OPERATION"


def test_valid_reparent_and_move_to_root(client, admin_headers, electronics_tree):
    electronics, _, gaming = electronics_tree

    response = client.patch(
        f"{API}/categories/{gaming['id']}",
        json={"parent_id": electronics["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["parent_id"] == electronics["id"]

    response = client.patch(
        f"{API}/categories/{gaming['id']}", json={"parent_id": None}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["parent_id"] is None


def test_reparent_to_unknown_parent(client, admin_headers, electronics_tree):
    _, laptops, _ = electronics_tree

    response = client.patch(
        f"{API}/categories/{laptops['id']}",
        json={"parent_id": "00000000-0000-0000-0000-000000000000"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_rename_to_existing_name(client, admin_headers, electronics_tree):
    electronics, laptops, _ = electronics_tree

    response = client.patch(
        f"{API}/categories/{laptops['id']}", json={"name": electronics["name"]}, headers=admin_headers
    )
    assert response.status_code == 409


def test_delete_category_with_children_is_refused(client, admin_headers, electronics_tree):
    _, laptops, gaming = electronics_tree

    response = client.delete(f"{API}/categories/{laptops['id']}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "RESOURCE_IN_USE"

    response = client.delete(f"{API}/categories/{gaming['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert client.get(f"{API}/categories/{gaming['id']}").status_code == 404
