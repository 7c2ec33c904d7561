from datetime import timedelta

import pytest

from conftest import API, unique
from storefront.adapters.outbound.persistence.models import Banner
from storefront.shared.utils.time import utcnow


@pytest.fixture()
def create_banner(client, admin_headers):
    def _create(**fields):
        payload = {"title": unique("Banner"), "image_url": "/img/banner.jpg", **fields}
        response = client.post(f"{API}/banners/", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def test_banner_crud(client, admin_headers, create_banner):
    banner = create_banner(type="hero", position="home_middle", display_order=3)
    assert banner["type"] == "hero"
    assert banner["categories"] == []

    assert client.get(f"{API}/banners/{banner['id']}").json()["title"] == banner["title"]

    response = client.patch(
        f"{API}/banners/{banner['id']}", json={"subtitle": "New"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["subtitle"] == "New"

    assert client.delete(f"{API}/banners/{banner['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/banners/{banner['id']}").status_code == 404


def test_active_listings(client, create_banner):
    shown = create_banner(position="product_page", type="seasonal")
    hidden = create_banner(position="product_page", type="seasonal", is_active=False)

    for path in ("/", "/position/product_page", "/type/seasonal"):
        ids = [b["id"] for b in client.get(f"{API}/banners{path}").json()]
        assert shown["id"] in ids
        assert hidden["id"] not in ids

    ids = [b["id"] for b in client.get(f"{API}/banners/position/home_top").json()]
    assert shown["id"] not in ids


def test_unknown_position(client):
    assert client.get(f"{API}/banners/position/sidebar").status_code == 422


def test_active_promotions_window(client, create_banner):
    now = utcnow()
    running = create_banner(
        type="promotion",
        start_date=(now - timedelta(days=1)).isoformat(),
        end_date=(now + timedelta(days=1)).isoformat(),
    )
    finished = create_banner(
        type="promotion",
        start_date=(now - timedelta(days=10)).isoformat(),
        end_date=(now - timedelta(days=5)).isoformat(),
    )
    no_window = create_banner(type="promotion")

    ids = [b["id"] for b in client.get(f"{API}/banners/promotions/active").json()]
    assert running["id"] in ids
    assert finished["id"] not in ids
    assert no_window["id"] not in ids


def test_end_before_start_is_rejected(client, admin_headers, create_banner):
    now = utcnow()
    response = client.post(
        f"{API}/banners/",
        json={
            "title": unique("Banner"),
            "image_url": "/img/banner.jpg",
            "start_date": now.isoformat(),
            "end_date": (now - timedelta(days=1)).isoformat(),
        },
        headers=admin_headers,
    )
    assert response.status_code == 422

    banner = create_banner(start_date=now.isoformat())
    response = client.patch(
        f"{API}/banners/{banner['id']}",
        json={"end_date": (now - timedelta(days=1)).isoformat()},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_banner_links(client, admin_headers, create_banner):
    category = client.post(
        f"{API}/categories/", json={"name": unique("Cat")}, headers=admin_headers
    ).json()

    banner = create_banner(category_ids=[category["id"]])
    assert banner["categories"] == [{"id": category["id"], "name": category["name"]}]

    response = client.post(
        f"{API}/banners/",
        json={
            "title": unique("Banner"),
            "image_url": "/img/banner.jpg",
            "product_ids": ["00000000-0000-0000-0000-000000000000"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_banner_window_helpers():
    now = utcnow()
    running = Banner(is_active=True, start_date=now - timedelta(hours=1), end_date=now + timedelta(hours=1))
    upcoming = Banner(is_active=True, start_date=now + timedelta(days=1))
    ended = Banner(is_active=True, end_date=now - timedelta(seconds=1))
    disabled = Banner(is_active=False)
    open_ended = Banner(is_active=True)

    assert running.is_active_now(now)
    assert not upcoming.is_active_now(now)
    assert ended.is_expired(now)
    assert not ended.is_active_now(now)
    assert not disabled.is_active_now(now)
    assert open_ended.is_active_now(now)
    assert not open_ended.is_expired(now)
