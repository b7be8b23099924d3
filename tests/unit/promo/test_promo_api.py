from __future__ import annotations

from fastapi.testclient import TestClient

from src.talent_cms.slots.slot_kinds import CATEGORY, FEATURED_TALENT


def _create_category(client: TestClient, headers, **fields):
    data = {"title": "Kids", "gender": "Boy-Girl", "description": "Young talent"}
    data.update(fields)
    return client.post(
        "/api/home/categories",
        headers=headers,
        data=data,
        files={"avatar": ("kids.png", b"png-bytes", "image/png")},
    )


def test_create_and_list_categories(client: TestClient, admin_headers) -> None:
    response = _create_category(client, admin_headers, talent_count="12")

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["talent_count"] == 12
    assert created["avatarUrl"] == f"http://testserver/uploads/categoryImg/{created['avatar']}"

    listing = client.get("/api/home/categories").json()
    assert listing["success"] is True
    assert [item["id"] for item in listing["data"]] == [created["id"]]


def test_create_category_missing_fields_is_400(client: TestClient, admin_headers, app_config) -> None:
    response = client.post(
        "/api/home/categories",
        headers=admin_headers,
        data={"title": "Kids"},
        files={"avatar": ("kids.png", b"png", "image/png")},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Required fields missing"}
    assert list((app_config.media_root / CATEGORY.directory).iterdir()) == []


def test_update_category_swaps_avatar(client: TestClient, admin_headers, app_config) -> None:
    created = _create_category(client, admin_headers).json()["data"]

    response = client.put(
        f"/api/home/categories/{created['id']}",
        headers=admin_headers,
        data={"title": "Teens"},
        files={"avatar": ("teens.png", b"new", "image/png")},
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["title"] == "Teens"
    assert updated["gender"] == "Boy-Girl"
    directory = app_config.media_root / CATEGORY.directory
    assert sorted(path.name for path in directory.iterdir()) == [updated["avatar"]]


def test_delete_category_removes_row_and_image(client: TestClient, admin_headers, app_config) -> None:
    created = _create_category(client, admin_headers).json()["data"]

    response = client.delete(f"/api/home/categories/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Category and image deleted successfully"}
    assert client.get("/api/home/categories").json()["data"] == []
    assert list((app_config.media_root / CATEGORY.directory).iterdir()) == []

    again = client.delete(f"/api/home/categories/{created['id']}", headers=admin_headers)
    assert again.status_code == 404
    assert again.json()["message"] == "Category not found"


def test_featured_talent_requires_profile_image(client: TestClient, admin_headers) -> None:
    response = client.post(
        "/api/home/featured-talents",
        headers=admin_headers,
        data={"name": "Ann", "gender": "Female"},
        files={"image1": ("side.jpg", b"jpg", "image/jpeg")},
    )

    assert response.status_code == 400


def test_featured_talent_create_update_delete(client: TestClient, admin_headers, app_config) -> None:
    created = client.post(
        "/api/home/featured-talents",
        headers=admin_headers,
        data={"name": "Ann", "gender": "Female", "age": "24", "eye_color": "green"},
        files={
            "profile_img": ("face.jpg", b"face", "image/jpeg"),
            "image2": ("full.jpg", b"full", "image/jpeg"),
        },
    )
    assert created.status_code == 201
    talent = created.json()["data"]
    assert talent["profileUrl"].endswith(talent["profile_img"])
    assert talent["image1Url"] is None

    updated = client.put(
        f"/api/home/featured-talents/{talent['id']}",
        headers=admin_headers,
        files={"image2": ("full-v2.jpg", b"v2", "image/jpeg")},
    ).json()["data"]
    directory = app_config.media_root / FEATURED_TALENT.directory
    assert sorted(path.name for path in directory.iterdir()) == sorted(
        [talent["profile_img"], updated["image2"]]
    )

    deleted = client.delete(f"/api/home/featured-talents/{talent['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert list(directory.iterdir()) == []


def test_testimonials_listing_includes_urls(client: TestClient, admin_headers) -> None:
    client.post(
        "/api/home/testimonials",
        headers=admin_headers,
        data={"name": "Kim", "description": "Great agency"},
        files={"avatar": ("kim.webp", b"webp", "image/webp")},
    )

    items = client.get("/api/home/testimonials").json()["data"]

    assert len(items) == 1
    assert items[0]["them"] == 1
    assert items[0]["avatarUrl"].startswith("http://testserver/uploads/testimonialsImg/")


def test_promo_writes_require_admin_token(client: TestClient) -> None:
    response = client.delete("/api/home/testimonials/1")

    assert response.status_code == 401
