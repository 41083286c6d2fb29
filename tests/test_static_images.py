"""
Static images: unique names, exact-name lookup and stored object cleanup.
"""

import asyncio

from bson import ObjectId

from aroma.core.errors import UpstreamFailure
from aroma.services.storage import MockStorageService, get_storage_service
from aroma.main import app


def image_payload(name: str, **overrides) -> dict:
    payload = {
        "name": name,
        "category": "hero",
        "imageUrl": f"https://cdn.example.com/{name.replace(' ', '-').lower()}.jpg",
        "altText": f"{name} picture",
    }
    payload.update(overrides)
    return payload


def stored(storage: MockStorageService, filename: str) -> tuple[str, str]:
    image = asyncio.run(storage.upload(b"\x89PNG", filename))
    return image.public_id, image.url


class BrokenStorage(MockStorageService):
    async def delete(self, public_id: str) -> bool:
        raise UpstreamFailure("mock", "storage offline")


def test_create_and_fetch(client):
    created = client.post("/api/static-images", json=image_payload("Homepage Hero"))

    assert created.status_code == 201
    body = created.json()
    assert body["isActive"] is True
    assert client.get(f"/api/static-images/{body['id']}").json()["name"] == "Homepage Hero"


def test_duplicate_name_rejected(client):
    client.post("/api/static-images", json=image_payload("Logo", category="logo"))

    response = client.post("/api/static-images", json=image_payload("Logo", category="logo"))

    assert response.status_code == 400
    assert response.json()["error"] == "Image with this name already exists"


def test_rename_onto_existing_name_rejected(client):
    client.post("/api/static-images", json=image_payload("Logo", category="logo"))
    other = client.post("/api/static-images", json=image_payload("Gallery Hero")).json()

    response = client.put(f"/api/static-images/{other['id']}", json={"name": "Logo"})

    assert response.status_code == 400


def test_unknown_category_rejected(client):
    response = client.post("/api/static-images", json=image_payload("Odd", category="banner"))

    assert response.status_code == 422


def test_exact_name_search_returns_only_that_image(client):
    client.post("/api/static-images", json=image_payload("Hero"))
    client.post("/api/static-images", json=image_payload("Hero Night"))

    exact = client.get("/api/static-images", params={"search": "Hero"}).json()
    partial = client.get("/api/static-images", params={"search": "night"}).json()

    assert [i["name"] for i in exact] == ["Hero"]
    assert [i["name"] for i in partial] == ["Hero Night"]


def test_filter_by_category_and_active(client):
    client.post("/api/static-images", json=image_payload("Shot 1", category="gallery"))
    client.post("/api/static-images", json=image_payload("Shot 2", category="gallery", isActive=False))
    client.post("/api/static-images", json=image_payload("Hero"))

    body = client.get("/api/static-images", params={"category": "gallery", "isActive": "true"}).json()

    assert [i["name"] for i in body] == ["Shot 1"]


def test_replacing_url_discards_old_object(client, storage):
    public_id, url = stored(storage, "hero.jpg")
    created = client.post(
        "/api/static-images",
        json=image_payload("Hero", imageUrl=url, storagePublicId=public_id),
    ).json()

    response = client.put(
        f"/api/static-images/{created['id']}",
        json={"imageUrl": "https://cdn.example.com/new-hero.jpg"},
    )

    assert response.status_code == 200
    assert response.json()["imageUrl"] == "https://cdn.example.com/new-hero.jpg"
    assert response.json().get("storagePublicId") is None
    assert public_id not in storage.objects


def test_replacing_url_with_new_stored_object(client, storage):
    old_id, old_url = stored(storage, "hero.jpg")
    new_id, new_url = stored(storage, "hero-2.jpg")
    created = client.post(
        "/api/static-images",
        json=image_payload("Hero", imageUrl=old_url, storagePublicId=old_id),
    ).json()

    body = client.put(
        f"/api/static-images/{created['id']}",
        json={"imageUrl": new_url, "storagePublicId": new_id},
    ).json()

    assert body["storagePublicId"] == new_id
    assert old_id not in storage.objects
    assert new_id in storage.objects


def test_alt_text_change_keeps_stored_object(client, storage):
    public_id, url = stored(storage, "hero.jpg")
    created = client.post(
        "/api/static-images",
        json=image_payload("Hero", imageUrl=url, storagePublicId=public_id),
    ).json()

    client.put(f"/api/static-images/{created['id']}", json={"altText": "Dining room"})

    assert public_id in storage.objects


def test_delete_removes_stored_object(client, storage):
    public_id, url = stored(storage, "hero.jpg")
    created = client.post(
        "/api/static-images",
        json=image_payload("Hero", imageUrl=url, storagePublicId=public_id),
    ).json()

    response = client.delete(f"/api/static-images/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Image deleted successfully"}
    assert public_id not in storage.objects
    assert client.get(f"/api/static-images/{created['id']}").status_code == 404


def test_delete_succeeds_when_storage_fails(client):
    app.dependency_overrides[get_storage_service] = lambda: BrokenStorage()
    created = client.post(
        "/api/static-images",
        json=image_payload("Hero", storagePublicId="aroma/hero_1234"),
    ).json()

    response = client.delete(f"/api/static-images/{created['id']}")

    assert response.status_code == 200


def test_unknown_image(client):
    assert client.delete(f"/api/static-images/{ObjectId()}").status_code == 404
    assert client.get("/api/static-images/not-an-id").status_code == 400


def test_writes_need_admin(anon_client):
    assert anon_client.post("/api/static-images", json=image_payload("Hero")).status_code == 401
