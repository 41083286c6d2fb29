"""
Testimonials CRUD, active listing and feed notifications.
"""

from bson import ObjectId

from aroma.schemas import DEFAULT_CUSTOMER_IMAGE


def add(client, name: str, message: str = "Lovely food", **extra) -> dict:
    response = client.post("/api/testimonials", json={"customerName": name, "message": message, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_defaults(client):
    created = add(client, "Jane Bennett")

    assert created["customerImage"] == DEFAULT_CUSTOMER_IMAGE
    assert created["isActive"] is True
    assert created["createdAt"]


def test_list_newest_first_with_pagination(client):
    for name in ("Ann", "Ben", "Cat"):
        add(client, name)

    body = client.get("/api/testimonials", params={"page": 1, "limit": 2}).json()

    assert [t["customerName"] for t in body["testimonials"]] == ["Cat", "Ben"]
    assert body["total"] == 3
    assert body["totalPages"] == 2
    assert body["page"] == 1


def test_search(client):
    add(client, "Jane", message="Best hummus in town")
    add(client, "Omar", message="Great curry")

    body = client.get("/api/testimonials", params={"search": "HUMMUS"}).json()

    assert [t["customerName"] for t in body["testimonials"]] == ["Jane"]


def test_active_only_lists_active(client):
    add(client, "Visible")
    add(client, "Hidden", isActive=False)

    body = client.get("/api/testimonials/active").json()

    assert [t["customerName"] for t in body["testimonials"]] == ["Visible"]
    assert set(body["testimonials"][0]) == {"id", "customerName", "message", "customerImage"}


def test_toggle_and_delete(client):
    created = add(client, "Jane")

    patched = client.patch(f"/api/testimonials/{created['id']}", json={"isActive": False})
    assert patched.status_code == 200
    assert patched.json()["isActive"] is False
    assert patched.json()["customerName"] == "Jane"

    deleted = client.delete(f"/api/testimonials/{created['id']}")
    assert deleted.status_code == 204
    assert deleted.content == b""
    assert client.get(f"/api/testimonials/{created['id']}").status_code == 404


def test_unknown_testimonial(client):
    assert client.patch(f"/api/testimonials/{ObjectId()}", json={"message": "x"}).status_code == 404
    assert client.delete(f"/api/testimonials/{ObjectId()}").status_code == 404


def test_every_write_publishes(client, feed):
    created = add(client, "Jane")
    client.patch(f"/api/testimonials/{created['id']}", json={"isActive": False})
    client.delete(f"/api/testimonials/{created['id']}")

    assert feed.published == 3


def test_writes_need_admin(anon_client):
    response = anon_client.post("/api/testimonials", json={"customerName": "Jane", "message": "Hi"})

    assert response.status_code == 401


def test_limit_above_one_hundred(client):
    for index in range(3):
        add(client, f"Guest {index}")

    response = client.get("/api/testimonials", params={"limit": 150})

    assert response.status_code == 200
    assert len(response.json()["testimonials"]) == 3
