"""
Admin image uploads against the in-memory storage.
"""

from aroma.services.storage import MAX_UPLOAD_BYTES


def upload(client, content: bytes = b"\xff\xd8\xff", content_type: str = "image/jpeg"):
    return client.post("/api/uploads", files={"file": ("dish.jpg", content, content_type)})


def test_upload_returns_public_id_and_url(client, storage):
    response = upload(client)

    assert response.status_code == 201
    body = response.json()
    assert body["publicId"] in storage.objects
    assert body["url"] == storage.url_for(body["publicId"])
    assert body["publicId"].rsplit("/", 1)[-1].startswith("dish_")


def test_wrong_content_type(client, storage):
    response = upload(client, content=b"%PDF", content_type="application/pdf")

    assert response.status_code == 400
    assert storage.objects == {}


def test_empty_file(client):
    assert upload(client, content=b"").status_code == 400


def test_too_large(client):
    response = upload(client, content=b"0" * (MAX_UPLOAD_BYTES + 1))

    assert response.status_code == 413


def test_delete_uploaded_object(client, storage):
    public_id = upload(client).json()["publicId"]

    first = client.delete(f"/api/uploads/{public_id}")
    second = client.delete(f"/api/uploads/{public_id}")

    assert first.json() == {"success": True, "deleted": True}
    assert second.json() == {"success": True, "deleted": False}


def test_uploads_need_admin(anon_client):
    assert upload(anon_client).status_code == 401
