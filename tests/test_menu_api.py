"""
HTTP surface of /api/menu-sections.
"""

from bson import ObjectId

from tests.factories import appetizers, make_item, make_section


def create(client, payload=None) -> dict:
    response = client.post("/api/menu-sections", json=payload or appetizers())
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_fetch(client):
    created = create(client)

    response = client.get(f"/api/menu-sections/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["title_en"] == "Appetizers"
    assert "_id" not in body
    assert [i["name_en"] for i in body["subsections"][0]["items"]] == ["Hummus", "Baba Ganoush"]


def test_search_envelope(client):
    create(client)

    response = client.get("/api/menu-sections", params={"search": "hummus", "page": 1, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["totalPages"] == 1
    assert body["page"] == 1
    assert body["limit"] == 10
    row = body["data"][0]
    assert row["name_en"] == "Hummus"
    assert row["price"] == "8.99"
    assert row["section"] == "Cold"
    assert row["title"] == "Appetizers"


def test_default_listing_is_grouped(client):
    create(client)

    body = client.get("/api/menu-sections").json()

    assert body["total"] == 2
    assert body["data"][0]["title_en"] == "Appetizers"
    assert len(body["data"][0]["subsections"][0]["items"]) == 2


def test_all_flag_returns_plain_list(client):
    create(client)
    create(client, make_section("Mains", [("Curries", [make_item("Dal", "11.00")])]))

    body = client.get("/api/menu-sections", params={"all": "true"}).json()

    assert isinstance(body, list)
    assert len(body) == 2


def test_invalid_paging_rejected(client):
    assert client.get("/api/menu-sections", params={"page": 0}).status_code == 422
    assert client.get("/api/menu-sections", params={"limit": 0}).status_code == 422


def test_large_limit_returns_everything(client):
    create(client)
    create(client, make_section("Mains", [("Curries", [make_item("Dal", "11.00")])]))

    response = client.get("/api/menu-sections", params={"page": 1, "limit": 200})

    assert response.status_code == 200
    body = response.json()
    assert body["limit"] == 200
    assert body["total"] == 3
    assert body["totalPages"] == 1
    assert sum(len(s["items"]) for section in body["data"] for s in section["subsections"]) == 3


def test_blank_item_name_rejected(client):
    payload = appetizers()
    payload["subsections"][0]["items"][0]["name_ar"] = "   "

    response = client.post("/api/menu-sections", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert any(e["field"].endswith("name_ar") for e in body["errors"])


def test_update_section(client):
    created = create(client)
    payload = appetizers()
    payload["title_en"] = "Starters"

    response = client.put(f"/api/menu-sections/{created['id']}", json=payload)

    assert response.status_code == 200
    assert response.json()["title_en"] == "Starters"


def test_unknown_and_invalid_ids(client):
    missing = str(ObjectId())
    response = client.get(f"/api/menu-sections/{missing}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Section not found", "detail": missing}

    response = client.get("/api/menu-sections/not-an-id")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid id"
    assert response.json()["errors"] == [{"field": "id", "message": "Invalid id"}]


def test_delete_item_prunes_section(client):
    created = create(client, make_section("Desserts", [("Sweet", [make_item("Kunafa", "6.00")])]))
    item_id = created["subsections"][0]["items"][0]["id"]

    response = client.delete(f"/api/menu-sections/items/{item_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "sectionDeleted": True}
    assert client.get(f"/api/menu-sections/{created['id']}").status_code == 404


def test_delete_section(client):
    created = create(client)

    assert client.delete(f"/api/menu-sections/{created['id']}").json() == {"success": True}
    assert client.get(f"/api/menu-sections/{created['id']}").status_code == 404


def test_writes_need_admin(anon_client):
    assert anon_client.post("/api/menu-sections", json=appetizers()).status_code == 401
    assert anon_client.get("/api/menu-sections").status_code == 200
