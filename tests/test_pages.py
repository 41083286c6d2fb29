"""
Public HTML pages.
"""

from aroma.repositories.menu import MenuRepository
from aroma.schemas import MenuSectionIn

from tests.factories import appetizers, story_payload


def test_root_redirects_to_english(anon_client):
    response = anon_client.get("/", follow_redirects=False)

    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/en"


def test_unknown_locale(anon_client):
    assert anon_client.get("/fr").status_code == 404
    assert anon_client.get("/fr/menu").status_code == 404


def test_arabic_is_rtl(anon_client):
    response = anon_client.get("/ar")

    assert response.status_code == 200
    assert 'lang="ar" dir="rtl"' in response.text


def test_english_is_ltr(anon_client):
    assert 'dir="ltr"' in anon_client.get("/en").text


def test_home_shows_active_story_and_testimonials(client, anon_client):
    client.post("/api/restaurant-story", json=story_payload("Two cuisines"))
    client.post("/api/testimonials", json={"customerName": "Jane", "message": "Lovely hummus"})

    page = anon_client.get("/ru").text

    assert "Two cuisines ru" in page
    assert "Lovely hummus" in page


def test_menu_page_in_locale(anon_client, db):
    MenuRepository(db).create_section(MenuSectionIn(**appetizers()))

    page = anon_client.get("/ru/menu").text

    assert "Appetizers ru" in page
    assert "Hummus ru" in page
    assert "8.99" in page


def test_missing_translation_renders_blank(anon_client, db):
    section = appetizers()
    section["subsections"][0]["items"][0].pop("name_ar")
    db.menu_sections.insert_one(section)

    page = anon_client.get("/ar/menu").text

    assert '<strong class="name"></strong>' in page
    assert "Baba Ganoush ar" in page
    assert ">Hummus<" not in page


def test_static_image_overrides_default_hero(client, anon_client):
    client.post(
        "/api/static-images",
        json={
            "name": "Gallery Hero",
            "category": "hero",
            "imageUrl": "https://cdn.example.com/gallery.jpg",
            "altText": "Dining room",
        },
    )

    page = anon_client.get("/en/gallery").text

    assert "https://cdn.example.com/gallery.jpg" in page


def test_find_us_lists_locations(client, anon_client):
    client.put(
        "/api/settings",
        json={
            "locations": [{
                "address": ["12 Spice Street"],
                "gettingHere": {"steps": ["Walk"], "mapEmbedSrc": "https://maps.example.com/embed"},
                "phoneNumbers": ["+971 50123 45678"],
                "emails": [],
                "openingHours": "Daily 12:00 - 23:00",
            }]
        },
    )

    page = anon_client.get("/en/find-us").text

    assert "12 Spice Street" in page
    assert "Daily 12:00 - 23:00" in page
