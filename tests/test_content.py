"""
Restaurant story and menu copy: at most one active document.
"""

from datetime import datetime, timedelta, timezone

import pytest

from aroma.core.errors import NotFoundError
from aroma.database import RESTAURANT_STORIES, deactivate_extra_actives
from aroma.repositories.active import RestaurantStoryRepository
from aroma.schemas import RestaurantStoryCreate, RestaurantStoryUpdate

from tests.factories import story_payload

COPY = {"paragraphs": {"en": ["Spices roasted in-house."], "ar": ["توابل"], "ru": ["Специи"]}}


class TestActiveRecords:
    def test_new_active_story_deactivates_others(self, db):
        repo = RestaurantStoryRepository(db)
        repo.create(RestaurantStoryCreate(**story_payload("First")))
        second = repo.create(RestaurantStoryCreate(**story_payload("Second")))

        assert repo.count_active() == 1
        assert repo.get_active()["id"] == second["id"]

    def test_reactivating_old_story(self, db):
        repo = RestaurantStoryRepository(db)
        first = repo.create(RestaurantStoryCreate(**story_payload("First")))
        repo.create(RestaurantStoryCreate(**story_payload("Second")))

        repo.update_story(RestaurantStoryUpdate(id=first["id"], isActive=True))

        assert repo.count_active() == 1
        assert repo.get_active()["tagline"]["en"] == "First"

    def test_inactive_save_leaves_active_alone(self, db):
        repo = RestaurantStoryRepository(db)
        active = repo.create(RestaurantStoryCreate(**story_payload("Live")))
        repo.create(RestaurantStoryCreate(**story_payload("Draft", is_active=False)))

        assert repo.get_active()["id"] == active["id"]

    def test_no_active_story(self, db):
        repo = RestaurantStoryRepository(db)
        repo.create(RestaurantStoryCreate(**story_payload("Draft", is_active=False)))

        with pytest.raises(NotFoundError):
            repo.get_active()

    def test_startup_cleanup_keeps_newest_active(self, db):
        now = datetime.now(timezone.utc)
        for hours_ago, tagline in ((3, "Oldest"), (0, "Newest"), (1, "Middle")):
            db.restaurant_stories.insert_one({
                **story_payload(tagline),
                "isActive": True,
                "updatedAt": now - timedelta(hours=hours_ago),
            })

        deactivated = deactivate_extra_actives(db, RESTAURANT_STORIES)

        repo = RestaurantStoryRepository(db)
        assert deactivated == 2
        assert repo.count_active() == 1
        assert repo.get_active()["tagline"]["en"] == "Newest"
        assert deactivate_extra_actives(db, RESTAURANT_STORIES) == 0


class TestStoryApi:
    def test_get_active_story(self, client):
        client.post("/api/restaurant-story", json=story_payload("First"))
        client.post("/api/restaurant-story", json=story_payload("Second"))

        response = client.get("/api/restaurant-story")

        assert response.status_code == 200
        assert response.json()["tagline"]["en"] == "Second"
        assert response.json()["isActive"] is True

    def test_missing_story_is_404(self, client):
        assert client.get("/api/restaurant-story").status_code == 404

    def test_localized_fields_are_trimmed_and_required(self, client):
        payload = story_payload()
        payload["tagline"]["en"] = "  Two cuisines  "
        assert client.post("/api/restaurant-story", json=payload).json()["tagline"]["en"] == "Two cuisines"

        payload["author"]["ru"] = " "
        assert client.post("/api/restaurant-story", json=payload).status_code == 422

    def test_put_takes_id_from_body(self, client):
        first = client.post("/api/restaurant-story", json=story_payload("First")).json()
        client.post("/api/restaurant-story", json=story_payload("Second"))

        response = client.put(
            "/api/restaurant-story",
            json={"_id": first["id"], "isActive": True, "author": {"en": "Chef", "ar": "الشيف", "ru": "Шеф"}},
        )

        assert response.status_code == 200
        assert response.json()["author"]["en"] == "Chef"
        assert client.get("/api/restaurant-story").json()["id"] == first["id"]


class TestMenuCopyApi:
    def test_post_is_always_active(self, client):
        first = client.post("/api/menu-copy", json=COPY).json()
        second = client.post("/api/menu-copy", json=COPY).json()

        assert first["isActive"] is True
        assert client.get("/api/menu-copy").json()["id"] == second["id"]

    def test_put_without_id(self, client):
        response = client.put("/api/menu-copy", json=COPY)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Missing _id"
        assert body["errors"] == [{"field": "_id", "message": "Missing _id"}]

    def test_put_activates_the_copy(self, client):
        first = client.post("/api/menu-copy", json=COPY).json()
        client.post("/api/menu-copy", json=COPY)
        new_copy = {"_id": first["id"], "paragraphs": {"en": ["Updated"], "ar": [], "ru": []}}

        response = client.put("/api/menu-copy", json=new_copy)

        assert response.status_code == 200
        active = client.get("/api/menu-copy").json()
        assert active["id"] == first["id"]
        assert active["paragraphs"]["en"] == ["Updated"]

    def test_no_active_copy(self, client):
        assert client.get("/api/menu-copy").status_code == 404
