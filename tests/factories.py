"""
Request payload builders shared by the tests.
"""

from datetime import date, timedelta
from typing import Any, Optional


def make_item(name: str, price: str, **overrides: Any) -> dict[str, Any]:
    item = {
        "name_en": name,
        "name_ar": f"{name} ar",
        "name_ru": f"{name} ru",
        "description_en": f"{name} description",
        "description_ar": f"{name} description ar",
        "description_ru": f"{name} description ru",
        "price": price,
    }
    item.update(overrides)
    return item


def make_section(
    title: str,
    subsections: list[tuple[str, list[dict[str, Any]]]],
) -> dict[str, Any]:
    return {
        "title_en": title,
        "title_ar": f"{title} ar",
        "title_ru": f"{title} ru",
        "subsections": [
            {
                "section_en": sub_title,
                "section_ar": f"{sub_title} ar",
                "section_ru": f"{sub_title} ru",
                "items": items,
            }
            for sub_title, items in subsections
        ],
    }


def appetizers() -> dict[str, Any]:
    return make_section(
        "Appetizers",
        [("Cold", [make_item("Hummus", "8.99"), make_item("Baba Ganoush", "9.50")])],
    )


def reservation_payload(days_ahead: int = 3, **overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "+971 50123 45678",
        "date": (date.today() + timedelta(days=days_ahead)).isoformat(),
        "time": "19:30",
        "guests": "2",
    }
    payload.update(overrides)
    return payload


def story_payload(tagline: str = "Two cuisines, one table", is_active: Optional[bool] = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "tagline": {"en": tagline, "ar": f"{tagline} ar", "ru": f"{tagline} ru"},
        "description": {"en": "Family recipes", "ar": "وصفات", "ru": "Рецепты"},
        "author": {"en": "The family", "ar": "العائلة", "ru": "Семья"},
    }
    if is_active is not None:
        payload["isActive"] = is_active
    return payload
