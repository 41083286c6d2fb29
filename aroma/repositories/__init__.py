"""
Repositories

One class per MongoDB collection. Repositories take a pymongo Database,
return plain JSON-friendly dicts (string `id` instead of `_id`) and raise
the domain errors from aroma.core.errors.
"""

from aroma.repositories.active import (
    MenuCardCopyRepository,
    RestaurantStoryRepository,
    get_active_or_none,
)
from aroma.repositories.menu import MenuRepository
from aroma.repositories.reservations import ReservationRepository
from aroma.repositories.settings import SettingsRepository
from aroma.repositories.static_images import StaticImageRepository
from aroma.repositories.testimonials import TestimonialRepository

__all__ = [
    "MenuRepository",
    "TestimonialRepository",
    "RestaurantStoryRepository",
    "MenuCardCopyRepository",
    "StaticImageRepository",
    "SettingsRepository",
    "ReservationRepository",
    "get_active_or_none",
]
